"""Pydantic configuration model for the WebDAV adapter.

This module defines the settings needed to build a client and an adapter.
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

_TRUE_VALUES = {"1", "true", "yes", "on"}


class WebDAVConfig(BaseModel):
    """Connection and scoping settings for a WebDAV adapter."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(..., description="WebDAV endpoint URL")
    username: str | None = Field(default=None, description="Basic auth user name")
    password: SecretStr | None = Field(default=None, description="Basic auth password")
    prefix: str = Field(
        default="", description="Server path every logical path is scoped under"
    )
    fake_visibility: bool = Field(
        default=False, description="Emulate visibility in memory (tests only)"
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")

    @field_validator("base_url")
    @classmethod
    def check_base_url(cls, value: str) -> str:
        """Require an absolute http(s) URL."""
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {value!r}")
        return value

    @classmethod
    def from_env(
        cls, env_prefix: str = "WEBDAV_", environ: Mapping[str, str] | None = None
    ) -> "WebDAVConfig":
        """Load settings from ``<env_prefix>BASE_URL``, ``<env_prefix>USERNAME``, ...

        Raises:
            ValueError: If the base URL variable is not set
        """
        env = os.environ if environ is None else environ

        base_url = env.get(f"{env_prefix}BASE_URL")
        if not base_url:
            raise ValueError(f"{env_prefix}BASE_URL is not set")

        values: dict[str, object] = {"base_url": base_url}
        for name in ("username", "password", "prefix", "timeout"):
            value = env.get(f"{env_prefix}{name.upper()}")
            if value is not None:
                values[name] = value
        for name in ("fake_visibility", "verify_ssl"):
            value = env.get(f"{env_prefix}{name.upper()}")
            if value is not None:
                values[name] = value.strip().lower() in _TRUE_VALUES

        return cls(**values)
