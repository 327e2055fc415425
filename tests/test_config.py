"""Tests for WebDAVConfig."""

import pytest
from pydantic import ValidationError

from chuk_webdav_fs.config import WebDAVConfig


class TestWebDAVConfig:
    """Test WebDAVConfig validation."""

    def test_defaults(self):
        config = WebDAVConfig(base_url="https://cloud.example.com/")
        assert config.username is None
        assert config.password is None
        assert config.prefix == ""
        assert config.fake_visibility is False
        assert config.timeout == 30.0
        assert config.verify_ssl is True

    def test_password_is_secret(self):
        config = WebDAVConfig(base_url="https://cloud.example.com/", password="s3cret")
        assert "s3cret" not in repr(config)
        assert config.password.get_secret_value() == "s3cret"

    def test_rejects_non_http_url(self):
        with pytest.raises(ValidationError):
            WebDAVConfig(base_url="ftp://cloud.example.com/")

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            WebDAVConfig(base_url="https://cloud.example.com/", timeout=0)

    def test_frozen(self):
        config = WebDAVConfig(base_url="https://cloud.example.com/")
        with pytest.raises(ValidationError):
            config.prefix = "/other/"


class TestFromEnv:
    """Test loading settings from the environment."""

    def test_from_env(self):
        environ = {
            "TESTS_WEBDAV_BASE_URL": "https://cloud.example.com",
            "TESTS_WEBDAV_USERNAME": "alice",
            "TESTS_WEBDAV_PASSWORD": "secret",
            "TESTS_WEBDAV_PREFIX": "/remote.php/webdav/webdav_tests/",
            "TESTS_WEBDAV_FAKE_VISIBILITY": "true",
            "TESTS_WEBDAV_TIMEOUT": "5",
            "TESTS_WEBDAV_VERIFY_SSL": "0",
        }
        config = WebDAVConfig.from_env("TESTS_WEBDAV_", environ=environ)

        assert config.base_url == "https://cloud.example.com"
        assert config.username == "alice"
        assert config.password.get_secret_value() == "secret"
        assert config.prefix == "/remote.php/webdav/webdav_tests/"
        assert config.fake_visibility is True
        assert config.timeout == 5.0
        assert config.verify_ssl is False

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("WEBDAV_BASE_URL", "http://localhost:8080/")
        config = WebDAVConfig.from_env()
        assert config.base_url == "http://localhost:8080/"

    def test_missing_base_url(self):
        with pytest.raises(ValueError, match="WEBDAV_BASE_URL"):
            WebDAVConfig.from_env(environ={})
