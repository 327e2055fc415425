"""
chuk_webdav_fs/attributes.py - File and directory attributes returned by adapters
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Literal


class Visibility(str, Enum):
    """Abstract access flag for a file."""

    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True)
class FileAttributes:
    """Attributes of a file; every metadata field is best-effort"""

    path: str
    file_size: int | None = None
    visibility: str | None = None
    last_modified: int | None = None  # Unix timestamp
    mime_type: str | None = None
    extra_metadata: dict[str, Any] = field(default_factory=dict, hash=False)
    type: Literal["file"] = field(default="file", init=False)

    def is_file(self) -> bool:
        return True

    def is_dir(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FileAttributes":
        """Create from dictionary representation"""
        data = {k: v for k, v in data.items() if k != "type"}
        return cls(**data)

    def __str__(self) -> str:
        size = "?" if self.file_size is None else self.file_size
        return f"[FILE] {self.path} ({size} bytes)"


@dataclass(frozen=True)
class DirectoryAttributes:
    """Attributes of a directory"""

    path: str
    visibility: str | None = None
    last_modified: int | None = None
    extra_metadata: dict[str, Any] = field(default_factory=dict, hash=False)
    type: Literal["dir"] = field(default="dir", init=False)

    def is_file(self) -> bool:
        return False

    def is_dir(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DirectoryAttributes":
        """Create from dictionary representation"""
        data = {k: v for k, v in data.items() if k != "type"}
        return cls(**data)

    def __str__(self) -> str:
        return f"[DIR] {self.path}"


# Listing entries are one or the other, told apart by ``type``
StorageAttributes = FileAttributes | DirectoryAttributes
