"""
chuk_webdav_fs/paths.py - Logical path normalization, prefixing and URL encoding
"""

import posixpath
import unicodedata
from typing import Protocol
from urllib.parse import quote

from chuk_webdav_fs.exceptions import CorruptedPathDetected, PathTraversalDetected


class PathNormalizer(Protocol):
    """Policy turning a user supplied path into a canonical logical path."""

    def normalize_path(self, path: str) -> str: ...


class WhitespacePathNormalizer:
    """
    Default normalization policy.

    Backslashes become slashes, empty and ``.`` segments are dropped and
    ``..`` is resolved. The root normalizes to the empty string.
    """

    def normalize_path(self, path: str) -> str:
        path = path.replace("\\", "/")
        self._reject_funky_whitespace(path)
        return self._normalize_relative_path(path)

    @staticmethod
    def _reject_funky_whitespace(path: str) -> None:
        # Unicode "Other" categories: control, format, surrogate, private use
        if any(unicodedata.category(char).startswith("C") for char in path):
            raise CorruptedPathDetected(path)

    @staticmethod
    def _normalize_relative_path(path: str) -> str:
        parts: list[str] = []
        for part in path.split("/"):
            if part in ("", "."):
                continue
            if part == "..":
                if not parts:
                    raise PathTraversalDetected(path)
                parts.pop()
            else:
                parts.append(part)
        return "/".join(parts)


class PathPrefixer:
    """Scopes logical paths under a root prefix on the server."""

    def __init__(self, prefix: str, separator: str = "/"):
        self.separator = separator
        self.prefix = prefix.rstrip("\\/")
        if self.prefix != "" or prefix == separator:
            self.prefix += separator

    def prefix_path(self, path: str) -> str:
        return self.prefix + path.lstrip("\\/")

    def strip_prefix(self, path: str) -> str:
        return path[len(self.prefix) :]

    def strip_directory_prefix(self, path: str) -> str:
        return self.strip_prefix(path).rstrip("\\/")

    def prefix_directory_path(self, path: str) -> str:
        prefixed_path = self.prefix_path(path.rstrip("\\/"))
        if prefixed_path == "" or prefixed_path.endswith(self.separator):
            return prefixed_path
        return prefixed_path + self.separator

    def __repr__(self) -> str:
        return f"<PathPrefixer prefix={self.prefix!r}>"


def encode_path(path: str) -> str:
    """Percent-encode each segment of ``path``, keeping the separators."""
    return "/".join(quote(part, safe="") for part in path.split("/"))


def dirname(path: str) -> str:
    """Parent of a logical path, empty for top-level entries."""
    return posixpath.dirname(path.rstrip("/"))
