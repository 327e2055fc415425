"""
chuk_webdav_fs - A WebDAV backend for storage-agnostic filesystem code
"""

from chuk_webdav_fs import exceptions, paths
from chuk_webdav_fs.adapter_base import FilesystemAdapter
from chuk_webdav_fs.adapters.webdav import WebDAVAdapter
from chuk_webdav_fs.attributes import (
    DirectoryAttributes,
    FileAttributes,
    StorageAttributes,
    Visibility,
)
from chuk_webdav_fs.client import DavClient, DavResponse, WebDAVClient
from chuk_webdav_fs.config import WebDAVConfig
from chuk_webdav_fs.paths import PathPrefixer, WhitespacePathNormalizer

__all__ = [
    # Adapters
    "FilesystemAdapter",
    "WebDAVAdapter",
    # Attributes
    "FileAttributes",
    "DirectoryAttributes",
    "StorageAttributes",
    "Visibility",
    # Transport
    "DavClient",
    "DavResponse",
    "WebDAVClient",
    # Configuration
    "WebDAVConfig",
    "PathPrefixer",
    "WhitespacePathNormalizer",
    # Utilities
    "paths",
    "exceptions",
]
