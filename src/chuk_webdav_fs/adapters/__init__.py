"""
Adapters exposing remote storage through the FilesystemAdapter contract.
"""

from chuk_webdav_fs.adapters.webdav import WebDAVAdapter

__all__ = ["WebDAVAdapter"]
