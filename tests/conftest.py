"""
Shared fixtures: an in-memory WebDAV client that behaves like a small server
and records every call made through it.
"""

import mimetypes
from email.utils import formatdate
from urllib.parse import quote, unquote, urljoin, urlsplit

import pytest

from chuk_webdav_fs.adapters.webdav import WebDAVAdapter
from chuk_webdav_fs.client import DavConnectionError, DavHTTPError, DavResponse
from chuk_webdav_fs.paths import PathPrefixer

BASE_URL = "http://dav.test/"
ROOT = "/root"
MODIFIED = 1700000000


class FakeDavClient:
    """In-memory stand-in for DavClient."""

    def __init__(self, base_url: str = BASE_URL, collections=("/", ROOT)):
        self.base_url = base_url
        self.files: dict[str, bytes] = {}
        self.collections: set[str] = set(collections)
        self.calls: list[tuple[str, str]] = []
        self.headers: list[dict] = []
        self.forced_status: dict[str, int] = {}
        self.content_types: dict[str, str | None] = {}
        self.offline = False
        self.modified = MODIFIED

    # Helpers

    def _key(self, url: str) -> str:
        path = unquote(urlsplit(self.get_absolute_url(url)).path)
        return path.rstrip("/") or "/"

    @staticmethod
    def _parent(key: str) -> str:
        return key.rsplit("/", 1)[0] or "/"

    def _record(self, method: str, url: str, headers=None) -> str:
        if self.offline:
            raise DavConnectionError(f"{method} {url} failed: connection refused")
        key = self._key(url)
        self.calls.append((method, key))
        self.headers.append(dict(headers or {}))
        return key

    def _descendants(self, key: str) -> list[str]:
        prefix = key.rstrip("/") + "/"
        paths = [
            p
            for p in self.collections | set(self.files)
            if p != key and p.startswith(prefix)
        ]
        return sorted(paths)

    def methods(self) -> list[str]:
        return [method for method, _ in self.calls]

    def _properties(self, key: str) -> dict:
        if key in self.collections:
            return {"{DAV:}resourcetype": ["{DAV:}collection"]}
        if key in self.content_types:
            content_type = self.content_types[key]
        else:
            content_type = mimetypes.guess_type(key)[0] or "application/octet-stream"
        properties = {
            "{DAV:}resourcetype": [],
            "{DAV:}getcontentlength": str(len(self.files[key])),
            "{DAV:}getlastmodified": formatdate(self.modified, usegmt=True),
        }
        if content_type is not None:
            properties["{DAV:}getcontenttype"] = content_type
        return properties

    def _href(self, key: str) -> str:
        href = quote(key)
        if key in self.collections and key != "/":
            href += "/"
        return href

    # WebDAVClient protocol

    def get_absolute_url(self, path: str) -> str:
        return urljoin(self.base_url, path)

    def propfind(self, url, properties=(), depth=0):
        key = self._record("PROPFIND", url)
        if key not in self.collections and key not in self.files:
            raise DavHTTPError(DavResponse(404), url)

        keys = [key]
        if depth != 0 and key in self.collections:
            descendants = self._descendants(key)
            if depth == 1:
                descendants = [p for p in descendants if self._parent(p) == key]
            keys.extend(descendants)
        return {self._href(k): self._properties(k) for k in keys}

    def request(self, method, url="", body=None, headers=None):
        key = self._record(method, url, headers)
        if method in self.forced_status:
            return DavResponse(self.forced_status[method], b"forced")

        if method == "PUT":
            if self._parent(key) not in self.collections:
                return DavResponse(409)
            existed = key in self.files
            self.files[key] = body or b""
            return DavResponse(204 if existed else 201)

        if method == "GET":
            if key not in self.files:
                return DavResponse(404, b"Not Found")
            return DavResponse(200, self.files[key])

        if method == "MKCOL":
            if key in self.collections or key in self.files:
                return DavResponse(405)
            if self._parent(key) not in self.collections:
                return DavResponse(409)
            self.collections.add(key)
            return DavResponse(201)

        if method == "DELETE":
            if key not in self.collections and key not in self.files:
                return DavResponse(404)
            for path in [key, *self._descendants(key)]:
                self.files.pop(path, None)
                self.collections.discard(path)
            return DavResponse(204)

        if method in ("MOVE", "COPY"):
            if key not in self.collections and key not in self.files:
                return DavResponse(404)
            destination = self._key(headers["Destination"])
            if self._parent(destination) not in self.collections:
                return DavResponse(409)
            for path in [key, *self._descendants(key)]:
                target = destination + path[len(key) :]
                if path in self.files:
                    self.files[target] = self.files[path]
                else:
                    self.collections.add(target)
            if method == "MOVE":
                for path in [key, *self._descendants(key)]:
                    self.files.pop(path, None)
                    self.collections.discard(path)
            return DavResponse(201)

        return DavResponse(405)


@pytest.fixture
def client():
    """In-memory WebDAV client with an empty ``/root`` collection."""
    return FakeDavClient()


@pytest.fixture
def adapter(client):
    """Adapter scoped under ``/root/``."""
    return WebDAVAdapter(client, path_prefixer=PathPrefixer("/root/"))


@pytest.fixture
def faking_adapter(client):
    """Adapter with in-memory visibility emulation."""
    return WebDAVAdapter(
        client, path_prefixer=PathPrefixer("/root/"), fake_visibility=True
    )
