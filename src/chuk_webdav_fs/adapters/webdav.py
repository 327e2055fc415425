"""
WebDAV adapter for chuk-webdav-fs.

Maps the generic FilesystemAdapter operations onto WebDAV requests
(PROPFIND, PUT, GET, DELETE, MKCOL, MOVE, COPY) sent through an injected
client, and maps the responses back onto attributes and FilesystemErrors.
"""

import io
import json
import logging
from collections.abc import Iterator
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any, BinaryIO
from urllib.parse import unquote

from chuk_webdav_fs.adapter_base import FilesystemAdapter
from chuk_webdav_fs.attributes import (
    DirectoryAttributes,
    FileAttributes,
    StorageAttributes,
    Visibility,
)
from chuk_webdav_fs.client import (
    DavClient,
    DavClientError,
    DavHTTPError,
    DavResponse,
    WebDAVClient,
)
from chuk_webdav_fs.config import WebDAVConfig
from chuk_webdav_fs.exceptions import (
    InvalidVisibilityProvided,
    TransportError,
    UnableToCheckExistence,
    UnableToCopyFile,
    UnableToCreateDirectory,
    UnableToDeleteDirectory,
    UnableToDeleteFile,
    UnableToListContents,
    UnableToMoveFile,
    UnableToReadFile,
    UnableToRetrieveMetadata,
    UnableToSetVisibility,
    UnableToWriteFile,
)
from chuk_webdav_fs.paths import (
    PathNormalizer,
    PathPrefixer,
    WhitespacePathNormalizer,
    dirname,
    encode_path,
)

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"

GETCONTENTLENGTH = "{DAV:}getcontentlength"
GETCONTENTTYPE = "{DAV:}getcontenttype"
GETLASTMODIFIED = "{DAV:}getlastmodified"
RESOURCETYPE = "{DAV:}resourcetype"
ISCOLLECTION = "{DAV:}iscollection"
COLLECTION = "{DAV:}collection"


def _to_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_timestamp(value: str | None) -> int | None:
    """Parse an HTTP date (RFC 1123, or ISO 8601 as sent by some servers)."""
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return int(parsed.timestamp())


def _mime_type(value: str | None) -> str | None:
    # Drop parameters such as "; charset=utf-8"
    if not value:
        return None
    return value.split(";", 1)[0].strip() or None


def _describe(response: DavResponse) -> str:
    return json.dumps(response.to_dict())


class WebDAVAdapter(FilesystemAdapter):
    """
    Filesystem adapter backed by a remote WebDAV server.

    Example:
        >>> from chuk_webdav_fs import DavClient, PathPrefixer, WebDAVAdapter
        >>>
        >>> client = DavClient("https://cloud.example.com", username="alice", password="secret")
        >>> adapter = WebDAVAdapter(client, path_prefixer=PathPrefixer("/remote.php/webdav/"))
        >>> adapter.write("reports/2024/summary.txt", b"Hello")
        >>> [entry.path for entry in adapter.list_contents("reports", deep=True)]
        ['reports/2024', 'reports/2024/summary.txt']

    The prefix must be the absolute server path of the root, since listing
    hrefs come back as absolute paths and are stripped with it.
    """

    def __init__(
        self,
        client: WebDAVClient,
        path_normalizer: PathNormalizer | None = None,
        path_prefixer: PathPrefixer | None = None,
        fake_visibility: bool = False,
    ):
        """
        Initialize the adapter.

        Args:
            client: WebDAV transport
            path_normalizer: Normalization policy (default: WhitespacePathNormalizer)
            path_prefixer: Root scoping on the server (default: no prefix)
            fake_visibility: Emulate visibility in memory; for test suites only
        """
        self.client = client
        self.path_normalizer = path_normalizer or WhitespacePathNormalizer()
        self.path_prefixer = path_prefixer or PathPrefixer("")
        self.fake_visibility = fake_visibility

        # path -> "public" | "private", only used when fake_visibility is set
        self._fake_visibilities: dict[str, str] = {}

    @classmethod
    def from_config(cls, config: WebDAVConfig) -> "WebDAVAdapter":
        """Build a DavClient and an adapter from settings."""
        client = DavClient(
            config.base_url,
            username=config.username,
            password=config.password.get_secret_value() if config.password else None,
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
        )
        return cls(
            client,
            path_prefixer=PathPrefixer(config.prefix),
            fake_visibility=config.fake_visibility,
        )

    # Locations

    def _file_location(self, path: str) -> str:
        path = self.path_normalizer.normalize_path(path)
        return self.path_prefixer.prefix_path(encode_path(path))

    def _directory_location(self, path: str) -> str:
        path = self.path_normalizer.normalize_path(path)
        return self.path_prefixer.prefix_directory_path(encode_path(path))

    def _request(
        self,
        method: str,
        location: str,
        body: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> DavResponse:
        try:
            return self.client.request(method, location, body, headers)
        except DavClientError as e:
            raise TransportError(f"{method} {location} failed: {e}") from e

    # Existence

    def _exists(self, location: str) -> bool:
        try:
            self.client.propfind(location, [], 0)
        except DavHTTPError:
            return False
        except DavClientError as e:
            raise UnableToCheckExistence(location=location, reason=str(e)) from e
        return True

    def file_exists(self, path: str) -> bool:
        return self._exists(self._file_location(path))

    def directory_exists(self, path: str) -> bool:
        return self._exists(self._directory_location(path))

    # Write / read

    def write(
        self, path: str, contents: bytes | str, visibility: str | None = None
    ) -> None:
        directory = dirname(path)
        try:
            self.create_directory(directory)
        except UnableToCreateDirectory as e:
            raise UnableToWriteFile(
                f"Unable to create the directory {directory}", location=path
            ) from e

        if isinstance(contents, str):
            contents = contents.encode("utf-8")

        location = self._file_location(path)
        response = self._request("PUT", location, body=contents)
        if response.status_code >= 400:
            raise UnableToWriteFile(
                f"URL: {location}, Server respond with {_describe(response)}",
                location=path,
            )

        if visibility:
            self.set_visibility(path, visibility)

    def write_stream(
        self, path: str, contents: BinaryIO, visibility: str | None = None
    ) -> None:
        self.write(path, contents.read(), visibility=visibility)

    def read(self, path: str) -> bytes:
        location = self._file_location(path)
        response = self._request("GET", location)
        if response.status_code != 200:
            raise UnableToReadFile(
                f"Server response was {_describe(response)}", location=path
            )
        return response.body

    def read_stream(self, path: str) -> BinaryIO:
        return io.BytesIO(self.read(path))

    # Delete

    def _delete(self, location: str) -> None:
        response = self._request("DELETE", location)
        if response.status_code == 404:
            logger.debug(f"DELETE {location}: nothing to delete")
        elif not response.is_success:
            logger.warning(
                f"DELETE {location} answered with status {response.status_code}"
            )

    def delete(self, path: str) -> None:
        try:
            self._delete(self._file_location(path))
        except TransportError as e:
            raise UnableToDeleteFile(location=path, reason=str(e)) from e

    def delete_directory(self, path: str) -> None:
        try:
            self._delete(self._directory_location(path))
        except TransportError as e:
            raise UnableToDeleteDirectory(location=path, reason=str(e)) from e

    # Directories

    def create_directory(self, path: str) -> None:
        if self.path_normalizer.normalize_path(path) == "" or self.directory_exists(
            path
        ):
            return

        parent = dirname(path)
        try:
            self.create_directory(parent)
        except UnableToCreateDirectory as e:
            raise UnableToCreateDirectory(
                f"Unable to create the directory {path} because impossible to create {parent}",
                location=path,
            ) from e

        location = self._directory_location(path)
        logger.debug(f"Creating directory {location}")
        response = self._request("MKCOL", location)
        if response.status_code != 201:
            raise UnableToCreateDirectory(
                f"Impossible to create directory, server response is {_describe(response)}.",
                location=path,
            )

    # Visibility

    def set_visibility(self, path: str, visibility: str) -> None:
        if not self.fake_visibility:
            raise UnableToSetVisibility(
                "Webdav doesn't support visibilities.", location=path
            )

        if not self.file_exists(path):
            raise UnableToSetVisibility(location=path, reason="File does not exist.")

        if visibility not in (Visibility.PUBLIC, Visibility.PRIVATE):
            raise InvalidVisibilityProvided(visibility)

        self._fake_visibilities[path] = Visibility(visibility).value

    def visibility(self, path: str) -> FileAttributes:
        if not self.fake_visibility:
            raise UnableToRetrieveMetadata(
                "Webdav doesn't support visibilities.", location=path
            )
        return self._file_attributes(path)

    # Metadata

    def _is_directory(self, properties: dict[str, Any]) -> bool:
        resource_type = properties.get(RESOURCETYPE)
        if resource_type is not None:
            return COLLECTION in resource_type
        # Fallback for servers that omit resourcetype
        return properties.get(ISCOLLECTION) == "1"

    def _file_attributes(self, path: str) -> FileAttributes:
        location = self._file_location(path)
        try:
            response = self.client.propfind(location, [], 0)
        except DavClientError as e:
            raise UnableToRetrieveMetadata(location=path, reason=str(e)) from e

        properties = next(iter(response.values()), {})
        if self._is_directory(properties):
            raise UnableToRetrieveMetadata(location=path, reason="It is a directory.")

        visibility = None
        if self.fake_visibility:
            visibility = self._fake_visibilities.get(path, Visibility.PUBLIC.value)

        return FileAttributes(
            path,
            file_size=_to_int(properties.get(GETCONTENTLENGTH)),
            mime_type=_mime_type(properties.get(GETCONTENTTYPE)),
            last_modified=_parse_timestamp(properties.get(GETLASTMODIFIED)),
            visibility=visibility,
        )

    def mime_type(self, path: str) -> FileAttributes:
        attributes = self._file_attributes(path)
        if not attributes.mime_type or attributes.mime_type == DEFAULT_MIME_TYPE:
            raise UnableToRetrieveMetadata(
                location=path, reason="Unknown mime type."
            )
        return attributes

    def last_modified(self, path: str) -> FileAttributes:
        return self._file_attributes(path)

    def file_size(self, path: str) -> FileAttributes:
        return self._file_attributes(path)

    # Listing

    def list_contents(self, path: str, deep: bool = False) -> Iterator[StorageAttributes]:
        location = self._directory_location(path)
        try:
            response = self.client.propfind(location, [], "infinity" if deep else 1)
        except DavClientError as e:
            raise UnableToListContents(location=path, reason=str(e)) from e

        entries = iter(response.items())
        # The first entry describes the listed directory itself
        next(entries, None)

        for href, properties in entries:
            entry_path = unquote(href)
            last_modified = _parse_timestamp(properties.get(GETLASTMODIFIED))
            if self._is_directory(properties):
                yield DirectoryAttributes(
                    self.path_prefixer.strip_directory_prefix(entry_path).lstrip("/"),
                    last_modified=last_modified,
                )
            else:
                yield FileAttributes(
                    self.path_prefixer.strip_prefix(entry_path).lstrip("/"),
                    file_size=_to_int(properties.get(GETCONTENTLENGTH)),
                    mime_type=_mime_type(properties.get(GETCONTENTTYPE)),
                    last_modified=last_modified,
                )

    # Move / copy

    def _transfer(self, method: str, source: str, destination: str) -> DavResponse:
        source_url = self.client.get_absolute_url(self._file_location(source))
        destination_url = self.client.get_absolute_url(self._file_location(destination))
        logger.debug(f"{method} {source_url} -> {destination_url}")
        return self._request(
            method, source_url, headers={"Destination": destination_url}
        )

    def move(self, source: str, destination: str) -> None:
        directory = dirname(destination)
        try:
            self.create_directory(directory)
        except UnableToCreateDirectory as e:
            raise UnableToMoveFile(
                f"Unable to create the directory {directory}.", location=source
            ) from e

        response = self._transfer("MOVE", source, destination)
        if response.status_code == 404:
            raise UnableToMoveFile(f"File {source} doesn't exist.", location=source)
        if response.status_code >= 400:
            raise UnableToMoveFile(
                f"Unable to move {source} to {destination}, server response is {_describe(response)}.",
                location=source,
            )

    def copy(self, source: str, destination: str) -> None:
        directory = dirname(destination)
        try:
            self.create_directory(directory)
        except UnableToCreateDirectory as e:
            raise UnableToCopyFile(
                f"Unable to create the directory {directory}.", location=source
            ) from e

        response = self._transfer("COPY", source, destination)
        if response.status_code >= 400:
            raise UnableToCopyFile(
                f"Unable to copy {source} to {destination}, server response is {_describe(response)}.",
                location=source,
            )

    # Lifecycle

    def close(self) -> None:
        """Close the underlying client if it holds resources."""
        close = getattr(self.client, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "WebDAVAdapter":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<WebDAVAdapter prefix={self.path_prefixer.prefix!r}>"
