"""
WebDAV transport client used by the adapter.

HTTP, auth and connection handling are done by httpx; multistatus bodies
are parsed with defusedxml. The adapter only relies on the three calls of
the ``WebDAVClient`` protocol, so any object providing them can be injected
(tests use a recording fake).
"""

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol
from urllib.parse import urlsplit

import httpx
from defusedxml.common import DefusedXmlException
from defusedxml.ElementTree import fromstring

logger = logging.getLogger(__name__)

DAV_NAMESPACE = "DAV:"
RESOURCETYPE = "{DAV:}resourcetype"

Depth = Literal[0, 1, "infinity"]

ET.register_namespace("d", DAV_NAMESPACE)


@dataclass
class DavResponse:
    """Status, body and headers of a raw WebDAV response."""

    status_code: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def to_dict(self) -> dict[str, Any]:
        return {
            "statusCode": self.status_code,
            "body": self.body.decode("utf-8", errors="replace"),
            "headers": self.headers,
        }


class DavClientError(Exception):
    """Base exception for the WebDAV transport."""


class DavHTTPError(DavClientError):
    """Raised when the server answers a metadata query with an error status."""

    def __init__(self, response: DavResponse, url: str = ""):
        self.response = response
        self.status_code = response.status_code
        self.url = url
        super().__init__(f"HTTP {response.status_code} for {url}")


class DavConnectionError(DavClientError):
    """Raised when the server could not be reached."""


class WebDAVClient(Protocol):
    """The transport surface consumed by ``WebDAVAdapter``."""

    def request(
        self,
        method: str,
        url: str = "",
        body: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DavResponse: ...

    def propfind(
        self, url: str, properties: Iterable[str] = (), depth: Depth = 0
    ) -> dict[str, dict[str, Any]]: ...

    def get_absolute_url(self, path: str) -> str: ...


def build_propfind_body(properties: Iterable[str] = ()) -> bytes:
    """Build a PROPFIND request body; no properties means ``allprop``."""
    root = ET.Element(f"{{{DAV_NAMESPACE}}}propfind")
    names = list(properties)
    if names:
        prop = ET.SubElement(root, f"{{{DAV_NAMESPACE}}}prop")
        for name in names:
            ET.SubElement(prop, name)
    else:
        ET.SubElement(root, f"{{{DAV_NAMESPACE}}}allprop")
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def _status_is_ok(status: str | None) -> bool:
    if not status:
        return True
    parts = status.split()
    return len(parts) > 1 and parts[1] == "200"


def _property_value(element: ET.Element) -> Any:
    if element.tag == RESOURCETYPE:
        return [child.tag for child in element]
    if element.text is None:
        return None
    return element.text.strip()


def parse_multistatus(content: bytes) -> dict[str, dict[str, Any]]:
    """
    Flatten a multistatus body into ``{href path: {property: value}}``.

    Keys are the path component of each ``href``, still percent-encoded, in
    the order the server sent them. Only properties found with a 200 status
    are kept. ``{DAV:}resourcetype`` becomes the list of its child tags.
    """
    try:
        root = fromstring(content)
    except (ET.ParseError, DefusedXmlException) as e:
        raise DavClientError(f"Invalid multistatus response: {e}") from e

    results: dict[str, dict[str, Any]] = {}
    for response in root.findall(f"{{{DAV_NAMESPACE}}}response"):
        href = response.findtext(f"{{{DAV_NAMESPACE}}}href")
        if not href:
            continue

        properties: dict[str, Any] = {}
        for propstat in response.findall(f"{{{DAV_NAMESPACE}}}propstat"):
            if not _status_is_ok(propstat.findtext(f"{{{DAV_NAMESPACE}}}status")):
                continue
            prop = propstat.find(f"{{{DAV_NAMESPACE}}}prop")
            if prop is None:
                continue
            for element in prop:
                properties[element.tag] = _property_value(element)

        results[urlsplit(href.strip()).path] = properties
    return results


class DavClient:
    """
    Blocking WebDAV client on top of ``httpx.Client``.

    Example:
        >>> client = DavClient("https://cloud.example.com/remote.php/webdav/",
        ...                    username="alice", password="secret")
        >>> client.propfind("documents/", depth=1)
    """

    def __init__(
        self,
        base_url: str,
        username: str | None = None,
        password: str | None = None,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: WebDAV endpoint; relative paths resolve against it
            username: Basic auth user name (no auth when omitted)
            password: Basic auth password
            timeout: Timeout in seconds for every request
            verify_ssl: Verify TLS certificates
            transport: Custom httpx transport (e.g. for in-process servers)
        """
        if not base_url.endswith("/"):
            base_url += "/"
        self.base_url = base_url

        auth = httpx.BasicAuth(username, password or "") if username else None
        self.http = httpx.Client(
            auth=auth, timeout=timeout, verify=verify_ssl, transport=transport
        )

    def get_absolute_url(self, path: str) -> str:
        """Resolve ``path`` against the base URL (RFC 3986)."""
        return str(httpx.URL(self.base_url).join(path))

    def request(
        self,
        method: str,
        url: str = "",
        body: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DavResponse:
        """Send a request; HTTP error statuses are returned, not raised."""
        absolute_url = self.get_absolute_url(url)
        logger.debug(f"{method} {absolute_url}")

        try:
            response = self.http.request(
                method, absolute_url, content=body, headers=headers
            )
        except httpx.HTTPError as e:
            raise DavConnectionError(f"{method} {absolute_url} failed: {e}") from e

        return DavResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    def propfind(
        self, url: str, properties: Iterable[str] = (), depth: Depth = 0
    ) -> dict[str, dict[str, Any]]:
        """
        Query properties of ``url`` and, with depth, of its members.

        Raises:
            DavHTTPError: If the server answers with a status >= 400
        """
        response = self.request(
            "PROPFIND",
            url,
            body=build_propfind_body(properties),
            headers={
                "Depth": str(depth),
                "Content-Type": "application/xml; charset=utf-8",
            },
        )
        if response.status_code >= 400:
            raise DavHTTPError(response, self.get_absolute_url(url))
        return parse_multistatus(response.body)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "DavClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<DavClient base_url={self.base_url}>"
