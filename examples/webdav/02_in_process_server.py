#!/usr/bin/env python3
"""
In-process WebDAV Server Example

Serves a temporary directory with WsgiDAV and talks to it through
httpx.WSGITransport, so no network port is opened.

Usage:
    pip install wsgidav
    python examples/webdav/02_in_process_server.py
"""

import sys
import tempfile
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))


def main():
    """Run the adapter against a local WsgiDAV share."""
    import httpx
    from wsgidav.wsgidav_app import WsgiDAVApp

    from chuk_webdav_fs import DavClient, PathPrefixer, WebDAVAdapter

    with tempfile.TemporaryDirectory() as root:
        app = WsgiDAVApp(
            {
                "provider_mapping": {"/dav": root},
                "simple_dc": {"user_mapping": {"*": True}},  # Allow anonymous access
                "verbose": 1,
                "logging": {"enable_loggers": []},
            }
        )
        client = DavClient(
            "http://testserver/dav/", transport=httpx.WSGITransport(app=app)
        )

        with WebDAVAdapter(client, path_prefixer=PathPrefixer("/dav/")) as fs:
            fs.write("reports/2024/summary.txt", b"Quarterly numbers")
            fs.move("reports/2024/summary.txt", "archive/summary.txt")

            for entry in fs.list_contents("archive"):
                print(entry)

            on_disk = Path(root) / "archive" / "summary.txt"
            print(f"On disk: {on_disk.read_text()}")


if __name__ == "__main__":
    main()
