#!/usr/bin/env python3
"""
Basic WebDAV Adapter Example

Connects to a WebDAV server configured through the environment, writes a
few files, lists them and cleans up.

Usage:
    export WEBDAV_BASE_URL=https://cloud.example.com
    export WEBDAV_USERNAME=alice
    export WEBDAV_PASSWORD=secret
    export WEBDAV_PREFIX=/remote.php/webdav/
    python examples/webdav/01_basic_webdav.py
"""

import logging
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))


def main():
    """Run the basic adapter walkthrough."""
    from chuk_webdav_fs import WebDAVAdapter, WebDAVConfig

    logging.basicConfig(level=logging.INFO)

    print("=" * 70)
    print("  chuk-webdav-fs basic example")
    print("=" * 70)
    print()

    config = WebDAVConfig.from_env()
    print(f"Server: {config.base_url} (prefix {config.prefix!r})")

    with WebDAVAdapter.from_config(config) as fs:
        fs.write("chuk-demo/documents/readme.txt", "Welcome to chuk-webdav-fs!")
        fs.write("chuk-demo/code/hello.py", 'print("Hello from WebDAV!")\n')
        fs.copy("chuk-demo/documents/readme.txt", "chuk-demo/backup/readme.txt")

        print()
        print("Contents:")
        for entry in fs.list_contents("chuk-demo", deep=True):
            print(f"  {entry}")

        print()
        print(f"readme.txt: {fs.read('chuk-demo/documents/readme.txt').decode()}")
        size = fs.file_size("chuk-demo/documents/readme.txt").file_size
        print(f"size: {size} bytes")

        fs.delete_directory("chuk-demo")
        print()
        print(f"Cleaned up: {not fs.directory_exists('chuk-demo')}")


if __name__ == "__main__":
    main()
