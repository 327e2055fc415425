"""
tests/test_attributes.py
"""

import dataclasses

import pytest

from chuk_webdav_fs.attributes import DirectoryAttributes, FileAttributes, Visibility


def test_file_is_tagged():
    attributes = FileAttributes("docs/a.txt")
    assert attributes.type == "file"
    assert attributes.is_file() is True
    assert attributes.is_dir() is False


def test_directory_is_tagged():
    attributes = DirectoryAttributes("docs")
    assert attributes.type == "dir"
    assert attributes.is_dir() is True
    assert attributes.is_file() is False


def test_metadata_defaults_to_none():
    attributes = FileAttributes("a.txt")
    assert attributes.file_size is None
    assert attributes.mime_type is None
    assert attributes.last_modified is None
    assert attributes.visibility is None
    assert attributes.extra_metadata == {}


def test_attributes_are_frozen():
    attributes = FileAttributes("a.txt", file_size=3)
    with pytest.raises(dataclasses.FrozenInstanceError):
        attributes.file_size = 4


def test_to_dict():
    data = FileAttributes("a.txt", file_size=3, mime_type="text/plain").to_dict()
    assert data["path"] == "a.txt"
    assert data["file_size"] == 3
    assert data["mime_type"] == "text/plain"
    assert data["type"] == "file"


def test_from_dict():
    # Create an entry, convert it to a dict, then create a new entry from that dict.
    original = FileAttributes("a.txt", file_size=3, last_modified=1700000000)
    assert FileAttributes.from_dict(original.to_dict()) == original

    directory = DirectoryAttributes("docs", last_modified=1700000000)
    assert DirectoryAttributes.from_dict(directory.to_dict()) == directory


def test_str():
    assert str(FileAttributes("a.txt", file_size=3)) == "[FILE] a.txt (3 bytes)"
    assert str(FileAttributes("a.txt")) == "[FILE] a.txt (? bytes)"
    assert str(DirectoryAttributes("docs")) == "[DIR] docs"


def test_visibility_values():
    assert Visibility.PUBLIC == "public"
    assert Visibility("private") is Visibility.PRIVATE


def test_attributes_are_hashable():
    first = FileAttributes("a.txt", file_size=3, extra_metadata={"etag": "1"})
    entries = {first, FileAttributes("a.txt", file_size=3, extra_metadata={"etag": "1"})}
    entries.add(DirectoryAttributes("docs", extra_metadata={"owner": "alice"}))

    assert len(entries) == 2
    assert hash(first) == hash(FileAttributes("a.txt", file_size=3))
    assert first != FileAttributes("a.txt", file_size=3)
