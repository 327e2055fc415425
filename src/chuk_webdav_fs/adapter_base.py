"""Base interface for filesystem adapters."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import BinaryIO

from chuk_webdav_fs.attributes import FileAttributes, StorageAttributes


class FilesystemAdapter(ABC):
    """
    Abstract base class for storage backends.

    Paths are slash separated and relative to the adapter's root. Failures
    are reported by raising a ``FilesystemError`` subclass.
    """

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        """Return True if a file exists at ``path``."""

    @abstractmethod
    def directory_exists(self, path: str) -> bool:
        """Return True if a directory exists at ``path``."""

    @abstractmethod
    def write(
        self, path: str, contents: bytes | str, visibility: str | None = None
    ) -> None:
        """
        Write ``contents`` to ``path``, creating parent directories.

        Raises:
            UnableToWriteFile: If the upload or a parent directory fails
        """

    @abstractmethod
    def write_stream(
        self, path: str, contents: BinaryIO, visibility: str | None = None
    ) -> None:
        """Write a binary stream to ``path``."""

    @abstractmethod
    def read(self, path: str) -> bytes:
        """
        Read the file at ``path``.

        Raises:
            UnableToReadFile: If the file cannot be downloaded
        """

    @abstractmethod
    def read_stream(self, path: str) -> BinaryIO:
        """Read the file at ``path`` as a binary stream."""

    @abstractmethod
    def delete(self, path: str) -> None:
        """Delete the file at ``path``."""

    @abstractmethod
    def delete_directory(self, path: str) -> None:
        """Delete the directory at ``path`` and everything below it."""

    @abstractmethod
    def create_directory(self, path: str) -> None:
        """
        Create the directory at ``path`` and any missing ancestors.

        Raises:
            UnableToCreateDirectory: If a level cannot be created
        """

    @abstractmethod
    def set_visibility(self, path: str, visibility: str) -> None:
        """Set the visibility of the file at ``path``."""

    @abstractmethod
    def visibility(self, path: str) -> FileAttributes:
        """Return attributes carrying the visibility of ``path``."""

    @abstractmethod
    def mime_type(self, path: str) -> FileAttributes:
        """Return attributes carrying the mime type of ``path``."""

    @abstractmethod
    def last_modified(self, path: str) -> FileAttributes:
        """Return attributes carrying the modification time of ``path``."""

    @abstractmethod
    def file_size(self, path: str) -> FileAttributes:
        """Return attributes carrying the size of ``path``."""

    @abstractmethod
    def list_contents(self, path: str, deep: bool = False) -> Iterator[StorageAttributes]:
        """
        List entries below ``path``.

        Args:
            path: Directory to list
            deep: Include all nested descendants instead of direct children

        Returns:
            A lazy iterator of file and directory attributes
        """

    @abstractmethod
    def move(self, source: str, destination: str) -> None:
        """Move ``source`` to ``destination``."""

    @abstractmethod
    def copy(self, source: str, destination: str) -> None:
        """Copy ``source`` to ``destination``."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
