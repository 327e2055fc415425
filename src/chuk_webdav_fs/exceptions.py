"""Exceptions raised by filesystem adapters."""


class FilesystemError(Exception):
    """Base exception for filesystem-related errors."""


class FilesystemOperationFailed(FilesystemError):
    """Base for errors tied to a single operation on a location."""

    operation = "operate on"

    def __init__(self, message: str = "", location: str = "", reason: str = ""):
        self.location = location
        self.reason = reason
        if not message:
            message = f"Unable to {self.operation} location: {location}."
            if reason:
                message = f"{message} {reason}"
        super().__init__(message)


class UnableToCheckExistence(FilesystemOperationFailed):
    """Raised when an existence check fails for a reason other than absence."""

    operation = "check existence for"


class UnableToWriteFile(FilesystemOperationFailed):
    """Raised when uploading a file fails."""

    operation = "write file at"


class UnableToReadFile(FilesystemOperationFailed):
    """Raised when downloading a file fails."""

    operation = "read file from"


class UnableToDeleteFile(FilesystemOperationFailed):
    """Raised when deleting a file fails."""

    operation = "delete file at"


class UnableToDeleteDirectory(FilesystemOperationFailed):
    """Raised when deleting a directory fails."""

    operation = "delete directory at"


class UnableToCreateDirectory(FilesystemOperationFailed):
    """Raised when a directory, or one of its ancestors, cannot be created."""

    operation = "create directory at"


class UnableToRetrieveMetadata(FilesystemOperationFailed):
    """Raised when file attributes cannot be resolved."""

    operation = "retrieve metadata for"


class UnableToSetVisibility(FilesystemOperationFailed):
    """Raised when visibility cannot be applied to a file."""

    operation = "set visibility for"


class UnableToMoveFile(FilesystemOperationFailed):
    """Raised when a move fails, including a missing source."""

    operation = "move file from"


class UnableToCopyFile(FilesystemOperationFailed):
    """Raised when a copy fails."""

    operation = "copy file from"


class UnableToListContents(FilesystemOperationFailed):
    """Raised when a directory listing cannot be fetched."""

    operation = "list contents of"


class InvalidVisibilityProvided(FilesystemError):
    """Raised when a visibility value is neither public nor private."""

    def __init__(self, visibility: str = ""):
        self.visibility = visibility
        super().__init__(
            f"Invalid visibility provided. Expected either public or private, received {visibility!r}."
        )


class CorruptedPathDetected(FilesystemError):
    """Raised when a path contains control or format characters."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Corrupted path detected: {path!r}")


class PathTraversalDetected(FilesystemError):
    """Raised when a path climbs above the filesystem root."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path traversal detected: {path}")


class TransportError(FilesystemError):
    """Raised when the WebDAV server could not be reached."""
