"""
Custom exception classes for tarutil.
"""


class TarutilError(Exception):
    """Base exception class for tarutil errors."""
    pass


class ArchiveValidationError(TarutilError):
    """Raised when arguments are rejected before any I/O starts."""
    pass


class InvalidExtensionError(ArchiveValidationError):
    """Raised when an archive path does not end in .tar or .tar.gz."""
    pass


class SourceNotFoundError(ArchiveValidationError):
    """Raised when the path to archive does not exist."""
    pass


class ArchiveIOError(TarutilError):
    """Raised when reading or writing files or archive streams fails."""
    pass


class ArchiveFormatError(TarutilError):
    """Raised when a tar header or gzip stream is malformed."""
    pass


class UnsafeArchivePathError(TarutilError):
    """Raised when an archive entry would be extracted outside the destination."""

    def __init__(self, entry_name: str, target: str, destination: str):
        self.entry_name = entry_name
        self.target = target
        self.destination = destination
        super().__init__(
            f"Unsafe tar member path detected: {entry_name!r} resolves to "
            f"'{target}', outside of '{destination}'"
        )
