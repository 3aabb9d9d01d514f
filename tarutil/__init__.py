"""tarutil - create and extract .tar / .tar.gz archives.

Provides:
* `archive` - walk a file or directory into a tar stream, gzip-compressed
  when the destination ends in ``.tar.gz``
* `extract` - rebuild an archive's files below a destination directory,
  rejecting entries that would escape it
* Thin CLI wrapper (`tarutil`)
"""

from ._version import __version__
from .common.logging_config import configure_logging  # noqa: F401
from .common.errors import (  # noqa: F401
    TarutilError,
    ArchiveValidationError,
    InvalidExtensionError,
    SourceNotFoundError,
    ArchiveIOError,
    ArchiveFormatError,
    UnsafeArchivePathError,
)
from .core.archiver import ArchiveEntry, archive, iter_entries  # noqa: F401
from .core.extractor import extract  # noqa: F401

__all__ = [
    "__version__",
    "configure_logging",
    "archive",
    "extract",
    "iter_entries",
    "ArchiveEntry",
    "TarutilError",
    "ArchiveValidationError",
    "InvalidExtensionError",
    "SourceNotFoundError",
    "ArchiveIOError",
    "ArchiveFormatError",
    "UnsafeArchivePathError",
]
