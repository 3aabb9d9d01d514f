"""Archive creation and extraction."""

from .archiver import ArchiveEntry, archive, iter_entries
from .extractor import extract

__all__ = ["ArchiveEntry", "archive", "iter_entries", "extract"]
