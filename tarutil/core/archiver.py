"""
Archive creation for tarutil.

Walks a source file or directory and writes its entries into a ustar
stream, optionally wrapped in gzip when the destination ends in ``.tar.gz``.
"""

from __future__ import annotations

import gzip
import os
import stat
import tarfile
from contextlib import ExitStack
from dataclasses import dataclass
from typing import BinaryIO, Collection, Iterable, Iterator

from tarutil.common.constants import DEFAULT_DIR_MODE
from tarutil.common.errors import ArchiveFormatError, ArchiveIOError, SourceNotFoundError
from tarutil.common.logging_config import get_logger
from tarutil.core.paths import StrPath, detect_format, path_exists


@dataclass
class ArchiveEntry:
    """A single file or directory record destined for the tar stream."""

    name: str
    path: str
    mode: int
    is_dir: bool
    size: int = 0
    mtime: float = 0.0

    @classmethod
    def from_stat(cls, name: str, path: str, st: os.stat_result) -> 'ArchiveEntry':
        is_dir = stat.S_ISDIR(st.st_mode)
        return cls(
            name=name,
            path=path,
            mode=stat.S_IMODE(st.st_mode),
            is_dir=is_dir,
            size=0 if is_dir else st.st_size,
            mtime=st.st_mtime,
        )

    def to_tarinfo(self) -> tarfile.TarInfo:
        """Build the ustar header for this entry."""
        info = tarfile.TarInfo(self.name)
        info.mode = self.mode
        info.mtime = int(self.mtime)
        if self.is_dir:
            info.type = tarfile.DIRTYPE
            info.size = 0
        else:
            info.type = tarfile.REGTYPE
            info.size = self.size
        return info

    def open(self) -> BinaryIO:
        """Open the entry's content for reading."""
        return open(self.path, 'rb')


def _stat(path: str) -> os.stat_result:
    try:
        return os.lstat(path)
    except OSError as exc:
        raise ArchiveIOError(f"failed to stat '{path}': {exc}") from exc


def _is_excluded(name: str, exclude_paths: Iterable[str]) -> bool:
    return any(pattern in name for pattern in exclude_paths)


def _walk_directory(
    directory: str,
    prefix: str,
    exclude_paths: Collection[str],
    skip: Collection[str],
) -> Iterator[ArchiveEntry]:
    log = get_logger(__name__)
    try:
        names = sorted(os.listdir(directory))
    except OSError as exc:
        raise ArchiveIOError(f"failed to read directory '{directory}': {exc}") from exc

    for name in names:
        path = os.path.join(directory, name)
        rel_name = prefix + name
        excluded = _is_excluded(rel_name, exclude_paths)
        st = _stat(path)

        if stat.S_ISDIR(st.st_mode):
            if excluded:
                log.debug("Excluded %s", rel_name)
            else:
                yield ArchiveEntry.from_stat(rel_name, path, st)
            # an excluded directory only drops its own entry
            yield from _walk_directory(path, rel_name + "/", exclude_paths, skip)
        elif stat.S_ISREG(st.st_mode):
            if excluded:
                log.debug("Excluded %s", rel_name)
            elif os.path.realpath(path) in skip:
                log.debug("Skipping the archive being written: %s", rel_name)
            else:
                yield ArchiveEntry.from_stat(rel_name, path, st)
        else:
            log.warning("Skipping %s: not a regular file or directory", path)


def iter_entries(
    src: StrPath,
    exclude_paths: Iterable[str] = (),
    skip: Iterable[str] = (),
) -> Iterator[ArchiveEntry]:
    """
    Yield the entries that archiving `src` would write, in stream order.

    A file source yields one entry named after its base name. A directory
    source is walked depth-first in lexical order; the root itself is not
    yielded and every name is relative to it with forward slashes.

    Args:
        src: File or directory to walk
        exclude_paths: Substrings matched against each entry name; matching
            entries are omitted (an excluded directory's children are still
            walked and checked on their own)
        skip: Real paths of files that must never be yielded
    """
    src = os.fspath(src)
    patterns = [pattern for pattern in exclude_paths if pattern]
    skip_set = {os.path.realpath(path) for path in skip}

    try:
        st = os.stat(src)
    except OSError as exc:
        raise ArchiveIOError(f"failed to stat '{src}': {exc}") from exc

    if stat.S_ISDIR(st.st_mode):
        yield from _walk_directory(src, "", patterns, skip_set)
    else:
        yield ArchiveEntry.from_stat(os.path.basename(os.path.normpath(src)), src, st)


def _write_entry(tar: tarfile.TarFile, entry: ArchiveEntry) -> None:
    try:
        info = entry.to_tarinfo()
        # Encode up front so header errors are reported before any bytes land
        info.tobuf(tar.format, tar.encoding, tar.errors)
    except ValueError as exc:
        raise ArchiveFormatError(f"failed to build tar header for '{entry.name}': {exc}") from exc

    if entry.is_dir:
        tar.addfile(info)
        return

    try:
        handle = entry.open()
    except OSError as exc:
        raise ArchiveIOError(f"failed to open '{entry.path}': {exc}") from exc
    with handle:
        tar.addfile(info, handle)


def archive(src: StrPath, dst: StrPath, *exclude_paths: str) -> None:
    """
    Archive a file or directory into a .tar or .tar.gz file.

    Args:
        src: File or directory to archive
        dst: Destination archive; its suffix selects gzip compression
        exclude_paths: Substrings of entry names to leave out

    Raises:
        SourceNotFoundError: If `src` does not exist
        InvalidExtensionError: If `dst` does not end in .tar or .tar.gz
        ArchiveIOError: On any filesystem read or write failure
        ArchiveFormatError: If an entry cannot be encoded as a ustar header

    A failure part way through leaves the partially written destination in
    place.
    """
    src = os.fspath(src)
    dst = os.fspath(dst)
    log = get_logger(__name__)

    if not path_exists(src):
        raise SourceNotFoundError(f"path {src} not exists")
    archive_format = detect_format(dst, "dst")

    parent = os.path.dirname(dst)
    if parent and not path_exists(parent):
        try:
            os.makedirs(parent, DEFAULT_DIR_MODE, exist_ok=True)
        except OSError as exc:
            raise ArchiveIOError(f"failed to create directory '{parent}': {exc}") from exc

    count = 0
    try:
        with ExitStack() as stack:
            try:
                dst_file = stack.enter_context(open(dst, 'wb'))
            except OSError as exc:
                raise ArchiveIOError(f"failed to create '{dst}': {exc}") from exc

            stream: BinaryIO = dst_file
            if archive_format.compressed:
                stream = stack.enter_context(gzip.GzipFile(fileobj=dst_file, mode='wb'))
            tar = stack.enter_context(
                tarfile.open(fileobj=stream, mode='w', format=tarfile.USTAR_FORMAT)
            )

            for entry in iter_entries(src, exclude_paths, skip=(dst,)):
                log.debug("Adding %s", entry.name)
                _write_entry(tar, entry)
                count += 1
    except OSError as exc:
        raise ArchiveIOError(f"failed to write archive '{dst}': {exc}") from exc

    log.info("Archived %d entries from %s to %s", count, src, dst)


__all__ = ["ArchiveEntry", "iter_entries", "archive"]
