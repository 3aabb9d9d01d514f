"""
Archive extraction for tarutil.

Reads a .tar or .tar.gz file entry by entry and recreates its files and
directories below a destination directory, refusing any entry whose target
would land outside of it.
"""

from __future__ import annotations

import gzip
import os
import shutil
import tarfile
import zlib
from contextlib import ExitStack
from typing import BinaryIO

from tarutil.common.constants import DEFAULT_DIR_MODE
from tarutil.common.errors import ArchiveFormatError, ArchiveIOError, UnsafeArchivePathError
from tarutil.common.logging_config import get_logger
from tarutil.core.paths import StrPath, detect_format, is_within_directory

# Decoder failures; gzip.BadGzipFile is an OSError so these are checked first
_FORMAT_ERRORS = (tarfile.TarError, gzip.BadGzipFile, EOFError, zlib.error)


def _resolve_target(destination: str, member: tarfile.TarInfo) -> str:
    target = os.path.normpath(os.path.join(destination, member.name))
    if not is_within_directory(destination, target):
        get_logger(__name__).error(
            "Refusing to extract %r: target %s is outside %s", member.name, target, destination
        )
        raise UnsafeArchivePathError(member.name, target, destination)
    return target


def _extract_directory(target: str, mode: int) -> None:
    try:
        os.makedirs(target, mode, exist_ok=True)
    except OSError as exc:
        raise ArchiveIOError(f"failed to create directory '{target}': {exc}") from exc


def _extract_file(tar: tarfile.TarFile, member: tarfile.TarInfo, target: str, mode: int) -> None:
    parent = os.path.dirname(target)
    if not os.path.isdir(parent):
        _extract_directory(parent, DEFAULT_DIR_MODE)

    source = tar.extractfile(member)
    if source is None:
        raise ArchiveFormatError(f"failed to read archive member: {member.name!r}")

    try:
        fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    except OSError as exc:
        raise ArchiveIOError(f"failed to create target file '{target}': {exc}") from exc

    try:
        with source, os.fdopen(fd, 'wb') as out_file:
            shutil.copyfileobj(source, out_file)
    except _FORMAT_ERRORS:
        raise
    except OSError as exc:
        raise ArchiveIOError(f"failed to extract file '{target}': {exc}") from exc


def _extract_members(tar: tarfile.TarFile, destination: str) -> int:
    log = get_logger(__name__)
    count = 0
    for member in tar:
        target = _resolve_target(destination, member)
        mode = member.mode & 0o7777
        if member.isdir():
            log.debug("Creating directory %s", target)
            _extract_directory(target, mode)
        elif member.isreg():
            log.debug("Extracting %s", target)
            _extract_file(tar, member, target, mode)
        else:
            log.warning("Skipping %r: unsupported entry type", member.name)
            continue
        count += 1
    return count


def extract(src: StrPath, dst: StrPath = "") -> None:
    """
    Extract a .tar or .tar.gz archive into a directory.

    Args:
        src: Archive file; its suffix selects gzip decompression
        dst: Destination directory, created if missing. Defaults to the
            current working directory when empty.

    Raises:
        InvalidExtensionError: If `src` does not end in .tar or .tar.gz
        UnsafeArchivePathError: If an entry would be written outside `dst`
        ArchiveFormatError: If a tar header or the gzip stream is malformed
        ArchiveIOError: On any filesystem read or write failure

    Entries already written before a failure are left on disk.
    """
    src = os.fspath(src)
    dst = os.fspath(dst) or "."
    log = get_logger(__name__)

    archive_format = detect_format(src, "src")
    destination = os.path.abspath(dst)
    _extract_directory(destination, DEFAULT_DIR_MODE)

    count = 0
    try:
        with ExitStack() as stack:
            try:
                archive_file = stack.enter_context(open(src, 'rb'))
            except OSError as exc:
                raise ArchiveIOError(f"failed to open src '{src}': {exc}") from exc

            # a zero-length plain tar is an immediate end of stream
            if not archive_format.compressed and os.fstat(archive_file.fileno()).st_size == 0:
                log.debug("%s is empty, nothing to extract", src)
            else:
                stream: BinaryIO = archive_file
                if archive_format.compressed:
                    stream = stack.enter_context(gzip.GzipFile(fileobj=archive_file, mode='rb'))
                tar = stack.enter_context(tarfile.open(fileobj=stream, mode='r|'))
                count = _extract_members(tar, destination)
    except _FORMAT_ERRORS as exc:
        raise ArchiveFormatError(f"failed to read tar archive '{src}': {exc}") from exc
    except OSError as exc:
        raise ArchiveIOError(f"failed to read archive '{src}': {exc}") from exc

    log.info("Extracted %d entries from %s to %s", count, src, destination)


__all__ = ["extract"]
