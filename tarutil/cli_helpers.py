"""Shared CLI helpers for tarutil commands."""

import sys
from typing import Optional

from tarutil.common.constants import ExitCodes
from tarutil.common.errors import (
    ArchiveFormatError,
    ArchiveIOError,
    InvalidExtensionError,
    SourceNotFoundError,
    UnsafeArchivePathError,
)


def exit_with_error(message: str, exit_code: int) -> None:
    """Print an error message and exit with the specified code."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(exit_code)


def map_exception_to_exit_code(exc: Exception) -> Optional[int]:
    """Translate known exceptions to tarutil exit codes."""
    if isinstance(exc, InvalidExtensionError):
        return ExitCodes.INVALID_EXTENSION
    if isinstance(exc, SourceNotFoundError):
        return ExitCodes.SOURCE_NOT_FOUND
    if isinstance(exc, UnsafeArchivePathError):
        return ExitCodes.UNSAFE_PATH
    if isinstance(exc, ArchiveIOError):
        return ExitCodes.IO_ERROR
    if isinstance(exc, ArchiveFormatError):
        return ExitCodes.FORMAT_ERROR
    return None


def report_failure(exc: Exception, action: str) -> None:
    """Exit with the message and exit code matching `exc`."""
    exit_code = map_exception_to_exit_code(exc)
    if exit_code is None:
        exit_with_error(f"{action} failed unexpectedly: {exc}", ExitCodes.UNEXPECTED_ERROR)
    else:
        exit_with_error(f"{action} failed: {exc}", exit_code)
