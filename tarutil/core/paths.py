"""Path helpers shared by the archiver and the extractor."""

from __future__ import annotations

import enum
import os
from typing import Union

from tarutil.common.constants import SUFFIX_TAR, SUFFIX_TAR_GZ
from tarutil.common.errors import InvalidExtensionError

StrPath = Union[str, os.PathLike]


class ArchiveFormat(enum.Enum):
    """How the tar byte stream is wrapped on disk."""

    TAR = SUFFIX_TAR
    TAR_GZ = SUFFIX_TAR_GZ

    @property
    def compressed(self) -> bool:
        return self is ArchiveFormat.TAR_GZ


def detect_format(path: str, role: str = "archive") -> ArchiveFormat:
    """Infer the archive format from the file name suffix.

    Args:
        path: Archive file name
        role: Name of the argument, used in the error message

    Returns:
        The matching ArchiveFormat

    Raises:
        InvalidExtensionError: If the name ends in neither .tar nor .tar.gz
    """
    if path.endswith(SUFFIX_TAR_GZ):
        return ArchiveFormat.TAR_GZ
    if path.endswith(SUFFIX_TAR):
        return ArchiveFormat.TAR
    raise InvalidExtensionError(
        f"{role} should have {SUFFIX_TAR} or {SUFFIX_TAR_GZ} extension: {path!r}"
    )


def path_exists(path: str) -> bool:
    """Return False for an empty path or one that does not exist.

    Stat failures other than "not found" (e.g. permission denied) count as
    existing so the caller surfaces the real error when it opens the path.
    """
    if not path:
        return False
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except OSError:
        return True
    return True


def is_within_directory(root: str, target: str) -> bool:
    """Check that `target` equals `root` or lies beneath it.

    Both paths are compared in normalized absolute form, so `/out2/x` is not
    considered to be inside `/out`.
    """
    abs_root = os.path.abspath(root)
    abs_target = os.path.abspath(target)
    try:
        common = os.path.commonpath([abs_root, abs_target])
    except ValueError:
        # different drives on Windows
        return False
    return common == abs_root


__all__ = ["StrPath", "ArchiveFormat", "detect_format", "path_exists", "is_within_directory"]
