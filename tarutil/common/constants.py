"""
Constants and exit codes for tarutil.
"""

SUFFIX_TAR = '.tar'
SUFFIX_TAR_GZ = '.tar.gz'

# Mode for directories tarutil creates on its own (archive parents, extraction root)
DEFAULT_DIR_MODE = 0o755


class ExitCodes:
    """Exit codes for different error conditions."""
    OK = 0
    INVALID_EXTENSION = 1
    SOURCE_NOT_FOUND = 2
    UNSAFE_PATH = 3
    IO_ERROR = 4
    FORMAT_ERROR = 5
    UNEXPECTED_ERROR = 6
