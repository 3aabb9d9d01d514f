"""Environment-backed configuration for tarutil.

Recognised variables:
    - `TARUTIL_LOG_LEVEL`   log level used by the CLI (default INFO)
    - `TARUTIL_EXCLUDE`     comma separated exclusion substrings for `archive`
    - `TARUTIL_EXTRACT_DIR` default destination for `extract`
"""

import os
from typing import List, Mapping, Optional


class TarutilSettings:
    """Resolve environment configuration for tarutil."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = os.environ if environ is None else environ

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._environ.get(key, default)

    def log_level(self) -> str:
        return (self.get("TARUTIL_LOG_LEVEL") or "INFO").upper()

    def default_excludes(self) -> List[str]:
        raw = self.get("TARUTIL_EXCLUDE", "") or ""
        return [item.strip() for item in raw.split(",") if item.strip()]

    def default_extract_dir(self) -> str:
        return self.get("TARUTIL_EXTRACT_DIR", "") or ""
