"""Plugin to find large, long-untouched files in the home directory."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path

from reclaim.models.plugin import ItemizedPlugin
from reclaim.models.scan_result import FileEntry, ScanResult
from reclaim.settings import Settings

log = logging.getLogger(__name__)

_MB = 1024 * 1024
_DAY = 86400  # seconds


class LargeFilesPlugin(ItemizedPlugin):
    """Lists files above a size threshold that were not modified for a while.

    Hidden directories are not descended into. Nothing is preselected:
    the user picks individual files from the list.
    """

    id = "large_files"
    category = "user"
    sort_order = 900

    def __init__(
        self,
        root: Path | None = None,
        min_size_mb: int | None = None,
        min_age_days: int | None = None,
    ) -> None:
        settings = Settings.instance() if min_size_mb is None or min_age_days is None else None
        self._root = root
        self._min_size_mb = min_size_mb if min_size_mb is not None else settings.get_int("large_files.min_size_mb")
        self._min_age_days = min_age_days if min_age_days is not None else settings.get_int("large_files.min_age_days")

    @property
    def name(self) -> str:
        return f"Large Unused Files (>{self._min_size_mb}MB, >{self._min_age_days}d)"

    @property
    def description(self) -> str:
        return (
            f"Files over {self._min_size_mb} MB in your home directory that were not "
            f"modified in {self._min_age_days} days. Pick the ones to delete."
        )

    def _do_scan(self) -> ScanResult:
        root = self._root or Path.home()
        min_size = self._min_size_mb * _MB
        cutoff = time.time() - self._min_age_days * _DAY
        entries: list[FileEntry] = []

        for dirpath, dirnames, filenames in os.walk(root, onerror=lambda e: log.debug("Skipping: %s", e)):
            dirnames[:] = [d for d in dirnames if not d.startswith(".")]
            for filename in filenames:
                path = Path(dirpath) / filename
                try:
                    st = path.lstat()
                except OSError:
                    continue
                if path.is_symlink() or not path.is_file():
                    continue
                if st.st_size > min_size and st.st_mtime < cutoff:
                    entries.append(FileEntry(path=path, size_bytes=st.st_size, description=filename, file_count=1))

        entries.sort(key=lambda e: e.size_bytes, reverse=True)
        return self._result(entries, f"Found {len(entries)} large unused files")
