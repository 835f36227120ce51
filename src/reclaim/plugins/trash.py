"""Plugin to empty the user's trash."""

from __future__ import annotations

import logging
from pathlib import Path

from reclaim.models.plugin import CleanPlugin
from reclaim.models.scan_result import FileEntry, ScanResult
from reclaim.utils import dir_info, xdg_data_home

log = logging.getLogger(__name__)


class TrashPlugin(CleanPlugin):
    """Empties the user's trash directory (~/.local/share/Trash)."""

    id = "trash"
    name = "User Trash"
    description = "Permanently deletes files in the trash. These files were already deleted by the user."
    sort_order = 30

    def _trash_dir(self) -> Path:
        return xdg_data_home() / "Trash"

    @property
    def unavailable_reason(self) -> str | None:
        if not self._trash_dir().is_dir():
            return "Trash directory not found"
        return None

    def _do_scan(self) -> ScanResult:
        trash_dir = self._trash_dir()
        entries: list[FileEntry] = []

        for subdir in (trash_dir / "files", trash_dir / "info"):
            if not subdir.is_dir():
                continue
            for item in sorted(subdir.iterdir()):
                try:
                    if item.is_dir() and not item.is_symlink():
                        size, fcount = dir_info(item)
                    else:
                        size, fcount = item.lstat().st_size, 1
                    entries.append(FileEntry(path=item, size_bytes=size, description=item.name, file_count=fcount))
                except OSError:
                    log.debug("Cannot access: %s", item)

        return self._result(entries, f"Found {len(entries)} items in trash")
