"""Plugin to clean system temporary directories."""

from __future__ import annotations

import logging
from pathlib import Path

from reclaim.models.clean_result import CleanResult
from reclaim.models.plugin import CleanPlugin
from reclaim.models.scan_result import FileEntry, ScanResult
from reclaim.utils import dir_info, remove_entries

log = logging.getLogger(__name__)

_TMP_DIRS = (Path("/tmp"), Path("/var/tmp"), Path("/var/crash"))


def _keep(path: Path) -> bool:
    """X11 sockets and lock files in /tmp must survive."""
    return path.parent == Path("/tmp") and path.name.startswith(".X")


class TmpFilesPlugin(CleanPlugin):
    """Empties /tmp, /var/tmp and /var/crash."""

    id = "tmp_files"
    name = "System Temp Files"
    description = (
        "Removes everything in /tmp, /var/tmp and /var/crash except X11 sockets. "
        "Files in use by running programs fail to delete and are left alone."
    )
    category = "system"
    requires_root = True
    sort_order = 110

    def __init__(self, tmp_dirs: tuple[Path, ...] = _TMP_DIRS) -> None:
        self._tmp_dirs = tmp_dirs

    def _do_scan(self) -> ScanResult:
        entries: list[FileEntry] = []
        for tmp_dir in self._tmp_dirs:
            try:
                children = sorted(tmp_dir.iterdir())
            except OSError:
                continue
            for item in children:
                if _keep(item):
                    continue
                try:
                    if item.is_dir() and not item.is_symlink():
                        size, fcount = dir_info(item)
                    elif item.is_file() and not item.is_symlink():
                        size, fcount = item.stat().st_size, 1
                    else:
                        # sockets, fifos, devices, symlinks
                        size, fcount = 0, 1
                    entries.append(FileEntry(path=item, size_bytes=size, description=item.name, file_count=fcount))
                except OSError:
                    log.debug("Cannot access: %s", item)
        return self._result(entries, f"Found {len(entries)} temporary items")

    def _do_clean(self, entries: list[FileEntry]) -> CleanResult:
        freed, removed, errors = remove_entries(entries, count_files=True)
        # Busy files are expected here and not worth failing the row over.
        for err in errors:
            log.info("tmp_files: %s", err)
        return CleanResult(plugin_id=self.id, freed_bytes=freed, files_removed=removed)
