"""Plugin to clean the npm cache."""

from __future__ import annotations

import logging
from pathlib import Path

from reclaim.models.clean_result import CleanResult
from reclaim.models.plugin import CleanPlugin
from reclaim.models.scan_result import FileEntry, ScanResult
from reclaim.utils import dir_info, has_command, remove_entries, run_command

log = logging.getLogger(__name__)


def _npm_dir() -> Path:
    return Path.home() / ".npm"


class NpmCachePlugin(CleanPlugin):
    """Clears ~/.npm, through npm itself when it is installed."""

    id = "npm_cache"
    name = "NPM Cache"
    description = "Removes the npm package cache in ~/.npm. Packages are re-downloaded on the next install."
    category = "development"
    sort_order = 90

    @property
    def unavailable_reason(self) -> str | None:
        if not _npm_dir().is_dir():
            return "npm cache directory not found"
        return None

    def _do_scan(self) -> ScanResult:
        npm_dir = _npm_dir()
        if not npm_dir.is_dir():
            return self._result([])
        size, fcount = dir_info(npm_dir)
        return self._result([FileEntry(path=npm_dir, size_bytes=size, description="npm cache", file_count=fcount)])

    def _do_clean(self, entries: list[FileEntry]) -> CleanResult:
        if has_command("npm"):
            proc = run_command(["npm", "cache", "clean", "--force"])
            if proc.returncode == 0:
                return CleanResult(
                    plugin_id=self.id,
                    freed_bytes=sum(e.size_bytes for e in entries),
                    files_removed=sum(e.file_count for e in entries),
                )
            log.info("npm cache clean failed, removing %s directly: %s", _npm_dir(), proc.stderr.strip())

        freed, removed, errors = remove_entries(entries, count_files=True)
        return CleanResult(plugin_id=self.id, freed_bytes=freed, files_removed=removed, errors=errors)
