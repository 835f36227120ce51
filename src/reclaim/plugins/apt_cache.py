"""Plugin to clean the APT package cache."""

from __future__ import annotations

import logging
from pathlib import Path

from reclaim.models.clean_result import CleanResult
from reclaim.models.plugin import CleanPlugin, PluginError
from reclaim.models.scan_result import FileEntry, ScanResult
from reclaim.utils import dir_size, has_command, run_command

log = logging.getLogger(__name__)

_APT_CACHE_DIR = Path("/var/cache/apt/archives")


class AptCachePlugin(CleanPlugin):
    """Cleans downloaded APT package files."""

    id = "apt_cache"
    name = "APT Cache"
    description = (
        "Removes downloaded .deb package files from /var/cache/apt/archives. "
        "These are no longer needed after installation."
    )
    category = "package_manager"
    requires_root = True
    sort_order = 10

    @property
    def unavailable_reason(self) -> str | None:
        if not has_command("apt-get"):
            return "APT not installed"
        return None

    def _do_scan(self) -> ScanResult:
        entries: list[FileEntry] = []
        if not _APT_CACHE_DIR.is_dir():
            return self._result(entries)

        for item in sorted(_APT_CACHE_DIR.glob("*.deb")):
            try:
                entries.append(FileEntry(path=item, size_bytes=item.stat().st_size, file_count=1))
            except OSError:
                log.debug("Cannot access: %s", item)
        return self._result(entries, f"Found {len(entries)} cached packages")

    def _do_clean(self, entries: list[FileEntry]) -> CleanResult:
        size_before = dir_size(_APT_CACHE_DIR)
        proc = run_command(["apt-get", "clean"])
        if proc.returncode != 0:
            raise PluginError(f"apt-get clean failed: {proc.stderr.strip()}")
        freed = max(0, size_before - dir_size(_APT_CACHE_DIR))
        return CleanResult(plugin_id=self.id, freed_bytes=freed, files_removed=len(entries))
