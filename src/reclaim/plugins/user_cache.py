"""Plugin to clean the rest of ~/.cache."""

from __future__ import annotations

import logging

from reclaim.models.plugin import CleanPlugin
from reclaim.models.scan_result import FileEntry, ScanResult
from reclaim.utils import dir_info, xdg_cache_home

log = logging.getLogger(__name__)

# Handled by dedicated plugins
_PLUGIN_DIRS = {
    "thumbnails",
    "google-chrome",
    "chromium",
    "mozilla",
    "BraveSoftware",
}

# Used by running desktop sessions; removing them causes glitches until relogin
_EXCLUDE_DIRS = {
    "fontconfig",
    "icon-cache.kcache",
    "gstreamer-1.0",
}


class UserCachePlugin(CleanPlugin):
    """Removes each remaining top-level entry in ~/.cache."""

    id = "user_cache"
    name = "Other User Caches"
    description = (
        "Removes application caches in ~/.cache not covered by another cleaner. "
        "Applications rebuild their caches when needed."
    )
    sort_order = 80

    @property
    def unavailable_reason(self) -> str | None:
        if not xdg_cache_home().is_dir():
            return "~/.cache not found"
        return None

    def _do_scan(self) -> ScanResult:
        cache_dir = xdg_cache_home()
        entries: list[FileEntry] = []
        try:
            children = sorted(cache_dir.iterdir())
        except OSError:
            log.debug("Cannot read cache directory: %s", cache_dir)
            return self._result(entries)

        for item in children:
            if item.name in _PLUGIN_DIRS or item.name in _EXCLUDE_DIRS:
                continue
            try:
                if item.is_dir() and not item.is_symlink():
                    size, fcount = dir_info(item)
                else:
                    size, fcount = item.lstat().st_size, 1
            except OSError:
                log.debug("Cannot access: %s", item)
                continue
            if size > 0:
                entries.append(FileEntry(path=item, size_bytes=size, description=item.name, file_count=fcount))

        return self._result(entries, f"Found {len(entries)} cache entries")
