"""Plugin to clean web browser disk caches."""

from __future__ import annotations

from pathlib import Path

from reclaim.models.plugin import MultiDirPlugin
from reclaim.utils import xdg_cache_home

# Profiles live elsewhere (~/.mozilla, ~/.config); these hold cache data only.
_BROWSER_CACHE_DIRS = (
    "google-chrome",
    "chromium",
    "mozilla/firefox",
    "BraveSoftware",
)


class BrowserCachePlugin(MultiDirPlugin):
    """Removes Chrome, Chromium, Firefox and Brave caches."""

    id = "browser_cache"
    name = "Browser Caches"
    description = "Removes browser disk caches under ~/.cache. Bookmarks, history and logins are not touched."
    category = "browser"
    sort_order = 60

    @property
    def _cache_dirs(self) -> tuple[Path, ...]:
        cache = xdg_cache_home()
        return tuple(cache / name for name in _BROWSER_CACHE_DIRS)
