"""Plugin to clean caches Electron apps keep under ~/.config."""

from __future__ import annotations

from pathlib import Path

from reclaim.models.plugin import MultiDirPlugin
from reclaim.utils import xdg_config_home

_APP_CACHE_DIRS = (
    ("discord", "Cache"),
    ("discord", "Code Cache"),
    ("discord", "DawnCache"),
    ("Slack", "Cache"),
    ("Slack", "Code Cache"),
    ("Slack", "Service Worker", "CacheStorage"),
    ("Code", "Cache"),
    ("Code", "CachedData"),
    ("Code", "CachedExtensionVSIXs"),
    ("spotify", "Storage"),
)


class AppCachePlugin(MultiDirPlugin):
    """Removes Discord, Slack, VS Code and Spotify caches."""

    id = "app_cache"
    name = "App Specific Caches"
    description = "Removes caches that Electron apps bury inside ~/.config. Apps rebuild them on start."
    category = "application"
    sort_order = 130

    @property
    def _cache_dirs(self) -> tuple[Path, ...]:
        config = xdg_config_home()
        return tuple(config.joinpath(*parts) for parts in _APP_CACHE_DIRS)
