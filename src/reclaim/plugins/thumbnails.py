"""Plugin to clean the freedesktop thumbnail cache."""

from __future__ import annotations

from pathlib import Path

from reclaim.models.plugin import MultiDirPlugin
from reclaim.utils import xdg_cache_home


class ThumbnailsPlugin(MultiDirPlugin):
    """Removes cached thumbnails; file managers regenerate them on demand."""

    id = "thumbnails"
    name = "User Cache (Thumbnails)"
    description = "Removes ~/.cache/thumbnails. Thumbnails are regenerated when needed."
    sort_order = 40

    @property
    def _cache_dirs(self) -> tuple[Path, ...]:
        return (xdg_cache_home() / "thumbnails",)
