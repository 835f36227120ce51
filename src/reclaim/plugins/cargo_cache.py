"""Plugin to clean the Cargo registry and git caches."""

from __future__ import annotations

import os
from pathlib import Path

from reclaim.models.plugin import MultiDirPlugin


def _cargo_home() -> Path:
    return Path(os.environ.get("CARGO_HOME", Path.home() / ".cargo"))


class CargoCachePlugin(MultiDirPlugin):
    """Removes downloaded crates and git checkouts. Cargo re-downloads on demand."""

    id = "cargo_cache"
    name = "Cargo Cache (Rust)"
    description = "Removes ~/.cargo registry caches, extracted sources and git checkouts."
    category = "development"
    sort_order = 120

    @property
    def _cache_dirs(self) -> tuple[Path, ...]:
        home = _cargo_home()
        return (
            home / "registry" / "cache",
            home / "registry" / "src",
            home / "git" / "db",
            home / "git" / "checkouts",
        )
