"""Central plugin registry."""

from __future__ import annotations

import logging
from typing import Iterator

from reclaim.models.plugin import CleanPlugin

log = logging.getLogger(__name__)


def _display_key(plugin: CleanPlugin) -> tuple[int, str]:
    return plugin.sort_order, plugin.name


class PluginRegistry:
    """Registered cleaning plugins, keyed by id and listed in display order.

    Display order is ``sort_order`` then ``name``; it is also the row order
    of a run.
    """

    def __init__(self) -> None:
        self._by_id: dict[str, CleanPlugin] = {}

    def register(self, plugin: CleanPlugin) -> bool:
        """Add a plugin. Returns False if its id is already taken."""
        existing = self._by_id.get(plugin.id)
        if existing is not None:
            log.warning(
                "Plugin id '%s' already taken by %s, ignoring %s",
                plugin.id,
                type(existing).__name__,
                type(plugin).__name__,
            )
            return False
        self._by_id[plugin.id] = plugin
        log.debug("Registered plugin: %s (%s)", plugin.id, plugin.name)
        return True

    def get(self, plugin_id: str) -> CleanPlugin | None:
        return self._by_id.get(plugin_id)

    def get_all(self) -> list[CleanPlugin]:
        """Every registered plugin in display order."""
        return sorted(self._by_id.values(), key=_display_key)

    def partition(self) -> tuple[list[CleanPlugin], dict[str, str]]:
        """Split plugins into usable ones and a map of id -> why not.

        A plugin whose availability check raises counts as unavailable.
        """
        usable: list[CleanPlugin] = []
        unusable: dict[str, str] = {}
        for plugin in self.get_all():
            try:
                available = plugin.is_available()
            except Exception as e:
                log.exception("Error checking availability for plugin '%s'", plugin.id)
                unusable[plugin.id] = f"availability check failed: {e}"
                continue
            if available:
                usable.append(plugin)
            else:
                unusable[plugin.id] = plugin.unavailable_reason or "not available"
        return usable, unusable

    def get_available(self) -> list[CleanPlugin]:
        """Plugins that can run on this system, in display order."""
        usable, unusable = self.partition()
        for plugin_id, reason in unusable.items():
            log.info("Plugin '%s' not available: %s", plugin_id, reason)
        return usable

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[CleanPlugin]:
        return iter(self.get_all())

    def __contains__(self, plugin_id: str) -> bool:
        return plugin_id in self._by_id
