"""Per-row selection state for a cleaning run."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from reclaim.models.plugin import CleanPlugin, ItemizedPlugin

log = logging.getLogger(__name__)


@dataclass(slots=True)
class CleanerItem:
    """UI state of one registered plugin.

    ``skip`` is fixed at creation: the plugin needs root and we are not
    root. A skipped item is never selected and never invoked.
    """

    plugin: CleanPlugin
    skip: bool = False
    selected: bool = False
    size: int = 0
    scanned: bool = False
    cleaned: bool = False
    error: str | None = None
    freed: int = 0

    @property
    def name(self) -> str:
        return self.plugin.name


@dataclass(slots=True)
class LargeFileEntry:
    """One individually selectable file offered by the drill-down item."""

    path: str
    size: int
    selected: bool = False


class SelectionModel:
    """Tracks which rows (and which large files) will be cleaned.

    At most one item is the drill-down item: the first plugin that can
    itemize its findings. Once its sub-list exists, that item's
    ``selected`` flag is derived from the sub-list and its contribution
    to ``total_selected`` is the sub-list's selected size.
    """

    def __init__(self, items: list[CleanerItem], drilldown_index: int = -1) -> None:
        self.items = items
        self.drilldown_index = drilldown_index
        self.large_files: list[LargeFileEntry] = []
        self.selected_count = 0
        self.selected_size = 0
        self.total_selected = 0
        self._populated = False
        self.recompute()

    @classmethod
    def from_plugins(
        cls,
        plugins: Iterable[CleanPlugin],
        *,
        is_root: bool,
        preselect: bool = True,
    ) -> SelectionModel:
        """Create one item per plugin, in the given order."""
        items: list[CleanerItem] = []
        drilldown = -1
        for index, plugin in enumerate(plugins):
            skip = plugin.requires_root and not is_root
            itemized = drilldown < 0 and isinstance(plugin, ItemizedPlugin)
            if itemized:
                drilldown = index
            items.append(CleanerItem(plugin=plugin, skip=skip, selected=preselect and not skip and not itemized))
        return cls(items, drilldown)

    # -- Queries --

    @property
    def has_drilldown(self) -> bool:
        return self.drilldown_index >= 0

    def is_drilldown(self, index: int) -> bool:
        return self.has_drilldown and index == self.drilldown_index

    def has_any_selection(self) -> bool:
        return any(it.selected and not it.skip for it in self.items)

    def first_pending(self) -> int:
        """Index of the first row still waiting for its scan, or len(items)."""
        return next((i for i, it in enumerate(self.items) if not it.scanned), len(self.items))

    def total_reclaimable(self) -> int:
        return sum(it.size for it in self.items)

    def contribution(self, index: int) -> int:
        """Bytes row *index* adds to the selected total."""
        if self.is_drilldown(index):
            return self.selected_size
        item = self.items[index]
        return item.size if item.selected else 0

    def selected_categories(self) -> int:
        """Number of rows that will actually free something."""
        count = 0
        for index, item in enumerate(self.items):
            if self.is_drilldown(index):
                count += self.selected_count > 0
            elif item.selected:
                count += 1
        return count

    def selected_paths(self) -> list[str]:
        return [lf.path for lf in self.large_files if lf.selected]

    def scan_targets(self) -> list[tuple[int, CleanerItem]]:
        return list(enumerate(self.items))

    def clean_targets(self) -> list[tuple[int, CleanerItem]]:
        return [(i, it) for i, it in enumerate(self.items) if it.selected and not it.skip]

    # -- Mutators --

    def toggle(self, index: int) -> bool:
        """Flip a row's selection. Returns False if the row cannot be toggled."""
        if not 0 <= index < len(self.items) or self.is_drilldown(index):
            return False
        item = self.items[index]
        if item.skip:
            return False
        item.selected = not item.selected
        self.recompute()
        return True

    def populate_large_files(self) -> bool:
        """Fill the sub-list from the drill-down plugin, once per run.

        Returns True if this call populated it.
        """
        if not self.has_drilldown or self._populated:
            return False
        plugin = self.items[self.drilldown_index].plugin
        found = plugin.found_files if isinstance(plugin, ItemizedPlugin) else []
        self.large_files = [LargeFileEntry(path=str(f.path), size=f.size_bytes) for f in found]
        self._populated = True
        log.debug("Populated %d large file entries", len(self.large_files))
        return True

    def toggle_large_file(self, index: int) -> bool:
        if not 0 <= index < len(self.large_files):
            return False
        entry = self.large_files[index]
        entry.selected = not entry.selected
        self.recompute()
        return True

    def record_scan(self, index: int, size: int, error: str | None) -> bool:
        """Apply a scan result. Returns False for a duplicate result."""
        item = self.items[index]
        if item.scanned:
            log.debug("Ignoring duplicate scan result for %s", item.plugin.id)
            return False
        item.size = max(0, size)
        item.error = error
        item.scanned = True
        if error is not None or item.size == 0:
            item.selected = False
        self.recompute()
        return True

    def record_clean(self, index: int, freed: int, error: str | None) -> bool:
        item = self.items[index]
        if item.cleaned:
            log.debug("Ignoring duplicate clean result for %s", item.plugin.id)
            return False
        item.cleaned = True
        item.freed = freed
        item.error = error
        return True

    def push_drilldown_selection(self) -> None:
        """Hand the chosen large files to the drill-down plugin."""
        if not self.has_drilldown:
            return
        plugin = self.items[self.drilldown_index].plugin
        if isinstance(plugin, ItemizedPlugin):
            plugin.set_files_to_clean(self.selected_paths())

    def recompute(self) -> None:
        """Refresh the sub-list counters and the selected total."""
        self.selected_count = sum(1 for lf in self.large_files if lf.selected)
        self.selected_size = sum(lf.size for lf in self.large_files if lf.selected)
        if self.has_drilldown and self._populated:
            parent = self.items[self.drilldown_index]
            parent.selected = self.selected_count > 0 and not parent.skip
        self.total_selected = sum(self.contribution(i) for i in range(len(self.items)))
