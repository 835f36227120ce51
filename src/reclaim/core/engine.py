"""Concurrent scan and clean dispatch."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Union

from reclaim.core.registry import PluginRegistry
from reclaim.models.plugin import CleanPlugin
from reclaim.models.selection import CleanerItem

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScanResultEvent:
    """A scan unit finished for the item at ``index``."""

    index: int
    size_bytes: int = 0
    error: str | None = None


@dataclass(frozen=True, slots=True)
class CleanResultEvent:
    """A clean unit finished for the item at ``index``."""

    index: int
    freed_bytes: int = 0
    error: str | None = None


ResultEvent = Union[ScanResultEvent, CleanResultEvent]
EventSink = Callable[[ResultEvent], None]
Targets = list[tuple[int, CleanerItem]]


class ReclaimEngine:
    """Runs one independent unit of work per item and reports back via events.

    Units run on daemon threads so that quitting never waits for a slow
    or hung plugin. A unit never touches run state: it only calls the
    event sink, exactly once, with its result.
    """

    def __init__(self, registry: PluginRegistry) -> None:
        self.registry = registry

    def plugins(self) -> list[CleanPlugin]:
        """Plugins taking part in a run, in display order."""
        return self.registry.get_available()

    # -- Dispatch --

    def dispatch_scan(self, targets: Targets, post: EventSink) -> int:
        """Start one scan unit per target. Returns the number dispatched."""
        for index, item in targets:
            self._spawn(f"scan-{item.plugin.id}", self._scan_and_post, index, item.plugin, item.skip, post)
        log.info("Dispatched %d scan units", len(targets))
        return len(targets)

    def dispatch_clean(self, targets: Targets, post: EventSink) -> int:
        """Start one clean unit per target. Returns the number dispatched."""
        for index, item in targets:
            self._spawn(f"clean-{item.plugin.id}", self._clean_and_post, index, item.plugin, post)
        log.info("Dispatched %d clean units", len(targets))
        return len(targets)

    # -- Units --

    def scan_unit(self, index: int, plugin: CleanPlugin, skip: bool = False) -> ScanResultEvent:
        """Scan one plugin synchronously, capturing any failure."""
        if skip:
            return ScanResultEvent(index=index)
        try:
            result = plugin.scan()
        except Exception as exc:
            log.exception("Plugin '%s' failed during scan", plugin.id)
            return ScanResultEvent(index=index, error=_describe(exc))
        log.debug("%s: %s", plugin.id, result.summary)
        return ScanResultEvent(index=index, size_bytes=max(0, result.total_bytes))

    def clean_unit(self, index: int, plugin: CleanPlugin) -> CleanResultEvent:
        """Clean one plugin synchronously, capturing any failure."""
        try:
            result = plugin.clean()
        except Exception as exc:
            log.exception("Plugin '%s' failed during clean", plugin.id)
            return CleanResultEvent(index=index, error=_describe(exc))

        if not result.ok:
            for err in result.errors:
                log.warning("%s: %s", plugin.id, err)
            first = result.errors[0]
            more = len(result.errors) - 1
            error = first if not more else f"{first} (+{more} more)"
            return CleanResultEvent(index=index, freed_bytes=result.freed_bytes, error=error)

        log.info("%s: freed %d bytes, removed %d items", plugin.id, result.freed_bytes, result.files_removed)
        return CleanResultEvent(index=index, freed_bytes=result.freed_bytes)

    def _scan_and_post(self, index: int, plugin: CleanPlugin, skip: bool, post: EventSink) -> None:
        post(self.scan_unit(index, plugin, skip))

    def _clean_and_post(self, index: int, plugin: CleanPlugin, post: EventSink) -> None:
        post(self.clean_unit(index, plugin))

    @staticmethod
    def _spawn(name: str, target: Callable[..., None], *args: object) -> threading.Thread:
        thread = threading.Thread(target=target, args=args, name=name, daemon=True)
        thread.start()
        return thread


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__
