"""Base plugin interface."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from reclaim.models.scan_result import FileEntry, ScanResult
from reclaim.models.clean_result import CleanResult

log = logging.getLogger(__name__)


class PluginError(Exception):
    """Raised by a plugin when a scan or clean cannot be carried out."""


class CleanPlugin(ABC):
    """Base class for all cleaning plugins.

    Every plugin must implement this interface to take part in a run.
    The engine only ever calls ``scan()``, ``clean()`` and reads
    ``requires_root``; everything else is display metadata.
    """

    _last_scan: ScanResult | None = None

    @property
    @abstractmethod
    def id(self) -> str:
        """Unique identifier, e.g. 'apt_cache'."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name, e.g. 'APT Cache'."""

    @property
    def description(self) -> str:
        """What this plugin cleans and why it's safe."""
        return ""

    @property
    def category(self) -> str:
        """Category: 'system', 'user', 'development', 'package_manager', 'browser', 'application'."""
        return "user"

    @property
    def requires_root(self) -> bool:
        """Whether this plugin needs elevated privileges."""
        return False

    @property
    def sort_order(self) -> int:
        """Display order (lower = first). Default 500."""
        return 500

    @property
    def unavailable_reason(self) -> str | None:
        """Why this plugin cannot work on this system, or None if supported."""
        return None

    def is_available(self) -> bool:
        """Check if this plugin is applicable on the current system."""
        return self.unavailable_reason is None

    @property
    def last_scan(self) -> ScanResult | None:
        return self._last_scan

    def scan(self) -> ScanResult:
        """Scan for cleanable files. MUST NOT delete anything.

        Raises on failure; the result of a successful scan is kept so
        that a later ``clean()`` acts on exactly what was reported.
        """
        result = self._do_scan()
        self._last_scan = result
        return result

    @abstractmethod
    def _do_scan(self) -> ScanResult:
        """Walk the filesystem (or ask a tool) and describe what can go."""

    def clean(self) -> CleanResult:
        """Remove what the last scan found, rescanning if there was none."""
        scan = self.last_scan if self.last_scan is not None else self.scan()
        return self._do_clean(scan.entries)

    def _do_clean(self, entries: list[FileEntry]) -> CleanResult:
        """Remove the given file entries and return a CleanResult.

        The default implementation uses ``remove_entries()`` which handles
        both files and directories. Override in plugins that delegate to
        an external command.
        """
        from reclaim.utils import remove_entries

        freed, removed, errors = remove_entries(entries)
        return CleanResult(
            plugin_id=self.id,
            freed_bytes=freed,
            files_removed=removed,
            errors=errors,
        )

    def _result(self, entries: list[FileEntry], summary: str = "") -> ScanResult:
        total = sum(e.size_bytes for e in entries)
        return ScanResult(
            plugin_id=self.id,
            plugin_name=self.name,
            entries=entries,
            total_bytes=total,
            summary=summary or f"Found {len(entries)} items totaling {total} bytes",
        )


class ItemizedPlugin(CleanPlugin, ABC):
    """Plugin whose findings can be picked one by one before cleaning.

    ``set_files_to_clean()`` narrows the next ``clean()`` to a chosen
    subset of the discovered paths. Until it is called, ``clean()``
    removes everything the last scan found.
    """

    _files_to_clean: list[str] | None = None

    @property
    def found_files(self) -> list[FileEntry]:
        scan = self.last_scan
        if scan is None:
            return []
        return list(scan.entries)

    def set_files_to_clean(self, paths: list[str] | None) -> None:
        self._files_to_clean = list(paths) if paths is not None else None

    def clean(self) -> CleanResult:
        if self._files_to_clean is None:
            return super().clean()

        by_path = {str(e.path): e for e in self.found_files}
        chosen = [by_path[p] for p in self._files_to_clean if p in by_path]
        skipped = len(self._files_to_clean) - len(chosen)
        if skipped:
            log.warning("%s: ignoring %d path(s) not found by the last scan", self.id, skipped)
        return self._do_clean(chosen)


class MultiDirPlugin(CleanPlugin, ABC):
    """Base class for plugins that empty a fixed set of directories.

    Subclasses define metadata properties and ``_cache_dirs``. Each existing
    directory becomes one entry; cleaning removes it entirely.
    """

    @property
    @abstractmethod
    def _cache_dirs(self) -> tuple[Path, ...]:
        """Directories to clean."""

    @property
    def unavailable_reason(self) -> str | None:
        if not any(d.is_dir() for d in self._cache_dirs):
            return f"{self.name}: nothing to look at"
        return None

    def _do_scan(self) -> ScanResult:
        from reclaim.utils import dir_info

        entries: list[FileEntry] = []
        for cache_dir in self._cache_dirs:
            if not cache_dir.is_dir():
                continue
            size, fcount = dir_info(cache_dir)
            if size > 0:
                entries.append(
                    FileEntry(path=cache_dir, size_bytes=size, description=self.name, file_count=fcount)
                )
        return self._result(entries)

    def _do_clean(self, entries: list[FileEntry]) -> CleanResult:
        from reclaim.utils import remove_entries

        freed, removed, errors = remove_entries(entries, count_files=True)
        return CleanResult(
            plugin_id=self.id,
            freed_bytes=freed,
            files_removed=removed,
            errors=errors,
        )
