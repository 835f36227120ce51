"""Example external plugin for Reclaim.

Shows the smallest useful cleaner. Copy this directory into
~/.local/share/reclaim/plugins/ (or list its parent under
``plugin_paths`` in settings.json) to have it discovered.
"""

from __future__ import annotations

from pathlib import Path

from reclaim.models.plugin import CleanPlugin
from reclaim.models.scan_result import FileEntry, ScanResult
from reclaim.utils import dir_info


class ExamplePlugin(CleanPlugin):
    """Removes a scratch directory of your choosing."""

    id = "example"
    name = "Example Scratch Dir"
    description = "Removes ~/scratch. Edit _SCRATCH to point somewhere else."
    category = "application"

    _SCRATCH = Path.home() / "scratch"

    @property
    def unavailable_reason(self) -> str | None:
        if not self._SCRATCH.is_dir():
            return f"{self._SCRATCH} does not exist"
        return None

    def _do_scan(self) -> ScanResult:
        size, count = dir_info(self._SCRATCH)
        if not size:
            return self._result([])
        return self._result([FileEntry(path=self._SCRATCH, size_bytes=size, file_count=count)])
