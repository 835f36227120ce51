"""Plugin to remove unused Flatpak runtimes."""

from __future__ import annotations

import logging
from pathlib import Path

from reclaim.models.clean_result import CleanResult
from reclaim.models.plugin import CleanPlugin, PluginError
from reclaim.models.scan_result import FileEntry, ScanResult
from reclaim.utils import has_command, run_command

log = logging.getLogger(__name__)


class FlatpakPlugin(CleanPlugin):
    """Removes Flatpak runtimes and extensions no installed app uses.

    Flatpak does not report sizes for unused refs, so the scan lists them
    at zero bytes; the row still shows up and can be selected by hand.
    """

    id = "flatpak"
    name = "Flatpak (Unused)"
    description = "Removes Flatpak runtimes and extensions that no installed application uses."
    category = "package_manager"
    sort_order = 100

    @property
    def unavailable_reason(self) -> str | None:
        if not has_command("flatpak"):
            return "Flatpak not installed"
        return None

    def _do_scan(self) -> ScanResult:
        proc = run_command(["flatpak", "uninstall", "--unused", "--noninteractive", "--dry-run"])
        entries: list[FileEntry] = []
        for line in proc.stdout.splitlines():
            line = line.strip()
            if line and not line.startswith("Nothing") and "/" in line:
                ref = line.split()[-1] if line[0].isdigit() else line
                entries.append(FileEntry(path=Path(ref), size_bytes=0, description=f"Unused runtime: {ref}"))
        return self._result(entries, f"Found {len(entries)} unused Flatpak refs")

    def _do_clean(self, entries: list[FileEntry]) -> CleanResult:
        proc = run_command(["flatpak", "uninstall", "--unused", "--noninteractive", "-y"])
        if proc.returncode != 0:
            raise PluginError(f"flatpak uninstall failed: {proc.stderr.strip()}")
        return CleanResult(plugin_id=self.id, files_removed=len(entries))
