"""Plugin to clean rotated system logs and vacuum the journal."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from reclaim.models.clean_result import CleanResult
from reclaim.models.plugin import CleanPlugin
from reclaim.models.scan_result import FileEntry, ScanResult
from reclaim.utils import has_command, remove_entries, run_command

log = logging.getLogger(__name__)

_LOG_DIR = Path("/var/log")
_ROTATED_SUFFIXES = (".gz", ".1", ".old")
_JOURNAL_RETENTION = "3d"


class SystemLogsPlugin(CleanPlugin):
    """Removes rotated log files under /var/log and trims the systemd journal."""

    id = "system_logs"
    name = "System Logs"
    description = (
        "Removes rotated log files (*.gz, *.1, *.old) under /var/log and "
        f"vacuums systemd journal entries older than {_JOURNAL_RETENTION}."
    )
    category = "system"
    requires_root = True
    sort_order = 20

    @property
    def unavailable_reason(self) -> str | None:
        if not _LOG_DIR.is_dir():
            return "/var/log directory not found"
        return None

    def _do_scan(self) -> ScanResult:
        entries: list[FileEntry] = []
        for dirpath, _dirnames, filenames in os.walk(_LOG_DIR):
            for filename in filenames:
                if not filename.endswith(_ROTATED_SUFFIXES):
                    continue
                path = Path(dirpath) / filename
                try:
                    if path.is_file():
                        entries.append(FileEntry(path=path, size_bytes=path.stat().st_size, file_count=1))
                except OSError:
                    log.debug("Cannot access: %s", path)
        entries.sort(key=lambda e: e.path)
        return self._result(entries, f"Found {len(entries)} rotated log files")

    def _do_clean(self, entries: list[FileEntry]) -> CleanResult:
        errors: list[str] = []
        if has_command("journalctl"):
            proc = run_command(["journalctl", f"--vacuum-time={_JOURNAL_RETENTION}"])
            if proc.returncode != 0:
                errors.append(f"journalctl vacuum failed: {proc.stderr.strip()}")

        freed, removed, remove_errors = remove_entries(entries)
        return CleanResult(
            plugin_id=self.id,
            freed_bytes=freed,
            files_removed=removed,
            errors=errors + remove_errors,
        )
