"""Plugin to clean the Go build cache."""

from __future__ import annotations

from pathlib import Path

from reclaim.models.clean_result import CleanResult
from reclaim.models.plugin import CleanPlugin, PluginError
from reclaim.models.scan_result import FileEntry, ScanResult
from reclaim.utils import dir_info, has_command, run_command


class GoCachePlugin(CleanPlugin):
    """Runs ``go clean -cache``."""

    id = "go_cache"
    name = "Go Build Cache"
    description = "Removes compiled build artifacts from GOCACHE. Go rebuilds them as needed."
    category = "development"
    sort_order = 70

    @property
    def unavailable_reason(self) -> str | None:
        if not has_command("go"):
            return "Go not installed"
        return None

    def _do_scan(self) -> ScanResult:
        proc = run_command(["go", "env", "GOCACHE"])
        cache_path = proc.stdout.strip()
        if proc.returncode != 0 or not cache_path or cache_path == "off":
            return self._result([], "GOCACHE not set")

        path = Path(cache_path)
        if not path.is_dir():
            return self._result([])
        size, fcount = dir_info(path)
        return self._result([FileEntry(path=path, size_bytes=size, description="GOCACHE", file_count=fcount)])

    def _do_clean(self, entries: list[FileEntry]) -> CleanResult:
        proc = run_command(["go", "clean", "-cache"])
        if proc.returncode != 0:
            raise PluginError(f"go clean -cache failed: {proc.stderr.strip()}")
        return CleanResult(
            plugin_id=self.id,
            freed_bytes=sum(e.size_bytes for e in entries),
            files_removed=sum(e.file_count for e in entries),
        )
