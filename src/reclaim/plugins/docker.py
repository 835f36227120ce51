"""Plugin to prune unused Docker data."""

from __future__ import annotations

import logging
from pathlib import Path

from reclaim.models.clean_result import CleanResult
from reclaim.models.plugin import CleanPlugin, PluginError
from reclaim.models.scan_result import FileEntry, ScanResult
from reclaim.utils import has_command, parse_human_size, run_command

log = logging.getLogger(__name__)


class DockerPlugin(CleanPlugin):
    """Runs ``docker system prune`` on stopped containers, dangling images and build cache."""

    id = "docker"
    name = "Docker System"
    description = (
        "Removes stopped containers, unused networks, dangling images and "
        "build cache via 'docker system prune'."
    )
    category = "development"
    requires_root = True
    sort_order = 50

    @property
    def unavailable_reason(self) -> str | None:
        if not has_command("docker"):
            return "Docker not installed"
        return None

    def _do_scan(self) -> ScanResult:
        proc = run_command(["docker", "system", "df", "--format", "{{.Type}}\t{{.Reclaimable}}"])
        if proc.returncode != 0:
            # Daemon not running; nothing we can report on.
            log.info("docker system df failed: %s", proc.stderr.strip())
            return self._result([], "Docker daemon not reachable")

        entries: list[FileEntry] = []
        for line in proc.stdout.splitlines():
            kind, _, reclaimable = line.partition("\t")
            # "1.23GB (23%)"
            size = parse_human_size(reclaimable.split("(")[0]) if reclaimable else 0
            if size > 0:
                entries.append(FileEntry(path=Path("docker") / kind.strip(), size_bytes=size, description=kind.strip()))
        return self._result(entries, f"Docker reports {len(entries)} reclaimable categories")

    def _do_clean(self, entries: list[FileEntry]) -> CleanResult:
        proc = run_command(["docker", "system", "prune", "-f"])
        if proc.returncode != 0:
            raise PluginError(f"docker system prune failed: {proc.stderr.strip()}")
        freed = 0
        for line in proc.stdout.splitlines():
            if line.startswith("Total reclaimed space:"):
                freed = parse_human_size(line.split(":", 1)[1])
        return CleanResult(plugin_id=self.id, freed_bytes=freed, files_removed=len(entries))
