"""Scan result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(slots=True)
class FileEntry:
    """Single file or directory a plugin found and may remove."""

    path: Path
    size_bytes: int
    description: str = ""
    file_count: int = 0


@dataclass(slots=True)
class ScanResult:
    """What a plugin would free, as discovered by its last scan."""

    plugin_id: str
    plugin_name: str
    entries: list[FileEntry] = field(default_factory=list)
    total_bytes: int = 0
    summary: str = ""
