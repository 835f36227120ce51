"""Cleaning result dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class CleanResult:
    """Outcome of one plugin's clean() call.

    A non-empty ``errors`` list marks the clean as failed for display
    purposes, even when some bytes were freed.
    """

    plugin_id: str
    freed_bytes: int = 0
    files_removed: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
