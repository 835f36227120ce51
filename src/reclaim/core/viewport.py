"""Cursor-centred scrolling window over a list."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Viewport:
    """Visible slice ``[start, end)`` of a list of ``total`` rows."""

    start: int
    end: int
    total: int

    @property
    def more_above(self) -> bool:
        return self.start > 0

    @property
    def more_below(self) -> bool:
        return self.end < self.total

    def __iter__(self):
        return iter(range(self.start, self.end))


def compute_viewport(cursor: int, total: int, rows: int) -> Viewport:
    """Return the window of at most *rows* rows that keeps *cursor* centred.

    The window never runs past either end of the list: near the bottom
    it is shifted up so that it ends exactly at *total*.
    """
    if total <= rows:
        return Viewport(0, total, total)

    start = max(0, cursor - rows // 2)
    end = start + rows
    if end > total:
        end = total
        start = max(0, end - rows)
    return Viewport(start, end, total)


def available_rows(height: int, reserved: int, minimum: int = 5) -> int:
    """Rows left for a list once *reserved* lines of chrome are taken."""
    return max(minimum, height - reserved)
