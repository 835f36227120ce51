"""Run state owned by the event loop."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from reclaim.models.selection import CleanerItem, LargeFileEntry, SelectionModel


class Phase(Enum):
    SCANNING = auto()
    REVIEW = auto()
    LARGE_FILE_SELECTION = auto()
    CONFIRM = auto()
    CLEANING = auto()
    DONE = auto()


class Key(Enum):
    UP = auto()
    DOWN = auto()
    TOGGLE = auto()
    ACTIVATE = auto()
    CLEAN = auto()
    BACK = auto()
    YES = auto()
    NO = auto()
    QUIT = auto()
    QUIT_NOW = auto()


class Effect(Enum):
    """What the event loop must do after a transition."""

    NONE = auto()
    DISPATCH_CLEAN = auto()
    QUIT = auto()
    FINISHED = auto()


# Lines render.py draws around each list, plus the row the final newline
# moves the cursor onto
SCAN_LIST_CHROME = 8
MAIN_LIST_CHROME = 16
LARGE_FILE_LIST_CHROME = 13


@dataclass
class RunState:
    """Everything the screen shows, mutated only by the event loop thread.

    The main cursor ranges over the items plus one extra position for
    the "clean selected items" button.
    """

    selection: SelectionModel
    phase: Phase = Phase.SCANNING
    cursor: int = 0
    lf_cursor: int = 0
    total_reclaimable: int = 0
    scans_dispatched: int = 0
    scans_received: int = 0
    cleans_dispatched: int = 0
    cleans_received: int = 0
    width: int = 80
    height: int = 24
    spinner_frame: int = 0
    quitting: bool = False

    @property
    def items(self) -> list[CleanerItem]:
        return self.selection.items

    @property
    def large_files(self) -> list[LargeFileEntry]:
        return self.selection.large_files

    @property
    def button_index(self) -> int:
        """Cursor position of the clean button."""
        return len(self.selection.items)

    @property
    def finished(self) -> bool:
        return self.quitting or self.phase is Phase.DONE
