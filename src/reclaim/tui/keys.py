"""Raw terminal input to key mapping."""

from __future__ import annotations

from reclaim.tui.state import Key

_KEYMAP: dict[str, Key] = {
    "\x1b[A": Key.UP,
    "\x1bOA": Key.UP,
    "k": Key.UP,
    "\x1b[B": Key.DOWN,
    "\x1bOB": Key.DOWN,
    "j": Key.DOWN,
    " ": Key.TOGGLE,
    "\r": Key.ACTIVATE,
    "\n": Key.ACTIVATE,
    "c": Key.CLEAN,
    "\x1b": Key.BACK,
    "\x7f": Key.BACK,
    "\x08": Key.BACK,
    "\x1b[D": Key.BACK,
    "\x1bOD": Key.BACK,
    "h": Key.BACK,
    "y": Key.YES,
    "Y": Key.YES,
    "n": Key.NO,
    "N": Key.NO,
    "q": Key.QUIT,
    "\x03": Key.QUIT_NOW,
}


def translate(raw: str) -> Key | None:
    """Map what ``click.getchar()`` returned to a Key, or None if unbound."""
    return _KEYMAP.get(raw)
