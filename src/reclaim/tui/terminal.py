"""Full-screen terminal session."""

from __future__ import annotations

import logging
import shutil
import sys
from typing import TextIO

import click

log = logging.getLogger(__name__)

_ENTER = "\x1b[?1049h\x1b[?25l"
_LEAVE = "\x1b[?25h\x1b[?1049l"
_HOME_CLEAR = "\x1b[H\x1b[J"


class Terminal:
    """Alternate screen with a hidden cursor, restored on exit.

    ``click.getchar()`` switches the tty to raw mode while it waits for
    a key. The reader thread is abandoned mid-read when the run ends, so
    the previous tty attributes are saved here and put back on exit.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdout
        self._saved_attrs: list | None = None

    def __enter__(self) -> Terminal:
        self._save_attrs()
        click.echo(_ENTER, file=self._stream, nl=False)
        return self

    def __exit__(self, *exc_info: object) -> None:
        click.echo(_LEAVE, file=self._stream, nl=False)
        self._restore_attrs()

    def size(self) -> tuple[int, int]:
        cols, rows = shutil.get_terminal_size((80, 24))
        return cols, rows

    def draw(self, frame: str) -> None:
        # Output post-processing is off while getchar() holds raw mode.
        click.echo(_HOME_CLEAR + frame.replace("\n", "\r\n"), file=self._stream, nl=False)

    def read_key(self) -> str:
        return click.getchar()

    def _save_attrs(self) -> None:
        if not sys.stdin.isatty():
            return
        import termios

        try:
            self._saved_attrs = termios.tcgetattr(sys.stdin.fileno())
        except termios.error as e:
            log.debug("Cannot save tty attributes: %s", e)

    def _restore_attrs(self) -> None:
        if self._saved_attrs is None:
            return
        import termios

        try:
            termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, self._saved_attrs)
        except termios.error as e:
            log.warning("Cannot restore tty attributes: %s", e)
