"""Interactive event loop."""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Union

import click

from reclaim.core.engine import CleanResultEvent, ReclaimEngine, ScanResultEvent
from reclaim.models.plugin import CleanPlugin
from reclaim.models.selection import SelectionModel
from reclaim.settings import Settings
from reclaim.tui import machine
from reclaim.tui.keys import translate
from reclaim.tui.render import render
from reclaim.tui.state import Effect, Key, RunState
from reclaim.tui.terminal import Terminal
from reclaim.utils import bytes_to_human, is_root

log = logging.getLogger(__name__)

TICK_INTERVAL = 0.1  # seconds


@dataclass(frozen=True, slots=True)
class KeyEvent:
    key: Key


@dataclass(frozen=True, slots=True)
class TickEvent:
    pass


@dataclass(frozen=True, slots=True)
class ResizeEvent:
    width: int
    height: int


Event = Union[KeyEvent, TickEvent, ResizeEvent, ScanResultEvent, CleanResultEvent]


class ReclaimApp:
    """Owns the run state and applies every event to it on one thread.

    Keys, spinner ticks, terminal resizes and unit results all arrive
    through a single queue; this loop is its only consumer.
    """

    def __init__(
        self,
        engine: ReclaimEngine,
        plugins: list[CleanPlugin],
        settings: Settings | None = None,
        terminal: Terminal | None = None,
        root: bool | None = None,
    ) -> None:
        settings = settings or Settings.instance()
        self.engine = engine
        self.terminal = terminal or Terminal()
        self.events: queue.Queue[Event] = queue.Queue()
        self.state = RunState(
            selection=SelectionModel.from_plugins(
                plugins,
                is_root=is_root() if root is None else root,
                preselect=bool(settings.get("review.preselect", True)),
            )
        )
        self._stop = threading.Event()

    def run(self) -> int:
        """Run until the user quits or cleaning completes.

        Returns 0 when the run finished normally, 130 when the user quit.
        """
        width, height = self.terminal.size()
        machine.resize(self.state, width, height)

        with self.terminal:
            self._start_threads()
            self.engine.dispatch_scan(machine.start_scan(self.state), self.events.put)
            try:
                self._loop()
            finally:
                self._stop.set()

        self._print_summary()
        return 130 if self.state.quitting else 0

    def process(self, event: Event) -> Effect:
        """Apply one event to the run state and carry out its effect."""
        match event:
            case KeyEvent(key=key):
                effect = machine.handle_key(self.state, key)
            case ScanResultEvent():
                effect = machine.apply_scan_result(self.state, event)
            case CleanResultEvent():
                effect = machine.apply_clean_result(self.state, event)
            case ResizeEvent(width=width, height=height):
                machine.resize(self.state, width, height)
                effect = Effect.NONE
            case TickEvent():
                machine.tick(self.state)
                effect = Effect.NONE
            case _:
                log.warning("Unknown event: %r", event)
                effect = Effect.NONE

        if effect is Effect.DISPATCH_CLEAN:
            targets = machine.start_clean(self.state)
            self.engine.dispatch_clean(targets, self.events.put)
            effect = machine.check_clean_complete(self.state)
        return effect

    def _loop(self) -> None:
        self.terminal.draw(render(self.state))
        while True:
            effect = self.process(self.events.get())
            self.terminal.draw(render(self.state))
            if effect in (Effect.QUIT, Effect.FINISHED):
                break

    def _start_threads(self) -> None:
        threading.Thread(target=self._read_keys, name="keys", daemon=True).start()
        threading.Thread(target=self._tick, name="ticker", daemon=True).start()

    def _read_keys(self) -> None:
        while not self._stop.is_set():
            try:
                raw = self.terminal.read_key()
            except (KeyboardInterrupt, EOFError):
                self.events.put(KeyEvent(Key.QUIT_NOW))
                return
            key = translate(raw)
            if key is not None:
                self.events.put(KeyEvent(key))

    def _tick(self) -> None:
        size = self.terminal.size()
        while not self._stop.wait(TICK_INTERVAL):
            self.events.put(TickEvent())
            current = self.terminal.size()
            if current != size:
                size = current
                self.events.put(ResizeEvent(*current))

    def _print_summary(self) -> None:
        if self.state.quitting:
            click.echo("Bye!")
            return
        freed = 0
        for item in self.state.items:
            if not item.cleaned:
                continue
            freed += item.freed
            if item.error:
                click.echo(f"  {click.style('✗', fg='red')} {item.name:35s} {click.style(item.error, fg='red')}")
            else:
                click.echo(f"  {click.style('✓', fg='green')} {item.name:35s} {bytes_to_human(item.freed)}")
        click.echo(f"\nTotal freed: {click.style(bytes_to_human(freed), fg='green', bold=True)}")
