"""Phase transitions.

Every function here takes the event loop's ``RunState`` and mutates it
in place; none of them block, spawn work or touch the terminal. The
caller acts on the returned ``Effect``.
"""

from __future__ import annotations

import logging

from reclaim.core.engine import CleanResultEvent, ScanResultEvent, Targets
from reclaim.tui.state import Effect, Key, Phase, RunState

log = logging.getLogger(__name__)


def start_scan(state: RunState) -> Targets:
    """Enter the scanning phase and return the units to dispatch."""
    targets = state.selection.scan_targets()
    state.phase = Phase.SCANNING
    state.scans_dispatched = len(targets)
    state.scans_received = 0
    if not targets:
        _finish_scanning(state)
    return targets


def start_clean(state: RunState) -> Targets:
    """Enter the cleaning phase and return the units to dispatch."""
    targets = state.selection.clean_targets()
    state.phase = Phase.CLEANING
    state.cleans_dispatched = len(targets)
    state.cleans_received = 0
    log.info("Cleaning %d items", len(targets))
    return targets


def apply_scan_result(state: RunState, event: ScanResultEvent) -> Effect:
    if state.phase is not Phase.SCANNING:
        log.debug("Dropping scan result for row %d outside the scanning phase", event.index)
        return Effect.NONE
    if not state.selection.record_scan(event.index, event.size_bytes, event.error):
        return Effect.NONE

    state.scans_received += 1
    if state.scans_received >= state.scans_dispatched:
        _finish_scanning(state)
    return Effect.NONE


def apply_clean_result(state: RunState, event: CleanResultEvent) -> Effect:
    if state.phase is not Phase.CLEANING:
        log.debug("Dropping clean result for row %d outside the cleaning phase", event.index)
        return Effect.NONE
    if not state.selection.record_clean(event.index, event.freed_bytes, event.error):
        return Effect.NONE

    state.cleans_received += 1
    return check_clean_complete(state)


def check_clean_complete(state: RunState) -> Effect:
    """Move to DONE once every dispatched clean unit has reported."""
    if state.phase is Phase.CLEANING and state.cleans_received >= state.cleans_dispatched:
        state.phase = Phase.DONE
        log.info("Cleaning finished: %d units reported", state.cleans_received)
        return Effect.FINISHED
    return Effect.NONE


def resize(state: RunState, width: int, height: int) -> None:
    state.width = width
    state.height = height


def tick(state: RunState) -> None:
    state.spinner_frame += 1


def handle_key(state: RunState, key: Key) -> Effect:
    if key is Key.QUIT_NOW:
        return _quit(state)

    match state.phase:
        case Phase.REVIEW:
            return _review_key(state, key)
        case Phase.LARGE_FILE_SELECTION:
            return _large_file_key(state, key)
        case Phase.CONFIRM:
            return _confirm_key(state, key)
        case _:
            if key is Key.QUIT:
                return _quit(state)
    return Effect.NONE


def _review_key(state: RunState, key: Key) -> Effect:
    match key:
        case Key.QUIT:
            return _quit(state)
        case Key.UP:
            state.cursor = max(0, state.cursor - 1)
        case Key.DOWN:
            state.cursor = min(state.button_index, state.cursor + 1)
        case Key.TOGGLE | Key.ACTIVATE:
            _activate(state)
        case Key.CLEAN:
            _request_confirm(state)
    return Effect.NONE


def _activate(state: RunState) -> None:
    selection = state.selection
    if state.cursor == state.button_index:
        _request_confirm(state)
    elif selection.is_drilldown(state.cursor):
        if not selection.items[state.cursor].skip:
            selection.populate_large_files()
            state.phase = Phase.LARGE_FILE_SELECTION
    else:
        selection.toggle(state.cursor)


def _request_confirm(state: RunState) -> None:
    if not state.selection.has_any_selection():
        return
    state.selection.push_drilldown_selection()
    state.phase = Phase.CONFIRM


def _large_file_key(state: RunState, key: Key) -> Effect:
    last = len(state.large_files) - 1
    match key:
        case Key.BACK | Key.QUIT:
            state.phase = Phase.REVIEW
        case Key.UP:
            state.lf_cursor = max(0, state.lf_cursor - 1)
        case Key.DOWN:
            state.lf_cursor = max(0, min(last, state.lf_cursor + 1))
        case Key.TOGGLE | Key.ACTIVATE:
            state.selection.toggle_large_file(state.lf_cursor)
    return Effect.NONE


def _confirm_key(state: RunState, key: Key) -> Effect:
    match key:
        case Key.YES | Key.ACTIVATE:
            return Effect.DISPATCH_CLEAN
        case Key.NO | Key.BACK | Key.QUIT:
            state.phase = Phase.REVIEW
    return Effect.NONE


def _quit(state: RunState) -> Effect:
    state.quitting = True
    return Effect.QUIT


def _finish_scanning(state: RunState) -> None:
    state.total_reclaimable = state.selection.total_reclaimable()
    state.phase = Phase.REVIEW
    log.info("Scanning finished, %d bytes reclaimable", state.total_reclaimable)
