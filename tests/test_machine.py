"""Tests for phase transitions."""

from __future__ import annotations

import pytest

from reclaim.core.engine import CleanResultEvent, ScanResultEvent
from reclaim.models.selection import SelectionModel
from reclaim.tui import machine
from reclaim.tui.state import Effect, Key, Phase, RunState

from tests.fakes import MB, FakeItemizedPlugin, FakePlugin


def _state(plugins, is_root=False) -> RunState:
    return RunState(selection=SelectionModel.from_plugins(plugins, is_root=is_root))


def _review(plugins, sizes, is_root=False) -> RunState:
    state = _state(plugins, is_root)
    machine.start_scan(state)
    for index, size in enumerate(sizes):
        machine.apply_scan_result(state, ScanResultEvent(index, size))
    assert state.phase is Phase.REVIEW
    return state


def _press(state: RunState, *keys: Key) -> Effect:
    effect = Effect.NONE
    for key in keys:
        effect = machine.handle_key(state, key)
    return effect


class TestScanning:
    def test_start_scan_targets_every_row(self):
        state = _state([FakePlugin("a"), FakePlugin("b", root=True)])
        targets = machine.start_scan(state)
        assert [i for i, _ in targets] == [0, 1]
        assert state.scans_dispatched == 2
        assert state.phase is Phase.SCANNING

    def test_no_plugins_goes_straight_to_review(self):
        state = _state([])
        assert machine.start_scan(state) == []
        assert state.phase is Phase.REVIEW

    @pytest.mark.parametrize("order", [[0, 1, 2], [2, 0, 1], [1, 2, 0]])
    def test_review_after_last_result_in_any_order(self, order):
        state = _state([FakePlugin("a"), FakePlugin("b"), FakePlugin("c")])
        machine.start_scan(state)
        sizes = [10, 20, 30]
        for n, index in enumerate(order):
            assert state.phase is Phase.SCANNING
            machine.apply_scan_result(state, ScanResultEvent(index, sizes[index]))
            assert state.scans_received == n + 1
        assert state.phase is Phase.REVIEW
        assert state.total_reclaimable == 60

    def test_duplicate_result_does_not_count(self):
        state = _state([FakePlugin("a"), FakePlugin("b")])
        machine.start_scan(state)
        machine.apply_scan_result(state, ScanResultEvent(0, 10))
        machine.apply_scan_result(state, ScanResultEvent(0, 10))
        assert state.phase is Phase.SCANNING
        assert state.scans_received == 1

    def test_errors_count_toward_completion(self):
        state = _state([FakePlugin("a"), FakePlugin("b")])
        machine.start_scan(state)
        machine.apply_scan_result(state, ScanResultEvent(0, error="permission denied"))
        machine.apply_scan_result(state, ScanResultEvent(1, 5))
        assert state.phase is Phase.REVIEW
        assert not state.items[0].selected

    def test_keys_ignored_except_quit(self):
        state = _state([FakePlugin("a")])
        machine.start_scan(state)
        assert _press(state, Key.DOWN, Key.TOGGLE, Key.CLEAN) is Effect.NONE
        assert state.cursor == 0
        assert state.items[0].selected
        assert _press(state, Key.QUIT) is Effect.QUIT
        assert state.quitting


class TestReview:
    def test_cursor_moves_over_items_and_button(self):
        state = _review([FakePlugin("a"), FakePlugin("b")], [1, 1])
        _press(state, Key.UP)
        assert state.cursor == 0
        _press(state, Key.DOWN, Key.DOWN, Key.DOWN, Key.DOWN)
        assert state.cursor == state.button_index == 2

    def test_space_toggles_row(self):
        state = _review([FakePlugin("a")], [100])
        _press(state, Key.TOGGLE)
        assert not state.items[0].selected
        assert state.selection.total_selected == 0

    def test_enter_on_button_asks_for_confirmation(self):
        state = _review([FakePlugin("a")], [100])
        _press(state, Key.DOWN, Key.ACTIVATE)
        assert state.phase is Phase.CONFIRM

    def test_clean_key_asks_for_confirmation(self):
        state = _review([FakePlugin("a")], [100])
        _press(state, Key.CLEAN)
        assert state.phase is Phase.CONFIRM

    def test_confirm_is_noop_without_selection(self):
        state = _review([FakePlugin("a")], [100])
        _press(state, Key.TOGGLE, Key.CLEAN)
        assert state.phase is Phase.REVIEW
        _press(state, Key.DOWN, Key.ACTIVATE)
        assert state.phase is Phase.REVIEW

    def test_skipped_only_selection_is_noop(self):
        state = _review([FakePlugin("a", root=True)], [0])
        _press(state, Key.TOGGLE, Key.CLEAN)
        assert state.phase is Phase.REVIEW

    def test_quit(self):
        state = _review([FakePlugin("a")], [100])
        assert _press(state, Key.QUIT) is Effect.QUIT
        assert state.quitting

    def test_quit_now_from_any_phase(self):
        state = _review([FakePlugin("a")], [100])
        _press(state, Key.CLEAN)
        assert _press(state, Key.QUIT_NOW) is Effect.QUIT


class TestLargeFileSelection:
    def _state(self, files=None, root=False):
        plugin = FakeItemizedPlugin(files if files is not None else {"/f/a": 200 * MB, "/f/b": 50 * MB}, root=root)
        plugin.scan()
        return _review([FakePlugin("x", size=0), plugin], [0, 250 * MB])

    def test_enter_on_drilldown_row_opens_sub_list(self):
        state = self._state()
        _press(state, Key.DOWN, Key.ACTIVATE)
        assert state.phase is Phase.LARGE_FILE_SELECTION
        assert len(state.large_files) == 2
        assert not any(lf.selected for lf in state.large_files)

    def test_toggle_and_back_keeps_selection(self):
        state = self._state()
        _press(state, Key.DOWN, Key.TOGGLE)
        _press(state, Key.DOWN, Key.TOGGLE, Key.BACK)
        assert state.phase is Phase.REVIEW
        assert state.items[1].selected
        assert state.selection.total_selected == 50 * MB

        _press(state, Key.ACTIVATE)
        assert state.phase is Phase.LARGE_FILE_SELECTION
        assert [lf.selected for lf in state.large_files] == [False, True]

    def test_sub_cursor_clamped(self):
        state = self._state()
        _press(state, Key.DOWN, Key.ACTIVATE, Key.UP)
        assert state.lf_cursor == 0
        _press(state, Key.DOWN, Key.DOWN, Key.DOWN)
        assert state.lf_cursor == 1

    def test_empty_sub_list(self):
        state = self._state(files={})
        _press(state, Key.DOWN, Key.ACTIVATE, Key.DOWN, Key.TOGGLE)
        assert state.lf_cursor == 0
        assert state.selection.total_selected == 0
        _press(state, Key.QUIT)
        assert state.phase is Phase.REVIEW
        assert not state.quitting

    def test_skipped_drilldown_row_does_not_open(self):
        plugin = FakeItemizedPlugin({"/f/a": 200 * MB}, root=True)
        state = _review([plugin], [0])
        _press(state, Key.ACTIVATE)
        assert state.phase is Phase.REVIEW

    def test_confirm_pushes_chosen_files(self):
        state = self._state()
        _press(state, Key.DOWN, Key.ACTIVATE, Key.DOWN, Key.TOGGLE, Key.BACK, Key.CLEAN)
        assert state.phase is Phase.CONFIRM
        plugin = state.items[1].plugin
        plugin.clean()
        assert plugin.cleaned == ["/f/b"]


class TestConfirm:
    def test_no_returns_to_review(self):
        state = _review([FakePlugin("a")], [100])
        for key in (Key.NO, Key.BACK, Key.QUIT):
            _press(state, Key.CLEAN)
            assert _press(state, key) is Effect.NONE
            assert state.phase is Phase.REVIEW
            assert not state.quitting

    @pytest.mark.parametrize("key", [Key.YES, Key.ACTIVATE])
    def test_yes_dispatches(self, key):
        state = _review([FakePlugin("a")], [100])
        _press(state, Key.CLEAN)
        assert _press(state, key) is Effect.DISPATCH_CLEAN

    def test_other_keys_ignored(self):
        state = _review([FakePlugin("a")], [100])
        _press(state, Key.CLEAN)
        assert _press(state, Key.DOWN, Key.TOGGLE, Key.CLEAN) is Effect.NONE
        assert state.phase is Phase.CONFIRM


class TestCleaning:
    def test_done_after_every_result_including_failures(self):
        state = _review([FakePlugin("a"), FakePlugin("b"), FakePlugin("c")], [1, 2, 3])
        _press(state, Key.CLEAN)
        targets = machine.start_clean(state)
        assert [i for i, _ in targets] == [0, 1, 2]
        assert state.phase is Phase.CLEANING

        assert machine.apply_clean_result(state, CleanResultEvent(2, 3)) is Effect.NONE
        assert machine.apply_clean_result(state, CleanResultEvent(0, error="device busy")) is Effect.NONE
        assert state.phase is Phase.CLEANING
        assert machine.apply_clean_result(state, CleanResultEvent(1, 2)) is Effect.FINISHED
        assert state.phase is Phase.DONE
        assert state.items[0].error == "device busy"
        assert state.finished

    def test_only_selected_rows_dispatched(self):
        state = _review([FakePlugin("a"), FakePlugin("b"), FakePlugin("c", root=True)], [1, 2, 0])
        _press(state, Key.TOGGLE, Key.CLEAN)
        assert [i for i, _ in machine.start_clean(state)] == [1]

    def test_quit_during_cleaning(self):
        state = _review([FakePlugin("a")], [1])
        _press(state, Key.CLEAN)
        machine.start_clean(state)
        assert _press(state, Key.QUIT) is Effect.QUIT

    def test_late_scan_result_dropped(self):
        state = _review([FakePlugin("a")], [1])
        machine.apply_scan_result(state, ScanResultEvent(0, 999))
        assert state.items[0].size == 1


def test_full_run_with_large_file_selection():
    files = {"/home/u/a.iso": 200 * MB, "/home/u/b.tar": 50 * MB, "/home/u/c.mkv": 300 * MB}
    large = FakeItemizedPlugin(files)
    large.scan()
    state = _review([FakePlugin("a", size=0), FakePlugin("b", size=0), large], [0, 0, 550 * MB])

    _press(state, Key.DOWN, Key.DOWN, Key.ACTIVATE)
    assert state.phase is Phase.LARGE_FILE_SELECTION
    _press(state, Key.TOGGLE, Key.DOWN, Key.TOGGLE, Key.BACK)
    assert state.selection.total_selected == 250 * MB

    _press(state, Key.CLEAN)
    assert state.phase is Phase.CONFIRM
    assert state.selection.selected_categories() == 1
    assert _press(state, Key.YES) is Effect.DISPATCH_CLEAN

    targets = machine.start_clean(state)
    assert [i for i, _ in targets] == [2]
    assert machine.apply_clean_result(state, CleanResultEvent(2, 250 * MB)) is Effect.FINISHED
    large.clean()
    assert sorted(large.cleaned) == ["/home/u/a.iso", "/home/u/b.tar"]


def test_resize_and_tick():
    state = _state([FakePlugin("a")])
    machine.resize(state, 120, 40)
    machine.tick(state)
    machine.tick(state)
    assert (state.width, state.height, state.spinner_frame) == (120, 40, 2)


def test_check_clean_complete_with_nothing_dispatched():
    state = _review([FakePlugin("a")], [1])
    state.phase = Phase.CLEANING
    assert machine.check_clean_complete(state) is Effect.FINISHED


def test_three_item_scenario():
    state = _review([FakePlugin("zero"), FakePlugin("mid"), FakePlugin("big")], [0, 50 * MB, 200 * MB])
    assert not state.items[0].selected
    assert machine.handle_key(state, Key.TOGGLE) is Effect.NONE
    assert state.items[0].selected
    machine.handle_key(state, Key.TOGGLE)

    machine.handle_key(state, Key.CLEAN)
    assert state.phase is Phase.CONFIRM
    assert state.selection.total_selected == 250 * MB
    assert machine.handle_key(state, Key.YES) is Effect.DISPATCH_CLEAN

    targets = machine.start_clean(state)
    assert [i for i, _ in targets] == [1, 2]
    machine.apply_clean_result(state, CleanResultEvent(2, 200 * MB))
    assert machine.apply_clean_result(state, CleanResultEvent(1, 50 * MB)) is Effect.FINISHED
    assert state.phase is Phase.DONE
    assert state.items[1].cleaned and state.items[2].cleaned
    assert not state.items[0].cleaned


def test_skipped_rows_never_selected_under_any_keys():
    plugins = [FakePlugin("a", root=True), FakePlugin("b"), FakePlugin("c", root=True)]
    state = _review(plugins, [0, 10, 0])
    sequence = [Key.TOGGLE, Key.DOWN, Key.ACTIVATE, Key.DOWN, Key.TOGGLE, Key.UP, Key.UP, Key.TOGGLE, Key.ACTIVATE]
    for key in sequence * 3:
        machine.handle_key(state, key)
        for item in state.items:
            if item.skip:
                assert not item.selected
