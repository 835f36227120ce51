"""Tests for key translation."""

from __future__ import annotations

import pytest

from reclaim.tui.keys import translate
from reclaim.tui.state import Key


@pytest.mark.parametrize(
    "raw, key",
    [
        ("\x1b[A", Key.UP),
        ("k", Key.UP),
        ("\x1b[B", Key.DOWN),
        ("j", Key.DOWN),
        (" ", Key.TOGGLE),
        ("\r", Key.ACTIVATE),
        ("c", Key.CLEAN),
        ("\x1b", Key.BACK),
        ("\x7f", Key.BACK),
        ("Y", Key.YES),
        ("n", Key.NO),
        ("q", Key.QUIT),
        ("\x03", Key.QUIT_NOW),
    ],
)
def test_translate(raw, key):
    assert translate(raw) is key


@pytest.mark.parametrize("raw", ["x", "\x1b[C", "", "Q"])
def test_unbound_keys(raw):
    assert translate(raw) is None
