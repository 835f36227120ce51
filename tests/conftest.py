"""Shared test fixtures."""

from __future__ import annotations

import pytest

from reclaim.settings import Settings


@pytest.fixture(autouse=True)
def isolate_settings(tmp_path, monkeypatch):
    """Point XDG directories at a temp dir and reset the settings singleton."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setattr(Settings, "_instance", None)
    return tmp_path / "config" / "reclaim" / "settings.json"
