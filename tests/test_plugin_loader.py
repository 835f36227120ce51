"""Tests for plugin discovery and loading."""

from __future__ import annotations

import json
from pathlib import Path

from reclaim.core.plugin_loader import _find_plugins_in_module, load_plugins, user_plugin_dir
from reclaim.core.registry import PluginRegistry
from reclaim.settings import Settings

from tests.fakes import FakePlugin

_EXTERNAL_PLUGIN = '''
from reclaim.models.plugin import CleanPlugin


class ExternalPlugin(CleanPlugin):
    id = "external"
    name = "External"

    def _do_scan(self):
        return self._result([])
'''


class TestPluginRegistry:
    def test_register_and_get(self):
        registry = PluginRegistry()
        plugin = FakePlugin("test")
        registry.register(plugin)

        assert registry.get("test") is plugin
        assert "test" in registry
        assert len(registry) == 1

    def test_duplicate_registration_skipped(self):
        registry = PluginRegistry()
        first = FakePlugin("dup")
        registry.register(first)
        registry.register(FakePlugin("dup"))
        assert len(registry) == 1
        assert registry.get("dup") is first

    def test_get_all_sorted(self):
        registry = PluginRegistry()
        registry.register(FakePlugin("late", sort_order=900))
        registry.register(FakePlugin("b", sort_order=10))
        registry.register(FakePlugin("a", sort_order=10))
        assert [p.id for p in registry] == ["a", "b", "late"]

    def test_get_available(self):
        registry = PluginRegistry()
        registry.register(FakePlugin("avail", available=True))
        registry.register(FakePlugin("not_avail", available=False))

        available = registry.get_available()
        assert len(available) == 1
        assert available[0].id == "avail"

    def test_get_available_survives_broken_check(self):
        class Broken(FakePlugin):
            def is_available(self) -> bool:
                raise OSError("boom")

        registry = PluginRegistry()
        registry.register(Broken("broken"))
        registry.register(FakePlugin("ok"))
        assert [p.id for p in registry.get_available()] == ["ok"]

    def test_partition_reports_reasons(self):
        registry = PluginRegistry()
        registry.register(FakePlugin("ok"))
        registry.register(FakePlugin("off", available=False))
        usable, unusable = registry.partition()
        assert [p.id for p in usable] == ["ok"]
        assert unusable == {"off": "not available"}

    def test_register_reports_duplicates(self):
        registry = PluginRegistry()
        assert registry.register(FakePlugin("x"))
        assert not registry.register(FakePlugin("x"))


class TestPluginLoader:
    def test_loads_builtin_plugins(self):
        registry = PluginRegistry()
        load_plugins(registry)
        assert len(registry) == 14
        for plugin_id in ("apt_cache", "trash", "docker", "large_files", "tmp_files"):
            assert plugin_id in registry

    def test_all_plugins_have_unique_ids(self):
        registry = PluginRegistry()
        load_plugins(registry)
        ids = [p.id for p in registry]
        assert len(ids) == len(set(ids))

    def test_large_files_sorts_last(self):
        registry = PluginRegistry()
        load_plugins(registry)
        assert registry.get_all()[-1].id == "large_files"

    def test_disabled_plugins_skipped(self, isolate_settings):
        isolate_settings.parent.mkdir(parents=True)
        isolate_settings.write_text(json.dumps({"plugins": {"disabled": ["docker", "trash"]}}))
        registry = PluginRegistry()
        load_plugins(registry, Settings(isolate_settings))
        assert "docker" not in registry
        assert "trash" not in registry
        assert "apt_cache" in registry

    def test_user_plugin_directory(self):
        plugin_dir = user_plugin_dir() / "external"
        plugin_dir.mkdir(parents=True)
        (plugin_dir / "plugin.py").write_text(_EXTERNAL_PLUGIN)

        registry = PluginRegistry()
        load_plugins(registry)
        assert "external" in registry

    def test_plugin_paths_setting(self, tmp_path):
        extra = tmp_path / "extra"
        extra.mkdir()
        (extra / "my_plugin.py").write_text(_EXTERNAL_PLUGIN)
        (extra / "broken.py").write_text("raise RuntimeError('nope')\n")
        settings = Settings(tmp_path / "s.json")
        settings.set("plugin_paths", [str(extra)])

        registry = PluginRegistry()
        load_plugins(registry, settings)
        assert "external" in registry

    def test_find_plugins_ignores_imported_classes(self):
        import reclaim.plugins.thumbnails as module

        found = _find_plugins_in_module(module)
        assert [cls.__name__ for cls in found] == ["ThumbnailsPlugin"]

    def test_bundled_example_plugin(self):
        from reclaim.core.plugin_loader import _load_plugins_from_directory

        example_dir = Path(__file__).resolve().parent.parent / "plugins"
        found = _load_plugins_from_directory(example_dir)
        assert [cls.__name__ for cls in found] == ["ExamplePlugin"]
        assert found[0]().id == "example"
