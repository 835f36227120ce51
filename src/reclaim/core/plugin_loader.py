"""Plugin discovery and loading."""

from __future__ import annotations

import importlib
import importlib.util
import inspect
import logging
import pkgutil
from pathlib import Path
from types import ModuleType

from reclaim.models.plugin import CleanPlugin, ItemizedPlugin, MultiDirPlugin
from reclaim.core.registry import PluginRegistry
from reclaim.settings import Settings
from reclaim.utils import xdg_data_home

log = logging.getLogger(__name__)

# Abstract base classes that should not be instantiated
_ABSTRACT_BASES = {CleanPlugin, ItemizedPlugin, MultiDirPlugin}


def user_plugin_dir() -> Path:
    return xdg_data_home() / "reclaim" / "plugins"


def _find_plugins_in_module(module: ModuleType) -> list[type[CleanPlugin]]:
    """Find all concrete CleanPlugin subclasses defined in a module."""
    plugins: list[type[CleanPlugin]] = []
    for _, obj in inspect.getmembers(module, inspect.isclass):
        if (
            issubclass(obj, CleanPlugin)
            and obj not in _ABSTRACT_BASES
            and not inspect.isabstract(obj)
            and obj.__module__ == module.__name__
        ):
            plugins.append(obj)
    return plugins


def _load_builtin_plugins() -> list[type[CleanPlugin]]:
    """Load plugins from the reclaim.plugins package."""
    import reclaim.plugins as plugins_pkg

    found: list[type[CleanPlugin]] = []
    for _importer, modname, _ispkg in pkgutil.iter_modules(plugins_pkg.__path__):
        try:
            module = importlib.import_module(f"reclaim.plugins.{modname}")
            found.extend(_find_plugins_in_module(module))
        except Exception:
            log.exception("Failed to load built-in plugin module: %s", modname)
    return found


def _load_plugins_from_directory(directory: Path) -> list[type[CleanPlugin]]:
    """Load plugins from an external directory.

    Accepts loose ``*.py`` files and package directories containing a
    ``plugin.py`` (or ``__init__.py``).
    """
    if not directory.is_dir():
        return []

    found: list[type[CleanPlugin]] = []
    for path in sorted(directory.iterdir()):
        if path.is_dir() and (path / "plugin.py").exists():
            module_file = path / "plugin.py"
        elif path.is_dir() and (path / "__init__.py").exists():
            module_file = path / "__init__.py"
        elif path.suffix == ".py" and path.name != "__init__.py":
            module_file = path
        else:
            continue

        try:
            spec = importlib.util.spec_from_file_location(f"reclaim_ext_plugin_{path.stem}", module_file)
            if spec is None or spec.loader is None:
                continue
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
            found.extend(_find_plugins_in_module(module))
        except Exception:
            log.exception("Failed to load plugin from: %s", module_file)
    return found


def load_plugins(registry: PluginRegistry, settings: Settings | None = None) -> None:
    """Discover and register all plugins not disabled in settings.

    Searches in order: built-in, user-local, then ``plugin_paths`` from settings.
    """
    settings = settings or Settings.instance()
    disabled = set(settings.get("plugins.disabled") or [])

    plugin_classes = _load_builtin_plugins()
    plugin_classes.extend(_load_plugins_from_directory(user_plugin_dir()))
    for extra in settings.get("plugin_paths") or []:
        plugin_classes.extend(_load_plugins_from_directory(Path(extra).expanduser()))

    for cls in plugin_classes:
        try:
            instance = cls()
        except Exception:
            log.exception("Failed to instantiate plugin: %s", cls.__name__)
            continue
        if instance.id in disabled:
            log.info("Plugin '%s' disabled in settings", instance.id)
            continue
        registry.register(instance)

    log.info("Loaded %d plugins", len(registry))
