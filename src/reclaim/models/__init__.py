"""Reclaim data models."""

from reclaim.models.plugin import CleanPlugin, ItemizedPlugin, MultiDirPlugin, PluginError
from reclaim.models.scan_result import FileEntry, ScanResult
from reclaim.models.clean_result import CleanResult
from reclaim.models.selection import CleanerItem, LargeFileEntry, SelectionModel

__all__ = [
    "CleanPlugin",
    "CleanResult",
    "CleanerItem",
    "FileEntry",
    "ItemizedPlugin",
    "LargeFileEntry",
    "MultiDirPlugin",
    "PluginError",
    "ScanResult",
    "SelectionModel",
]
