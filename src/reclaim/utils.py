"""Shared utility functions."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path

from reclaim.models.scan_result import FileEntry

log = logging.getLogger(__name__)


def has_command(name: str) -> bool:
    """Check if a command exists on PATH."""
    return shutil.which(name) is not None


def is_root() -> bool:
    """Check if the current process is running as root."""
    return os.geteuid() == 0


def xdg_cache_home() -> Path:
    """Return XDG_CACHE_HOME, defaulting to ~/.cache."""
    return Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def xdg_data_home() -> Path:
    """Return XDG_DATA_HOME, defaulting to ~/.local/share."""
    return Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def run_command(args: list[str], *, timeout: float | None = None) -> subprocess.CompletedProcess[str]:
    """Run an external tool, capturing text output. Never raises on exit status."""
    log.debug("Running: %s", " ".join(args))
    return subprocess.run(args, capture_output=True, text=True, timeout=timeout)


def remove_entries(
    entries: list[FileEntry],
    *,
    count_files: bool = False,
) -> tuple[int, int, list[str]]:
    """Remove file entries and return (freed_bytes, files_removed, errors).

    Args:
        entries: FileEntry items to remove.
        count_files: If True, count individual files in directories.
                     If False, count each entry as 1 removal.
    """
    freed = 0
    removed = 0
    errors: list[str] = []

    for entry in entries:
        try:
            if entry.path.is_dir() and not entry.path.is_symlink():
                if count_files:
                    removed += sum(1 for f in entry.path.rglob("*") if f.is_file())
                else:
                    removed += 1
                shutil.rmtree(entry.path)
            elif entry.path.exists() or entry.path.is_symlink():
                entry.path.unlink()
                removed += 1
            freed += entry.size_bytes
        except OSError as e:
            errors.append(f"{entry.path}: {e}")

    return freed, removed, errors


def dir_info(path: Path | str) -> tuple[int, int]:
    """Calculate total size and file count of a directory tree.

    Symlinks are not followed and unreadable subtrees are skipped.

    Returns:
        (total_bytes, file_count) tuple.
    """
    total = 0
    count = 0
    stack: list[Path | str] = [path]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                for entry in it:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            total += entry.stat(follow_symlinks=False).st_size
                            count += 1
                        elif entry.is_dir(follow_symlinks=False):
                            stack.append(entry.path)
                    except OSError:
                        pass
        except OSError:
            pass
    return total, count


def dir_size(path: Path | str) -> int:
    """Calculate total size of a directory tree."""
    return dir_info(path)[0]


def bytes_to_human(size_bytes: int) -> str:
    """Convert byte count to a human-readable string (binary units)."""
    if size_bytes < 0:
        return f"-{bytes_to_human(-size_bytes)}"
    if size_bytes < 1024:
        return f"{size_bytes} B"

    value = float(size_bytes)
    for unit in ("KB", "MB", "GB", "TB", "PB"):
        value /= 1024
        if value < 1024:
            return f"{value:.1f} {unit}"
    return f"{value:.1f} PB"


def parse_human_size(text: str) -> int:
    """Parse sizes like '1.2GB', '512kB' or '3 B' as printed by docker.

    Decimal (SI) multipliers are used. Unparseable input yields 0.
    """
    text = text.strip().upper().replace(" ", "")
    multipliers = (("TB", 10**12), ("GB", 10**9), ("MB", 10**6), ("KB", 10**3), ("B", 1))
    for suffix, factor in multipliers:
        if text.endswith(suffix):
            number = text[: -len(suffix)]
            try:
                return int(float(number) * factor)
            except ValueError:
                return 0
    return 0
