"""Tests for shared helpers."""

from __future__ import annotations

import pytest

from reclaim.models.scan_result import FileEntry
from reclaim.utils import bytes_to_human, dir_info, parse_human_size, remove_entries


@pytest.mark.parametrize(
    "size, text",
    [
        (0, "0 B"),
        (512, "512 B"),
        (1536, "1.5 KB"),
        (250 * 1024 * 1024, "250.0 MB"),
        (3 * 1024**4, "3.0 TB"),
    ],
)
def test_bytes_to_human(size, text):
    assert bytes_to_human(size) == text


@pytest.mark.parametrize(
    "text, size",
    [
        ("1.5GB", 1_500_000_000),
        ("512kB", 512_000),
        ("3 B", 3),
        ("0B", 0),
        ("garbage", 0),
        ("xGB", 0),
    ],
)
def test_parse_human_size(text, size):
    assert parse_human_size(text) == size


def test_dir_info_skips_symlinks(tmp_path):
    (tmp_path / "a").write_bytes(b"a" * 10)
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b").write_bytes(b"b" * 20)
    (tmp_path / "link").symlink_to(tmp_path / "sub")
    assert dir_info(tmp_path) == (30, 2)


def test_dir_info_missing_dir(tmp_path):
    assert dir_info(tmp_path / "missing") == (0, 0)


def test_remove_entries(tmp_path):
    (tmp_path / "file").write_bytes(b"f" * 5)
    (tmp_path / "dir").mkdir()
    (tmp_path / "dir" / "x").write_bytes(b"x")
    (tmp_path / "dir" / "y").write_bytes(b"y")
    entries = [
        FileEntry(path=tmp_path / "file", size_bytes=5),
        FileEntry(path=tmp_path / "dir", size_bytes=2),
    ]
    freed, removed, errors = remove_entries(entries, count_files=True)
    assert (freed, removed, errors) == (7, 3, [])
    assert list(tmp_path.iterdir()) == []
