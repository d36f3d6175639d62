"""Shared test fixtures for mtimekeeper."""

from __future__ import annotations

import os
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from mtimekeeper.services.datetime_service import from_ns, to_ns

if TYPE_CHECKING:
    from pathlib import Path

# Reference modification times; microsecond precision survives a round trip.
T1 = datetime(2021, 3, 4, 5, 6, 7, 123456, tzinfo=UTC)
T2 = datetime(2022, 8, 9, 10, 11, 12, 654321, tzinfo=UTC)
T3 = datetime(2024, 1, 1, 0, 0, 0, tzinfo=UTC)
T4 = datetime(2024, 6, 1, 12, 30, 0, tzinfo=UTC)


def write_file(path: Path, content: str, mtime: datetime | None = None) -> Path:
    """Write a file, creating parents, and optionally set its atime and mtime."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    if mtime is not None:
        set_mtime(path, mtime)
    return path


def set_mtime(path: Path, mtime: datetime) -> None:
    ns = to_ns(mtime)
    os.utime(path, ns=(ns, ns))


def mtime_of(path: Path) -> datetime:
    return from_ns(path.stat().st_mtime_ns)


def symlink_or_skip(link: Path, target: Path, *, target_is_directory: bool = False) -> None:
    """Create a symbolic link or skip the test where the platform refuses."""
    try:
        os.symlink(target, link, target_is_directory=target_is_directory)
    except (OSError, NotImplementedError) as exc:
        pytest.skip(f"symlinks unavailable: {exc}")


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Tree with ``a.txt`` ("hello", T1) and ``b/c.txt`` ("world", T2)."""
    root = tmp_path / "source"
    write_file(root / "a.txt", "hello", T1)
    write_file(root / "b" / "c.txt", "world", T2)
    return root


@pytest.fixture
def copied_tree(tmp_path: Path, source_tree: Path) -> Path:
    """Copy of ``source_tree`` with the same content but fresh mtimes T3 and T4."""
    root = tmp_path / "copy"
    write_file(root / "a.txt", "hello", T3)
    write_file(root / "b" / "c.txt", "world", T4)
    return root
