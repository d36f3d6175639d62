"""Path containment checks for manifest paths."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


def relative_posix(root: Path, path: Path) -> str:
    """Return ``path`` relative to ``root`` with forward-slash separators."""
    return path.relative_to(root).as_posix()


def resolve_within(root: Path, relative_path: str) -> Path | None:
    """Resolve a manifest path within root, returning None on traversal.

    Absolute paths, ``..`` segments and symlinks that lead outside ``root``
    all count as traversal.
    """
    base = root.resolve()
    candidate = (base / relative_path).resolve()
    if not candidate.is_relative_to(base):
        return None
    return candidate
