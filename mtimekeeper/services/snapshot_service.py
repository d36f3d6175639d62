"""Snapshot service: walk a tree and record each file's identity and mtime."""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from mtimekeeper.exceptions import SnapshotError
from mtimekeeper.filesystem.paths import relative_posix
from mtimekeeper.schemas.manifest import Manifest, ManifestEntry
from mtimekeeper.services.datetime_service import format_timestamp, from_ns
from mtimekeeper.services.fingerprint_service import DEFAULT_CHUNK_SIZE, hash_file

logger = logging.getLogger(__name__)


class SkipReason(StrEnum):
    """Why a path found during the walk produced no manifest entry."""

    SYMLINK = "symlink"
    NOT_REGULAR = "not_regular"
    ERROR = "error"


@dataclass(frozen=True)
class SkippedPath:
    """A path left out of the manifest."""

    relative_path: str
    reason: SkipReason
    detail: str = ""


@dataclass
class SnapshotResult:
    """The manifest built by a snapshot plus everything it left out."""

    manifest: Manifest
    skipped: list[SkippedPath] = field(default_factory=list)

    @property
    def errors(self) -> list[SkippedPath]:
        """Files that could not be read."""
        return [s for s in self.skipped if s.reason is SkipReason.ERROR]


def _raise_walk_error(exc: OSError) -> None:
    msg = f"Error enumerating {exc.filename}: {exc.strerror or exc}"
    raise SnapshotError(msg) from exc


def _snapshot_file(root: Path, path: Path, chunk_size: int) -> ManifestEntry | SkippedPath:
    rel = relative_posix(root, path)
    try:
        st = path.lstat()
    except OSError as exc:
        return SkippedPath(rel, SkipReason.ERROR, f"cannot stat file: {exc}")

    if stat.S_ISLNK(st.st_mode):
        return SkippedPath(rel, SkipReason.SYMLINK, "symbolic link")
    if not stat.S_ISREG(st.st_mode):
        return SkippedPath(rel, SkipReason.NOT_REGULAR, "not a regular file")

    try:
        digest = hash_file(path, chunk_size)
    except OSError as exc:
        return SkippedPath(rel, SkipReason.ERROR, f"cannot hash file: {exc}")

    return ManifestEntry(
        relative_path=rel,
        content_fingerprint=digest,
        modification_time=format_timestamp(from_ns(st.st_mtime_ns)),
        is_directory=False,
    )


def snapshot(root: Path | str, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> SnapshotResult:
    """Build a manifest of every regular file under ``root``.

    Directories are descended into but get no entry of their own. Symbolic
    links and other non-regular files are never followed or read; they are
    listed in ``SnapshotResult.skipped``, as are files that fail to read.

    Raises SnapshotError if ``root`` is missing, is not a directory, or any
    directory in the tree cannot be enumerated.
    """
    root = Path(root)
    if not root.is_dir():
        msg = f"Root directory does not exist or is not a directory: {root}"
        raise SnapshotError(msg)

    entries: list[ManifestEntry] = []
    skipped: list[SkippedPath] = []

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        current = Path(dirpath)

        descend: list[str] = []
        for name in sorted(dirnames):
            child = current / name
            if child.is_symlink():
                skipped.append(
                    SkippedPath(relative_posix(root, child), SkipReason.SYMLINK, "symbolic link")
                )
            else:
                descend.append(name)
        dirnames[:] = descend

        for name in sorted(filenames):
            outcome = _snapshot_file(root, current / name, chunk_size)
            if isinstance(outcome, SkippedPath):
                logger.debug("Skipping %s (%s)", outcome.relative_path, outcome.reason)
                skipped.append(outcome)
            else:
                entries.append(outcome)

    logger.debug("Snapshot of %s: %d entries, %d skipped", root, len(entries), len(skipped))
    return SnapshotResult(manifest=Manifest(entries), skipped=skipped)
