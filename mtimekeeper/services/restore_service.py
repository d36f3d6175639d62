"""Restore service: apply recorded modification times to unchanged files."""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from mtimekeeper.filesystem.paths import resolve_within
from mtimekeeper.services.datetime_service import parse_timestamp, to_ns
from mtimekeeper.services.fingerprint_service import DEFAULT_CHUNK_SIZE, hash_file

if TYPE_CHECKING:
    from mtimekeeper.schemas.manifest import Manifest, ManifestEntry

logger = logging.getLogger(__name__)


class EntryOutcome(StrEnum):
    """What happened to a single manifest entry during a restore."""

    UPDATED = "updated"
    SKIPPED_DIRECTORY = "skipped_directory"
    SKIPPED_MISSING = "skipped_missing"
    SKIPPED_MISMATCH = "skipped_mismatch"
    SKIPPED_ERROR = "skipped_error"


@dataclass(frozen=True)
class EntryResult:
    """Outcome for one manifest entry."""

    relative_path: str
    outcome: EntryOutcome
    detail: str = ""


@dataclass
class RestoreReport:
    """Totals and per-entry outcomes of a restore pass."""

    total_entries: int = 0
    results: list[EntryResult] = field(default_factory=list)
    dry_run: bool = False

    @property
    def updated_count(self) -> int:
        return self.count(EntryOutcome.UPDATED)

    @property
    def warnings(self) -> list[EntryResult]:
        """Entries skipped because of an error worth reporting."""
        return [r for r in self.results if r.outcome is EntryOutcome.SKIPPED_ERROR]

    def count(self, outcome: EntryOutcome) -> int:
        return sum(1 for r in self.results if r.outcome is outcome)


def restore_entry(
    root: Path,
    entry: ManifestEntry,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    dry_run: bool = False,
) -> EntryResult:
    """Restore the modification time of one manifest entry under ``root``.

    The recorded time is applied (to both atime and mtime) only when the file
    exists and its current fingerprint equals the recorded one. Failures are
    returned as ``SKIPPED_ERROR`` results, never raised.
    """
    rel = entry.relative_path
    if entry.is_directory:
        return EntryResult(rel, EntryOutcome.SKIPPED_DIRECTORY)

    try:
        target = resolve_within(root, rel)
        if target is None:
            return EntryResult(rel, EntryOutcome.SKIPPED_ERROR, "path escapes the restore root")
        st = target.stat()
    except (FileNotFoundError, NotADirectoryError):
        return EntryResult(rel, EntryOutcome.SKIPPED_MISSING)
    except (OSError, RuntimeError, ValueError) as exc:
        # RuntimeError: symlink loop on Python < 3.13; ValueError: embedded NUL byte
        return EntryResult(rel, EntryOutcome.SKIPPED_ERROR, f"cannot resolve path: {exc}")
    if not stat.S_ISREG(st.st_mode):
        return EntryResult(rel, EntryOutcome.SKIPPED_ERROR, "not a regular file")

    try:
        digest = hash_file(target, chunk_size)
    except OSError as exc:
        return EntryResult(rel, EntryOutcome.SKIPPED_ERROR, f"cannot hash file: {exc}")
    if digest != entry.content_fingerprint.lower():
        return EntryResult(rel, EntryOutcome.SKIPPED_MISMATCH)

    try:
        ns = to_ns(parse_timestamp(entry.modification_time))
    except (ValueError, OverflowError) as exc:
        return EntryResult(
            rel,
            EntryOutcome.SKIPPED_ERROR,
            f"invalid modification time {entry.modification_time!r}: {exc}",
        )

    if not dry_run:
        try:
            os.utime(target, ns=(ns, ns))
        except (OSError, OverflowError) as exc:
            return EntryResult(
                rel, EntryOutcome.SKIPPED_ERROR, f"cannot set modification time: {exc}"
            )
    return EntryResult(rel, EntryOutcome.UPDATED)


def restore(
    root: Path | str,
    manifest: Manifest,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    dry_run: bool = False,
) -> RestoreReport:
    """Restore recorded modification times onto the tree at ``root``.

    Every entry is handled independently; no per-entry failure stops the pass.
    With ``dry_run`` nothing on disk is touched, but entries that would be
    updated are still reported as ``UPDATED``.
    """
    root = Path(root)
    report = RestoreReport(total_entries=len(manifest), dry_run=dry_run)
    for entry in manifest:
        result = restore_entry(root, entry, chunk_size=chunk_size, dry_run=dry_run)
        logger.debug("%s: %s", result.relative_path, result.outcome)
        report.results.append(result)
    return report
