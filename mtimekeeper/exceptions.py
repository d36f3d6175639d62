"""Application-level exception types.

Convention:
- ``MtimeKeeperError`` subclasses are *fatal*: they abort a whole snapshot or
  restore run. The CLI entry points catch them, log the message at ERROR and
  exit with status 1.
- ``OSError`` is the *per-entry* failure type. It never escapes the step that
  processes a single file; it is turned into a skipped-path record or an
  ``EntryOutcome.SKIPPED_ERROR`` result instead.
"""

from __future__ import annotations


class MtimeKeeperError(Exception):
    """Base class for errors that abort an entire run."""


class SnapshotError(MtimeKeeperError):
    """Raised when the snapshot root cannot be enumerated.

    Covers a missing root, a root that is not a directory, and any error
    reported while walking the tree itself.
    """


class ManifestError(MtimeKeeperError):
    """Raised when a manifest cannot be read, parsed, validated or written."""
