"""CLI: restore recorded modification times onto files whose content is unchanged."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from cli import configure_logging
from mtimekeeper.config import Settings
from mtimekeeper.exceptions import ManifestError
from mtimekeeper.schemas.manifest import load_manifest
from mtimekeeper.services.restore_service import EntryOutcome, restore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="restore-mtime",
        description="Restore modification times from a manifest onto files with matching content",
    )
    parser.add_argument("root", help="Root directory to restore into")
    parser.add_argument("manifest", help="Manifest file written by save-mtime")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would be updated without changing any file",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    try:
        settings = Settings()
    except ValidationError as exc:
        configure_logging(debug=False)
        logger.error("Invalid configuration: %s", exc)
        return 1
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose or settings.debug)

    try:
        manifest = load_manifest(Path(args.manifest))
    except ManifestError as exc:
        logger.error("%s", exc)
        return 1

    report = restore(
        Path(args.root),
        manifest,
        chunk_size=settings.hash_chunk_size,
        dry_run=args.dry_run,
    )

    for result in report.results:
        if result.outcome is EntryOutcome.SKIPPED_ERROR:
            logger.warning("Skipping %s: %s", result.relative_path, result.detail)
        elif result.outcome is EntryOutcome.SKIPPED_MISSING:
            logger.debug("Skipping %s: not found", result.relative_path)
        elif result.outcome is EntryOutcome.SKIPPED_MISMATCH:
            logger.debug("Skipping %s: content changed", result.relative_path)

    suffix = " (dry run)" if report.dry_run else ""
    print(f"Parsed file infos: {report.total_entries}")
    print(f"Updated files: {report.updated_count}{suffix}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
