"""CLI: snapshot a directory tree's file identities and modification times."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from cli import configure_logging
from mtimekeeper.config import Settings
from mtimekeeper.exceptions import ManifestError, SnapshotError
from mtimekeeper.schemas.manifest import save_manifest
from mtimekeeper.services.snapshot_service import SkipReason, snapshot

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="save-mtime",
        description="Record the content hash and modification time of every file in a tree",
    )
    parser.add_argument("root", help="Root directory to scan")
    parser.add_argument(
        "--output",
        "-o",
        default=settings.manifest_name,
        help=f"Manifest file to write (default: {settings.manifest_name})",
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
    args = build_parser(settings).parse_args(argv)
    configure_logging(args.verbose or settings.debug)

    try:
        result = snapshot(Path(args.root), chunk_size=settings.hash_chunk_size)
    except SnapshotError as exc:
        logger.error("%s", exc)
        return 1

    for skipped in result.skipped:
        if skipped.reason is SkipReason.ERROR:
            logger.warning("Skipping %s: %s", skipped.relative_path, skipped.detail)
        else:
            logger.info("Skipping %s: %s", skipped.relative_path, skipped.detail)

    output = Path(args.output)
    try:
        save_manifest(result.manifest, output)
    except ManifestError as exc:
        logger.error("%s", exc)
        return 1

    print(f"Processed {len(result.manifest)} files. File information saved to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
