"""Content fingerprints: streamed SHA-256 over a file's bytes."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_CHUNK_SIZE = 65536


def hash_file(path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Compute the SHA-256 hex digest of a file.

    The file is read in ``chunk_size`` pieces so arbitrarily large files never
    have to fit in memory. Any ``OSError`` raised while opening or reading
    propagates to the caller.
    """
    sha = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            sha.update(chunk)
    return sha.hexdigest()
