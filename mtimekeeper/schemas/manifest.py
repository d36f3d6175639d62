"""Manifest schema and persistence."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError, field_validator

from mtimekeeper.exceptions import ManifestError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


class ManifestEntry(BaseModel):
    """Identity and timestamp of one file at snapshot time.

    Serialized with the short keys ``path``, ``hash``, ``mod_time`` and
    ``is_directory``; field names are accepted on input too.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    relative_path: str = Field(alias="path", min_length=1)
    content_fingerprint: str = Field(alias="hash")
    modification_time: str = Field(alias="mod_time")  # parsed per entry at restore time
    is_directory: bool = False


class Manifest(RootModel[tuple[ManifestEntry, ...]]):
    """Ordered, immutable sequence of manifest entries."""

    model_config = ConfigDict(frozen=True)

    root: tuple[ManifestEntry, ...] = ()

    @field_validator("root", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        # A snapshot of an empty tree may be written as ``null``
        return () if value is None else value

    @field_validator("root")
    @classmethod
    def _paths_are_unique(cls, value: tuple[ManifestEntry, ...]) -> tuple[ManifestEntry, ...]:
        seen: set[str] = set()
        for entry in value:
            if entry.relative_path in seen:
                msg = f"Duplicate manifest path: {entry.relative_path}"
                raise ValueError(msg)
            seen.add(entry.relative_path)
        return value

    def __iter__(self) -> Iterator[ManifestEntry]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> ManifestEntry:
        return self.root[index]


def load_manifest(path: Path) -> Manifest:
    """Read and validate a manifest file.

    Raises ManifestError if the file cannot be read or is not a valid manifest.
    """
    try:
        raw = path.read_bytes()
    except OSError as exc:
        msg = f"Error reading {path}: {exc}"
        raise ManifestError(msg) from exc
    try:
        return Manifest.model_validate_json(raw)
    except ValidationError as exc:
        msg = f"Error parsing {path}: {exc}"
        raise ManifestError(msg) from exc


def save_manifest(manifest: Manifest, path: Path) -> None:
    """Write a manifest as an indented JSON array."""
    data = manifest.model_dump_json(by_alias=True, indent=4)
    try:
        path.write_text(data + "\n", encoding="utf-8")
    except OSError as exc:
        msg = f"Error writing {path}: {exc}"
        raise ManifestError(msg) from exc
