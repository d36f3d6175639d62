"""Pydantic schemas for mtimekeeper manifests."""

from mtimekeeper.schemas.manifest import Manifest, ManifestEntry, load_manifest, save_manifest

__all__ = [
    "Manifest",
    "ManifestEntry",
    "load_manifest",
    "save_manifest",
]
