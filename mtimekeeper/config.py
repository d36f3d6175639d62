"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MANIFEST_NAME = "file_info.json"


class Settings(BaseSettings):
    """mtimekeeper settings.

    Defaults reproduce the fixed command-line behaviour; command-line flags
    take precedence over anything set here.
    """

    model_config = SettingsConfigDict(
        env_prefix="MTIMEKEEPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Snapshot output, relative to the current working directory
    manifest_name: str = Field(default=DEFAULT_MANIFEST_NAME, min_length=1)

    # Bytes read per chunk while fingerprinting
    hash_chunk_size: int = Field(default=65536, ge=1)

    debug: bool = False
