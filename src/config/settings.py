# src/config/settings.py — v2
"""Typed configuration loaded from the environment / .env via pydantic-settings.

Single source of truth for deployment-specific settings. This is the only
place that reads ambient variables such as GITHUB_REPOSITORY; the restore and
save flows receive an explicit CacheConfig built from it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dircache.cache.models import CacheConfig


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # === Cache location ===
    cache_base_dir: Path = Path("/media/cache")
    # Empty namespace = one cache root shared by every repository.
    cache_namespace: str = Field(
        default="",
        validation_alias=AliasChoices(
            "cache_namespace", "CACHE_NAMESPACE", "GITHUB_REPOSITORY"
        ),
    )

    # === Synchronization ===
    sync_backend: Literal["rsync", "local"] = "rsync"
    rsync_binary: str = "rsync"
    rsync_flags: str = "-ahm --delete --force --stats"
    sync_timeout_s: float | None = None

    # === Lookup / save behavior ===
    restore_include_primary_key: bool = False
    unique_save_ids: bool = False

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("sync_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("sync_timeout_s must be > 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.sync_backend == "rsync" and not self.rsync_binary.strip():
            errors.append("SYNC_BACKEND=rsync requires RSYNC_BINARY")

        if self.sync_backend == "rsync" and "--delete" not in self.rsync_flags.split():
            errors.append("RSYNC_FLAGS must include --delete to mirror entries")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    def cache_config(self) -> CacheConfig:
        """Return the explicit cache location handed to the flows."""
        return CacheConfig(
            base_dir=self.cache_base_dir,
            namespace=self.cache_namespace,
        )


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment with optional overrides.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
