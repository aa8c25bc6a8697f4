# src/cache/models.py — v1
"""Cache domain models: CacheConfig, lookup results, transfer options."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from dircache.cache import layout

# Returned by every successful save unless unique save ids are enabled.
LEGACY_CACHE_ID = 420


class CacheConfig(BaseModel):
    """Where the cache lives: <base_dir>/<namespace>/."""

    model_config = ConfigDict(frozen=True)

    base_dir: Path = Path("/media/cache")
    namespace: str = ""

    @property
    def root(self) -> Path:
        return layout.cache_root(self.base_dir, self.namespace)


class Found(BaseModel):
    """Locator hit: the entry directory name and the key that matched it."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["found"] = "found"
    entry: str
    key: str


class NotFound(BaseModel):
    """Locator miss."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["not_found"] = "not_found"

    def __bool__(self) -> bool:
        return False


LocateResult = Annotated[Union[Found, NotFound], Field(discriminator="kind")]


class DownloadOptions(BaseModel):
    """Restore tuning knobs. Passed through and logged, never interpreted."""

    use_azure_sdk: bool | None = None
    download_concurrency: int | None = None
    timeout_in_ms: int | None = None
    compression_level: int | None = None


class UploadOptions(BaseModel):
    """Save tuning knobs. Passed through and logged, never interpreted."""

    upload_concurrency: int | None = None
    upload_chunk_size: int | None = None
    compression_level: int | None = None
