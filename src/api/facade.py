# src/api/facade.py — v2
"""Public API facade — restore and save entry points.

Usage:
    from dircache.api.facade import restore_cache, save_cache
    key = await restore_cache(["node_modules"], "deps-v2-abc", ["deps-v2-"])
    cache_id = await save_cache(["node_modules"], "deps-v2-abc")
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from dircache.cache.models import DownloadOptions, UploadOptions
from dircache.cache.restore import RestoreFlow
from dircache.cache.save import SaveFlow
from dircache.config.settings import Settings
from dircache.logging.context import set_operation_context
from dircache.sync.sync_factory import create_sync_backend

if TYPE_CHECKING:
    from dircache.sync.base_sync_backend import BaseSyncBackend

logger = logging.getLogger(__name__)


async def restore_cache(
    paths: Sequence[str],
    primary_key: str,
    restore_keys: Sequence[str] | None = None,
    options: DownloadOptions | None = None,
    settings: Settings | None = None,
    backend: BaseSyncBackend | None = None,
) -> str | None:
    """Restore a cache entry into paths[0].

    Args:
        paths: Paths to restore. Only the first one is synchronized.
        primary_key: Explicit key for the cache.
        restore_keys: Ordered fallback keys. When given, they replace the
            primary key as lookup candidates.
        options: Download tuning, passed through untouched.
        settings: Global settings. Loaded from the environment if None.
        backend: Sync backend. Built from settings if None.

    Returns:
        The key that matched, or None on a cache miss.

    Raises:
        ValidationError: If the keys or paths are malformed.
    """
    settings = settings or Settings()
    set_operation_context("restore", primary_key)
    flow = RestoreFlow(
        config=settings.cache_config(),
        backend=backend or create_sync_backend(settings),
        include_primary_key=settings.restore_include_primary_key,
    )
    return await flow.run(paths, primary_key, restore_keys, options)


async def save_cache(
    paths: Sequence[str],
    key: str,
    options: UploadOptions | None = None,
    settings: Settings | None = None,
    backend: BaseSyncBackend | None = None,
) -> int:
    """Save paths[0] under `key`.

    Returns:
        The cache id (a fixed sentinel unless UNIQUE_SAVE_IDS is enabled).

    Raises:
        ValidationError: If the key or paths are malformed.
    """
    settings = settings or Settings()
    set_operation_context("save", key)
    flow = SaveFlow(
        config=settings.cache_config(),
        backend=backend or create_sync_backend(settings),
        unique_ids=settings.unique_save_ids,
    )
    return await flow.run(paths, key, options)
