# src/cache/save.py — v2
"""Save flow: mirror the first path into the entry named after the key."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from pathlib import Path

from dircache.cache.layout import entry_dir, entry_payload_dir
from dircache.cache.models import LEGACY_CACHE_ID, CacheConfig, UploadOptions
from dircache.cache.validation import validate_key, validate_paths
from dircache.sync.base_sync_backend import BaseSyncBackend

logger = logging.getLogger(__name__)


def generate_cache_id() -> int:
    """Return a random positive 63-bit cache id."""
    return (uuid.uuid4().int >> 65) or 1


class SaveFlow:
    """Save the first requested path under a cache key.

    Existing entries under the same key are never checked: the destructive
    mirror overwrites them, so the last save wins.
    """

    def __init__(
        self,
        config: CacheConfig,
        backend: BaseSyncBackend,
        unique_ids: bool = False,
    ) -> None:
        self._config = config
        self._backend = backend
        self._unique_ids = unique_ids

    async def run(
        self,
        paths: Sequence[str],
        key: str,
        options: UploadOptions | None = None,
    ) -> int:
        """Save the cache and return its id.

        Returns LEGACY_CACHE_ID unless unique ids are enabled.

        Raises:
            ValidationError: If the key or paths are malformed.
        """
        validate_paths(paths)
        validate_key(key)

        logger.info(
            "Saving cache",
            extra={"data": {
                "paths": list(paths),
                "key": key,
                "options": options.model_dump(exclude_none=True) if options else {},
            }},
        )

        root = self._config.root
        await self._backend.ensure_dir(entry_dir(root, key))
        target = entry_payload_dir(root, key, paths[0])
        await self._backend.mirror(Path(paths[0]), target)

        cache_id = generate_cache_id() if self._unique_ids else LEGACY_CACHE_ID
        logger.info("Cache saved with key: %s (id %d)", key, cache_id)
        return cache_id
