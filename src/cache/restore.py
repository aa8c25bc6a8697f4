# src/cache/restore.py — v2
"""Restore flow: find the best cache entry for a key list and mirror it back.

Steps run strictly in order: validate -> ensure root -> list -> locate ->
mirror. A miss returns None; every I/O failure propagates unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from dircache.cache.layout import entry_payload_dir
from dircache.cache.locator import SUBSTRING_POLICY, MatchPolicy, locate
from dircache.cache.models import CacheConfig, DownloadOptions, NotFound
from dircache.cache.validation import validate_key, validate_keys, validate_paths
from dircache.sync.base_sync_backend import BaseSyncBackend

logger = logging.getLogger(__name__)


class RestoreFlow:
    """Restore a cached directory into the first requested path."""

    def __init__(
        self,
        config: CacheConfig,
        backend: BaseSyncBackend,
        policy: MatchPolicy = SUBSTRING_POLICY,
        include_primary_key: bool = False,
    ) -> None:
        self._config = config
        self._backend = backend
        self._policy = policy
        self._include_primary_key = include_primary_key

    def candidate_keys(
        self, primary_key: str, restore_keys: Sequence[str] | None
    ) -> list[str]:
        """Keys to try, in precedence order.

        Without restore keys the primary key is the only candidate. With
        restore keys, the primary key is tried first only when
        include_primary_key is set.
        """
        if restore_keys is None:
            return [primary_key]
        keys = list(restore_keys)
        if self._include_primary_key:
            keys = [primary_key] + [k for k in keys if k != primary_key]
        return keys

    async def run(
        self,
        paths: Sequence[str],
        primary_key: str,
        restore_keys: Sequence[str] | None = None,
        options: DownloadOptions | None = None,
    ) -> str | None:
        """Restore the cache and return the matched key, or None on a miss.

        Raises:
            ValidationError: If the key, restore keys or paths are malformed.
        """
        validate_key(primary_key)
        validate_keys(restore_keys or [])
        validate_paths(paths)

        logger.info(
            "Restoring cache",
            extra={"data": {
                "paths": list(paths),
                "primary_key": primary_key,
                "restore_keys": restore_keys,
                "options": options.model_dump(exclude_none=True) if options else {},
            }},
        )

        root = self._config.root
        await self._backend.ensure_dir(root)
        entries = await self._backend.list_dir(root)
        logger.debug(
            "Listed cache root",
            extra={"data": {"root": str(root), "entries": len(entries)}},
        )

        keys = self.candidate_keys(primary_key, restore_keys)
        result = locate(keys, entries, self._policy)
        if isinstance(result, NotFound):
            logger.info("Cache not found for keys: %s", ", ".join(keys))
            return None

        source = entry_payload_dir(root, result.entry, paths[0])
        await self._backend.mirror(source, Path(paths[0]))
        logger.info("Cache restored from key: %s (entry %s)", result.key, result.entry)
        return result.key
