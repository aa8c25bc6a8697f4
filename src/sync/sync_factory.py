# src/sync/sync_factory.py — v1
"""Factory: instantiate the synchronization backend from configuration."""

from __future__ import annotations

import logging

from dircache.config.settings import Settings
from dircache.sync.base_sync_backend import BaseSyncBackend

logger = logging.getLogger(__name__)


class UnsupportedSyncBackendError(ValueError):
    """Raised when a sync backend type is not supported."""


def create_sync_backend(settings: Settings | None = None) -> BaseSyncBackend:
    """Instantiate the configured sync backend.

    Args:
        settings: Application settings (SYNC_BACKEND). Defaults to rsync.

    Returns:
        Configured BaseSyncBackend instance.

    Raises:
        UnsupportedSyncBackendError: If the backend type is not supported.
    """
    backend = "rsync" if settings is None else settings.sync_backend

    if backend == "rsync":
        from dircache.sync.rsync_backend import RsyncSyncBackend
        if settings is None:
            return RsyncSyncBackend()
        return RsyncSyncBackend(
            rsync_binary=settings.rsync_binary,
            rsync_flags=settings.rsync_flags,
            timeout_s=settings.sync_timeout_s,
        )

    if backend == "local":
        from dircache.sync.local_backend import LocalSyncBackend
        return LocalSyncBackend()

    raise UnsupportedSyncBackendError(
        f"Unsupported sync backend: {backend!r}. Available: rsync, local"
    )
