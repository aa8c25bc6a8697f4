# src/sync/rsync_backend.py — v2
"""rsync-based synchronization backend (default).

Directory creation shells out to `mkdir -p` and mirroring to
`rsync -ahm --delete --force --stats`, both streamed through run_streaming.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shlex
from collections.abc import Sequence
from pathlib import Path

from dircache.sync.base_sync_backend import BaseSyncBackend
from dircache.sync.process import run_streaming

logger = logging.getLogger(__name__)

DEFAULT_RSYNC_FLAGS = "-ahm --delete --force --stats"


class RsyncSyncBackend(BaseSyncBackend):
    """Mirror directories with rsync."""

    def __init__(
        self,
        rsync_binary: str = "rsync",
        rsync_flags: str | Sequence[str] = DEFAULT_RSYNC_FLAGS,
        timeout_s: float | None = None,
    ) -> None:
        self._rsync = rsync_binary
        if isinstance(rsync_flags, str):
            rsync_flags = shlex.split(rsync_flags)
        self._flags = list(rsync_flags)
        self._timeout_s = timeout_s

    async def ensure_dir(self, path: Path) -> None:
        await run_streaming(["mkdir", "-p", str(path)], timeout_s=self._timeout_s)

    async def list_dir(self, path: Path) -> list[str]:
        return sorted(await asyncio.to_thread(os.listdir, path))

    async def mirror(self, source: Path, destination: Path) -> None:
        """rsync the contents of `source` (trailing slash) into `destination`."""
        await self.ensure_dir(Path(destination).parent)
        argv = [
            self._rsync,
            *self._flags,
            _as_contents(source),
            str(destination),
        ]
        logger.info("Mirroring %s -> %s", source, destination)
        await run_streaming(argv, timeout_s=self._timeout_s)


def _as_contents(path: Path | str) -> str:
    """Append the trailing slash that makes rsync copy a directory's contents."""
    text = str(path)
    return text if text.endswith("/") else text + "/"
