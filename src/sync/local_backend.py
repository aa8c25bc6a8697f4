# src/sync/local_backend.py — v2
"""In-process synchronization backend built on shutil.

Same contract as the rsync backend without an external binary. Blocking
filesystem work runs in a worker thread to keep the event loop free.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
from pathlib import Path

from dircache.sync.base_sync_backend import BaseSyncBackend

logger = logging.getLogger(__name__)


class LocalSyncBackend(BaseSyncBackend):
    """Mirror directories on the local filesystem."""

    async def ensure_dir(self, path: Path) -> None:
        await asyncio.to_thread(Path(path).mkdir, parents=True, exist_ok=True)

    async def list_dir(self, path: Path) -> list[str]:
        return sorted(await asyncio.to_thread(os.listdir, path))

    async def mirror(self, source: Path, destination: Path) -> None:
        logger.info("Mirroring %s -> %s", source, destination)
        copied = await asyncio.to_thread(_mirror_tree, Path(source), Path(destination))
        logger.info("Mirrored %d file(s) into %s", copied, destination)


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def _holds_files(path: Path) -> bool:
    """True if any file or symlink sits somewhere below `path`."""
    for root, dirs, files in os.walk(path):
        if files or any(os.path.islink(os.path.join(root, d)) for d in dirs):
            return True
    return False


def _mirror_tree(source: Path, destination: Path) -> int:
    """Recursively mirror `source` into `destination`. Returns files copied.

    Subdirectories holding no files are pruned, matching `rsync -m`.
    """
    if not source.is_dir():
        raise FileNotFoundError(f"Mirror source is not a directory: {source}")

    if destination.is_symlink() or (destination.exists() and not destination.is_dir()):
        destination.unlink()
    destination.mkdir(parents=True, exist_ok=True)

    source_items = {
        item.name: item
        for item in source.iterdir()
        if item.is_symlink() or not item.is_dir() or _holds_files(item)
    }
    for existing in list(destination.iterdir()):
        if existing.name not in source_items:
            _remove(existing)

    copied = 0
    for name, item in sorted(source_items.items()):
        target = destination / name
        if item.is_symlink():
            if target.is_symlink() or target.exists():
                _remove(target)
            target.symlink_to(os.readlink(item))
        elif item.is_dir():
            if target.is_symlink() or (target.exists() and not target.is_dir()):
                _remove(target)
            copied += _mirror_tree(item, target)
        else:
            if target.is_symlink() or target.is_dir():
                _remove(target)
            shutil.copy2(item, target)
            copied += 1
    return copied
