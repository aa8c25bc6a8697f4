# src/sync/base_sync_backend.py — v2
"""Abstract synchronization backend interface.

Restore and save only ever talk to the filesystem through this interface,
so the flows can be exercised with an in-memory double.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class BaseSyncBackend(ABC):
    """Unified interface for directory synchronization backends."""

    @abstractmethod
    async def ensure_dir(self, path: Path) -> None:
        """Create `path` and its parents if absent. Idempotent."""

    @abstractmethod
    async def list_dir(self, path: Path) -> list[str]:
        """Return immediate entry names of `path`, sorted.

        Raises FileNotFoundError if `path` does not exist.
        """

    @abstractmethod
    async def mirror(self, source: Path, destination: Path) -> None:
        """Make `destination` hold exactly the contents of `source`.

        Files present only in `destination` are removed. Subdirectories of
        `source` that hold no files are pruned rather than copied (rsync
        `-m` semantics), so empty directories do not survive a save and
        restore on any backend. Not atomic: a failure part-way leaves
        `destination` partially mirrored.
        """
