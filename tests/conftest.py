# tests/conftest.py — v2
"""Shared test fixtures for unit and integration tests.

Provides an in-memory sync backend, a clean environment and a reset of the
dircache logger between tests.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dircache.cache.models import CacheConfig
from dircache.logging.context import clear_context
from dircache.sync.base_sync_backend import BaseSyncBackend


class FakeSyncBackend(BaseSyncBackend):
    """Records every call; list_dir returns a fixed listing."""

    def __init__(
        self,
        entries: list[str] | None = None,
        list_error: Exception | None = None,
        mirror_error: Exception | None = None,
    ) -> None:
        self.entries = list(entries or [])
        self.list_error = list_error
        self.mirror_error = mirror_error
        self.calls: list[tuple] = []

    async def ensure_dir(self, path: Path) -> None:
        self.calls.append(("ensure_dir", Path(path)))

    async def list_dir(self, path: Path) -> list[str]:
        self.calls.append(("list_dir", Path(path)))
        if self.list_error is not None:
            raise self.list_error
        return list(self.entries)

    async def mirror(self, source: Path, destination: Path) -> None:
        self.calls.append(("mirror", Path(source), Path(destination)))
        if self.mirror_error is not None:
            raise self.mirror_error

    @property
    def mirror_calls(self) -> list[tuple]:
        return [c for c in self.calls if c[0] == "mirror"]


# === FIXTURES ===


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    """Keep CI variables of the machine running the tests out of Settings."""
    for name in (
        "GITHUB_REPOSITORY",
        "CACHE_NAMESPACE",
        "CACHE_BASE_DIR",
        "SYNC_BACKEND",
        "UNIQUE_SAVE_IDS",
        "RESTORE_INCLUDE_PRIMARY_KEY",
        "LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    clear_context()
    root = logging.getLogger("dircache")
    root.handlers.clear()
    root.setLevel(logging.NOTSET)


@pytest.fixture
def cache_config() -> CacheConfig:
    return CacheConfig(base_dir=Path("/media/cache"), namespace="acme/widgets")


@pytest.fixture
def fake_backend() -> FakeSyncBackend:
    return FakeSyncBackend()


@pytest.fixture
def snapshot():
    """Map every file under a directory (relative path) to its bytes."""

    def _snapshot(root: Path) -> dict[str, bytes]:
        return {
            str(p.relative_to(root)): p.read_bytes()
            for p in sorted(root.rglob("*"))
            if p.is_file()
        }

    return _snapshot


@pytest.fixture
def make_tree():
    """Write a {relative_path: text} mapping under a directory."""

    def _make(root: Path, files: dict[str, str]) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        for rel, text in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        return root

    return _make
