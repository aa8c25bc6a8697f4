# src/cache/layout.py — v1
"""Cache directory structure definition.

Persisted layout:

    <base>/<namespace>/                   cache root
    <base>/<namespace>/<key>/             cache entry
    <base>/<namespace>/<key>/<sanitized>/ mirrored copy of the cached path
"""

from __future__ import annotations

import re
from pathlib import Path

FILLER_CHAR = "_"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9]")


def sanitize_path(path: str) -> str:
    """Map a path to an entry-safe name, one filler per non-alphanumeric char.

    Distinct paths can collide: "a/b" and "a.b" both become "a_b".
    """
    return _UNSAFE_CHARS.sub(FILLER_CHAR, path)


def cache_root(base_dir: Path, namespace: str) -> Path:
    """Return the cache root. An empty namespace yields the shared base dir."""
    if not namespace:
        return Path(base_dir)
    return Path(base_dir) / namespace


def entry_dir(root: Path, entry_name: str) -> Path:
    return root / entry_name


def entry_payload_dir(root: Path, entry_name: str, path: str) -> Path:
    """Return the directory holding the mirrored contents of `path`."""
    return entry_dir(root, entry_name) / sanitize_path(path)
