# src/__init__.py — v1
"""dircache — key-addressed directory cache for CI pipelines.

Usage:
    from dircache import restore_cache, save_cache
    matched = await restore_cache(["node_modules"], "deps-abc", ["deps-"])
    cache_id = await save_cache(["node_modules"], "deps-abc")
"""

from dircache.api.facade import restore_cache, save_cache
from dircache.cache.validation import ValidationError
from dircache.version import __version__

__all__ = ["ValidationError", "__version__", "restore_cache", "save_cache"]
