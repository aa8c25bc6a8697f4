# src/cache/validation.py — v1
"""Input validation for cache paths and keys.

Runs before any filesystem or process I/O. Keys are joined into
comma-separated lookup lists by callers, so commas are rejected outright.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

MAX_KEY_LENGTH = 512


class ValidationError(ValueError):
    """Raised when a cache key or path list is malformed."""


def validate_paths(paths: Sequence[str] | None) -> None:
    """Require at least one path."""
    if not paths:
        raise ValidationError(
            "Path Validation Error: At least one directory or file path is required"
        )


def validate_key(key: str) -> None:
    """Reject keys longer than MAX_KEY_LENGTH or containing a comma."""
    if len(key) > MAX_KEY_LENGTH:
        raise ValidationError(
            f"Key Validation Error: {key} cannot be larger than "
            f"{MAX_KEY_LENGTH} characters."
        )
    if "," in key:
        raise ValidationError(
            f"Key Validation Error: {key} cannot contain commas."
        )


def validate_keys(keys: Iterable[str]) -> None:
    for key in keys:
        validate_key(key)
