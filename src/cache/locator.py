# src/cache/locator.py — v1
"""Cache directory locator: match candidate keys against existing entries.

Two levels of precedence apply. Key order dominates: every entry is tried
against the first key before the second key is considered. Within one key,
entries are tried in listing order. The first accepted pair wins.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

from dircache.cache.models import Found, NotFound

logger = logging.getLogger(__name__)


class MatchPolicy(ABC):
    """Decides whether an entry name belongs to a key."""

    name: str = "abstract"

    @abstractmethod
    def matches(self, key: str, entry_name: str) -> bool:
        """Return True when `entry_name` satisfies `key`."""


class SubstringMatchPolicy(MatchPolicy):
    """Accept any entry whose name contains the key.

    Entry names may carry a key plus a path fragment ("{key}_{sanitized}")
    and still match the bare key. A key that happens to be a substring of an
    unrelated entry name also matches; existing caches rely on this, so it
    must not be narrowed to prefix or exact matching.
    """

    name = "substring"

    def matches(self, key: str, entry_name: str) -> bool:
        return key in entry_name


SUBSTRING_POLICY = SubstringMatchPolicy()


def locate(
    candidate_keys: Sequence[str],
    existing_entries: Iterable[str],
    policy: MatchPolicy = SUBSTRING_POLICY,
) -> Found | NotFound:
    """Return the first (entry, key) pair accepted by `policy`, else NotFound."""
    entries = list(existing_entries)
    for key in candidate_keys:
        for entry in entries:
            if policy.matches(key, entry):
                logger.debug(
                    "Matched entry %s with key %s (policy=%s)", entry, key, policy.name
                )
                return Found(entry=entry, key=key)
    return NotFound()
