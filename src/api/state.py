# src/api/state.py — v1
"""Restore -> save hand-off between separate CLI invocations.

The restore step records which key it asked for and which key matched. The
save step reads it back and skips saving when the primary key already hit.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class RestoreState(BaseModel):
    """What a restore step observed."""

    primary_key: str
    matched_key: str | None = None

    @property
    def cache_hit(self) -> bool:
        """True only for an exact primary-key hit, not a fallback match."""
        return self.matched_key is not None and self.matched_key == self.primary_key


def write_state(path: Path, state: RestoreState) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(state.model_dump_json(indent=2), encoding="utf-8")


def read_state(path: Path) -> RestoreState | None:
    """Load a previously written state; None if the file is absent."""
    path = Path(path)
    if not path.exists():
        return None
    data = json.loads(path.read_text(encoding="utf-8"))
    return RestoreState(**data)
