"""Leaf change record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LeafChange:
    """An old/new pair for a value that changed as a whole.

    Immutable: a LeafChange is a terminal changeset entry and never holds a
    nested Changeset.
    """

    old: Any
    new: Any

    def to_dict(self) -> dict[str, Any]:
        return {"old": self.old, "new": self.new}
