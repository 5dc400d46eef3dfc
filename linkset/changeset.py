"""Recursive changeset between two keyed collections.

A Changeset maps every changed key to either a LeafChange (the value was
replaced as a whole) or a nested Changeset (a same-shaped collection or a
comparable object changed somewhere below).  Unchanged keys are absent.

Per-key decision table, evaluated in the new collection's key order:

    categories differ              -> LeafChange
    both objects, incomparable     -> LeafChange
    both objects, comparable       -> nested Changeset if non-empty
    both collections, keys differ  -> LeafChange
    both collections, same keys    -> nested Changeset if non-empty
    anything else                  -> LeafChange unless strictly equal

The result is fully computed in the constructor and never mutated after.
"""

from __future__ import annotations

from collections.abc import Iterator
from types import MappingProxyType
from typing import Any, TypeAlias

from linkset.errors import ChangeNotFoundError, ImmutableChangesetError, InvalidInputError
from linkset.models.category import Category, classify, collection_keys, same_keys
from linkset.models.change import LeafChange
from linkset.observability.logging import get_logger
from linkset.snapshot import Incomparable, try_diff

_log = get_logger("changeset")

Entry: TypeAlias = "LeafChange | Changeset"


class Changeset:
    """Read-only tree of changes between an old and a new collection.

    Raises:
        TypeError: if either argument is not a keyed collection.
        InvalidInputError: if the two collections do not have the same keys
            in the same order.
    """

    __slots__ = ("_changes",)

    def __init__(self, old: Any, new: Any) -> None:
        for value in (old, new):
            if classify(value) is not Category.COLLECTION:
                raise TypeError(f"Changeset expects keyed collections, got {type(value).__name__}")
        object.__setattr__(self, "_changes", MappingProxyType(_compute(old, new)))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def has_changed(self, key: Any) -> bool:
        """Return True if *key* was recorded as changed."""
        return key in self._changes

    def get_change(self, key: Any) -> Entry:
        """Return the entry recorded for *key*.

        Raises:
            ChangeNotFoundError: the key does not exist or was not changed.
        """
        try:
            return self._changes[key]
        except KeyError:
            raise ChangeNotFoundError(key) from None

    def count(self) -> int:
        """Number of changed keys; 0 means nothing changed at or below this level."""
        return len(self._changes)

    def keys(self) -> list[Any]:
        return list(self._changes)

    def paths(self) -> Iterator[tuple[tuple[Any, ...], LeafChange]]:
        """Yield ``(path, LeafChange)`` for every leaf, depth first."""
        for key, entry in self._changes.items():
            if isinstance(entry, Changeset):
                for sub_path, leaf in entry.paths():
                    yield (key, *sub_path), leaf
            else:
                yield (key,), entry

    def to_dict(self) -> dict[Any, Any]:
        """Plain nested dict; leaves become ``{"old": ..., "new": ...}``."""
        return {key: entry.to_dict() for key, entry in self._changes.items()}

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __getitem__(self, key: Any) -> Entry:
        return self.get_change(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        raise ImmutableChangesetError("set an entry of")

    def __delitem__(self, key: Any) -> None:
        raise ImmutableChangesetError("delete an entry of")

    def __setattr__(self, name: str, value: Any) -> None:
        raise ImmutableChangesetError("set attributes on")

    def __delattr__(self, name: str) -> None:
        raise ImmutableChangesetError("delete attributes of")

    def __contains__(self, key: Any) -> bool:
        return self.has_changed(key)

    def __iter__(self) -> Iterator[tuple[Any, Entry]]:
        """Iterate ``(key, entry)`` pairs in the order changes were found."""
        return iter(self._changes.items())

    def __len__(self) -> int:
        return len(self._changes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Changeset):
            return NotImplemented
        return list(self._changes.items()) == list(other._changes.items())

    def __repr__(self) -> str:
        return f"Changeset({dict(self._changes)!r})"


def _compute(old: Any, new: Any) -> dict[Any, Entry]:
    old_keys = collection_keys(old)
    new_keys = collection_keys(new)
    if not same_keys(old_keys, new_keys):
        raise InvalidInputError(old_keys, new_keys)

    changes: dict[Any, Entry] = {}
    for key in new_keys:
        entry = _compare(key, old[key], new[key])
        if entry is not None:
            changes[key] = entry
    return changes


def _compare(key: Any, old: Any, new: Any) -> Entry | None:
    """Return the entry for one key, or None if the values are unchanged."""
    category = classify(old)
    if category is not classify(new):
        return LeafChange(old, new)

    if category is Category.OBJECT:
        outcome = try_diff(old, new)
        if isinstance(outcome, Incomparable):
            leaf = LeafChange(old, new)
            _log.debug("incomparable_objects_replaced", key=key, reason=outcome.reason, change=leaf)
            return leaf
        return outcome.changeset if outcome.changeset.count() else None

    if category is Category.COLLECTION:
        if not same_keys(collection_keys(old), collection_keys(new)):
            return LeafChange(old, new)
        nested = Changeset(old, new)
        return nested if nested.count() else None

    if old is new:
        return None
    if type(old) is not type(new) or old != new:
        return LeafChange(old, new)
    return None
