"""Snapshots of comparable state.

A snapshot captures the state of a single value as a key -> value mapping
in canonical order, and can diff itself against another snapshot of the
same shape.  Diffing snapshots that cannot be meaningfully compared raises
IncomparableDataError; ``try_diff`` turns that failure into a result value.

Exports:
    Snapshot           -- ABC shared by every snapshot kind.
    ObjectSnapshot     -- Attribute state of an object (``__dict__`` and ``__slots__``).
    CollectionSnapshot -- Entries of a mapping, list or tuple.
    snapshot           -- Factory choosing the snapshot kind from the value category.
    try_diff           -- Diff two values, returning Compared or Incomparable.
    diff               -- Diff two values, raising IncomparableDataError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from linkset.errors import IncomparableDataError
from linkset.models.category import Category, classify, collection_keys, same_keys

if TYPE_CHECKING:
    from linkset.changeset import Changeset

_UNSET = object()
_TPFLAGS_HEAPTYPE = 1 << 9


class Snapshot(ABC):
    """Captured comparable state of a single value."""

    def __init__(self, raw: Any, data: dict[Any, Any]) -> None:
        self._raw = raw
        self._data = data

    @property
    def raw(self) -> Any:
        """The value this snapshot was taken from."""
        return self._raw

    @property
    def data(self) -> Mapping[Any, Any]:
        """Captured state, keyed in canonical order."""
        return MappingProxyType(self._data)

    @abstractmethod
    def is_comparable(self, other: Snapshot) -> bool:
        """Return True if *other* captures the same kind of state as this snapshot."""

    def diff(self, other: Snapshot) -> Changeset:
        """Compute the changeset going from this snapshot to *other*.

        Raises:
            IncomparableDataError: if the snapshots are of different kinds or
                their captured keys differ.
        """
        from linkset.changeset import Changeset

        if not self.is_comparable(other):
            raise IncomparableDataError(
                f"{type(other).__name__} of {type(other.raw).__name__} is not comparable "
                f"with {type(self).__name__} of {type(self.raw).__name__}"
            )
        return Changeset(self._aligned_with(other), other._data)

    def _aligned_with(self, other: Snapshot) -> dict[Any, Any]:
        """Return this snapshot's data keyed in the same order as *other*.

        Collections require identical keys in identical order.
        """
        if not same_keys(list(self._data), list(other._data)):
            raise _different_keys(self, other)
        return self._data

    def __repr__(self) -> str:
        return f"{type(self).__name__}({type(self._raw).__name__}, keys={list(self._data)!r})"


class ObjectSnapshot(Snapshot):
    """Attribute state of an object instance.

    Two object snapshots are comparable only when both objects have exactly
    the same class and the same attribute names, in any order.  Objects whose
    state lives in a native base (exceptions, set or datetime subclasses)
    cannot be captured.
    """

    def __init__(self, obj: Any) -> None:
        if classify(obj) is not Category.OBJECT:
            raise IncomparableDataError(f"Cannot capture object state of {type(obj).__name__}")
        native = _native_base(type(obj))
        if native is not None:
            raise IncomparableDataError(
                f"Cannot capture object state of {type(obj).__name__}: it derives from native type {native.__name__}"
            )
        super().__init__(obj, _capture_attributes(obj))

    def is_comparable(self, other: Snapshot) -> bool:
        return isinstance(other, ObjectSnapshot) and type(other.raw) is type(self.raw)

    def _aligned_with(self, other: Snapshot) -> dict[Any, Any]:
        # Attribute order only reflects assignment order.
        if set(self._data) != set(other._data):
            raise _different_keys(self, other)
        return {name: self._data[name] for name in other._data}


class CollectionSnapshot(Snapshot):
    """Entries of a keyed collection (mapping, list or tuple)."""

    def __init__(self, value: Any) -> None:
        if classify(value) is not Category.COLLECTION:
            raise IncomparableDataError(f"{type(value).__name__} is not a keyed collection")
        super().__init__(value, {key: value[key] for key in collection_keys(value)})

    def is_comparable(self, other: Snapshot) -> bool:
        return isinstance(other, CollectionSnapshot)


def _different_keys(old: Snapshot, new: Snapshot) -> IncomparableDataError:
    return IncomparableDataError(
        f"Captured state of {type(old.raw).__name__} has different keys: {list(old._data)!r} != {list(new._data)!r}"
    )


def _native_base(cls: type) -> type | None:
    """Return the first base in the MRO whose state lives outside ``__dict__``/``__slots__``.

    Builtin types (exceptions, sets, bytes, ...) and static extension types
    with their own instance layout (datetime, Decimal, ...) qualify.
    """
    for base in cls.__mro__:
        if base is object:
            continue
        if base.__module__ == "builtins":
            return base
        if not base.__flags__ & _TPFLAGS_HEAPTYPE and base.__basicsize__ > object.__basicsize__:
            return base
    return None


def _capture_attributes(obj: Any) -> dict[str, Any]:
    """Collect instance attributes from ``__dict__`` and every ``__slots__`` in the MRO.

    Unset slots are skipped.
    """
    state: dict[str, Any] = dict(vars(obj)) if hasattr(obj, "__dict__") else {}
    for cls in reversed(type(obj).__mro__):
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__"):
                continue
            if name.startswith("__") and not name.endswith("__"):
                name = f"_{cls.__name__.lstrip('_')}{name}"
            value = getattr(obj, name, _UNSET)
            if value is not _UNSET:
                state[name] = value
    return state


def snapshot(value: Any) -> Snapshot:
    """Build the snapshot matching the category of *value*.

    Raises:
        IncomparableDataError: if *value* is neither an object nor a keyed collection.
    """
    category = classify(value)
    if category is Category.OBJECT:
        return ObjectSnapshot(value)
    if category is Category.COLLECTION:
        return CollectionSnapshot(value)
    raise IncomparableDataError(f"Cannot snapshot a value of category {category}")


@dataclass(frozen=True)
class Compared:
    """Both values were comparable; *changeset* holds their differences."""

    changeset: Changeset


@dataclass(frozen=True)
class Incomparable:
    """The values could not be compared structurally."""

    reason: str


def try_diff(old: Any, new: Any) -> Compared | Incomparable:
    """Snapshot and diff two values without raising IncomparableDataError."""
    try:
        return Compared(snapshot(old).diff(snapshot(new)))
    except IncomparableDataError as exc:
        return Incomparable(exc.reason)


def diff(old: Any, new: Any) -> Changeset:
    """Snapshot and diff two values.

    Raises:
        IncomparableDataError: if the values cannot be compared structurally.
    """
    return snapshot(old).diff(snapshot(new))
