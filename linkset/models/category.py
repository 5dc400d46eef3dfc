"""Value categories used to decide how two values are compared."""

from __future__ import annotations

import types
from collections.abc import Mapping
from enum import Enum, StrEnum
from typing import Any

# Attribute-bearing values that are still compared as opaque values.
_OPAQUE_TYPES = (
    type,
    Enum,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.ModuleType,
)


class Category(StrEnum):
    """Coarse runtime kind of a value."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    COLLECTION = "collection"
    OBJECT = "object"
    OTHER = "other"


def classify(value: Any) -> Category:
    """Return the category of *value*.

    ``bool`` is tested before ``int`` since it subclasses it.  Mappings and
    lists/tuples are keyed collections; instances carrying attribute state
    are objects; everything else is compared opaquely.
    """
    if value is None:
        return Category.NULL
    if isinstance(value, bool):
        return Category.BOOLEAN
    if isinstance(value, int):
        return Category.INTEGER
    if isinstance(value, float):
        return Category.FLOAT
    if isinstance(value, str):
        return Category.STRING
    if isinstance(value, (Mapping, list, tuple)):
        return Category.COLLECTION
    if isinstance(value, _OPAQUE_TYPES):
        return Category.OTHER
    if hasattr(value, "__dict__") or hasattr(type(value), "__slots__"):
        return Category.OBJECT
    return Category.OTHER


def collection_keys(value: Mapping[Any, Any] | list[Any] | tuple[Any, ...]) -> list[Any]:
    """Return the canonical key order of a keyed collection."""
    if isinstance(value, Mapping):
        return list(value.keys())
    return list(range(len(value)))


def same_keys(old: list[Any], new: list[Any]) -> bool:
    """True when both key sequences hold the same keys in the same order.

    Keys are compared strictly: ``1`` and ``True`` or ``1`` and ``1.0`` differ.
    """
    if len(old) != len(new):
        return False
    return all(type(a) is type(b) and a == b for a, b in zip(old, new, strict=True))
