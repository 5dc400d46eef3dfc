"""Exceptions raised by linkset."""

from __future__ import annotations

from typing import Any


class LinkSetError(Exception):
    """Base class for every linkset error."""


class InvalidInputError(LinkSetError, ValueError):
    """Raised when two collections with different key sets are compared."""

    def __init__(self, old_keys: list[Any], new_keys: list[Any]) -> None:
        super().__init__(f"Cannot compare collections with different keys: {old_keys!r} != {new_keys!r}")
        self.old_keys = old_keys
        self.new_keys = new_keys


class ChangeNotFoundError(LinkSetError, KeyError):
    """Raised when looking up a key that was not recorded as changed."""

    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Key {self.key!r} does not exist or was not changed"


class ImmutableChangesetError(LinkSetError, TypeError):
    """Raised on any attempt to alter a computed changeset."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot {operation} a changeset once it has been computed")
        self.operation = operation


class IncomparableDataError(LinkSetError):
    """Raised by snapshots that cannot be meaningfully compared."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
