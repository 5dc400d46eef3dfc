"""linkset -- structural changesets between two snapshots of data.

Given an old and a new version of a keyed collection (mapping, list or
tuple), ``Changeset`` records which values changed and how: a LeafChange
for values replaced as a whole, a nested Changeset for same-shaped
collections and comparable objects that changed below.

Submodules:
    changeset     -- The recursive Changeset.
    snapshot      -- Object and collection snapshots used to diff objects.
    models        -- LeafChange, value categories, configuration dataclasses.
    errors        -- Exception hierarchy.
    config        -- LINKSET_* environment configuration.
    observability -- structlog setup.
"""

from linkset.changeset import Changeset
from linkset.errors import (
    ChangeNotFoundError,
    ImmutableChangesetError,
    IncomparableDataError,
    InvalidInputError,
    LinkSetError,
)
from linkset.models import Category, LeafChange, classify
from linkset.snapshot import (
    CollectionSnapshot,
    Compared,
    Incomparable,
    ObjectSnapshot,
    Snapshot,
    diff,
    snapshot,
    try_diff,
)

__version__ = "0.1.0"

__all__ = [
    "Category",
    "ChangeNotFoundError",
    "Changeset",
    "CollectionSnapshot",
    "Compared",
    "ImmutableChangesetError",
    "Incomparable",
    "IncomparableDataError",
    "InvalidInputError",
    "LeafChange",
    "LinkSetError",
    "ObjectSnapshot",
    "Snapshot",
    "classify",
    "diff",
    "snapshot",
    "try_diff",
]
