"""Property-based tests for Changeset.

Uses hypothesis to generate nested JSON-like documents and validates that:
 1. Comparing a document with itself (or a deep copy) records nothing
 2. Differing key sets always raise InvalidInputError
 3. Recorded keys are a subset of the input keys, in new-key order
 4. Scalars of the same type are changed exactly when they are unequal
 5. Every leaf reachable through paths() holds the values found at that path
"""

from __future__ import annotations

import copy
from typing import Any

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from linkset.changeset import Changeset
from linkset.errors import InvalidInputError
from linkset.models.change import LeafChange

# ---------------------------------------------------------------------------
# Hypothesis strategies
# ---------------------------------------------------------------------------

_scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.floats(allow_nan=False),
    st.text(max_size=10),
)

_keys = st.text(max_size=5)

_values = st.recursive(
    _scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(_keys, children, max_size=4),
    ),
    max_leaves=20,
)

_documents = st.dictionaries(_keys, _values, max_size=6)


def _lookup(document: Any, path: tuple[Any, ...]) -> Any:
    for key in path:
        document = document[key]
    return document


@st.composite
def _document_pairs(draw: st.DrawFn) -> tuple[dict[str, Any], dict[str, Any]]:
    """Two documents sharing the same top-level keys."""
    old = draw(_documents)
    new = {key: draw(_values) for key in old}
    return old, new


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestNoChangeIdempotence:
    @given(document=_documents)
    def test_same_document_unchanged(self, document: dict[str, Any]) -> None:
        cs = Changeset(document, document)
        assert cs.count() == 0
        for key in document:
            assert cs.has_changed(key) is False

    @given(document=_documents)
    def test_deep_copy_unchanged(self, document: dict[str, Any]) -> None:
        assert Changeset(document, copy.deepcopy(document)).count() == 0

    @given(document=st.dictionaries(_keys, st.floats(allow_nan=True), max_size=4))
    def test_same_document_with_nan_unchanged(self, document: dict[str, float]) -> None:
        assert Changeset(document, document).count() == 0


class TestKeyValidation:
    @given(old=st.dictionaries(_keys, st.integers()), new=st.dictionaries(_keys, st.integers()))
    def test_differing_keys_rejected(self, old: dict[str, int], new: dict[str, int]) -> None:
        assume(list(old) != list(new))
        with pytest.raises(InvalidInputError):
            Changeset(old, new)

    @given(document=st.dictionaries(_keys, st.integers(), min_size=2))
    def test_reordered_keys_rejected(self, document: dict[str, int]) -> None:
        reordered = dict(reversed(list(document.items())))
        with pytest.raises(InvalidInputError):
            Changeset(document, reordered)


class TestRecordedKeys:
    @given(pair=_document_pairs())
    def test_keys_subset_in_new_order(self, pair: tuple[dict[str, Any], dict[str, Any]]) -> None:
        old, new = pair
        cs = Changeset(old, new)
        expected_order = [key for key in new if cs.has_changed(key)]
        assert cs.keys() == expected_order
        assert [key for key, _ in cs] == expected_order
        assert cs.count() == len(expected_order)

    @given(pair=_document_pairs())
    def test_leaves_match_inputs(self, pair: tuple[dict[str, Any], dict[str, Any]]) -> None:
        old, new = pair
        cs = Changeset(old, new)
        for path, leaf in cs.paths():
            assert isinstance(leaf, LeafChange)
            assert leaf.old is _lookup(old, path)
            assert leaf.new is _lookup(new, path)

    @given(pair=_document_pairs())
    def test_nested_changesets_never_empty(self, pair: tuple[dict[str, Any], dict[str, Any]]) -> None:
        old, new = pair
        pending = [Changeset(old, new)]
        while pending:
            for _, entry in pending.pop():
                if isinstance(entry, Changeset):
                    assert entry.count() > 0
                    pending.append(entry)


class TestScalarStrictness:
    @given(old=st.integers(), new=st.integers())
    def test_integers(self, old: int, new: int) -> None:
        assert Changeset({"k": old}, {"k": new}).has_changed("k") is (old != new)

    @given(old=st.text(), new=st.text())
    def test_strings(self, old: str, new: str) -> None:
        assert Changeset({"k": old}, {"k": new}).has_changed("k") is (old != new)

    @given(value=st.integers())
    def test_integer_vs_float_always_changed(self, value: int) -> None:
        assume(abs(value) < 2**53)
        assert Changeset({"k": value}, {"k": float(value)}).get_change("k") == LeafChange(value, float(value))
