"""Unit tests for the join operator."""

from __future__ import annotations

from collections import Counter

import pytest

from query_engine.domain.entities import Supplier
from query_engine.domain.errors import MalformedKeyError
from query_engine.domain.services import equi_join, group_join, select_many
from query_engine.domain.value_objects import Location


def _pair(left, right):
    return (left, right)


@pytest.mark.unit
class TestEquiJoin:
    """Tests for equi_join."""

    def test_matches_on_equal_keys(self) -> None:
        """Only pairs with equal keys are combined."""
        rows = equi_join([1, 2, 3], [2, 3, 4], lambda x: x, lambda y: y, _pair)
        assert rows == [(2, 2), (3, 3)]

    def test_output_follows_left_then_right_order(self) -> None:
        """Left order drives output; right order is kept within a match group."""
        left = [("b", 1), ("a", 2)]
        right = [("a", "x"), ("b", "y"), ("a", "z")]
        rows = equi_join(left, right, lambda l: l[0], lambda r: r[0], lambda l, r: (l[1], r[1]))
        assert rows == [(1, "y"), (2, "x"), (2, "z")]

    def test_unmatched_left_records_are_dropped(self) -> None:
        rows = equi_join(["a", "b"], ["b"], str, str, _pair)
        assert rows == [("b", "b")]

    @pytest.mark.parametrize("left, right", [([], [1, 2]), ([1, 2], []), ([], [])])
    def test_empty_input_yields_empty_output(self, left, right) -> None:
        assert equi_join(left, right, lambda x: x, lambda y: y, _pair) == []

    def test_composite_key_requires_every_field_equal(self) -> None:
        """City and country must both match."""
        customers = [("C1", Location("Lyon", "France"))]
        suppliers = [
            Supplier(1, "Same city, other country", "Lyon", "Germany"),
            Supplier(2, "Exact match", "Lyon", "France"),
        ]
        rows = equi_join(
            customers,
            suppliers,
            lambda c: c[1],
            lambda s: s.location,
            lambda c, s: s.supplier_name,
        )
        assert rows == ["Exact match"]

    def test_key_comparison_is_case_sensitive(self) -> None:
        rows = equi_join(
            [Location("Lyon", "France")],
            [Location("lyon", "France")],
            lambda l: l,
            lambda r: r,
            _pair,
        )
        assert rows == []

    def test_none_key_raises(self) -> None:
        with pytest.raises(MalformedKeyError):
            equi_join([1], [1], lambda x: None, lambda y: y, _pair)

    def test_composite_key_with_none_field_raises(self) -> None:
        """A missing city cannot be compared."""
        suppliers = [Supplier(1, "Nowhere", None, "France")]
        with pytest.raises(MalformedKeyError) as excinfo:
            equi_join(
                [Location("Lyon", "France")],
                suppliers,
                lambda l: l,
                lambda s: s.location,
                _pair,
            )
        assert "None field" in str(excinfo.value)

    def test_tuple_key_with_none_field_raises(self) -> None:
        with pytest.raises(MalformedKeyError):
            equi_join([1], [1], lambda x: (x, None), lambda y: (y, 1), _pair)

    def test_unhashable_key_raises(self) -> None:
        with pytest.raises(MalformedKeyError) as excinfo:
            equi_join([1], [1], lambda x: [x], lambda y: [y], _pair)
        assert "hashable" in str(excinfo.value)


@pytest.mark.unit
class TestGroupJoin:
    """Tests for group_join."""

    def test_one_output_per_left_record(self) -> None:
        rows = group_join(
            ["a", "b", "c"],
            ["a", "a", "c"],
            str,
            str,
            lambda left, group: (left, list(group)),
        )
        assert rows == [("a", ["a", "a"]), ("b", []), ("c", ["c"])]

    def test_empty_right_gives_empty_groups(self) -> None:
        rows = group_join([1, 2], [], lambda x: x, lambda y: y, lambda l, g: (l, g))
        assert rows == [(1, ()), (2, ())]

    def test_empty_left_gives_no_output(self) -> None:
        assert group_join([], [1], lambda x: x, lambda y: y, lambda l, g: (l, g)) == []

    def test_group_is_immutable_tuple(self) -> None:
        rows = group_join([1], [1, 1], lambda x: x, lambda y: y, lambda l, g: g)
        assert isinstance(rows[0], tuple)


@pytest.mark.unit
class TestSelectMany:
    """Tests for select_many."""

    def test_flattens_with_result_selector(self) -> None:
        rows = select_many(
            [("a", [1, 2]), ("b", []), ("c", [3])],
            lambda item: item[1],
            lambda item, inner: f"{item[0]}{inner}",
        )
        assert rows == ["a1", "a2", "c3"]

    def test_flattens_without_result_selector(self) -> None:
        assert select_many([[1, 2], [3]], lambda item: item) == [1, 2, 3]


@pytest.mark.unit
@pytest.mark.property
class TestJoinDuality:
    """Flat join and group-join followed by flatten give the same rows."""

    @pytest.mark.parametrize(
        "left, right",
        [
            ([1, 2, 2, 3], [2, 3, 3, 4]),
            ([1, 1, 1], [1, 1]),
            ([5, 6], [7, 8]),
            ([], [1]),
            ([1], []),
            (list(range(10)), [x % 4 for x in range(12)]),
        ],
    )
    def test_identical_multisets(self, left, right) -> None:
        keyed_left = [(i, value) for i, value in enumerate(left)]
        keyed_right = [(j, value) for j, value in enumerate(right)]

        flat = equi_join(
            keyed_left, keyed_right, lambda l: l[1], lambda r: r[1], lambda l, r: (l[0], r[0])
        )
        grouped = group_join(
            keyed_left, keyed_right, lambda l: l[1], lambda r: r[1], lambda l, g: (l, g)
        )
        flattened = select_many(grouped, lambda pair: pair[1], lambda pair, r: (pair[0][0], r[0]))

        assert Counter(flat) == Counter(flattened)
        # Both paths also agree on order
        assert flat == flattened
