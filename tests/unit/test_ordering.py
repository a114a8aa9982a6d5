"""Unit tests for the ordering operator."""

from __future__ import annotations

import itertools
from datetime import date

import pytest

from query_engine.domain.services import order_by
from query_engine.domain.value_objects import SortDirection, SortKey, ascending, descending


@pytest.mark.unit
class TestOrderBy:
    """Tests for order_by."""

    def test_single_ascending_key(self) -> None:
        assert order_by([3, 1, 2], [ascending(lambda x: x)]) == [1, 2, 3]

    def test_single_descending_key(self) -> None:
        assert order_by([3, 1, 2], [descending(lambda x: x)]) == [3, 2, 1]

    def test_no_keys_keeps_input_order(self) -> None:
        assert order_by([3, 1, 2], []) == [3, 1, 2]

    def test_input_is_not_modified(self) -> None:
        items = [3, 1, 2]
        order_by(items, [ascending(lambda x: x)])
        assert items == [3, 1, 2]

    def test_mixed_directions(self) -> None:
        """Year ascending, month ascending, name descending."""
        rows = [
            (1997, 8, "Bravo"),
            (1996, 9, "Alpha"),
            (1997, 8, "Delta"),
            (1997, 3, "Charlie"),
            (1996, 9, "Echo"),
        ]
        result = order_by(
            rows,
            [
                ascending(lambda r: r[0]),
                ascending(lambda r: r[1]),
                descending(lambda r: r[2]),
            ],
        )
        assert result == [
            (1996, 9, "Echo"),
            (1996, 9, "Alpha"),
            (1997, 3, "Charlie"),
            (1997, 8, "Delta"),
            (1997, 8, "Bravo"),
        ]

    def test_descending_works_on_non_numeric_keys(self) -> None:
        days = [date(1997, 1, 1), date(1998, 1, 1), date(1996, 1, 1)]
        assert order_by(days, [descending(lambda d: d)]) == [
            date(1998, 1, 1),
            date(1997, 1, 1),
            date(1996, 1, 1),
        ]

    def test_directions_are_independent_per_key(self) -> None:
        rows = [(1, "a"), (2, "b"), (1, "b"), (2, "a")]
        result = order_by(rows, [descending(lambda r: r[0]), ascending(lambda r: r[1])])
        assert result == [(2, "a"), (2, "b"), (1, "a"), (1, "b")]

    def test_sort_key_defaults_to_ascending(self) -> None:
        key = SortKey(lambda x: x)
        assert key.direction is SortDirection.ASCENDING
        assert order_by([2, 1], [key]) == [1, 2]

    def test_incomparable_values_raise(self) -> None:
        with pytest.raises(TypeError):
            order_by([1, "a"], [ascending(lambda x: x)])

    @pytest.mark.property
    @pytest.mark.parametrize("direction", [ascending, descending])
    def test_ties_keep_input_order(self, direction) -> None:
        """Records tied on every key stay in their input order, in either direction."""
        rows = [("x", 1), ("y", 0), ("x", 2), ("y", 1), ("x", 3)]
        for permutation in itertools.permutations(rows):
            result = order_by(permutation, [direction(lambda r: r[0])])
            for group_key in ("x", "y"):
                expected = [r for r in permutation if r[0] == group_key]
                assert [r for r in result if r[0] == group_key] == expected
