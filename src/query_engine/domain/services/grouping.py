"""Grouping and aggregation over in-memory collections.

Grouping partitions a collection by an arbitrary key selector. Keys keep the
order in which they were first seen, every input record lands in exactly one
group, and no group is ever empty. A finalizer then turns each (key, group)
pair into a result record, usually by applying the aggregate primitives
below. Grouping can be applied a second time inside each group to build a
two-level structure.

Aggregates:
    - sum_of: arithmetic sum of a numeric field (0 for an empty group)
    - count: number of elements
    - min_of / max_of: extreme value of an ordered field; empty input raises
    - average: sum(numerator) / sum(denominator); zero denominator raises

Exceptions raised by selectors and finalizers propagate unchanged.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable, Hashable, Iterable, Sequence, TypeVar

from query_engine.domain.errors import DivisionByZeroError, EmptyGroupError

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)
K2 = TypeVar("K2", bound=Hashable)
R = TypeVar("R")

Number = int | float | Decimal


def group_by(items: Iterable[T], key_selector: Callable[[T], K]) -> dict[K, list[T]]:
    """Partition items by key, preserving first-seen key order.

    Args:
        items: Records to group.
        key_selector: Computes the group key of a record. Composite and
            derived keys are allowed as long as they are hashable.

    Returns:
        Mapping of key to the records that share it, in input order.
    """
    groups: dict[K, list[T]] = {}
    for item in items:
        groups.setdefault(key_selector(item), []).append(item)
    return groups


def aggregate_groups(
    groups: dict[K, list[T]], finalizer: Callable[[K, list[T]], R]
) -> list[R]:
    """Apply a finalizer to every group in key order."""
    return [finalizer(key, members) for key, members in groups.items()]


def nested_group_by(
    items: Iterable[T],
    outer_key: Callable[[T], K],
    inner_key: Callable[[T], K2],
) -> dict[K, dict[K2, list[T]]]:
    """Group by an outer key, then group each outer group by an inner key."""
    return {
        key: group_by(members, inner_key)
        for key, members in group_by(items, outer_key).items()
    }


def count(group: Sequence[Any]) -> int:
    return len(group)


def sum_of(group: Iterable[T], selector: Callable[[T], Number]) -> Number:
    """Sum a numeric field over the group. An empty group sums to 0."""
    total: Number = 0
    for item in group:
        total = total + selector(item)
    return total


def min_of(group: Iterable[T], selector: Callable[[T], Any]) -> Any:
    """Smallest selected value.

    Raises:
        EmptyGroupError: If the group has no elements.
    """
    values = [selector(item) for item in group]
    if not values:
        raise EmptyGroupError("min")
    return min(values)


def max_of(group: Iterable[T], selector: Callable[[T], Any]) -> Any:
    """Largest selected value.

    Raises:
        EmptyGroupError: If the group has no elements.
    """
    values = [selector(item) for item in group]
    if not values:
        raise EmptyGroupError("max")
    return max(values)


def average(
    group: Sequence[T],
    numerator: Callable[[T], Number],
    denominator: Callable[[T], Number],
) -> Decimal | float:
    """Ratio of two sums over the same group.

    Members contributing 0 to both sums are allowed; only a zero total
    denominator is an error. Decimal inputs produce a Decimal result.

    Raises:
        DivisionByZeroError: If the denominator sums to zero.
    """
    top = sum_of(group, numerator)
    bottom = sum_of(group, denominator)
    if bottom == 0:
        raise DivisionByZeroError(top)
    if isinstance(top, Decimal) or isinstance(bottom, Decimal):
        return Decimal(top) / Decimal(bottom)
    return top / bottom
