"""Ordering operator: stable multi-key sort with per-key directions.

Keys are applied from the least significant to the most significant, each as
its own stable sort. Python's sort stays stable with ``reverse=True``, so a
descending key still keeps tied elements in their prior relative order and
keys of any ordered type (strings, dates, Decimals) can be reversed without
negating them.

References:
    - Python Sorting HOWTO, "Sort Stability and Complex Sorts"
"""

from __future__ import annotations

from typing import Iterable, Sequence, TypeVar

from query_engine.domain.value_objects import SortKey

T = TypeVar("T")


def order_by(items: Iterable[T], keys: Sequence[SortKey[T]]) -> list[T]:
    """Sort items by an ordered list of keys.

    Args:
        items: Records to sort. Not modified.
        keys: Most significant key first. Each key has its own direction.

    Returns:
        A new list. Records tied on every key keep their input order.

    Raises:
        TypeError: If a selector yields values that cannot be compared.
    """
    result = list(items)
    for key in reversed(keys):
        result.sort(key=key.selector, reverse=key.direction.is_descending)
    return result
