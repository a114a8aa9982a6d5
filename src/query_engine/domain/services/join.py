"""Equality joins and group-joins over in-memory collections.

Both joins build a hash lookup of the right collection keyed by the right
key selector, then probe it once per left record:

    equi_join   one output per matching (left, right) pair, inner semantics
    group_join  one output per left record with all its matches, possibly none

Output order follows the left collection, then the right collection within
each match group. ``select_many`` flattens group-join output back into one
row per match, which must give the same rows as ``equi_join``.

References:
    - Graefe, "Query Evaluation Techniques for Large Databases" (1993), hash join
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Callable, Hashable, Iterable, Sequence, TypeVar

from query_engine.domain.errors import MalformedKeyError

logger = logging.getLogger(__name__)

L = TypeVar("L")
R = TypeVar("R")
T = TypeVar("T")
U = TypeVar("U")
Out = TypeVar("Out")


def _validate_key(key: Any) -> Hashable:
    """Check that a join key can be compared for equality.

    Raises:
        MalformedKeyError: If the key or any of its fields is None, or if
            the key is not hashable.
    """
    if key is None:
        raise MalformedKeyError(key, "key is None")

    if dataclasses.is_dataclass(key) and not isinstance(key, type):
        fields = [getattr(key, f.name) for f in dataclasses.fields(key)]
    elif isinstance(key, tuple):
        fields = list(key)
    else:
        fields = [key]

    if any(value is None for value in fields):
        raise MalformedKeyError(key, "composite key has a None field")

    try:
        hash(key)
    except TypeError as e:
        raise MalformedKeyError(key, "key is not hashable") from e
    return key


def _build_lookup(
    right: Iterable[R], right_key: Callable[[R], Any]
) -> dict[Hashable, list[R]]:
    """Index the right collection by key, keeping input order per key."""
    lookup: dict[Hashable, list[R]] = {}
    for record in right:
        key = _validate_key(right_key(record))
        lookup.setdefault(key, []).append(record)
    return lookup


def equi_join(
    left: Iterable[L],
    right: Iterable[R],
    left_key: Callable[[L], Any],
    right_key: Callable[[R], Any],
    combine: Callable[[L, R], Out],
) -> list[Out]:
    """Inner join on structural key equality.

    Args:
        left: Outer collection; drives output order.
        right: Inner collection.
        left_key: Key selector for left records.
        right_key: Key selector for right records.
        combine: Builds one output row from a matching pair.

    Returns:
        One row per matching pair. Left records without a match contribute
        nothing.

    Raises:
        MalformedKeyError: If a selector yields a null or unhashable key.
    """
    lookup = _build_lookup(right, right_key)
    results: list[Out] = []
    for outer in left:
        key = _validate_key(left_key(outer))
        for inner in lookup.get(key, ()):
            results.append(combine(outer, inner))

    logger.debug("equi_join produced %d rows from %d keys", len(results), len(lookup))
    return results


def group_join(
    left: Iterable[L],
    right: Iterable[R],
    left_key: Callable[[L], Any],
    right_key: Callable[[R], Any],
    combine: Callable[[L, Sequence[R]], Out],
) -> list[Out]:
    """Join each left record with the group of all matching right records.

    Unlike :func:`equi_join`, every left record produces exactly one output,
    with an empty tuple when nothing matches.

    Raises:
        MalformedKeyError: If a selector yields a null or unhashable key.
    """
    lookup = _build_lookup(right, right_key)
    results: list[Out] = []
    for outer in left:
        key = _validate_key(left_key(outer))
        results.append(combine(outer, tuple(lookup.get(key, ()))))
    return results


def select_many(
    items: Iterable[T],
    collection_selector: Callable[[T], Iterable[U]],
    result_selector: Callable[[T, U], Out] | None = None,
) -> list[Out]:
    """Flatten a nested collection into one row per inner element.

    Args:
        items: Outer records.
        collection_selector: Returns the inner collection of an outer record.
        result_selector: Builds a row from (outer, inner). When omitted the
            inner element itself is emitted.
    """
    results: list[Any] = []
    for outer in items:
        for inner in collection_selector(outer):
            if result_selector is None:
                results.append(inner)
            else:
                results.append(result_selector(outer, inner))
    return results
