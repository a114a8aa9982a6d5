"""Sort keys for the ordering operator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


class SortDirection(Enum):
    """Direction of a single sort key."""

    ASCENDING = "asc"
    DESCENDING = "desc"

    @property
    def is_descending(self) -> bool:
        return self is SortDirection.DESCENDING


@dataclass(frozen=True)
class SortKey(Generic[T]):
    """One (selector, direction) pair of a multi-key ordering.

    Each key carries its own direction; there is no global flag.

    Example:
        >>> keys = [ascending(lambda r: r.year), descending(lambda r: r.name)]
    """

    selector: Callable[[T], Any]
    direction: SortDirection = SortDirection.ASCENDING


def ascending(selector: Callable[[T], Any]) -> SortKey[T]:
    """Build an ascending sort key."""
    return SortKey(selector, SortDirection.ASCENDING)


def descending(selector: Callable[[T], Any]) -> SortKey[T]:
    """Build a descending sort key."""
    return SortKey(selector, SortDirection.DESCENDING)
