"""Outbound ports for the query engine.

The query core depends on two collaborators it does not implement:

    DataSource  supplies immutable customers, suppliers and products, fully
                populated before any query runs. Orders are reached through
                their customers.
    ResultSink  receives each query result for presentation (console,
                table, file). The core never depends on how results are shown.

References:
    - Cockburn, "Hexagonal Architecture" (2005)
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol, Sequence

from query_engine.domain.entities import Customer, Product, Supplier

if TYPE_CHECKING:
    from query_engine.application.results import QueryResult


class DataSource(Protocol):
    """Protocol for read-only access to the dataset.

    Implementations must return the same collections on every access for the
    lifetime of a query session.
    """

    @property
    @abstractmethod
    def customers(self) -> Sequence[Customer]:
        """All customers, each carrying its orders."""
        ...

    @property
    @abstractmethod
    def suppliers(self) -> Sequence[Supplier]:
        """All suppliers."""
        ...

    @property
    @abstractmethod
    def products(self) -> Sequence[Product]:
        """All products."""
        ...


class ResultSink(Protocol):
    """Protocol for the presentation layer that consumes query results."""

    @abstractmethod
    def write(self, result: QueryResult) -> None:
        """Accept one materialized query result."""
        ...


__all__ = [
    "DataSource",
    "ResultSink",
]
