"""In-memory data source holding caller-supplied collections."""

from __future__ import annotations

from typing import Iterable

from query_engine.domain.entities import Customer, Order, Product, Supplier


class InMemoryDataSource:
    """Read-only dataset backed by tuples.

    Collections are copied into tuples at construction, so later changes to
    the caller's lists cannot leak into a running query session.

    Example:
        source = InMemoryDataSource(customers=[...], suppliers=[...])
        pipeline = QueryPipeline(source)
    """

    def __init__(
        self,
        customers: Iterable[Customer] = (),
        suppliers: Iterable[Supplier] = (),
        products: Iterable[Product] = (),
    ) -> None:
        self._customers = tuple(customers)
        self._suppliers = tuple(suppliers)
        self._products = tuple(products)

        seen: set[str] = set()
        for customer in self._customers:
            if customer.customer_id in seen:
                raise ValueError(f"Duplicate customer id '{customer.customer_id}'")
            seen.add(customer.customer_id)

    @property
    def customers(self) -> tuple[Customer, ...]:
        return self._customers

    @property
    def suppliers(self) -> tuple[Supplier, ...]:
        return self._suppliers

    @property
    def products(self) -> tuple[Product, ...]:
        return self._products

    @property
    def orders(self) -> tuple[Order, ...]:
        """Every order reachable from the customers, in customer order."""
        return tuple(order for customer in self._customers for order in customer.orders)

    def __repr__(self) -> str:
        return (
            f"InMemoryDataSource(customers={len(self._customers)}, "
            f"suppliers={len(self._suppliers)}, products={len(self._products)})"
        )
