"""Customer and Order entities.

A customer owns an ordered tuple of orders for iteration purposes. Each order
refers back to its customer by id rather than holding the customer object,
so orders can also be stored and passed around independently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from query_engine.domain.value_objects import Location


@dataclass(frozen=True, slots=True)
class Order:
    """A single customer order.

    Attributes:
        order_id: Order number, unique across the dataset
        customer_id: Id of the owning customer
        order_date: Calendar date the order was placed
        total: Monetary amount of the order, never negative
    """

    order_id: int
    customer_id: str
    order_date: date
    total: Decimal

    def __post_init__(self) -> None:
        if self.total < 0:
            raise ValueError(f"Order {self.order_id} total must be non-negative, got {self.total}")


@dataclass(frozen=True, slots=True)
class Customer:
    """A customer and the orders it placed.

    ``region``, ``postal_code`` and ``phone`` may be missing in the source
    data and are kept as ``None`` rather than defaulted.
    """

    customer_id: str
    company_name: str
    city: str | None
    country: str | None
    postal_code: str | None = None
    region: str | None = None
    phone: str | None = None
    address: str | None = None
    orders: tuple[Order, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable of orders but store an immutable tuple
        if not isinstance(self.orders, tuple):
            object.__setattr__(self, "orders", tuple(self.orders))
        for order in self.orders:
            if order.customer_id != self.customer_id:
                raise ValueError(
                    f"Order {order.order_id} belongs to '{order.customer_id}', "
                    f"not '{self.customer_id}'"
                )

    @property
    def location(self) -> Location:
        return Location(self.city, self.country)

    @property
    def has_orders(self) -> bool:
        return len(self.orders) > 0

    @property
    def order_count(self) -> int:
        return len(self.orders)
