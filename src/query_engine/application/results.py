"""Result record types produced by the analytical queries.

Every query emits rows of one explicit frozen type, so a presentation layer
can rely on field names and types instead of inspecting ad-hoc objects.
Months are plain numbers 1-12; turning them into names is up to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Sequence

from query_engine.domain.entities import Product


@dataclass(frozen=True, slots=True)
class CustomerTurnover:
    """A customer and the sum of its order totals."""

    customer_id: str
    total: Decimal


@dataclass(frozen=True, slots=True)
class CustomerSupplier:
    """A customer paired with a supplier from the same city and country."""

    customer_id: str
    customer_city: str
    supplier_city: str
    customer_country: str
    supplier_country: str
    supplier_name: str


@dataclass(frozen=True, slots=True)
class LargeOrder:
    """A single order above the order total threshold."""

    customer_id: str
    company_name: str
    order_id: int
    total: Decimal


@dataclass(frozen=True, slots=True)
class CustomerStart:
    """A customer and the date of its first order."""

    customer_id: str
    company_name: str
    start_date: date

    @property
    def year(self) -> int:
        return self.start_date.year

    @property
    def month(self) -> int:
        return self.start_date.month


@dataclass(frozen=True, slots=True)
class CustomerContact:
    """Contact fields of a customer flagged as incomplete."""

    customer_id: str
    company_name: str
    postal_code: str | None
    region: str | None
    phone: str | None


@dataclass(frozen=True, slots=True)
class StockGroup:
    """Products sharing one stock level, cheapest first."""

    units_in_stock: int
    products: tuple[Product, ...]


@dataclass(frozen=True, slots=True)
class CategoryStock:
    """Products of one category, grouped by stock level."""

    category: str
    stock_groups: tuple[StockGroup, ...]


@dataclass(frozen=True, slots=True)
class PriceBandGroup:
    """Products falling into one price band."""

    label: str
    products: tuple[Product, ...]


@dataclass(frozen=True, slots=True)
class CityAverage:
    """A per-city ratio such as average order value or orders per customer."""

    city: str | None
    average: Decimal | float


@dataclass(frozen=True, slots=True)
class MonthCount:
    month: int
    total_orders: int


@dataclass(frozen=True, slots=True)
class YearCount:
    year: int
    total_orders: int


@dataclass(frozen=True, slots=True)
class YearMonthCounts:
    """Order counts for each month of one year, months ascending."""

    year: int
    months: tuple[MonthCount, ...]

    @property
    def total_orders(self) -> int:
        return sum(month.total_orders for month in self.months)


@dataclass(frozen=True, slots=True)
class QueryDefinition:
    """Registration metadata of a named query."""

    name: str
    title: str
    description: str


@dataclass(frozen=True)
class QueryResult:
    """Result of running a named query."""

    name: str
    rows: Sequence[Any]
    elapsed_seconds: float = 0.0

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)
