"""Query pipeline composing the relational operators into named queries.

Each query is a pure function of the injected data source and the query
settings: it reads the immutable collections, composes joins, groupings,
bucketing and ordering, and returns a fully materialized list of typed rows.

Registered queries:
    q1              customers whose turnover exceeds a threshold
    q2_join         customers with suppliers in the same city (flat join)
    q2_group_join   the same rows via group-join then flatten
    q3              orders whose total exceeds a threshold
    q4              first order date of every customer with orders
    q5              q4 ordered by year, month, then company name descending
    q6              customers with incomplete contact data
    q7              products by category, then stock level, cheapest first
    q8              products grouped into price bands
    q9a             average order value per city
    q9b             average order count per customer per city
    q10a/b/c        order counts by month, by year, and by year then month

Usage:
    source = InMemoryDataSource(customers=..., suppliers=..., products=...)
    pipeline = QueryPipeline(source)

    rows = pipeline.customers_over_turnover()
    result = pipeline.run("q5")
    pipeline.run_all(sink)
"""

from __future__ import annotations

import re
import time
from typing import Any, Callable

from query_engine.application.results import (
    CategoryStock,
    CityAverage,
    CustomerContact,
    CustomerStart,
    CustomerSupplier,
    CustomerTurnover,
    LargeOrder,
    MonthCount,
    PriceBandGroup,
    QueryDefinition,
    QueryResult,
    StockGroup,
    YearCount,
    YearMonthCounts,
)
from query_engine.domain.entities import Customer, Order, Supplier
from query_engine.domain.errors import UnknownQueryError
from query_engine.domain.services import (
    aggregate_groups,
    average,
    classify,
    count,
    equi_join,
    group_by,
    group_join,
    min_of,
    nested_group_by,
    order_by,
    select_many,
    sum_of,
)
from query_engine.domain.value_objects import BucketScheme, ascending, descending
from query_engine.infrastructure.config import QuerySettings
from query_engine.infrastructure.logging import get_logger, query_context
from query_engine.infrastructure.metrics import MetricsRegistry, get_metrics
from query_engine.infrastructure.tracing import query_span, record_rows
from query_engine.ports.outbound import DataSource, ResultSink

logger = get_logger(__name__)

# name -> (definition, method name), in registration order
_REGISTRY: dict[str, tuple[QueryDefinition, str]] = {}


def registered_query(name: str, title: str, description: str) -> Callable:
    """Register a pipeline method as a named query."""

    def decorator(func: Callable) -> Callable:
        if name in _REGISTRY:
            raise ValueError(f"Query '{name}' registered twice")
        _REGISTRY[name] = (QueryDefinition(name, title, description), func.__name__)
        return func

    return decorator


def _customer_supplier(customer: Customer, supplier: Supplier) -> CustomerSupplier:
    return CustomerSupplier(
        customer_id=customer.customer_id,
        customer_city=customer.city,
        supplier_city=supplier.city,
        customer_country=customer.country,
        supplier_country=supplier.country,
        supplier_name=supplier.supplier_name,
    )


def _order_total(order: Order) -> Any:
    return order.total


def _turnover(customer: Customer) -> Any:
    return sum_of(customer.orders, _order_total)


def _city_sort_key(row: CityAverage) -> tuple[bool, str]:
    # Customers without a city sort last
    return (row.city is None, row.city or "")


class QueryPipeline:
    """Runs the analytical queries against a data source.

    The pipeline holds no mutable state besides its collaborators, so the
    same instance can run any query any number of times with the same result.
    """

    def __init__(
        self,
        source: DataSource,
        settings: QuerySettings | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            source: Read-only dataset.
            settings: Query thresholds, price bands and contact rules.
                Defaults to the reference settings.
            metrics: Metrics registry. Defaults to the global registry.
        """
        self._source = source
        self._settings = settings or QuerySettings()
        self._metrics = metrics
        self._postal_code_re = re.compile(self._settings.postal_code_pattern)

    @property
    def settings(self) -> QuerySettings:
        return self._settings

    # -------------------------------------------------------------------------
    # Registry
    # -------------------------------------------------------------------------

    @staticmethod
    def queries() -> list[QueryDefinition]:
        """All registered queries in registration order."""
        return [definition for definition, _ in _REGISTRY.values()]

    def run(self, name: str) -> QueryResult:
        """Run one registered query by name.

        Args:
            name: Registered query name, e.g. ``"q5"``.

        Returns:
            QueryResult with the materialized rows and elapsed time.

        Raises:
            UnknownQueryError: If no query has that name.
            QueryError: Any error raised while evaluating the query.
        """
        if name not in _REGISTRY:
            raise UnknownQueryError(name)
        definition, method_name = _REGISTRY[name]
        metrics = self._metrics or get_metrics()

        with query_context(name), query_span(name, definition.title) as span:
            started = time.perf_counter()
            try:
                rows = getattr(self, method_name)()
            except Exception as e:
                elapsed = time.perf_counter() - started
                metrics.record_query(name, "error", elapsed)
                logger.error(
                    "query_failed",
                    error=str(e),
                    error_type=type(e).__name__,
                    elapsed_seconds=elapsed,
                )
                raise

            elapsed = time.perf_counter() - started
            record_rows(span, len(rows))
            metrics.record_query(name, "success", elapsed, len(rows))
            logger.info("query_completed", rows=len(rows), elapsed_seconds=elapsed)

        return QueryResult(name=name, rows=tuple(rows), elapsed_seconds=elapsed)

    def run_all(self, sink: ResultSink) -> list[QueryResult]:
        """Run every registered query and hand each result to the sink.

        Stops at the first failing query and re-raises its error.
        """
        results = []
        for name in _REGISTRY:
            result = self.run(name)
            sink.write(result)
            results.append(result)
        return results

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @registered_query(
        "q1",
        "Task 1",
        "Customers whose total turnover (the sum of all orders) exceeds X.",
    )
    def customers_over_turnover(self, threshold: Any = None) -> list[CustomerTurnover]:
        """Customers with at least one order whose turnover exceeds the threshold."""
        limit = self._settings.turnover_threshold if threshold is None else threshold
        results = []
        for customer in self._source.customers:
            if not customer.has_orders:
                continue
            total = _turnover(customer)
            if total > limit:
                results.append(CustomerTurnover(customer.customer_id, total))
        return results

    @registered_query(
        "q2_join",
        "Task 2_1 without grouping",
        "Suppliers located in the same country and city as each customer.",
    )
    def customer_suppliers_joined(self) -> list[CustomerSupplier]:
        return equi_join(
            self._source.customers,
            self._source.suppliers,
            left_key=lambda customer: customer.location,
            right_key=lambda supplier: supplier.location,
            combine=_customer_supplier,
        )

    @registered_query(
        "q2_group_join",
        "Task 2_2 using grouping",
        "Suppliers located in the same country and city as each customer, "
        "computed with a group-join.",
    )
    def customer_suppliers_grouped(self) -> list[CustomerSupplier]:
        grouped = group_join(
            self._source.customers,
            self._source.suppliers,
            left_key=lambda customer: customer.location,
            right_key=lambda supplier: supplier.location,
            combine=lambda customer, suppliers: (customer, suppliers),
        )
        return select_many(
            grouped,
            lambda pair: pair[1],
            lambda pair, supplier: _customer_supplier(pair[0], supplier),
        )

    @registered_query(
        "q3",
        "Task 3",
        "Orders whose total exceeds X, with the owning customer.",
    )
    def orders_over_total(self, threshold: Any = None) -> list[LargeOrder]:
        limit = self._settings.order_total_threshold if threshold is None else threshold
        rows = select_many(
            self._source.customers,
            lambda customer: customer.orders,
            lambda customer, order: LargeOrder(
                customer_id=customer.customer_id,
                company_name=customer.company_name,
                order_id=order.order_id,
                total=order.total,
            ),
        )
        return [row for row in rows if row.total > limit]

    @registered_query(
        "q4",
        "Task 4",
        "Customers with the month of the year they became clients "
        "(the date of their first order).",
    )
    def customer_first_orders(self) -> list[CustomerStart]:
        """First order date per customer. Customers without orders are skipped."""
        return [
            CustomerStart(
                customer_id=customer.customer_id,
                company_name=customer.company_name,
                start_date=min_of(customer.orders, lambda order: order.order_date),
            )
            for customer in self._source.customers
            if customer.has_orders
        ]

    @registered_query(
        "q5",
        "Task 5",
        "Customers with their first order date, sorted by year, month "
        "and company name descending.",
    )
    def customer_first_orders_sorted(self) -> list[CustomerStart]:
        return order_by(
            self.customer_first_orders(),
            [
                ascending(lambda row: row.year),
                ascending(lambda row: row.month),
                descending(lambda row: row.company_name),
            ],
        )

    @registered_query(
        "q6",
        "Task 6",
        "Customers with a non-numeric postal code, an empty region, "
        "or a phone without an operator code.",
    )
    def customers_with_incomplete_contacts(
        self,
        postal_code_valid: Callable[[str | None], bool] | None = None,
        phone_has_operator_code: Callable[[str | None], bool] | None = None,
    ) -> list[CustomerContact]:
        """Customers failing at least one contact check.

        Args:
            postal_code_valid: Overrides the configured postal code pattern.
            phone_has_operator_code: Overrides the configured phone prefix.
        """
        postal_ok = postal_code_valid or self._postal_code_matches
        phone_ok = phone_has_operator_code or self._phone_has_prefix
        return [
            CustomerContact(
                customer_id=customer.customer_id,
                company_name=customer.company_name,
                postal_code=customer.postal_code,
                region=customer.region,
                phone=customer.phone,
            )
            for customer in self._source.customers
            if not postal_ok(customer.postal_code)
            or not customer.region
            or not phone_ok(customer.phone)
        ]

    def _postal_code_matches(self, postal_code: str | None) -> bool:
        return postal_code is not None and self._postal_code_re.fullmatch(postal_code) is not None

    def _phone_has_prefix(self, phone: str | None) -> bool:
        return phone is not None and phone.startswith(self._settings.phone_prefix)

    @registered_query(
        "q7",
        "Task 7",
        "Products grouped by category, then by units in stock, "
        "cheapest first within each stock group.",
    )
    def products_by_category_and_stock(self) -> list[CategoryStock]:
        nested = nested_group_by(
            self._source.products,
            outer_key=lambda product: product.category,
            inner_key=lambda product: product.units_in_stock,
        )
        return [
            CategoryStock(
                category=category,
                stock_groups=tuple(
                    StockGroup(
                        units_in_stock=stock,
                        products=tuple(
                            order_by(products, [ascending(lambda p: p.unit_price)])
                        ),
                    )
                    for stock, products in stock_groups.items()
                ),
            )
            for category, stock_groups in nested.items()
        ]

    @registered_query(
        "q8",
        "Task 8",
        "Products grouped into price bands (cheap, average price, expensive).",
    )
    def products_by_price_band(self, scheme: BucketScheme | None = None) -> list[PriceBandGroup]:
        """Non-empty price bands in scheme order, products in input order."""
        bands = scheme or self._settings.bucket_scheme()
        groups = aggregate_groups(
            group_by(self._source.products, lambda product: classify(product.unit_price, bands)),
            lambda label, products: PriceBandGroup(label, tuple(products)),
        )
        return order_by(groups, [ascending(lambda group: bands.index_of(group.label))])

    @registered_query(
        "q9a",
        "Task 9-1",
        "Average profitability of each city (the average order total "
        "over all customers from that city).",
    )
    def average_order_value_by_city(self) -> list[CityAverage]:
        """Sum of order totals divided by the number of orders, per city.

        Customers without orders add nothing to either sum, so they are left
        out; a city whose customers have no orders at all has no average and
        is omitted.
        """
        buyers = [customer for customer in self._source.customers if customer.has_orders]
        rows = aggregate_groups(
            group_by(buyers, lambda customer: customer.city),
            lambda city, customers: CityAverage(
                city=city,
                average=average(customers, _turnover, lambda customer: customer.order_count),
            ),
        )
        return order_by(rows, [ascending(_city_sort_key)])

    @registered_query(
        "q9b",
        "Task 9-2",
        "Average intensity (the average number of orders per customer) of each city.",
    )
    def average_order_count_by_city(self) -> list[CityAverage]:
        rows = aggregate_groups(
            group_by(self._source.customers, lambda customer: customer.city),
            lambda city, customers: CityAverage(
                city=city,
                average=average(customers, lambda customer: customer.order_count, lambda _: 1),
            ),
        )
        return order_by(rows, [ascending(_city_sort_key)])

    def _all_orders(self) -> list[Order]:
        return select_many(self._source.customers, lambda customer: customer.orders)

    @registered_query(
        "q10a",
        "Task 10-1",
        "Client activity by month, excluding the year.",
    )
    def order_counts_by_month(self) -> list[MonthCount]:
        rows = aggregate_groups(
            group_by(self._all_orders(), lambda order: order.order_date.month),
            lambda month, orders: MonthCount(month, count(orders)),
        )
        return order_by(rows, [ascending(lambda row: row.month)])

    @registered_query(
        "q10b",
        "Task 10-2",
        "Client activity by year.",
    )
    def order_counts_by_year(self) -> list[YearCount]:
        rows = aggregate_groups(
            group_by(self._all_orders(), lambda order: order.order_date.year),
            lambda year, orders: YearCount(year, count(orders)),
        )
        return order_by(rows, [ascending(lambda row: row.year)])

    @registered_query(
        "q10c",
        "Task 10-3",
        "Client activity by year and month.",
    )
    def order_counts_by_year_and_month(self) -> list[YearMonthCounts]:
        nested = nested_group_by(
            self._all_orders(),
            outer_key=lambda order: order.order_date.year,
            inner_key=lambda order: order.order_date.month,
        )
        rows = [
            YearMonthCounts(
                year=year,
                months=tuple(
                    order_by(
                        [MonthCount(month, count(orders)) for month, orders in months.items()],
                        [ascending(lambda row: row.month)],
                    )
                ),
            )
            for year, months in nested.items()
        ]
        return order_by(rows, [ascending(lambda row: row.year)])


__all__ = [
    "QueryPipeline",
    "registered_query",
]
