"""Application layer for the query engine.

The application layer composes the domain operators into named analytical
queries and runs them with logging, tracing and metrics.

Exports:
    Pipeline:
        - QueryPipeline: Runs the named queries against a data source
    Results:
        - QueryResult: Rows and timing of one query run
        - QueryDefinition: Name, title and description of a registered query
        - One frozen record type per query (CustomerTurnover, CustomerSupplier, ...)
"""

from query_engine.application.pipeline import QueryPipeline
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

__all__ = [
    "QueryPipeline",
    "QueryResult",
    "QueryDefinition",
    "CustomerTurnover",
    "CustomerSupplier",
    "LargeOrder",
    "CustomerStart",
    "CustomerContact",
    "CategoryStock",
    "StockGroup",
    "PriceBandGroup",
    "CityAverage",
    "MonthCount",
    "YearCount",
    "YearMonthCounts",
]
