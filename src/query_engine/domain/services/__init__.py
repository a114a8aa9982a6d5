"""Domain services implementing the relational operators.

Services are pure functions over immutable collections. Each returns a new
eagerly materialized list and never mutates its inputs.
"""

from query_engine.domain.services.bucketing import classify, classify_by
from query_engine.domain.services.grouping import (
    aggregate_groups,
    average,
    count,
    group_by,
    max_of,
    min_of,
    nested_group_by,
    sum_of,
)
from query_engine.domain.services.join import equi_join, group_join, select_many
from query_engine.domain.services.ordering import order_by

__all__ = [
    # Join
    "equi_join",
    "group_join",
    "select_many",
    # Grouping
    "group_by",
    "nested_group_by",
    "aggregate_groups",
    "sum_of",
    "count",
    "min_of",
    "max_of",
    "average",
    # Bucketing
    "classify",
    "classify_by",
    # Ordering
    "order_by",
]
