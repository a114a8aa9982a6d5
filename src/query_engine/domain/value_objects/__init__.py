"""Value objects for the query engine domain.

Value objects are immutable types that represent domain concepts.
They have no identity - two value objects with the same attributes are equal.

Exports:
    Keys:
        - Location: City/Country composite join key
        - YearMonth: Year and month composite grouping key

    Sorting:
        - SortDirection: ASCENDING or DESCENDING
        - SortKey: (selector, direction) pair
        - ascending, descending: SortKey builders

    Bands:
        - PriceBand: Labelled upper-bound band
        - BucketScheme: Validated ordered list of bands
"""

from query_engine.domain.value_objects.bands import BucketScheme, PriceBand
from query_engine.domain.value_objects.keys import Location, YearMonth
from query_engine.domain.value_objects.sorting import (
    SortDirection,
    SortKey,
    ascending,
    descending,
)

__all__ = [
    # Keys
    "Location",
    "YearMonth",
    # Sorting
    "SortDirection",
    "SortKey",
    "ascending",
    "descending",
    # Bands
    "PriceBand",
    "BucketScheme",
]
