"""Bucketing operator: map a derived scalar onto a labelled band."""

from __future__ import annotations

from decimal import Decimal
from typing import Callable, TypeVar

from query_engine.domain.value_objects import BucketScheme

T = TypeVar("T")


def classify(value: Decimal | int | float, scheme: BucketScheme) -> str:
    """Return the label of the first band that admits the value.

    The scheme's last band is unbounded, so every value gets a label.
    """
    for band in scheme:
        if band.admits(value):
            return band.label
    # BucketScheme guarantees an unbounded last band
    raise AssertionError(f"no band admits {value} in {scheme!r}")


def classify_by(
    item: T,
    selector: Callable[[T], Decimal | int | float],
    scheme: BucketScheme,
) -> str:
    """Classify a record by a derived numeric value."""
    return classify(selector(item), scheme)
