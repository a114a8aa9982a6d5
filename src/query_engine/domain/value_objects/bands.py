"""Price bands for categorical bucketing.

A bucket scheme is an ordered list of bands. Each band but the last has an
upper bound, either exclusive (value < bound) or inclusive (value <= bound).
A value falls into the first band whose bound admits it, so the lower bound
of every band is implied by the upper bound of the band before it. The last
band is unbounded, which makes the labels exhaustive. Strictly increasing
bounds make them mutually exclusive.

Reference scheme:
    Cheap          value <  20
    Average price  20 <= value <= 30
    Expensive      value >  30
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator, Sequence

from query_engine.domain.errors import InvalidBucketSchemeError


@dataclass(frozen=True, slots=True)
class PriceBand:
    """A labelled band with an optional upper bound."""

    label: str
    upper_bound: Decimal | None = None
    inclusive: bool = False

    def admits(self, value: Decimal | int | float) -> bool:
        """Check whether the value lies at or below this band's upper bound."""
        if self.upper_bound is None:
            return True
        if self.inclusive:
            return value <= self.upper_bound
        return value < self.upper_bound


class BucketScheme:
    """Validated, ordered collection of price bands."""

    def __init__(self, bands: Sequence[PriceBand]) -> None:
        """Create a scheme.

        Args:
            bands: Bands in ascending order of upper bound; the last one
                must be unbounded.

        Raises:
            InvalidBucketSchemeError: If the bands leave gaps or overlap.
        """
        if not bands:
            raise InvalidBucketSchemeError("bucket scheme needs at least one band")

        labels = [band.label for band in bands]
        if len(set(labels)) != len(labels):
            raise InvalidBucketSchemeError(f"duplicate band labels in {labels}")

        *bounded, last = bands
        if last.upper_bound is not None:
            raise InvalidBucketSchemeError(
                f"last band '{last.label}' must be unbounded"
            )

        previous: Decimal | None = None
        for band in bounded:
            if band.upper_bound is None:
                raise InvalidBucketSchemeError(
                    f"only the last band may be unbounded, got '{band.label}'"
                )
            if previous is not None and band.upper_bound <= previous:
                raise InvalidBucketSchemeError(
                    f"band '{band.label}' bound {band.upper_bound} "
                    f"does not exceed previous bound {previous}"
                )
            previous = band.upper_bound

        self._bands: tuple[PriceBand, ...] = tuple(bands)

    @classmethod
    def reference(cls) -> BucketScheme:
        """The Cheap / Average price / Expensive scheme."""
        return cls(
            [
                PriceBand("Cheap", Decimal("20"), inclusive=False),
                PriceBand("Average price", Decimal("30"), inclusive=True),
                PriceBand("Expensive"),
            ]
        )

    @property
    def bands(self) -> tuple[PriceBand, ...]:
        return self._bands

    @property
    def labels(self) -> list[str]:
        return [band.label for band in self._bands]

    def index_of(self, label: str) -> int:
        """Position of a label in declaration order."""
        return self.labels.index(label)

    def __iter__(self) -> Iterator[PriceBand]:
        return iter(self._bands)

    def __len__(self) -> int:
        return len(self._bands)

    def __repr__(self) -> str:
        return f"BucketScheme({list(self._bands)!r})"
