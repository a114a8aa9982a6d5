"""Composite keys used by joins and groupings.

Each key shape is defined once as a frozen dataclass so that equality and
hashing are structural: two keys are equal when every field is equal.
String fields are compared exactly, with no case folding or trimming.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, slots=True)
class Location:
    """City/Country pair used to match customers with suppliers.

    Example:
        >>> Location("Berlin", "Germany") == Location("Berlin", "Germany")
        True
        >>> Location("berlin", "Germany") == Location("Berlin", "Germany")
        False
    """

    city: str | None
    country: str | None

    def __str__(self) -> str:
        return f"{self.city}, {self.country}"


@dataclass(frozen=True, slots=True, order=True)
class YearMonth:
    """Calendar month within a specific year. Orders by (year, month)."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, got {self.month}")

    @classmethod
    def of(cls, day: date) -> YearMonth:
        return cls(year=day.year, month=day.month)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
