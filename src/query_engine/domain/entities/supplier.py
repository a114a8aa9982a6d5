"""Supplier entity."""

from __future__ import annotations

from dataclasses import dataclass

from query_engine.domain.value_objects import Location


@dataclass(frozen=True, slots=True)
class Supplier:
    """A supplier located in a city."""

    supplier_id: int
    supplier_name: str
    city: str | None
    country: str | None
    address: str | None = None

    @property
    def location(self) -> Location:
        return Location(self.city, self.country)
