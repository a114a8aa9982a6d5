"""Product entity."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class Product:
    """A catalogue product with its price and current stock level."""

    product_id: int
    product_name: str
    category: str
    unit_price: Decimal
    units_in_stock: int

    def __post_init__(self) -> None:
        if self.unit_price < 0:
            raise ValueError(
                f"Product {self.product_id} unit_price must be non-negative, got {self.unit_price}"
            )
        if self.units_in_stock < 0:
            raise ValueError(
                f"Product {self.product_id} units_in_stock must be non-negative, "
                f"got {self.units_in_stock}"
            )
