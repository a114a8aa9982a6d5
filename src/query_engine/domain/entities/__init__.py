"""Domain entities for the query engine.

Entities are plain immutable records loaded once from the data source and
never mutated while queries run.

Exports:
    - Customer: Customer with its owned orders
    - Order: Single order referring back to its customer
    - Supplier: Supplier with city and country
    - Product: Catalogue product with price and stock
"""

from query_engine.domain.entities.customer import Customer, Order
from query_engine.domain.entities.product import Product
from query_engine.domain.entities.supplier import Supplier

__all__ = [
    "Customer",
    "Order",
    "Supplier",
    "Product",
]
