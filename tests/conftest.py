"""Pytest configuration and fixtures for query_engine tests."""

from __future__ import annotations

import itertools
from datetime import date
from decimal import Decimal
from typing import Callable

import pytest
from prometheus_client import CollectorRegistry

from query_engine.adapters.outbound import InMemoryDataSource
from query_engine.application import QueryPipeline
from query_engine.domain.entities import Customer, Order, Product, Supplier
from query_engine.infrastructure.metrics import MetricsRegistry

_order_ids = itertools.count(10001)


def _build_customer(
    customer_id: str,
    orders: list[tuple[str, str]] | None = None,
    company_name: str | None = None,
    city: str | None = "Berlin",
    country: str | None = "Germany",
    postal_code: str | None = "12209",
    region: str | None = "BE",
    phone: str | None = "(030) 0074321",
) -> Customer:
    """Build a customer from (ISO date, total) order pairs."""
    built = []
    for order_date, total in orders or []:
        built.append(
            Order(
                order_id=next(_order_ids),
                customer_id=customer_id,
                order_date=date.fromisoformat(order_date),
                total=Decimal(total),
            )
        )
    return Customer(
        customer_id=customer_id,
        company_name=company_name or f"{customer_id} Company",
        city=city,
        country=country,
        postal_code=postal_code,
        region=region,
        phone=phone,
        orders=tuple(built),
    )


def _build_product(
    product_id: int,
    unit_price: str,
    category: str = "Beverages",
    units_in_stock: int = 10,
    product_name: str | None = None,
) -> Product:
    return Product(
        product_id=product_id,
        product_name=product_name or f"Product {product_id}",
        category=category,
        unit_price=Decimal(unit_price),
        units_in_stock=units_in_stock,
    )


@pytest.fixture
def make_customer() -> Callable[..., Customer]:
    """Factory for customers with orders given as (ISO date, total) pairs."""
    return _build_customer


@pytest.fixture
def make_product() -> Callable[..., Product]:
    """Factory for products."""
    return _build_product


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def sample_customers() -> list[Customer]:
    """A small Northwind-like customer set covering every query."""
    return [
        _build_customer(
            "ALFKI",
            [("1997-08-25", "814.50"), ("1997-10-03", "878.00"), ("1998-01-15", "845.80")],
            company_name="Alfreds Futterkiste",
            city="Berlin",
            country="Germany",
            postal_code="12209",
            region=None,
            phone="030-0074321",
        ),
        _build_customer(
            "ANATR",
            [("1996-09-18", "88.80"), ("1997-08-08", "479.75")],
            company_name="Ana Trujillo Emparedados",
            city="México D.F.",
            country="Mexico",
            postal_code="05021",
            region="DF",
            phone="(5) 555-4729",
        ),
        _build_customer(
            "BLONP",
            [("1996-07-25", "10000.00"), ("1997-03-12", "75000.00")],
            company_name="Blondel père et fils",
            city="Strasbourg",
            country="France",
            postal_code="67000",
            region="BR",
            phone="(88) 60.15.31",
        ),
        _build_customer(
            "BONAP",
            [("1996-07-16", "200.00"), ("1997-08-11", "100.00")],
            company_name="Bon app'",
            city="Lyon",
            country="France",
            postal_code="69004",
            region="RA",
            phone="(91) 24.45.40",
        ),
        _build_customer(
            "VICTE",
            [("1997-08-29", "100.00")],
            company_name="Victuailles en stock",
            city="Lyon",
            country="France",
            postal_code="69004",
            region="RA",
            phone="(78) 32.54.86",
        ),
        _build_customer(
            "NOORD",
            [],
            company_name="North Orders",
            city="Berlin",
            country="Germany",
            postal_code="WX1 6LT",
            region="BE",
            phone="(030) 555 0199",
        ),
    ]


@pytest.fixture
def sample_suppliers() -> list[Supplier]:
    return [
        Supplier(1, "Heli Süßwaren", "Berlin", "Germany"),
        Supplier(2, "Plutzer Lebensmittel", "Frankfurt", "Germany"),
        Supplier(3, "Lyon Fromagerie", "Lyon", "France"),
        Supplier(4, "Berliner Brot", "Berlin", "Germany"),
        Supplier(5, "Lyon Trading", "Lyon", "Germany"),
        Supplier(6, "Gai pâturage", "Annecy", "France"),
    ]


@pytest.fixture
def sample_products() -> list[Product]:
    return [
        _build_product(1, "18.00", "Beverages", 39, "Chai"),
        _build_product(2, "19.00", "Beverages", 17, "Chang"),
        _build_product(3, "40.00", "Condiments", 13, "Northwoods Cranberry Sauce"),
        _build_product(4, "10.00", "Condiments", 13, "Aniseed Syrup"),
        _build_product(5, "22.00", "Condiments", 53, "Chef Anton's Cajun Seasoning"),
        _build_product(6, "46.00", "Beverages", 17, "Ipoh Coffee"),
        _build_product(7, "20.00", "Dairy", 86, "Queso Cabrales"),
        _build_product(8, "30.00", "Dairy", 86, "Queso Manchego"),
    ]


@pytest.fixture
def sample_source(
    sample_customers: list[Customer],
    sample_suppliers: list[Supplier],
    sample_products: list[Product],
) -> InMemoryDataSource:
    return InMemoryDataSource(
        customers=sample_customers,
        suppliers=sample_suppliers,
        products=sample_products,
    )


@pytest.fixture
def pipeline(sample_source: InMemoryDataSource, metrics_registry: MetricsRegistry) -> QueryPipeline:
    return QueryPipeline(sample_source, metrics=metrics_registry)


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "property: Property tests over many inputs")
