"""Shared fixtures: a fixed evaluation instant and a product factory."""

from datetime import datetime

import pytest

from freshtag.models.product import Product

# Every test evaluates at this instant
NOW = datetime(2024, 1, 25)

# (manufacturing, expiry) pairs with a known tag at NOW
CRITICAL_DATES = (datetime(2024, 1, 1), datetime(2024, 1, 31))   # 20.0%, 6 days
WARNING_DATES = (datetime(2024, 1, 1), datetime(2024, 2, 10))    # 40.0%, 16 days
WARNING_SOON_DATES = (datetime(2024, 1, 1), datetime(2024, 2, 5))  # ~31.4%, 11 days
GOOD_DATES = (datetime(2024, 1, 20), datetime(2024, 3, 1))       # ~87.8%, 36 days


def make_product(
    id="P001",
    dates=CRITICAL_DATES,
    price=10.0,
    quantity=10,
    **overrides
) -> Product:
    manufacturing, expiry = dates
    fields = {
        "id": id,
        "name": f"Product {id}",
        "category": "Dairy",
        "manufacturing_date": manufacturing,
        "expiry_date": expiry,
        "price": price,
        "quantity": quantity,
        "location": "Aisle 1",
        "supplier": "Green Valley Farms",
        "batch_number": f"B-{id}",
        "description": "Test product",
    }
    fields.update(overrides)
    return Product(**fields)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def product_factory():
    return make_product


@pytest.fixture
def mixed_catalog():
    """Critical / Warning / Good with values 100 / 200 / 300."""
    return [
        make_product("C1", CRITICAL_DATES, price=10.0, quantity=10, category="Dairy"),
        make_product("W1", WARNING_DATES, price=20.0, quantity=10, category="Bakery"),
        make_product("G1", GOOD_DATES, price=30.0, quantity=10, category="Dairy"),
    ]
