"""Tests for catalog validation."""

import pandas as pd

from freshtag.utils.validators import CatalogValidator, ValidationResult


def frame(**overrides):
    data = {
        "id": ["P1", "P2"],
        "name": ["Milk", "Bread"],
        "category": ["Dairy", "Bakery"],
        "manufacturing_date": pd.to_datetime(["2024-01-01", "2024-01-10"]),
        "expiry_date": pd.to_datetime(["2024-01-31", "2024-01-20"]),
        "price": [4.99, 2.5],
        "quantity": [10, 3],
    }
    data.update(overrides)
    return pd.DataFrame(data)


def test_valid_frame():
    result = CatalogValidator().validate(frame(), "test")
    assert result.is_valid
    assert result.errors == []
    assert result.info["row_count"] == 2
    assert result.info["duplicate_count"] == 0


def test_missing_columns_stop_row_checks():
    result = CatalogValidator().validate(frame().drop(columns=["price", "name"]), "test")
    assert not result.is_valid
    assert len(result.errors) == 1
    assert "price" in result.errors[0] and "name" in result.errors[0]


def test_duplicate_ids():
    result = CatalogValidator().validate(frame(id=["P1", "P1"]), "test")
    assert not result.is_valid
    assert result.info["duplicate_count"] == 1


def test_non_numeric_price():
    result = CatalogValidator().validate(frame(price=["4.99", "abc"]), "test")
    assert any("non-numeric" in error for error in result.errors)


def test_inverted_dates_are_a_warning():
    result = CatalogValidator().validate(
        frame(expiry_date=pd.to_datetime(["2023-12-01", "2024-01-20"])), "test"
    )
    assert result.is_valid
    assert "P1" in result.warnings[0]


def test_validation_result_helpers():
    result = ValidationResult()
    result.add_warning("heads up")
    assert result.is_valid
    result.add_error("broken")
    assert result.to_dict() == {
        "is_valid": False,
        "errors": ["broken"],
        "warnings": ["heads up"],
        "info": {},
    }
