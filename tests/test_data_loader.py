"""Tests for catalog loading."""

import json
from datetime import datetime

import pytest

from freshtag.models.errors import CatalogLoadError, InvalidDateRange
from freshtag.services.data_loader import CatalogLoader, products_from_records
from freshtag.services.lifecycle import classify

HEADER = "id,name,category,location,price,quantity,manufacturing_date,expiry_date,supplier,batch_number,description"


def write_csv(tmp_path, *rows, header=HEADER, name="catalog.csv"):
    path = tmp_path / name
    path.write_text("\n".join([header, *rows]) + "\n", encoding="utf-8")
    return path


def record(**overrides):
    data = {
        "id": "P1",
        "name": "Milk",
        "category": "Dairy",
        "price": 4.99,
        "quantity": 48,
        "manufacturing_date": "2024-01-01",
        "expiry_date": "2024-01-31",
    }
    data.update(overrides)
    return data


class TestCsv:

    def test_loads_products(self, tmp_path):
        path = write_csv(
            tmp_path,
            "007,Milk,Dairy,Cooler A,4.99,48,2024-01-01,2024-01-31,Green Valley,0042,Whole milk",
            "P2,Bread,Bakery,,5.49,30,2024-01-17T08:00:00,2024-01-27T08:00:00,,,"
        )
        products = CatalogLoader(path).load()

        assert [p.id for p in products] == ["007", "P2"]
        milk = products[0]
        assert milk.price == pytest.approx(4.99)
        assert milk.quantity == 48
        assert isinstance(milk.quantity, int)
        assert milk.manufacturing_date == datetime(2024, 1, 1)
        assert milk.expiry_date == datetime(2024, 1, 31)
        assert milk.batch_number == "0042"
        assert milk.location == "Cooler A"

        bread = products[1]
        assert bread.location == ""
        assert bread.supplier == ""
        assert bread.manufacturing_date == datetime(2024, 1, 17, 8)

    def test_optional_columns_may_be_absent(self, tmp_path):
        path = write_csv(
            tmp_path,
            "P1,Milk,Dairy,4.99,48,2024-01-01,2024-01-31",
            header="id,name,category,price,quantity,manufacturing_date,expiry_date"
        )
        product = CatalogLoader(path).load()[0]
        assert product.description == ""
        assert product.batch_number == ""

    def test_timezone_aware_dates_become_naive_utc(self, tmp_path):
        path = write_csv(
            tmp_path,
            "P1,Milk,Dairy,,4.99,48,2024-01-01T02:00:00+02:00,2024-01-31T00:00:00Z,,,"
        )
        product = CatalogLoader(path).load()[0]
        assert product.manufacturing_date == datetime(2024, 1, 1)
        assert product.expiry_date.tzinfo is None

    def test_missing_required_column(self, tmp_path):
        path = write_csv(
            tmp_path,
            "P1,Milk,4.99,48,2024-01-01,2024-01-31",
            header="id,name,price,quantity,manufacturing_date,expiry_date"
        )
        with pytest.raises(CatalogLoadError) as excinfo:
            CatalogLoader(path).load()
        assert any("category" in problem for problem in excinfo.value.problems)

    def test_reports_every_row_problem(self, tmp_path):
        path = write_csv(
            tmp_path,
            "P1,Milk,Dairy,,-1,48,2024-01-01,2024-01-31,,,",
            "P1,Bread,Bakery,,5.49,2.5,not-a-date,2024-01-27,,,"
        )
        with pytest.raises(CatalogLoadError) as excinfo:
            CatalogLoader(path).load()

        problems = " | ".join(excinfo.value.problems)
        assert "negative" in problems
        assert "manufacturing_date" in problems
        assert "whole units" in problems
        assert "Duplicate product ids" in problems

    def test_inverted_dates_load_but_cannot_be_classified(self, tmp_path):
        path = write_csv(tmp_path, "BAD,Milk,Dairy,,4.99,48,2024-02-01,2024-01-01,,,")
        loader = CatalogLoader(path)
        product = loader.load()[0]

        assert loader.validation.is_valid
        assert loader.validation.warnings
        with pytest.raises(InvalidDateRange):
            classify(product, datetime(2024, 1, 15))


class TestJson:

    def test_camel_case_list(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([{
            "id": "1",
            "name": "Milk",
            "category": "Dairy",
            "price": 4.99,
            "quantity": 48,
            "manufacturingDate": "2024-01-01",
            "expiryDate": "2024-01-31",
            "batchNumber": "GV-1",
            "location": "Cooler A",
            "supplier": "Green Valley",
            "description": "Whole milk",
            "image": "milk.png"
        }]), encoding="utf-8")

        product = CatalogLoader(path).load()[0]
        assert product.batch_number == "GV-1"
        assert product.expiry_date == datetime(2024, 1, 31)

    def test_products_object(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"products": [record(), record(id="P2")]}), encoding="utf-8")
        assert len(CatalogLoader(path).load()) == 2

    def test_invalid_structure(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"items": []}), encoding="utf-8")
        with pytest.raises(CatalogLoadError):
            CatalogLoader(path).load()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogLoadError):
            CatalogLoader(path).load()


class TestFiles:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            CatalogLoader(tmp_path / "missing.csv")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "catalog.xlsx"
        path.write_bytes(b"")
        with pytest.raises(CatalogLoadError):
            CatalogLoader(path).load()


class TestRecords:

    def test_products_from_records(self):
        products = products_from_records([record(), record(id="P2", quantity=3)])
        assert [p.quantity for p in products] == [48, 3]
        assert products[0].manufacturing_date == datetime(2024, 1, 1)

    def test_datetime_values(self):
        products = products_from_records([record(
            manufacturing_date=datetime(2024, 1, 1, 6),
            expiry_date=datetime(2024, 1, 31)
        )])
        assert products[0].manufacturing_date == datetime(2024, 1, 1, 6)

    def test_invalid_records(self):
        with pytest.raises(CatalogLoadError):
            products_from_records([record(price="free")])
