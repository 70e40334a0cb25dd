"""
Catalog Loader Service
======================
Load a static catalog snapshot from CSV or JSON into immutable Products.

Assumptions:
- Files are UTF-8 encoded
- Dates are ISO-8601 strings; timezone-aware values are converted to
  UTC and made naive, naive values are taken as-is
- Column names may use the original web catalog's camelCase
  (manufacturingDate, expiryDate, batchNumber)

Rows whose expiry is not after manufacturing still load, with a
validation warning; the classifier raises InvalidDateRange for them.

Example
-------
>>> loader = CatalogLoader("./data/catalog.csv")
>>> products = loader.load()
>>> print(f"Loaded {len(products)} products")
"""

import json
import pandas as pd
import numpy as np
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from freshtag.models.errors import CatalogLoadError
from freshtag.models.product import Product
from freshtag.utils.constants import CATALOG_SCHEMA
from freshtag.utils.logger import LogContext, get_logger
from freshtag.utils.validators import CatalogValidator, ValidationResult

logger = get_logger(__name__)


class CatalogLoader:
    """
    Load and validate a catalog file.

    Attributes
    ----------
    path : Path
        Catalog file (.csv or .json)
    validation : ValidationResult or None
        Result of the last load's validation
    """

    def __init__(self, path: Union[str, Path], schema: Optional[Dict] = None):
        """
        Parameters
        ----------
        path : str or Path
            Catalog file (.csv or .json)
        schema : dict, optional
            Custom schema. Uses CATALOG_SCHEMA if not provided.

        Raises
        ------
        FileNotFoundError
            If the file does not exist
        """
        self.path = Path(path)
        self.schema = schema or CATALOG_SCHEMA
        self.validator = CatalogValidator(self.schema)
        self.validation: Optional[ValidationResult] = None

        if not self.path.exists():
            raise FileNotFoundError(f"Catalog file not found: {self.path}")

    def load(self) -> List[Product]:
        """
        Read, validate and convert the catalog.

        Raises
        ------
        CatalogLoadError
            If the format is unsupported or validation fails
        """
        with LogContext(logger, f"Loading catalog {self.path.name}"):
            df = self._read()
            logger.info(f"Read {len(df):,} rows, {len(df.columns)} columns")
            products, self.validation = frame_to_products(df, self.path.name, self.validator)
        return products

    def _read(self) -> pd.DataFrame:
        suffix = self.path.suffix.lower()
        if suffix not in self.schema["supported_extensions"]:
            raise CatalogLoadError(
                f"Unsupported catalog format '{suffix}'",
                [f"expected one of {self.schema['supported_extensions']}"]
            )

        if suffix == ".csv":
            # Keep identifiers and batch numbers textual (leading zeros)
            text_columns = {col: str for col in ("id", "batch_number", "batchNumber")}
            return pd.read_csv(self.path, dtype=text_columns, encoding="utf-8")

        with open(self.path, encoding="utf-8") as f:
            try:
                payload = json.load(f)
            except json.JSONDecodeError as e:
                raise CatalogLoadError(f"Invalid JSON in {self.path.name}", [str(e)]) from e

        if isinstance(payload, dict):
            payload = payload.get("products")
        if not isinstance(payload, list):
            raise CatalogLoadError(
                f"Invalid catalog structure in {self.path.name}",
                ["expected a list of products or an object with a 'products' list"]
            )
        return pd.DataFrame.from_records(payload)


def products_from_records(records: List[Dict[str, Any]]) -> List[Product]:
    """
    Build Products from a list of dicts (same columns as a catalog file).

    Raises
    ------
    CatalogLoadError
        If validation fails
    """
    products, _ = frame_to_products(pd.DataFrame.from_records(records), "records")
    return products


def frame_to_products(
    df: pd.DataFrame,
    source: str,
    validator: Optional[CatalogValidator] = None
) -> Tuple[List[Product], ValidationResult]:
    """
    Normalise, validate and convert a catalog DataFrame.

    Returns
    -------
    Tuple[List[Product], ValidationResult]
    """
    validator = validator or CatalogValidator()
    schema = validator.schema

    df = df.rename(columns=schema.get("column_aliases", {}))
    for col in schema["timestamp_columns"]:
        if col in df.columns:
            df[col] = _parse_dates(df[col])

    validation = validator.validate(df, source)
    if not validation.is_valid:
        raise CatalogLoadError(f"Catalog {source} failed validation", validation.errors)

    for col in schema.get("optional_columns", []):
        if col not in df.columns:
            df[col] = ""

    # NaN in optional text columns becomes an empty string
    df = df.replace({np.nan: None})

    products = [_row_to_product(row) for row in df.to_dict("records")]
    logger.info(f"Built {len(products)} products from {source}")
    return products, validation


def _parse_dates(series: pd.Series) -> pd.Series:
    if pd.api.types.is_datetime64_any_dtype(series):
        parsed = pd.to_datetime(series, utc=True)
    else:
        # Strings, dates and datetimes all render as ISO-8601 text
        parsed = pd.to_datetime(
            series.astype("string"), errors="coerce", utc=True, format="ISO8601"
        )
    return parsed.dt.tz_localize(None)


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _row_to_product(row: Dict[str, Any]) -> Product:
    return Product(
        id=_text(row["id"]),
        name=_text(row["name"]),
        category=_text(row["category"]),
        manufacturing_date=row["manufacturing_date"].to_pydatetime(),
        expiry_date=row["expiry_date"].to_pydatetime(),
        price=float(row["price"]),
        quantity=int(float(row["quantity"])),
        location=_text(row.get("location")),
        supplier=_text(row.get("supplier")),
        batch_number=_text(row.get("batch_number")),
        description=_text(row.get("description"))
    )
