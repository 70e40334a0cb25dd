"""
Data Validation Utilities
==========================
Schema validation and data quality checks for catalog snapshots.

Design Principles:
- Never silently fail - always log issues
- Return structured validation results
- Report every problem at once so a file can be fixed in one pass
"""

import pandas as pd
import numpy as np
from typing import Dict, List, Any, Optional
from dataclasses import dataclass, field

from freshtag.utils.logger import get_logger
from freshtag.utils.constants import CATALOG_SCHEMA

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """
    Structured result of a validation operation.

    Attributes
    ----------
    is_valid : bool
        Overall validation status
    errors : List[str]
        Critical issues that prevent processing
    warnings : List[str]
        Non-critical issues to be aware of
    info : Dict[str, Any]
        Additional validation metadata
    """
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    info: Dict[str, Any] = field(default_factory=dict)

    def add_error(self, message: str) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "is_valid": self.is_valid,
            "errors": self.errors,
            "warnings": self.warnings,
            "info": self.info
        }


class CatalogValidator:
    """
    Validates a catalog DataFrame against CATALOG_SCHEMA.

    Usage
    -----
    validator = CatalogValidator()
    result = validator.validate(df, "catalog.csv")

    if not result.is_valid:
        print(f"Validation failed: {result.errors}")
    """

    def __init__(self, schema: Optional[Dict] = None):
        self.schema = schema or CATALOG_SCHEMA

    def validate(self, df: pd.DataFrame, file_name: str = "catalog") -> ValidationResult:
        """
        Validate a catalog DataFrame.

        Timestamp columns are expected to be parsed already
        (datetime64 dtype); unparseable values show up as NaT.

        Parameters
        ----------
        df : pd.DataFrame
            The catalog to validate
        file_name : str
            Name of the source (for messages)

        Returns
        -------
        ValidationResult
            Structured validation result with errors/warnings
        """
        result = ValidationResult()
        result.info["file_name"] = file_name
        result.info["row_count"] = len(df)

        required = self.schema.get("required_columns", [])
        missing = [col for col in required if col not in df.columns]
        if missing:
            result.add_error(f"Missing required columns in {file_name}: {missing}")
            # Row-level checks need the columns
            self._log_result(result, file_name)
            return result

        optional = self.schema.get("optional_columns", [])
        result.info["optional_columns_present"] = [c for c in optional if c in df.columns]

        for col in self.schema.get("timestamp_columns", []):
            self._validate_timestamps(df, col, result)

        for col in self.schema.get("numeric_columns", []):
            self._validate_numeric(df, col, result)

        self._validate_identifiers(df, result)
        self._validate_date_order(df, result)

        self._log_result(result, file_name)
        return result

    def _validate_timestamps(
        self,
        df: pd.DataFrame,
        column: str,
        result: ValidationResult
    ) -> None:
        """Flag rows whose timestamp could not be parsed."""
        bad_rows = df.index[df[column].isna()].tolist()
        if bad_rows:
            result.add_error(
                f"Column '{column}' has missing or unparseable dates at rows {bad_rows}"
            )

    def _validate_numeric(
        self,
        df: pd.DataFrame,
        column: str,
        result: ValidationResult
    ) -> None:
        """Numeric columns must be present and non-negative."""
        values = pd.to_numeric(df[column], errors='coerce')

        bad_rows = df.index[values.isna()].tolist()
        if bad_rows:
            result.add_error(f"Column '{column}' has non-numeric values at rows {bad_rows}")

        negative_rows = df.index[values < 0].tolist()
        if negative_rows:
            result.add_error(f"Column '{column}' has negative values at rows {negative_rows}")

        if column == "quantity":
            fractional = values.notna() & ~np.isclose(values.fillna(0) % 1, 0)
            fractional_rows = df.index[fractional].tolist()
            if fractional_rows:
                result.add_error(
                    f"Column 'quantity' must hold whole units, rows {fractional_rows}"
                )

    def _validate_identifiers(self, df: pd.DataFrame, result: ValidationResult) -> None:
        """Identifiers must be present and unique."""
        ids = df["id"].astype(str).str.strip()

        if (df["id"].isna() | (ids == "")).any():
            result.add_error("Column 'id' has empty values")

        duplicated = sorted(ids[ids.duplicated()].unique().tolist())
        if duplicated:
            result.add_error(f"Duplicate product ids: {duplicated}")

        result.info["duplicate_count"] = len(duplicated)

    def _validate_date_order(self, df: pd.DataFrame, result: ValidationResult) -> None:
        """
        Expiry on or before manufacturing is only a warning here.

        Such rows still load; the classifier refuses them when evaluated.
        """
        both = df["manufacturing_date"].notna() & df["expiry_date"].notna()
        inverted = both & (df["expiry_date"] <= df["manufacturing_date"])
        if inverted.any():
            ids = df.loc[inverted, "id"].astype(str).tolist()
            result.add_warning(f"Products with expiry not after manufacturing: {ids}")

    def _log_result(self, result: ValidationResult, file_name: str) -> None:
        if result.is_valid:
            logger.info(f"Validation PASSED for {file_name}")
        else:
            logger.error(f"Validation FAILED for {file_name}: {result.errors}")

        for warning in result.warnings:
            logger.warning(warning)
