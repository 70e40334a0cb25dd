"""
Utils Package
=============
Utility functions for the FreshTag freshness engine.

Modules:
- logger: Centralized logging configuration
- validators: Catalog schema and data validation utilities
- constants: Thresholds, policy rates and schemas
"""

from freshtag.utils.logger import get_logger, LogContext
from freshtag.utils.validators import CatalogValidator, ValidationResult
from freshtag.utils.constants import (
    FRESHNESS_THRESHOLDS,
    RECOMMENDATION_POLICY,
    EXPIRY_BUCKETS,
    ANALYTICS_CONFIG,
    ALERT_CONFIG,
    CATALOG_SCHEMA,
    OUTPUT_CONFIG
)

__all__ = [
    'get_logger',
    'LogContext',
    'CatalogValidator',
    'ValidationResult',
    'FRESHNESS_THRESHOLDS',
    'RECOMMENDATION_POLICY',
    'EXPIRY_BUCKETS',
    'ANALYTICS_CONFIG',
    'ALERT_CONFIG',
    'CATALOG_SCHEMA',
    'OUTPUT_CONFIG'
]
