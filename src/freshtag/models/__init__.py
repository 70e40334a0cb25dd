"""
Models Package
===============
Data models and error types for the FreshTag freshness engine.

Modules:
- product: Product, freshness result and recommendation structures
- errors: Exception hierarchy raised by the services
"""

from freshtag.models.errors import (
    FreshTagError,
    InvalidDateRange,
    UndefinedStatistic,
    CatalogLoadError
)
from freshtag.models.product import (
    Product,
    Tag,
    FreshnessResult,
    ActionType,
    Urgency,
    Recommendation
)

__all__ = [
    'FreshTagError',
    'InvalidDateRange',
    'UndefinedStatistic',
    'CatalogLoadError',
    'Product',
    'Tag',
    'FreshnessResult',
    'ActionType',
    'Urgency',
    'Recommendation'
]
