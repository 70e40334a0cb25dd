# FreshTag - Perishable Inventory Freshness Engine

"""
FreshTag - Freshness Classification and Mitigation Analytics
=============================================================

Derives, from each perishable product's manufacturing and expiry dates,
a freshness tag (Critical / Warning / Good), a ranked list of mitigation
recommendations, and catalog-wide analytics.

Every computation takes the evaluation instant as an explicit argument,
so results are deterministic for a fixed catalog and instant.

Usage:
    from datetime import datetime
    from freshtag import classify, recommend, summarize

    now = datetime(2024, 1, 25)
    freshness = classify(product, now)
    actions = recommend(product, freshness)
    summary = summarize(catalog, now)
"""

__version__ = "1.0.0"
__author__ = "Team FreshTag"

from freshtag.models.errors import (
    FreshTagError,
    InvalidDateRange,
    UndefinedStatistic,
    CatalogLoadError,
)
from freshtag.models.product import (
    Product,
    Tag,
    FreshnessResult,
    ActionType,
    Urgency,
    Recommendation,
)
from freshtag.services.lifecycle import classify
from freshtag.services.recommendation_engine import recommend
from freshtag.services.catalog_analytics import CatalogSummary, summarize

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
    'Recommendation',
    'CatalogSummary',
    'classify',
    'recommend',
    'summarize',
]
