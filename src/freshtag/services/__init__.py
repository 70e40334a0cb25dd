"""
Services Package
=================
Freshness derivation and reporting services for FreshTag.

Modules:
- lifecycle: Date utilities and the freshness classifier
- recommendation_engine: Ranked mitigation recommendations
- catalog_analytics: Catalog-wide aggregation (CatalogSummary)
- catalog_filter: Search and tag filtering
- notifications: Expiry alert generation
- data_loader: Catalog loading from CSV / JSON
- output_generator: Report export
"""

from freshtag.services.lifecycle import classify
from freshtag.services.recommendation_engine import RecommendationEngine, recommend
from freshtag.services.catalog_analytics import CatalogAccumulator, CatalogSummary, summarize
from freshtag.services.catalog_filter import filter_catalog, count_by_tag
from freshtag.services.notifications import Alert, generate_alerts
from freshtag.services.data_loader import CatalogLoader, products_from_records
from freshtag.services.output_generator import ReportGenerator

__all__ = [
    'classify',
    'RecommendationEngine',
    'recommend',
    'CatalogAccumulator',
    'CatalogSummary',
    'summarize',
    'filter_catalog',
    'count_by_tag',
    'Alert',
    'generate_alerts',
    'CatalogLoader',
    'products_from_records',
    'ReportGenerator'
]
