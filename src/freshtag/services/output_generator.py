"""
Output Generator Service
=========================
Tabular and JSON exports of per-item freshness results and the catalog
summary.

Output Structure:
outputs/
    catalog_items.csv        one row per product
    recommendations.csv      one row per recommendation, ranked per product
    catalog_summary.json     CatalogSummary with undefined statistics as null
"""

import json
import pandas as pd
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from freshtag.models.errors import InvalidDateRange, UndefinedStatistic
from freshtag.models.product import Product, Tag, Timestamp
from freshtag.services.catalog_analytics import CatalogSummary, summarize
from freshtag.services.catalog_filter import filter_catalog, partition_valid
from freshtag.services.lifecycle import as_datetime, classify, format_date
from freshtag.services.recommendation_engine import (
    RecommendationEngine,
    max_estimated_savings,
    recommendations_to_dataframe,
)
from freshtag.utils.constants import OUTPUT_CONFIG
from freshtag.utils.logger import LogContext, get_logger

logger = get_logger(__name__)

ITEM_COLUMNS = [
    'id', 'name', 'category', 'location', 'supplier', 'batch_number',
    'manufacturing_date', 'expiry_date', 'price', 'quantity', 'value',
    'remaining_life_pct', 'days_until_expiry', 'tag', 'tag_color',
    'top_action', 'max_estimated_savings'
]


def build_item_table(
    products: Iterable[Product],
    now: Timestamp,
    engine: Optional[RecommendationEngine] = None
) -> pd.DataFrame:
    """
    One row per product with its freshness and best recommendation.

    Products with an invalid date range are skipped with a warning.
    """
    engine = engine or RecommendationEngine()
    records = []

    for product in products:
        try:
            freshness = classify(product, now)
        except InvalidDateRange as e:
            logger.warning(f"Leaving {product.id} out of the item table: {e}")
            continue

        recs = engine.recommend(product, freshness)
        records.append({
            'id': product.id,
            'name': product.name,
            'category': product.category,
            'location': product.location,
            'supplier': product.supplier,
            'batch_number': product.batch_number,
            'manufacturing_date': format_date(product.manufacturing_date),
            'expiry_date': format_date(product.expiry_date),
            'price': product.price,
            'quantity': product.quantity,
            'value': product.value,
            'remaining_life_pct': round(freshness.remaining_life_percentage, 1),
            'days_until_expiry': freshness.days_until_expiry,
            'tag': freshness.tag.label,
            'tag_color': freshness.tag.color,
            'top_action': recs[0].title,
            'max_estimated_savings': max_estimated_savings(recs)
        })

    return pd.DataFrame(records, columns=ITEM_COLUMNS)


def _statistic(summary: CatalogSummary, name: str) -> Optional[float]:
    """Read a ratio statistic, or None when it is undefined."""
    try:
        return round(getattr(summary, name), 2)
    except UndefinedStatistic as e:
        logger.info(f"{e}; reporting null")
        return None


def summary_to_dict(summary: CatalogSummary) -> Dict[str, Any]:
    """Convert a CatalogSummary to a JSON-ready dictionary."""
    return {
        'item_count': summary.item_count,
        'total_value': round(summary.total_value, 2),
        'total_quantity': summary.total_quantity,
        'tag_counts': {tag.label: summary.tag_counts[tag] for tag in Tag},
        'value_at_risk': {
            tag.label: round(summary.value_at_risk[tag], 2) for tag in Tag
        },
        'critical_percentage': _statistic(summary, 'critical_percentage'),
        'warning_percentage': _statistic(summary, 'warning_percentage'),
        'health_score': _statistic(summary, 'health_score'),
        'average_price': _statistic(summary, 'average_price'),
        'category_counts': dict(summary.category_counts),
        'top_categories': [
            {'category': name, 'count': count} for name, count in summary.top_categories
        ],
        'expiry_buckets': dict(summary.expiry_buckets),
        'potential_savings': round(summary.potential_savings, 2),
        'skipped_ids': list(summary.skipped_ids)
    }


class ReportGenerator:
    """
    Export item, recommendation and summary reports to a directory.

    Usage
    -----
    >>> generator = ReportGenerator(output_dir="./outputs")
    >>> paths = generator.export(products, now, tag="Critical")
    """

    def __init__(
        self,
        output_dir: Optional[Union[str, Path]] = None,
        config: Optional[Dict] = None
    ):
        """
        Parameters
        ----------
        output_dir : str or Path, optional
            Directory for outputs; defaults to config["output_base_dir"]
        config : dict, optional
            Custom configuration. Uses OUTPUT_CONFIG if not provided.
        """
        self.config = config or OUTPUT_CONFIG
        self.output_dir = Path(output_dir or self.config['output_base_dir'])
        self.engine = RecommendationEngine()

        logger.info(f"ReportGenerator initialized: output_dir={self.output_dir}")

    def export(
        self,
        products: Iterable[Product],
        now: Timestamp,
        tag: Optional[Union[Tag, str]] = None,
        search_term: Optional[str] = None
    ) -> Dict[str, Path]:
        """
        Write catalog_items.csv, recommendations.csv and catalog_summary.json.

        Malformed products are skipped (and listed in the summary's
        skipped_ids) so one bad row does not block the report.

        Returns
        -------
        Dict[str, Path]
            Written file paths keyed by report name
        """
        products = list(products)
        with LogContext(logger, f"Exporting report for {len(products)} products"):
            valid, invalid = partition_valid(products, now)
            selected = filter_catalog(valid, now, search_term=search_term, tag=tag)

            items = build_item_table(selected, now, self.engine)
            recommendations = recommendations_to_dataframe([
                (product, self.engine.recommend(product, classify(product, now)))
                for product in selected
            ])
            summary = summarize(selected + invalid, now, skip_invalid=True)

            payload = {
                'generated_for': as_datetime(now).isoformat(),
                'filter': {
                    'tag': tag.label if isinstance(tag, Tag) else (tag or 'all'),
                    'search': search_term or ''
                },
                'summary': summary_to_dict(summary)
            }

            self.output_dir.mkdir(parents=True, exist_ok=True)
            paths = {
                'items': self.output_dir / self.config['items_file'],
                'recommendations': self.output_dir / self.config['recommendations_file'],
                'summary': self.output_dir / self.config['summary_file']
            }

            csv_options = {
                'index': self.config.get('csv_index', False),
                'encoding': self.config.get('csv_encoding', 'utf-8'),
                'float_format': self.config.get('float_format')
            }
            items.to_csv(paths['items'], **csv_options)
            recommendations.to_csv(paths['recommendations'], **csv_options)

            with open(paths['summary'], 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, default=str)

            for name, path in paths.items():
                logger.info(f"Saved {name} to {path}")

        return paths

