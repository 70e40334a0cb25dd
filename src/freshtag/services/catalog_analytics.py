"""
Catalog Analytics Service
=========================
Roll per-product freshness results into catalog-wide statistics.

Design Principles:
- Single pass: each product is classified once and folded into a
  CatalogAccumulator
- Accumulators merge associatively, so a catalog may be split into
  partitions, accumulated independently and merged in any grouping
- Ratios over an empty denominator raise UndefinedStatistic instead of
  returning a sentinel a caller could mistake for a measurement

Derived statistics:
    critical_percentage = critical / items * 100
    warning_percentage  = warning / items * 100
    health_score        = 100 - critical_percentage - 0.5 * warning_percentage
    average_price       = total_value / total_quantity

The health score is not clamped by default. Since critical + warning
never exceeds the item count it already stays within [0, 100]; setting
ANALYTICS_CONFIG["clamp_health_score"] clamps it explicitly.
"""

from dataclasses import dataclass, field
from functools import reduce
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from freshtag.models.errors import InvalidDateRange, UndefinedStatistic
from freshtag.models.product import FreshnessResult, Product, Tag, Timestamp
from freshtag.utils.constants import ANALYTICS_CONFIG, EXPIRY_BUCKETS
from freshtag.utils.logger import get_logger
from freshtag.services.lifecycle import classify
from freshtag.services.recommendation_engine import (
    RecommendationEngine,
    max_estimated_savings,
)

logger = get_logger(__name__)


def expiry_bucket(days: int) -> str:
    """Label of the expiry bucket a days-until-expiry value falls in."""
    for label, upper in EXPIRY_BUCKETS:
        if upper is None or days <= upper:
            return label
    raise ValueError(f"No expiry bucket for {days} days")


def _merge_counts(left: Mapping, right: Mapping) -> Dict:
    """Sum two count mappings; keys keep left-then-right first-seen order."""
    merged = dict(left)
    for key, value in right.items():
        merged[key] = merged.get(key, 0) + value
    return merged


def _zero_tags(kind=int) -> Dict[Tag, float]:
    return {tag: kind() for tag in Tag}


def _zero_buckets() -> Dict[str, int]:
    return {label: 0 for label, _ in EXPIRY_BUCKETS}


@dataclass(frozen=True)
class CatalogAccumulator:
    """
    Running tallies for a catalog (or a partition of one).

    Build one per product with `for_product`, combine with `merge`.
    The empty accumulator is the identity of `merge`.
    """
    item_count: int = 0
    total_value: float = 0.0
    total_quantity: int = 0
    tag_counts: Dict[Tag, int] = field(default_factory=_zero_tags)
    value_at_risk: Dict[Tag, float] = field(default_factory=lambda: _zero_tags(float))
    category_counts: Dict[str, int] = field(default_factory=dict)
    expiry_buckets: Dict[str, int] = field(default_factory=_zero_buckets)
    potential_savings: float = 0.0
    skipped_ids: Tuple[str, ...] = ()

    @classmethod
    def for_product(
        cls,
        product: Product,
        freshness: FreshnessResult,
        best_savings: float
    ) -> 'CatalogAccumulator':
        """Tallies contributed by a single classified product."""
        value = product.value

        tag_counts = _zero_tags()
        tag_counts[freshness.tag] = 1
        value_at_risk = _zero_tags(float)
        value_at_risk[freshness.tag] = value
        buckets = _zero_buckets()
        buckets[expiry_bucket(freshness.days_until_expiry)] = 1

        return cls(
            item_count=1,
            total_value=value,
            total_quantity=product.quantity,
            tag_counts=tag_counts,
            value_at_risk=value_at_risk,
            category_counts={product.category: 1},
            expiry_buckets=buckets,
            potential_savings=best_savings
        )

    @classmethod
    def for_skipped(cls, product_id: str) -> 'CatalogAccumulator':
        """A malformed product that was left out of the statistics."""
        return cls(skipped_ids=(product_id,))

    def merge(self, other: 'CatalogAccumulator') -> 'CatalogAccumulator':
        """Combine two accumulators without modifying either."""
        return CatalogAccumulator(
            item_count=self.item_count + other.item_count,
            total_value=self.total_value + other.total_value,
            total_quantity=self.total_quantity + other.total_quantity,
            tag_counts=_merge_counts(self.tag_counts, other.tag_counts),
            value_at_risk=_merge_counts(self.value_at_risk, other.value_at_risk),
            category_counts=_merge_counts(self.category_counts, other.category_counts),
            expiry_buckets=_merge_counts(self.expiry_buckets, other.expiry_buckets),
            potential_savings=self.potential_savings + other.potential_savings,
            skipped_ids=self.skipped_ids + other.skipped_ids
        )


@dataclass(frozen=True)
class CatalogSummary:
    """
    Catalog-wide statistics.

    Counts and sums are plain attributes and are zero for an empty
    catalog. Ratio statistics are properties that raise
    UndefinedStatistic when their denominator is zero.

    Attributes
    ----------
    item_count : int
        Number of products summarized
    total_value : float
        Sum of price x quantity
    total_quantity : int
        Sum of quantities
    tag_counts : Dict[Tag, int]
        Products per tag; sums to item_count
    value_at_risk : Dict[Tag, float]
        Value per tag; sums to total_value
    category_counts : Dict[str, int]
        Products per raw category, in first-seen order
    top_categories : List[Tuple[str, int]]
        Categories by count descending, ties in first-seen order
    expiry_buckets : Dict[str, int]
        Products per days-until-expiry bucket
    potential_savings : float
        Best estimated savings per product, summed
    skipped_ids : Tuple[str, ...]
        Malformed products left out (only with skip_invalid=True)
    clamp_health_score : bool
        Whether health_score is clamped to [0, 100]
    """
    item_count: int
    total_value: float
    total_quantity: int
    tag_counts: Dict[Tag, int]
    value_at_risk: Dict[Tag, float]
    category_counts: Dict[str, int]
    top_categories: List[Tuple[str, int]]
    expiry_buckets: Dict[str, int]
    potential_savings: float
    skipped_ids: Tuple[str, ...] = ()
    clamp_health_score: bool = False

    @classmethod
    def from_accumulator(
        cls,
        acc: CatalogAccumulator,
        top_n: Optional[int] = None,
        clamp_health_score: Optional[bool] = None
    ) -> 'CatalogSummary':
        top_n = ANALYTICS_CONFIG["top_categories"] if top_n is None else top_n
        if clamp_health_score is None:
            clamp_health_score = ANALYTICS_CONFIG["clamp_health_score"]

        # sorted() is stable, so equal counts keep first-seen order
        ranked = sorted(acc.category_counts.items(), key=lambda item: -item[1])

        return cls(
            item_count=acc.item_count,
            total_value=acc.total_value,
            total_quantity=acc.total_quantity,
            tag_counts=dict(acc.tag_counts),
            value_at_risk=dict(acc.value_at_risk),
            category_counts=dict(acc.category_counts),
            top_categories=ranked[:top_n],
            expiry_buckets=dict(acc.expiry_buckets),
            potential_savings=acc.potential_savings,
            skipped_ids=acc.skipped_ids,
            clamp_health_score=clamp_health_score
        )

    @property
    def critical_percentage(self) -> float:
        return self._share_of_items(Tag.CRITICAL, "critical_percentage")

    @property
    def warning_percentage(self) -> float:
        return self._share_of_items(Tag.WARNING, "warning_percentage")

    @property
    def health_score(self) -> float:
        if self.item_count == 0:
            raise UndefinedStatistic("health_score", "catalog has no items")

        weight = ANALYTICS_CONFIG["warning_weight"]
        score = 100 - self.critical_percentage - weight * self.warning_percentage
        if self.clamp_health_score:
            score = max(0.0, min(100.0, score))
        return score

    @property
    def average_price(self) -> float:
        """Value-weighted average unit price."""
        if self.total_quantity == 0:
            raise UndefinedStatistic("average_price", "total quantity is zero")
        return self.total_value / self.total_quantity

    def _share_of_items(self, tag: Tag, statistic: str) -> float:
        if self.item_count == 0:
            raise UndefinedStatistic(statistic, "catalog has no items")
        return self.tag_counts[tag] / self.item_count * 100


def accumulate(
    catalog: Iterable[Product],
    now: Timestamp,
    skip_invalid: bool = False,
    engine: Optional[RecommendationEngine] = None
) -> CatalogAccumulator:
    """
    Fold a catalog (or partition) into a CatalogAccumulator.

    Raises
    ------
    InvalidDateRange
        If a product is malformed and skip_invalid is False
    """
    engine = engine or RecommendationEngine()

    def contribution(product: Product) -> CatalogAccumulator:
        try:
            freshness = classify(product, now)
        except InvalidDateRange as e:
            if not skip_invalid:
                raise
            logger.warning(f"Skipping product {product.id}: {e}")
            return CatalogAccumulator.for_skipped(product.id)

        best = max_estimated_savings(engine.recommend(product, freshness))
        return CatalogAccumulator.for_product(product, freshness, best)

    return reduce(
        CatalogAccumulator.merge,
        (contribution(product) for product in catalog),
        CatalogAccumulator()
    )


def summarize(
    catalog: Iterable[Product],
    now: Timestamp,
    skip_invalid: bool = False,
    top_n: Optional[int] = None,
    clamp_health_score: Optional[bool] = None
) -> CatalogSummary:
    """
    Summarize a catalog at an evaluation instant.

    Parameters
    ----------
    catalog : iterable of Product
        Read-only catalog snapshot
    now : datetime or date
        Evaluation instant
    skip_invalid : bool
        Skip (and log) malformed products instead of raising
    top_n : int, optional
        Categories kept in top_categories (default 5)
    clamp_health_score : bool, optional
        Override ANALYTICS_CONFIG["clamp_health_score"]

    Returns
    -------
    CatalogSummary
        Catalog-wide statistics

    Raises
    ------
    InvalidDateRange
        If a product is malformed and skip_invalid is False
    """
    acc = accumulate(catalog, now, skip_invalid=skip_invalid)
    summary = CatalogSummary.from_accumulator(
        acc, top_n=top_n, clamp_health_score=clamp_health_score
    )

    counts = ", ".join(f"{summary.tag_counts[tag]} {tag.label}" for tag in Tag)
    logger.info(f"Summarized {summary.item_count} products: {counts}")
    if summary.skipped_ids:
        logger.warning(f"Skipped {len(summary.skipped_ids)} malformed products")

    return summary
