"""
Recommendation Engine Service
==============================
Generate ranked, advisory mitigation actions for perishable products.

Design Principles:
- Every recommendation has an explanation in plain English
- Logic is deterministic and rule-based: same product and freshness,
  same output, in the same order
- Branch thresholds are the classifier's own FRESHNESS_THRESHOLDS,
  so a Critical tag always gets the Critical branch
- Recommendations never touch product state

Branches (emission order is the priority order):
1. Critical (p <= 20): Donate (15%), Emergency Discount (30%), Priority Sale
2. Warning (20 < p <= 49): Dynamic Discount (40%), Store Transfer (20%)
3. Good (p > 49): Inventory Optimization (no estimate)

Savings are exact fractions of price x quantity; rounding happens only
when reports are written.
"""

import pandas as pd
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from freshtag.models.product import (
    ActionType,
    FreshnessResult,
    Product,
    Recommendation,
    Urgency,
)
from freshtag.utils.constants import FRESHNESS_THRESHOLDS, RECOMMENDATION_POLICY
from freshtag.utils.logger import get_logger

logger = get_logger(__name__)


class RecommendationEngine:
    """
    Map a classified product to an ordered list of recommendations.

    Usage
    -----
    >>> engine = RecommendationEngine()
    >>> freshness = classify(product, now)
    >>> for rec in engine.recommend(product, freshness):
    ...     print(f"{rec.urgency.value}: {rec.title}")
    """

    def __init__(self, policy: Optional[Dict] = None):
        """
        Initialize the recommendation engine.

        Parameters
        ----------
        policy : dict, optional
            Custom savings policy. Uses RECOMMENDATION_POLICY if not provided.
        """
        self.policy = policy or RECOMMENDATION_POLICY
        self.thresholds = FRESHNESS_THRESHOLDS

    def recommend(
        self,
        product: Product,
        freshness: FreshnessResult
    ) -> List[Recommendation]:
        """
        Generate recommendations for one product.

        Parameters
        ----------
        product : Product
            The catalog entry
        freshness : FreshnessResult
            Its freshness at the evaluation instant

        Returns
        -------
        List[Recommendation]
            At least one recommendation, most important first
        """
        percentage = freshness.remaining_life_percentage

        if percentage <= self.thresholds["critical_max"]:
            recs = self._critical_actions(product)
        elif percentage <= self.thresholds["warning_max"]:
            recs = self._warning_actions(product)
        else:
            recs = self._good_actions(product)

        logger.debug(f"{product.id}: {[rec.title for rec in recs]}")
        return recs

    def _critical_actions(self, product: Product) -> List[Recommendation]:
        rules = self.policy["critical"]
        value = product.value

        return [
            Recommendation(
                action=ActionType.DONATE,
                title="Donate to Charity",
                description=(
                    f"Donate {product.quantity} units to local food banks or "
                    f"charities before expiry. Tax deduction available."
                ),
                urgency=Urgency.HIGH,
                estimated_savings=value * rules["donate_savings_rate"]
            ),
            Recommendation(
                action=ActionType.DISCOUNT,
                title=f"Emergency Discount ({rules['emergency_discount_pct']}% off)",
                description=(
                    "Apply maximum discount to move inventory quickly. "
                    "Monitor sales velocity."
                ),
                urgency=Urgency.HIGH,
                estimated_savings=value * rules["emergency_discount_savings_rate"]
            ),
            Recommendation(
                action=ActionType.PRIORITY_SALE,
                title="Priority Sale Display",
                description=(
                    "Move to front-of-store display with \"Manager's Special\" signage."
                ),
                urgency=Urgency.HIGH
            ),
        ]

    def _warning_actions(self, product: Product) -> List[Recommendation]:
        rules = self.policy["warning"]
        value = product.value
        low, high = rules["discount_range"]
        transfer_units = int(product.quantity * rules["transfer_share"])

        return [
            Recommendation(
                action=ActionType.DISCOUNT,
                title=f"Dynamic Discount ({low}-{high}% off)",
                description=(
                    "Apply moderate discount based on sales velocity. Adjust daily."
                ),
                urgency=Urgency.MEDIUM,
                estimated_savings=value * rules["discount_savings_rate"]
            ),
            Recommendation(
                action=ActionType.TRANSFER,
                title="Store-to-Store Transfer",
                description=(
                    f"Transfer {transfer_units} units to high-velocity stores. "
                    f"Optimize inventory distribution."
                ),
                urgency=Urgency.MEDIUM,
                estimated_savings=value * rules["transfer_savings_rate"]
            ),
        ]

    def _good_actions(self, product: Product) -> List[Recommendation]:
        return [
            Recommendation(
                action=ActionType.TRANSFER,
                title="Inventory Optimization",
                description=(
                    "Monitor sales patterns. Consider strategic redistribution if needed."
                ),
                urgency=Urgency.LOW
            ),
        ]


_default_engine = RecommendationEngine()


def recommend(product: Product, freshness: FreshnessResult) -> List[Recommendation]:
    """Recommendations for a product using the default policy."""
    return _default_engine.recommend(product, freshness)


def max_estimated_savings(recommendations: Iterable[Recommendation]) -> float:
    """Largest estimate among recommendations; missing estimates count as 0."""
    return max(
        (rec.estimated_savings or 0.0 for rec in recommendations),
        default=0.0
    )


def recommendations_to_dataframe(
    rows: Sequence[Tuple[Product, List[Recommendation]]]
) -> pd.DataFrame:
    """
    Convert per-product recommendations to a DataFrame for reporting.

    Parameters
    ----------
    rows : sequence of (Product, List[Recommendation])
        Products paired with their recommendations

    Returns
    -------
    pd.DataFrame
        One row per recommendation; `rank` preserves emission order
    """
    columns = [
        'product_id', 'product_name', 'rank', 'action', 'title',
        'urgency', 'estimated_savings', 'description'
    ]
    records = []
    for product, recs in rows:
        for rank, rec in enumerate(recs, start=1):
            records.append({
                'product_id': product.id,
                'product_name': product.name,
                'rank': rank,
                'action': rec.action.value,
                'title': rec.title,
                'urgency': rec.urgency.value,
                'estimated_savings': rec.estimated_savings,
                'description': rec.description
            })

    return pd.DataFrame(records, columns=columns)
