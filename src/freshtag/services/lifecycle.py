"""
Product Lifecycle Service
=========================
Converts absolute manufacturing / expiry dates into relative freshness
measures and a discrete freshness tag.

Design Principles:
- The evaluation instant is always an explicit argument
- Remaining-life percentage and days-until-expiry are computed
  independently from the raw time delta; near expiry they may disagree
  (e.g. "1 day" left while the percentage already rounds to Critical)
- Malformed products (expiry <= manufacturing) raise InvalidDateRange

Remaining-life percentage:
    total     = expiry - manufacturing
    elapsed   = now - manufacturing
    remaining = expiry - now

    remaining <= 0  -> 0
    elapsed   <= 0  -> 100
    otherwise       -> clamp(0, 100, remaining / total * 100)

Tags:
    0  <= p <= 20   Critical
    20 <  p <= 49   Warning
    49 <  p <= 100  Good
"""

import math
from datetime import date, datetime, time, timedelta
from typing import Any, Optional

from freshtag.models.errors import InvalidDateRange
from freshtag.models.product import FreshnessResult, Product, Tag, Timestamp
from freshtag.utils.constants import FRESHNESS_THRESHOLDS
from freshtag.utils.logger import get_logger

logger = get_logger(__name__)

ONE_DAY = timedelta(days=1)


def as_datetime(value: Timestamp) -> datetime:
    """Promote a date to midnight of that day; datetimes pass through."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise TypeError(f"Expected a date or datetime, got {type(value).__name__}")


def remaining_life_percentage(
    manufacturing_date: Timestamp,
    expiry_date: Timestamp,
    now: Timestamp,
    product_id: Optional[Any] = None
) -> float:
    """
    Share of the manufacturing-to-expiry lifespan still ahead of `now`.

    Parameters
    ----------
    manufacturing_date : datetime or date
        Production instant
    expiry_date : datetime or date
        Expiry instant
    now : datetime or date
        Evaluation instant
    product_id : Any, optional
        Carried into the error for the caller's benefit

    Returns
    -------
    float
        Percentage in [0, 100]

    Raises
    ------
    InvalidDateRange
        If expiry is not strictly after manufacturing
    """
    manufactured = as_datetime(manufacturing_date)
    expires = as_datetime(expiry_date)
    now = as_datetime(now)

    total_lifespan = expires - manufactured
    if total_lifespan <= timedelta(0):
        raise InvalidDateRange(
            f"Expiry {expires.isoformat()} is not after manufacturing "
            f"{manufactured.isoformat()}"
            + (f" for product {product_id}" if product_id is not None else ""),
            product_id=product_id
        )

    elapsed = now - manufactured
    remaining = expires - now

    if remaining <= timedelta(0):
        return 0.0
    if elapsed <= timedelta(0):
        return 100.0

    return max(0.0, min(100.0, (remaining / total_lifespan) * 100))


def days_until_expiry(expiry_date: Timestamp, now: Timestamp) -> int:
    """
    Whole days until expiry, rounded up, never negative.

    Computed with exact timedelta arithmetic rather than float seconds,
    so a delta of exactly N days reports N.
    """
    remaining = as_datetime(expiry_date) - as_datetime(now)
    days, rest = divmod(remaining, ONE_DAY)
    if rest:
        days += 1
    return max(0, days)


def adjusted_days_until_expiry(expiry_date: Timestamp, now: Timestamp) -> int:
    """Days until expiry for display, floored at 1 so it never reads zero."""
    return max(1, days_until_expiry(expiry_date, now))


def tag_for_percentage(percentage: float) -> Tag:
    """
    Map a remaining-life percentage to its freshness tag.

    Raises
    ------
    ValueError
        If the percentage is NaN or outside [0, 100]
    """
    if math.isnan(percentage) or not 0 <= percentage <= 100:
        raise ValueError(f"Remaining-life percentage out of range: {percentage}")

    if percentage <= FRESHNESS_THRESHOLDS["critical_max"]:
        return Tag.CRITICAL
    elif percentage <= FRESHNESS_THRESHOLDS["warning_max"]:
        return Tag.WARNING
    else:
        return Tag.GOOD


def classify(product: Product, now: Timestamp) -> FreshnessResult:
    """
    Compute the freshness of a product at an evaluation instant.

    Parameters
    ----------
    product : Product
        Catalog entry to evaluate
    now : datetime or date
        Evaluation instant

    Returns
    -------
    FreshnessResult
        Remaining-life percentage, days until expiry and tag

    Raises
    ------
    InvalidDateRange
        If the product's expiry is not after its manufacturing date
    """
    percentage = remaining_life_percentage(
        product.manufacturing_date,
        product.expiry_date,
        now,
        product_id=product.id
    )
    days_left = days_until_expiry(product.expiry_date, now)
    tag = tag_for_percentage(percentage)

    logger.debug(
        f"Classified {product.id}: {percentage:.1f}% remaining, "
        f"{days_left} days, {tag.label}"
    )

    return FreshnessResult(
        remaining_life_percentage=percentage,
        days_until_expiry=days_left,
        tag=tag
    )


def format_date(value: Timestamp) -> str:
    """Render a date for reports, e.g. 'Jan 5, 2024'."""
    return f"{value:%b} {value.day}, {value.year}"
