"""
Catalog Filtering
=================
Search-term and freshness-tag filtering over a catalog snapshot.

A product matches a search term when its name, category, location or
description contains the term, case-insensitively. Catalog order is
preserved.
"""

from typing import Dict, Iterable, List, Optional, Tuple, Union

from freshtag.models.errors import InvalidDateRange
from freshtag.models.product import Product, Tag, Timestamp
from freshtag.services.lifecycle import classify
from freshtag.utils.logger import get_logger

logger = get_logger(__name__)

SEARCH_FIELDS = ("name", "category", "location", "description")

ALL_TAGS = "all"


def matches_search(product: Product, search_term: Optional[str]) -> bool:
    if not search_term:
        return True
    needle = search_term.lower()
    return any(needle in (getattr(product, name) or "").lower() for name in SEARCH_FIELDS)


def resolve_tag(tag: Optional[Union[Tag, str]]) -> Optional[Tag]:
    """None or "all" means no tag filter; anything else must name a tag."""
    if tag is None or (isinstance(tag, str) and tag.strip().lower() == ALL_TAGS):
        return None
    return Tag.parse(tag)


def filter_catalog(
    products: Iterable[Product],
    now: Timestamp,
    search_term: Optional[str] = None,
    tag: Optional[Union[Tag, str]] = None
) -> List[Product]:
    """
    Products matching a search term and freshness tag.

    Parameters
    ----------
    products : iterable of Product
        Catalog snapshot
    now : datetime or date
        Evaluation instant for tag classification
    search_term : str, optional
        Case-insensitive substring; empty or None matches everything
    tag : Tag or str, optional
        Tag, label ("Warning") or color key ("yellow"); None or "all"
        disables the tag filter

    Raises
    ------
    ValueError
        If tag names no known tag
    InvalidDateRange
        If a tag filter is active and a searched product is malformed
    """
    wanted = resolve_tag(tag)

    selected = []
    for product in products:
        if not matches_search(product, search_term):
            continue
        if wanted is not None and classify(product, now).tag is not wanted:
            continue
        selected.append(product)

    logger.debug(
        f"Filter search={search_term!r} tag={wanted.label if wanted else ALL_TAGS}: "
        f"{len(selected)} products"
    )
    return selected


def count_by_tag(products: Iterable[Product], now: Timestamp) -> Dict[str, int]:
    """Product counts for the tag filter: {"all": n, "Critical": c, ...}."""
    counts = {ALL_TAGS: 0}
    counts.update({tag.label: 0 for tag in Tag})

    for product in products:
        counts[ALL_TAGS] += 1
        counts[classify(product, now).tag.label] += 1

    return counts


def partition_valid(
    products: Iterable[Product],
    now: Timestamp
) -> Tuple[List[Product], List[Product]]:
    """Split products into (classifiable, malformed), keeping catalog order."""
    valid, invalid = [], []
    for product in products:
        try:
            classify(product, now)
        except InvalidDateRange as e:
            logger.warning(f"Product {product.id} has an invalid date range: {e}")
            invalid.append(product)
        else:
            valid.append(product)
    return valid, invalid
