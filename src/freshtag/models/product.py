"""
Product and Derived Result Models
==================================
Structures flowing through the freshness pipeline:

    Product -> FreshnessResult -> [Recommendation, ...]

Design Decisions:
- Product is frozen: the engine only ever reads catalog entries
- FreshnessResult and Recommendation are derived, ephemeral values
  recomputed from (Product, now) on demand
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

Timestamp = Union[datetime, date]


class Tag(Enum):
    """Discrete freshness classes, ordered from most to least urgent."""
    CRITICAL = "Critical"
    WARNING = "Warning"
    GOOD = "Good"

    @property
    def label(self) -> str:
        return self.value

    @property
    def color(self) -> str:
        """Legacy color key used by filters and report columns."""
        return _TAG_COLORS[self]

    @classmethod
    def parse(cls, value: Union['Tag', str]) -> 'Tag':
        """
        Resolve a Tag from a Tag, a label ("Critical") or a color key ("red").

        Raises
        ------
        ValueError
            If the value names no tag
        """
        if isinstance(value, Tag):
            return value

        key = str(value).strip().lower()
        for tag in cls:
            if key in (tag.value.lower(), tag.name.lower(), tag.color):
                return tag

        raise ValueError(f"Unknown freshness tag: {value!r}")


_TAG_COLORS = {
    Tag.CRITICAL: "red",
    Tag.WARNING: "yellow",
    Tag.GOOD: "green",
}


class ActionType(Enum):
    """Kinds of mitigation the engine can recommend."""
    DONATE = "donate"
    TRANSFER = "transfer"
    DISCOUNT = "discount"
    PRIORITY_SALE = "priority_sale"


class Urgency(Enum):
    """Urgency levels for recommendations."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Product:
    """
    A perishable catalog entry.

    Attributes
    ----------
    id : str
        Unique, stable identifier
    name : str
        Display name
    category : str
        Raw category string (case-sensitive for aggregation)
    manufacturing_date : datetime or date
        When the item was produced
    expiry_date : datetime or date
        When the item expires; must be after manufacturing_date
    price : float
        Unit price (>= 0)
    quantity : int
        Units on hand (>= 0)
    location : str
        Free-text storage location
    supplier : str
        Supplier name
    batch_number : str
        Supplier batch reference
    description : str
        Free-text description
    """
    id: str
    name: str
    category: str
    manufacturing_date: Timestamp
    expiry_date: Timestamp
    price: float
    quantity: int
    location: str = ""
    supplier: str = ""
    batch_number: str = ""
    description: str = ""

    @property
    def value(self) -> float:
        """Monetary value of the stock on hand (price x quantity)."""
        return self.price * self.quantity


@dataclass(frozen=True)
class FreshnessResult:
    """
    Freshness of one product at one evaluation instant.

    Attributes
    ----------
    remaining_life_percentage : float
        Share of the lifespan still ahead, in [0, 100]
    days_until_expiry : int
        Whole days until expiry (ceiling), never negative
    tag : Tag
        Classification derived from remaining_life_percentage
    """
    remaining_life_percentage: float
    days_until_expiry: int
    tag: Tag


@dataclass(frozen=True)
class Recommendation:
    """
    A single advisory mitigation action.

    Attributes
    ----------
    action : ActionType
        Kind of action recommended
    title : str
        Short headline
    description : str
        Plain English explanation of what to do
    urgency : Urgency
        How urgent the action is
    estimated_savings : float, optional
        Heuristic savings in currency; None for qualitative recommendations
    """
    action: ActionType
    title: str
    description: str
    urgency: Urgency
    estimated_savings: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "action": self.action.value,
            "title": self.title,
            "description": self.description,
            "urgency": self.urgency.value,
            "estimated_savings": self.estimated_savings
        }
