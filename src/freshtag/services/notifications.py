"""
Alert Generation
================
Turn a catalog snapshot into expiry alerts for display.

Only generation lives here. Dismissal state, periodic re-evaluation and
rendering belong to the caller, which re-invokes generate_alerts on its
own schedule with a fresh `now`.

Rules (per product, in catalog order):
1. Critical tag                       -> critical alert
2. Warning tag and <= 14 days left    -> warning alert
3. 0 < days left <= 1                 -> emergency (critical) alert
Then one reminder when any product is Critical.

Alert ids are derived from product ids, so regenerating for the same
catalog yields the same ids and callers can de-duplicate.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from freshtag.models.product import Product, Tag, Timestamp
from freshtag.services.lifecycle import as_datetime, classify
from freshtag.utils.constants import ALERT_CONFIG
from freshtag.utils.logger import get_logger

logger = get_logger(__name__)

CRITICAL = "critical"
WARNING = "warning"
REMINDER = "reminder"


@dataclass(frozen=True)
class Alert:
    """
    A single expiry alert.

    Attributes
    ----------
    alert_id : str
        Deterministic identifier
    kind : str
        One of "critical", "warning", "reminder"
    title : str
        Headline
    message : str
        Plain English body
    created_at : datetime
        Evaluation instant the alert was generated for
    product_id : str, optional
        Product the alert is about; None for reminders
    """
    alert_id: str
    kind: str
    title: str
    message: str
    created_at: datetime
    product_id: Optional[str] = None


def generate_alerts(
    products: Iterable[Product],
    now: Timestamp,
    config: Optional[dict] = None
) -> List[Alert]:
    """
    Generate alerts for a catalog at an evaluation instant.

    Parameters
    ----------
    products : iterable of Product
        Catalog snapshot
    now : datetime or date
        Evaluation instant
    config : dict, optional
        Overrides for ALERT_CONFIG

    Returns
    -------
    List[Alert]
        At most config["max_alerts"] alerts, keeping the most recent

    Raises
    ------
    InvalidDateRange
        If a product is malformed
    """
    config = {**ALERT_CONFIG, **(config or {})}
    created_at = as_datetime(now)

    alerts = []
    critical_count = 0

    for product in products:
        freshness = classify(product, now)
        days_left = freshness.days_until_expiry

        if freshness.tag is Tag.CRITICAL:
            critical_count += 1
            alerts.append(Alert(
                alert_id=f"critical-{product.id}",
                kind=CRITICAL,
                title="URGENT: Critical Item Alert",
                message=(
                    f"{product.name} expires in {days_left} days. Immediate action "
                    f"required to prevent loss of ${product.value:.2f}."
                ),
                created_at=created_at,
                product_id=product.id
            ))

        if freshness.tag is Tag.WARNING and days_left <= config["warning_days"]:
            alerts.append(Alert(
                alert_id=f"warning-{product.id}",
                kind=WARNING,
                title="Warning: Item Approaching Expiry",
                message=(
                    f"{product.name} expires in {days_left} days. Consider applying "
                    f"discount or transfer to high-velocity store."
                ),
                created_at=created_at,
                product_id=product.id
            ))

        if 0 < days_left <= config["emergency_days"]:
            alerts.append(Alert(
                alert_id=f"emergency-{product.id}",
                kind=CRITICAL,
                title="EMERGENCY: Item Expires Tomorrow",
                message=(
                    f"{product.name} expires tomorrow! Emergency action required - "
                    f"donate, discount heavily, or remove from inventory."
                ),
                created_at=created_at,
                product_id=product.id
            ))

    if critical_count > 0:
        alerts.append(Alert(
            alert_id=f"reminder-{critical_count}",
            kind=REMINDER,
            title="Daily Reminder: Critical Items",
            message=(
                f"You have {critical_count} critical items requiring immediate "
                f"attention. Review and take action to minimize losses."
            ),
            created_at=created_at
        ))

    max_alerts = config["max_alerts"]
    if len(alerts) > max_alerts:
        logger.info(f"Keeping the last {max_alerts} of {len(alerts)} alerts")
        alerts = alerts[len(alerts) - max_alerts:]

    return alerts
