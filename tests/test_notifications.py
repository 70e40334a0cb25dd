"""Tests for expiry alert generation."""

from datetime import datetime

from freshtag.services.notifications import CRITICAL, REMINDER, WARNING, generate_alerts
from tests.conftest import (
    CRITICAL_DATES,
    GOOD_DATES,
    NOW,
    WARNING_DATES,
    WARNING_SOON_DATES,
    make_product,
)


def kinds(alerts):
    return [(a.alert_id, a.kind) for a in alerts]


def test_critical_product_alert_and_reminder():
    product = make_product("C1", CRITICAL_DATES, price=2.5, quantity=10, name="Milk")
    alerts = generate_alerts([product], NOW)

    assert kinds(alerts) == [("critical-C1", CRITICAL), ("reminder-1", REMINDER)]
    assert alerts[0].product_id == "C1"
    assert alerts[0].message == (
        "Milk expires in 6 days. Immediate action required to prevent loss of $25.00."
    )
    assert alerts[1].product_id is None
    assert "1 critical items" in alerts[1].message
    assert all(a.created_at == NOW for a in alerts)


def test_warning_alert_only_within_fourteen_days():
    soon = make_product("W1", WARNING_SOON_DATES)   # 11 days left
    later = make_product("W2", WARNING_DATES)       # 16 days left
    assert kinds(generate_alerts([soon, later], NOW)) == [("warning-W1", WARNING)]


def test_warning_window_is_configurable():
    later = make_product("W2", WARNING_DATES)
    alerts = generate_alerts([later], NOW, {"warning_days": 20})
    assert kinds(alerts) == [("warning-W2", WARNING)]


def test_emergency_alert_when_expiring_within_a_day():
    product = make_product("E1", (datetime(2024, 1, 1), datetime(2024, 1, 25, 12)))
    alerts = generate_alerts([product], NOW)
    assert kinds(alerts) == [
        ("critical-E1", CRITICAL),
        ("emergency-E1", CRITICAL),
        ("reminder-1", REMINDER),
    ]
    assert alerts[1].title == "EMERGENCY: Item Expires Tomorrow"


def test_expired_product_gets_no_emergency_alert():
    product = make_product("X1", (datetime(2024, 1, 1), datetime(2024, 1, 20)))
    assert kinds(generate_alerts([product], NOW)) == [
        ("critical-X1", CRITICAL), ("reminder-1", REMINDER)
    ]


def test_good_products_produce_no_alerts():
    assert generate_alerts([make_product("G1", GOOD_DATES)], NOW) == []
    assert generate_alerts([], NOW) == []


def test_ids_are_stable_across_runs():
    catalog = [make_product("C1"), make_product("W1", WARNING_SOON_DATES)]
    assert generate_alerts(catalog, NOW) == generate_alerts(catalog, NOW)


def test_keeps_only_the_most_recent_alerts():
    catalog = [make_product(f"C{i}") for i in range(5)]
    alerts = generate_alerts(catalog, NOW, {"max_alerts": 3})
    assert kinds(alerts) == [
        ("critical-C3", CRITICAL), ("critical-C4", CRITICAL), ("reminder-5", REMINDER)
    ]
