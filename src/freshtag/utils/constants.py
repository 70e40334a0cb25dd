"""
System-Wide Constants and Configurations
==========================================
Centralized location for thresholds, policy rates and schemas.

Design Principles:
- All magic numbers should be defined here
- The classifier and the recommendation engine read the same
  FRESHNESS_THRESHOLDS, so their tiers cannot drift apart
- Savings rates are fixed heuristic percentages of item value
"""

# =============================================================================
# FRESHNESS THRESHOLDS
# =============================================================================
# Remaining-life percentage bounds (inclusive upper bounds).
#   0 <= p <= 20   -> Critical
#   20 < p <= 49   -> Warning
#   49 < p <= 100  -> Good

FRESHNESS_THRESHOLDS = {
    "critical_max": 20.0,
    "warning_max": 49.0
}

# =============================================================================
# RECOMMENDATION POLICY
# =============================================================================
# Estimated savings are percentages of price x quantity.

RECOMMENDATION_POLICY = {
    "critical": {
        "donate_savings_rate": 0.15,
        "emergency_discount_savings_rate": 0.30,
        "emergency_discount_pct": 70
    },
    "warning": {
        "discount_savings_rate": 0.40,
        "transfer_savings_rate": 0.20,
        "transfer_share": 0.60,     # Share of current quantity to move
        "discount_range": (30, 50)
    }
}

# =============================================================================
# EXPIRY BUCKETS
# =============================================================================
# (label, inclusive upper bound in days). None = unbounded.

EXPIRY_BUCKETS = [
    ("0-7 days", 7),
    ("8-14 days", 14),
    ("15-30 days", 30),
    ("30+ days", None)
]

# =============================================================================
# ANALYTICS
# =============================================================================

ANALYTICS_CONFIG = {
    "top_categories": 5,
    "warning_weight": 0.5,          # Warning items count half as much as critical
    "clamp_health_score": False     # Reproduce the raw formula by default
}

# =============================================================================
# ALERTS
# =============================================================================

ALERT_CONFIG = {
    "warning_days": 14,     # Warning items alert when this close to expiry
    "emergency_days": 1,    # 0 < days <= 1 triggers an emergency alert
    "max_alerts": 20        # Keep only the most recent alerts
}

# =============================================================================
# CATALOG SCHEMA
# =============================================================================

CATALOG_SCHEMA = {
    "name": "catalog",
    "description": "Perishable product catalog snapshot",
    "required_columns": [
        "id", "name", "category", "manufacturing_date",
        "expiry_date", "price", "quantity"
    ],
    "optional_columns": ["location", "supplier", "batch_number", "description"],
    "timestamp_columns": ["manufacturing_date", "expiry_date"],
    "numeric_columns": ["price", "quantity"],
    # Column names used by the original web catalog
    "column_aliases": {
        "manufacturingDate": "manufacturing_date",
        "expiryDate": "expiry_date",
        "batchNumber": "batch_number"
    },
    "supported_extensions": [".csv", ".json"]
}

# =============================================================================
# OUTPUT CONFIGURATION
# =============================================================================

OUTPUT_CONFIG = {
    "output_base_dir": "outputs",
    "items_file": "catalog_items.csv",
    "recommendations_file": "recommendations.csv",
    "summary_file": "catalog_summary.json",
    "csv_encoding": "utf-8",
    "csv_index": False,
    "float_format": "%.2f"
}
