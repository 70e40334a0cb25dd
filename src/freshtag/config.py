"""
FreshTag - Configuration Module
================================

Runtime settings for the command-line tool, with environment overrides.

Environment variables:
    FRESHTAG_OUTPUT_DIR          report directory (default: ./outputs)
    FRESHTAG_LOG_LEVEL           DEBUG, INFO, WARNING, ... (default: INFO)
    FRESHTAG_LOG_FILE            optional log file path
    FRESHTAG_TOP_CATEGORIES      categories kept in the summary (default: 5)
    FRESHTAG_MAX_ALERTS          alerts kept per run (default: 20)
    FRESHTAG_CLAMP_HEALTH_SCORE  "1"/"true" to clamp the health score
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Mapping, Optional

from freshtag.utils.constants import ALERT_CONFIG, ANALYTICS_CONFIG, OUTPUT_CONFIG

ENV_PREFIX = "FRESHTAG_"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class Config:
    """
    Master configuration for FreshTag

    Usage:
        config = Config.from_env()
        config.top_categories = 10
    """
    output_dir: Path = field(
        default_factory=lambda: Path.cwd() / OUTPUT_CONFIG["output_base_dir"]
    )
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    top_categories: int = ANALYTICS_CONFIG["top_categories"]
    max_alerts: int = ALERT_CONFIG["max_alerts"]
    clamp_health_score: bool = ANALYTICS_CONFIG["clamp_health_score"]

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Config':
        """
        Build a Config from FRESHTAG_* variables, falling back to defaults.

        Raises
        ------
        ValueError
            If a numeric variable is not an integer
        """
        environ = os.environ if environ is None else environ
        config = cls()

        def get(name: str) -> Optional[str]:
            value = environ.get(ENV_PREFIX + name)
            return value.strip() if value and value.strip() else None

        if get("OUTPUT_DIR"):
            config.output_dir = Path(get("OUTPUT_DIR"))
        if get("LOG_LEVEL"):
            config.log_level = get("LOG_LEVEL").upper()
        if get("LOG_FILE"):
            config.log_file = Path(get("LOG_FILE"))
        if get("TOP_CATEGORIES"):
            config.top_categories = int(get("TOP_CATEGORIES"))
        if get("MAX_ALERTS"):
            config.max_alerts = int(get("MAX_ALERTS"))
        if get("CLAMP_HEALTH_SCORE"):
            config.clamp_health_score = get("CLAMP_HEALTH_SCORE").lower() in _TRUE_VALUES

        return config
