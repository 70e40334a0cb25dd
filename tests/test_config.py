"""Tests for runtime configuration."""

from pathlib import Path

import pytest

from freshtag.config import Config


def test_defaults():
    config = Config.from_env({})
    assert config.log_level == "INFO"
    assert config.log_file is None
    assert config.top_categories == 5
    assert config.max_alerts == 20
    assert config.clamp_health_score is False
    assert config.output_dir.name == "outputs"


def test_environment_overrides():
    config = Config.from_env({
        "FRESHTAG_OUTPUT_DIR": "/tmp/reports",
        "FRESHTAG_LOG_LEVEL": "debug",
        "FRESHTAG_LOG_FILE": "/tmp/freshtag.log",
        "FRESHTAG_TOP_CATEGORIES": "3",
        "FRESHTAG_MAX_ALERTS": "50",
        "FRESHTAG_CLAMP_HEALTH_SCORE": "true",
    })
    assert config.output_dir == Path("/tmp/reports")
    assert config.log_level == "DEBUG"
    assert config.log_file == Path("/tmp/freshtag.log")
    assert config.top_categories == 3
    assert config.max_alerts == 50
    assert config.clamp_health_score is True


def test_blank_values_are_ignored():
    assert Config.from_env({"FRESHTAG_TOP_CATEGORIES": "  "}).top_categories == 5


def test_invalid_number():
    with pytest.raises(ValueError):
        Config.from_env({"FRESHTAG_MAX_ALERTS": "many"})
