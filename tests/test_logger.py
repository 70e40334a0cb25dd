"""Tests for FreshTag logging helpers."""

import logging

import pytest

from freshtag.utils.logger import LogContext, attach_log_file, get_logger, set_package_level


@pytest.fixture
def restore_level():
    yield
    set_package_level(logging.INFO)


def test_get_logger_does_not_duplicate_handlers():
    first = get_logger("freshtag.tests.handlers")
    second = get_logger("freshtag.tests.handlers")
    assert first is second
    assert len(first.handlers) == 1
    assert first.propagate is False


def test_set_package_level_by_name(restore_level):
    logger = get_logger("freshtag.tests.level")
    set_package_level("debug")
    assert logger.level == logging.DEBUG
    assert all(handler.level == logging.DEBUG for handler in logger.handlers)


def test_set_package_level_leaves_other_loggers_alone(restore_level):
    other = logging.getLogger("someone.else")
    other.setLevel(logging.WARNING)
    set_package_level("DEBUG")
    assert other.level == logging.WARNING


def test_unknown_level_name():
    with pytest.raises(ValueError, match="Unknown log level"):
        set_package_level("chatty")


def test_attach_log_file(tmp_path):
    logger = get_logger("freshtag.tests.file")
    log_file = tmp_path / "logs" / "freshtag.log"
    attach_log_file(log_file)
    try:
        logger.info("written to file")
    finally:
        for existing in logging.Logger.manager.loggerDict.values():
            if not isinstance(existing, logging.Logger):
                continue
            for handler in list(existing.handlers):
                if isinstance(handler, logging.FileHandler):
                    existing.removeHandler(handler)
                    handler.close()

    assert "freshtag.tests.file | written to file" in log_file.read_text(encoding="utf-8")


def test_log_context_reports_failure_and_reraises(capsys):
    logger = get_logger("freshtag.tests.context")
    with pytest.raises(RuntimeError):
        with LogContext(logger, "Exporting report"):
            raise RuntimeError("disk full")

    out = capsys.readouterr().out
    assert "Starting: Exporting report" in out
    assert "Failed: Exporting report" in out
    assert "disk full" in out
