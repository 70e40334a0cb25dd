"""
FreshTag Logging
================
Every FreshTag module logs through `get_logger(__name__)`, which gives
it a stdout handler with the shared format below. FreshTag loggers do
not propagate, so an application embedding the library keeps control
of its root logger.

The CLI adjusts all FreshTag loggers at once:
- `set_package_level("DEBUG")` for --log-level
- `attach_log_file(path)` for FRESHTAG_LOG_FILE

Usage:
    from freshtag.utils.logger import LogContext, get_logger
    logger = get_logger(__name__)

    with LogContext(logger, "Loading catalog catalog.csv"):
        products = loader.load()

    # 2024-01-25 10:30:00 | INFO     | freshtag.services.data_loader | Starting: Loading catalog catalog.csv
"""

import logging
import sys
import time
from pathlib import Path
from typing import Iterator, Optional, Union

PACKAGE_PREFIX = 'freshtag'
LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _formatter() -> logging.Formatter:
    return logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)


def _package_loggers() -> Iterator[logging.Logger]:
    """FreshTag loggers created so far (placeholders skipped)."""
    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if name.startswith(PACKAGE_PREFIX) and isinstance(logger, logging.Logger):
            yield logger


def get_logger(
    name: str,
    log_file: Optional[Union[str, Path]] = None,
    level: int = logging.INFO
) -> logging.Logger:
    """
    Logger for a FreshTag module.

    Handlers are attached on first use only, so importing a module twice
    does not duplicate output.

    Parameters
    ----------
    name : str
        Module name, normally __name__
    log_file : str or Path, optional
        Also write to this file
    level : int
        Logger and handler level (default: INFO)
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(level)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(_formatter())
    logger.addHandler(console)

    if log_file:
        logger.addHandler(_file_handler(log_file, level))

    logger.propagate = False
    return logger


def _file_handler(log_file: Union[str, Path], level: int = logging.NOTSET) -> logging.FileHandler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_path, encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(_formatter())
    return handler


def set_package_level(level: Union[int, str]) -> None:
    """
    Set the level of every FreshTag logger and its handlers.

    Raises
    ------
    ValueError
        If `level` is not a known level name
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    for logger in _package_loggers():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)


def attach_log_file(log_file: Union[str, Path]) -> None:
    """Write the output of every FreshTag logger to `log_file` as well."""
    handler = _file_handler(log_file)
    for logger in _package_loggers():
        logger.addHandler(handler)


class LogContext:
    """
    Log the start, end and duration of an operation.

    A failure is logged at ERROR and the exception propagates.
    """

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self._started = None

    def __enter__(self) -> 'LogContext':
        self._started = time.perf_counter()
        self.logger.info(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        elapsed = time.perf_counter() - self._started
        if exc_type is None:
            self.logger.info(f"Completed: {self.operation} ({elapsed:.2f}s)")
        else:
            self.logger.error(f"Failed: {self.operation} ({elapsed:.2f}s) - {exc_val}")
        return False
