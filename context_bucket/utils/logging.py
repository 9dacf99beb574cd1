"""
Centralized structlog setup for the context bucket library.
Path: context_bucket/utils/logging.py
"""

import logging
from typing import Any, Dict, Optional

import structlog

from context_bucket.config import get_value

DEFAULT_LEVEL = "WARNING"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_logger(name: Optional[str] = None) -> Any:
    """Return a structlog bound logger, optionally tagged with a component name"""
    logger = structlog.get_logger()
    if name:
        return logger.bind(component=name)
    return logger


def initialize_logging_config(config: Optional[Dict[str, Any]] = None) -> None:
    """
    Configure structlog from the `logging` section of a configuration dict.

    Args:
        config: Configuration dictionary. Recognised keys are
            `logging.level` (DEBUG..CRITICAL) and `logging.format`
            (`console` or `json`).
    """
    config = config or {}
    level_name = str(get_value(config, "logging.level") or DEFAULT_LEVEL).upper()
    level = _LEVELS.get(level_name)
    if level is None:
        level_name, level = DEFAULT_LEVEL, _LEVELS[DEFAULT_LEVEL]

    log_format = get_value(config, "logging.format") or "console"
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
    get_logger().debug("logging.configured", level=level_name, format=log_format)
