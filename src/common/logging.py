"""Logging for the card publisher.

All project loggers live under the ``card_publisher`` namespace. The
namespace logger owns the single stdout handler; component loggers
(``card_publisher.transformer``, ``card_publisher.client``, ...) carry no
handler of their own and propagate to it.

Usage:
    from src.common.logging import get_logger

    logger = get_logger("transformer")
"""

from __future__ import annotations

import logging
import os
import sys

LOGGER_NAMESPACE = "card_publisher"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level_from_env(default: int) -> int:
    name = os.getenv("CARD_LOG_LEVEL", "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def setup_logging(
    level: int = logging.INFO,
    module_name: str = LOGGER_NAMESPACE,
) -> logging.Logger:
    """Attach the stdout handler to ``module_name`` once and return it.

    ``CARD_LOG_LEVEL`` (e.g. ``DEBUG``) overrides ``level``.
    """
    logger = logging.getLogger(module_name)

    if logger.handlers:
        return logger

    level = _level_from_env(level)
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    return logger


def get_logger(component: str) -> logging.Logger:
    """Return the ``card_publisher.<component>`` logger, configuring the namespace."""
    setup_logging()
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{component}")
