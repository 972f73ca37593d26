"""Central logging configuration for cpamm apps.

Engine modules only create module-level loggers; handlers and format are set here.
"""

from __future__ import annotations

import logging
from logging import Logger

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: int = logging.INFO) -> Logger:
    """Configure and return the package logger for use by launchers and scripts."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return logging.getLogger("cpamm")


__all__ = ["configure_logging", "LOG_FORMAT"]
