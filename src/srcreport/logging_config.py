"""Logging setup for the srcreport command."""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

SIMPLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
)

LOG_LEVEL_ENV = "SRCREPORT_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging to stderr.

    Args:
        level: Log level override. If not provided, uses SRCREPORT_LOG_LEVEL or WARNING.
    """
    level_name = (level or os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)).upper()
    log_level = getattr(logging, level_name, logging.WARNING)

    # Line numbers only matter when debugging
    fmt = DETAILED_FORMAT if log_level == logging.DEBUG else SIMPLE_FORMAT

    # stdout carries the report
    logging.basicConfig(
        level=log_level,
        format=fmt,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
