"""Diagnostics logger shared by every linkscan module.

Scanning and auditing code logs through ``logger`` and stays silent until
something calls ``configure_logging``. The command line does so on every run,
choosing the level from ``--log-level``, the ``-v`` count or
``LINKSCAN_LOG_LEVEL`` (first one set wins).
"""

from __future__ import annotations

import logging
import os

LOGGER_NAME = "linkscan"
LOG_LEVEL_ENV = "LINKSCAN_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# -v -> INFO, -vv (or more) -> DEBUG
_VERBOSITY_LEVELS = {1: "INFO", 2: "DEBUG"}

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


def resolve_level(level: str | None = None, verbosity: int = 0) -> str | None:
    """Pick the effective level name, or None when logging stays off."""
    if level and level.strip():
        return level.strip().upper()
    if verbosity > 0:
        return _VERBOSITY_LEVELS[min(verbosity, 2)]
    env_level = os.getenv(LOG_LEVEL_ENV, "").strip()
    return env_level.upper() or None


def configure_logging(level: str | None = None, verbosity: int = 0) -> None:
    """Route package logs to stderr at the resolved level, or silence them.

    Handlers are replaced on every call, so repeated CLI runs in one process
    write to the stderr that is current at call time.
    """
    resolved = resolve_level(level, verbosity)
    logger.handlers = []
    logger.propagate = False

    if resolved is None:
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, resolved, logging.INFO))
