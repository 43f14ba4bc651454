from __future__ import annotations

import logging
import sys

_LOGGER_PREFIX = "workforce_payroll"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: int | str = logging.INFO, *, stream=None) -> logging.Logger:
    """Attach one stream handler to the package logger (idempotent)."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(level)
    if not root_logger.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root_logger.addHandler(handler)
        root_logger.propagate = False
    return root_logger
