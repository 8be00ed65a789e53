from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Send ``piper`` log records to stderr at ``level``."""
    logger = logging.getLogger("piper")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


__all__ = ["LOG_FORMAT", "LOG_LEVELS", "setup_logging"]
