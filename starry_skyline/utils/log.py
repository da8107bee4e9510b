"""Logging setup for entry points."""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_configured = False


def setup_logging(verbose: bool = False):
    """Attach one stream handler to the package logger.

    Repeated calls only adjust the level. Library modules never call this.
    """
    global _configured
    logger = logging.getLogger("starry_skyline")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if _configured:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    _configured = True
    return logger
