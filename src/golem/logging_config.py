"""Logging configuration for embedders and scripts driving the engine."""
import logging
import sys
from typing import Optional, TextIO

from .config import load_config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
    """
    Attach a stream handler to the `golem` logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            GOLEM_LOG_LEVEL or WARNING when omitted.
        stream: Where records go; stderr when omitted.
    """
    if level is None:
        level = load_config().log_level

    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("golem")
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(numeric_level)

    root.debug("Logging initialized at %s level", level.upper())

