"""Logging helpers for the crossgrid package.

Library modules only ask for namespaced loggers. Handlers and levels are the
caller's business: the ``main.py`` entrypoint calls :func:`configure_logging`,
embedding applications configure logging their own way.
"""

from __future__ import annotations

import logging
from typing import Optional

PACKAGE_LOGGER = "crossgrid"

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def configure_logging(level: int = logging.INFO) -> None:
    """Install a single stream handler on the root logger.

    Per-branch search detail is only emitted at DEBUG, so INFO stays readable
    even for large word lists.
    """

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or PACKAGE_LOGGER)
