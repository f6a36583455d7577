"""Logging infrastructure.

Basic usage:
    import logging

    from pathtree.infra.logging import get_lazy_logger, setup_logging

    setup_logging()  # reads LOG_* settings once
    logger = logging.getLogger(__name__)
    logger.info("Node placed", extra={"node_id": 9, "path": "3/5/9/"})

    # Lazy evaluation for expensive debug output
    lazy_logger = get_lazy_logger(__name__)
    lazy_logger.debug(lambda: f"Subtree: {[n.path for n in nodes]}")
"""

from pathtree.infra.logging.config import configure_logging, setup_logging
from pathtree.infra.logging.formatters import JSONFormatter
from pathtree.infra.logging.lazy import (
    LazyLoggerAdapter,
    LazyString,
    get_lazy_logger,
    lazy,
)

__all__ = [
    "JSONFormatter",
    "LazyLoggerAdapter",
    "LazyString",
    "configure_logging",
    "get_lazy_logger",
    "lazy",
    "setup_logging",
]
