"""
Logging infrastructure.

Provides logging setup for the service process.
"""
import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once for the whole service.

    Module loggers created with `logging.getLogger(__name__)` propagate here.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ...)
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())
