"""
Logging utilities for the SDK and its helper scripts.

Provides a consistent logging format and configuration.
"""

import logging
import sys

# httpx logs every request at INFO, which would echo query strings and ids.
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with the SDK's default format."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, logging.getLogger().level))


__all__ = ["configure_logging"]
