"""Logging module for downmix.

Provides configurable logging with JSON format support and file rotation.
"""

from downmix.logging.config import configure_logging
from downmix.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "configure_logging",
]
