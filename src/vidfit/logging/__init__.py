"""Structured logging for vidfit.

Provides configurable logging with JSON format support and file rotation.
"""

from vidfit.logging.config import configure_logging
from vidfit.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "configure_logging",
]
