"""
Infrastructure shared by the request pipeline.

Exposes the structured logging helpers used across the request pipeline.
"""

from .logging import StructuredLogFormatter, configure_logging, get_logger, log_progress

__all__ = [
    "StructuredLogFormatter",
    "configure_logging",
    "get_logger",
    "log_progress",
]
