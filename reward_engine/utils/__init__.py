"""
Utility functions and helpers.
"""
from .logging import (
    setup_logging,
    get_logger,
    JsonFormatter,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "JsonFormatter",
]
