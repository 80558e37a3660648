"""
Abstract base class for order book normalizers.
"""
from abc import ABC, abstractmethod
from typing import Any

from ..core.types import NormalizedBook


class BaseNormalizer(ABC):
    """Abstract normalizer interface."""

    @abstractmethod
    def normalize(self, raw_book: Any, token_id: str = "") -> NormalizedBook:
        """
        Convert a raw order book payload to a NormalizedBook.

        Must never raise: malformed input degrades to empty sides.
        """
        pass
