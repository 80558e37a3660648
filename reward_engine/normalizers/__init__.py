"""Normalizers for converting raw order books to sorted depth ladders."""


from .base import BaseNormalizer
from .polymarket_normalizer import PolymarketBookNormalizer, parse_level

__all__ = [
    "BaseNormalizer",
    "PolymarketBookNormalizer",
    "parse_level",
]
