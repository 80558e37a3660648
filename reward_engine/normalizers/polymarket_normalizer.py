"""
Polymarket CLOB order book normalizer.

Converts /book responses ({"bids": [{"price": "0.5", "size": "100"}, ...],
"asks": [...]}) into sorted numeric depth ladders.
"""
import logging
import math
from typing import Any

from ..core.types import NormalizedBook, Order, OrderBookSide
from .base import BaseNormalizer

logger = logging.getLogger(__name__)


def _to_float(value: Any) -> float | None:
    """Parse a decimal string (or number) to a finite non-negative float."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def parse_level(raw_level: Any) -> Order | None:
    """
    Parse one raw price level.

    Returns None if the level is not a mapping or its price/size is malformed.
    """
    if not isinstance(raw_level, dict):
        return None
    price = _to_float(raw_level.get("price"))
    size = _to_float(raw_level.get("size"))
    if price is None or size is None:
        return None
    return Order(price=price, size=size)


class PolymarketBookNormalizer(BaseNormalizer):
    """Normalizes Polymarket CLOB order books."""

    def normalize(self, raw_book: Any, token_id: str = "") -> NormalizedBook:
        """Parse and sort both sides. Absent or malformed sides become empty."""
        if not isinstance(raw_book, dict):
            return NormalizedBook(token_id=token_id)

        bids = self._parse_side(raw_book.get("bids"), token_id, "bids")
        asks = self._parse_side(raw_book.get("asks"), token_id, "asks")

        # Bids: highest price first. Asks: lowest price first.
        bids.sort(key=lambda o: o.price, reverse=True)
        asks.sort(key=lambda o: o.price)

        return NormalizedBook(token_id=token_id, bids=bids, asks=asks)

    @staticmethod
    def _parse_side(raw_side: Any, token_id: str, side_name: str) -> OrderBookSide:
        if not isinstance(raw_side, list):
            return []

        orders: OrderBookSide = []
        dropped = 0
        for raw_level in raw_side:
            order = parse_level(raw_level)
            if order is None:
                dropped += 1
                continue
            orders.append(order)

        if dropped:
            logger.debug(f"Dropped {dropped} malformed {side_name} levels for token {token_id}")
        return orders
