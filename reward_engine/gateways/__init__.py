"""Upstream data gateways."""
from .polymarket_rest import (
    ClobClient,
    EventNotFoundError,
    GammaClient,
    MarketDataError,
    PolymarketConfig,
    PolymarketError,
    extract_slug,
)

__all__ = [
    "ClobClient",
    "EventNotFoundError",
    "GammaClient",
    "MarketDataError",
    "PolymarketConfig",
    "PolymarketError",
    "extract_slug",
]
