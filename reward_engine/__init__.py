"""
Reward Engine: Polymarket liquidity reward estimator.

Estimates the daily liquidity-mining reward a fixed capital commitment would
earn on each outcome of a Polymarket market, for a set of spread bands
around the mid price.

Architecture:
    Gamma/CLOB → Gateway → Normalizer → RewardEstimator → Reporter

Key Components:
    - core: Type definitions and the reward estimator
    - normalizers: Raw order book → sorted depth ladders
    - gateways: Polymarket Gamma (events) and CLOB (order books) clients
    - monitor: Orchestration and report output
    - config: YAML/env configuration
    - utils: Logging

Usage:
    from reward_engine import RewardEstimator, PolymarketBookNormalizer

    book = PolymarketBookNormalizer().normalize(raw_book, token_id)
    report = RewardEstimator(capital=1000).estimate(book, daily_pool, outcome)
"""

__version__ = "0.1.0"

from .core import (
    # Types
    DEFAULT_BANDS,
    InvalidConfigurationError,
    MarketContext,
    NormalizedBook,
    Order,
    Outcome,
    OutcomeReport,
    RewardEstimate,
    SkipReason,
    SpreadBand,
    # Estimation
    RewardEstimator,
)
from .normalizers import PolymarketBookNormalizer
from .config import EstimatorConfig
from .utils import setup_logging, get_logger

__all__ = [
    # Version
    "__version__",
    # Core Types
    "DEFAULT_BANDS",
    "InvalidConfigurationError",
    "MarketContext",
    "NormalizedBook",
    "Order",
    "Outcome",
    "OutcomeReport",
    "RewardEstimate",
    "SkipReason",
    "SpreadBand",
    # Components
    "RewardEstimator",
    "PolymarketBookNormalizer",
    # Config
    "EstimatorConfig",
    # Utils
    "setup_logging",
    "get_logger",
]
