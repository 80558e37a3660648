"""
Core module - contains types and the reward estimator.
"""
from .types import (
    DEFAULT_BANDS,
    InvalidConfigurationError,
    MarketContext,
    NormalizedBook,
    Order,
    OrderBookSide,
    Outcome,
    OutcomeReport,
    RewardEstimate,
    SkipReason,
    SpreadBand,
)
from .reward_estimator import (
    RewardEstimator,
    depth_window,
    side_depth,
    user_share,
)

__all__ = [
    # Types
    "DEFAULT_BANDS",
    "InvalidConfigurationError",
    "MarketContext",
    "NormalizedBook",
    "Order",
    "OrderBookSide",
    "Outcome",
    "OutcomeReport",
    "RewardEstimate",
    "SkipReason",
    "SpreadBand",
    # Estimation
    "RewardEstimator",
    "depth_window",
    "side_depth",
    "user_share",
]
