"""
Core type definitions for the reward engine.

All prices are floats in [0, 1] for a prediction-market contract.
All depth and reward figures are expressed in USD.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class InvalidConfigurationError(ValueError):
    """Raised when capital or band configuration makes the estimate meaningless."""


@dataclass(frozen=True, slots=True)
class Order:
    """Single resting order (one price level entry)."""
    price: float                    # Limit price, probability terms
    size: float                     # Shares resting at this price

    @property
    def notional(self) -> float:
        """USD value of the order at its own limit price."""
        return self.price * self.size


OrderBookSide = list[Order]


@dataclass(frozen=True, slots=True)
class NormalizedBook:
    """
    Sorted depth ladders for one outcome token.

    Bids are sorted best (highest) first, asks best (lowest) first.
    Orders at the same price are kept as separate entries.
    """
    token_id: str
    bids: OrderBookSide = field(default_factory=list)
    asks: OrderBookSide = field(default_factory=list)

    @property
    def best_bid(self) -> Optional[float]:
        return self.bids[0].price if self.bids else None

    @property
    def best_ask(self) -> Optional[float]:
        return self.asks[0].price if self.asks else None

    @property
    def mid_price(self) -> Optional[float]:
        """Midpoint of best bid and best ask, None if either side is missing."""
        if self.best_bid is None or self.best_ask is None:
            return None
        return (self.best_bid + self.best_ask) / 2

    @property
    def is_empty(self) -> bool:
        return not self.bids and not self.asks


@dataclass(frozen=True, slots=True)
class Outcome:
    """Outcome token of a market."""
    token_id: str
    label: str                      # e.g. "Yes" / "No"


@dataclass(frozen=True)
class MarketContext:
    """Market-level parameters, fixed for the duration of one run."""
    question: str
    daily_reward_pool: float        # USD per day distributed to liquidity providers
    outcomes: tuple[Outcome, ...] = ()
    slug: Optional[str] = None

    def __post_init__(self):
        if not math.isfinite(self.daily_reward_pool) or self.daily_reward_pool < 0:
            raise InvalidConfigurationError(
                f"daily_reward_pool must be a finite number >= 0, got {self.daily_reward_pool}"
            )


@dataclass(frozen=True, slots=True)
class SpreadBand:
    """Symmetric price window around the mid price."""
    label: str
    half_width: float               # 0.01 = +/- 1 cent around mid

    def __post_init__(self):
        if not isinstance(self.half_width, (int, float)) or not math.isfinite(self.half_width):
            raise InvalidConfigurationError(f"Band {self.label!r}: half_width must be finite")
        if self.half_width <= 0:
            raise InvalidConfigurationError(
                f"Band {self.label!r}: half_width must be positive, got {self.half_width}"
            )

    @classmethod
    def from_half_width(cls, half_width: float) -> "SpreadBand":
        """Build a band labelled in cents, e.g. 0.01 -> "1%"."""
        return cls(label=f"{half_width * 100:g}%", half_width=half_width)


DEFAULT_BANDS: tuple[SpreadBand, ...] = (
    SpreadBand("1%", 0.01),
    SpreadBand("2%", 0.02),
    SpreadBand("3%", 0.03),
)


@dataclass(frozen=True, slots=True)
class RewardEstimate:
    """Depth and estimated daily reward for one spread band."""
    band: SpreadBand
    min_price: float                # Lower window bound, clamped at 0
    max_price: float                # Upper window bound, not clamped
    bid_depth_usd: float
    ask_depth_usd: float
    total_depth_usd: float
    user_share: float               # In (0, 1]
    outcome_reward_pool: float      # daily pool * mid price
    estimated_daily_reward: float

    def to_dict(self) -> dict:
        return {
            "band": self.band.label,
            "half_width": self.band.half_width,
            "min_price": self.min_price,
            "max_price": self.max_price,
            "bid_depth_usd": self.bid_depth_usd,
            "ask_depth_usd": self.ask_depth_usd,
            "total_depth_usd": self.total_depth_usd,
            "user_share": self.user_share,
            "outcome_reward_pool": self.outcome_reward_pool,
            "estimated_daily_reward": self.estimated_daily_reward,
        }


class SkipReason(Enum):
    """Why an outcome could not be rated."""
    EMPTY_BIDS = "empty_bids"
    EMPTY_ASKS = "empty_asks"
    EMPTY_BOOK = "empty_book"
    NO_DATA = "no_data"             # Order book could not be retrieved


@dataclass(frozen=True)
class OutcomeReport:
    """
    Result for one outcome: either a rated set of estimates or a skip marker.

    A skipped report never carries estimates or a mid price.
    """
    outcome: Outcome
    mid_price: Optional[float] = None
    estimates: tuple[RewardEstimate, ...] = ()
    skip_reason: Optional[SkipReason] = None

    @classmethod
    def rated(
        cls,
        outcome: Outcome,
        mid_price: float,
        estimates: list[RewardEstimate],
    ) -> "OutcomeReport":
        return cls(outcome=outcome, mid_price=mid_price, estimates=tuple(estimates))

    @classmethod
    def skipped(cls, outcome: Outcome, reason: SkipReason) -> "OutcomeReport":
        return cls(outcome=outcome, skip_reason=reason)

    @property
    def is_rated(self) -> bool:
        return self.skip_reason is None

    def to_dict(self) -> dict:
        return {
            "token_id": self.outcome.token_id,
            "outcome": self.outcome.label,
            "mid_price": self.mid_price,
            "skipped": not self.is_rated,
            "skip_reason": self.skip_reason.value if self.skip_reason else None,
            "estimates": [e.to_dict() for e in self.estimates],
        }
