# core/reward_estimator.py
"""
Liquidity reward estimation engine.

For each spread band around the mid price, sums the resting depth inside the
band and estimates the share of the daily reward pool a given capital
commitment would earn against that depth.
"""
import logging
import math
from typing import Callable, Iterable

from reward_engine.core.types import (
    DEFAULT_BANDS,
    InvalidConfigurationError,
    NormalizedBook,
    Order,
    Outcome,
    OutcomeReport,
    RewardEstimate,
    SkipReason,
    SpreadBand,
)

logger = logging.getLogger(__name__)

# Absorbs float rounding in mid +/- half_width so a level exactly on a band
# edge stays inside. Polymarket ticks are >= 0.001.
PRICE_TOLERANCE = 1e-9


def depth_window(mid_price: float, half_width: float) -> tuple[float, float]:
    """Return (min_price, max_price). Lower bound clamped at 0, upper not clamped."""
    return max(0.0, mid_price - half_width), mid_price + half_width


def side_depth(orders: Iterable[Order], in_window: Callable[[Order], bool]) -> float:
    """USD depth of the orders passing the window filter, valued at their own price."""
    return sum((o.notional for o in orders if in_window(o)), 0.0)


def user_share(total_depth: float, capital: float) -> float:
    """
    Fraction of the outcome pool earned by `capital` against `total_depth`.

    Diminishing returns: capital / (depth + capital), always in (0, 1].
    """
    return capital / (total_depth + capital)


class RewardEstimator:
    """
    Estimates daily liquidity rewards per spread band for one outcome.

    The outcome's slice of the market pool is approximated as
    daily_reward_pool * mid_price, using the mid price as the outcome's
    implied probability. Mid prices are not normalized across the outcomes
    of a market, so the slices need not sum to the full pool.
    """

    def __init__(
        self,
        capital: float,
        bands: Iterable[SpreadBand] = DEFAULT_BANDS,
    ):
        bands = tuple(bands)
        if isinstance(capital, bool) or not isinstance(capital, (int, float)):
            raise InvalidConfigurationError(f"capital must be a number, got {capital!r}")
        if not math.isfinite(capital) or capital <= 0:
            raise InvalidConfigurationError(f"capital must be positive, got {capital}")
        if not bands:
            raise InvalidConfigurationError("At least one spread band is required")
        for band in bands:
            if not isinstance(band, SpreadBand):
                raise InvalidConfigurationError(f"Not a SpreadBand: {band!r}")

        self.capital = float(capital)
        self.bands = bands

    def estimate(
        self,
        book: NormalizedBook,
        daily_reward_pool: float,
        outcome: Outcome,
    ) -> OutcomeReport:
        """
        Rate one outcome.

        Returns a skipped report if either side of the book is empty; no
        fictitious mid price is substituted.
        """
        reason = self._skip_reason(book)
        if reason is not None:
            logger.info(f"Skipping outcome {outcome.label}: {reason.value}")
            return OutcomeReport.skipped(outcome, reason)

        mid_price = book.mid_price
        outcome_pool = daily_reward_pool * mid_price

        estimates = [
            self._estimate_band(book, band, mid_price, outcome_pool)
            for band in self.bands
        ]
        return OutcomeReport.rated(outcome, mid_price, estimates)

    def _estimate_band(
        self,
        book: NormalizedBook,
        band: SpreadBand,
        mid_price: float,
        outcome_pool: float,
    ) -> RewardEstimate:
        """
        Depth and reward for a single band.

        The filters admit levels up to PRICE_TOLERANCE outside the window;
        the reported min_price/max_price are the exact window bounds.
        """
        min_price, max_price = depth_window(mid_price, band.half_width)

        bid_depth = side_depth(book.bids, lambda o: o.price >= min_price - PRICE_TOLERANCE)
        ask_depth = side_depth(book.asks, lambda o: o.price <= max_price + PRICE_TOLERANCE)
        total_depth = bid_depth + ask_depth

        share = user_share(total_depth, self.capital)
        reward = outcome_pool * share

        logger.debug(
            f"{book.token_id} band={band.label} window=[{min_price:.4f}, {max_price:.4f}] "
            f"depth={total_depth:.2f} share={share:.4f} reward={reward:.2f}"
        )

        return RewardEstimate(
            band=band,
            min_price=min_price,
            max_price=max_price,
            bid_depth_usd=bid_depth,
            ask_depth_usd=ask_depth,
            total_depth_usd=total_depth,
            user_share=share,
            outcome_reward_pool=outcome_pool,
            estimated_daily_reward=reward,
        )

    @staticmethod
    def _skip_reason(book: NormalizedBook) -> SkipReason | None:
        if book.is_empty:
            return SkipReason.EMPTY_BOOK
        if not book.bids:
            return SkipReason.EMPTY_BIDS
        if not book.asks:
            return SkipReason.EMPTY_ASKS
        return None
