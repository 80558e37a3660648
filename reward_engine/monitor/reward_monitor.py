"""
Reward Monitor Orchestrator.

Fetches an event's market metadata, pulls the order book of every outcome,
and rates each outcome against the configured spread bands.
"""
import asyncio
import logging

from ..core.reward_estimator import RewardEstimator
from ..core.types import MarketContext, Outcome, OutcomeReport, SkipReason
from ..gateways.polymarket_rest import ClobClient, GammaClient
from ..normalizers.base import BaseNormalizer
from ..normalizers.polymarket_normalizer import PolymarketBookNormalizer
from .reporter import RewardReporter

logger = logging.getLogger(__name__)


class RewardMonitor:
    """
    Runs one reward estimation pass for a single market.

    Order books are fetched concurrently. Outcomes are independent: a failed
    fetch or a one-sided book only skips that outcome.
    """

    def __init__(
        self,
        estimator: RewardEstimator,
        gamma: GammaClient,
        clob: ClobClient,
        normalizer: BaseNormalizer | None = None,
        reporter: RewardReporter | None = None,
    ):
        self._estimator = estimator
        self._gamma = gamma
        self._clob = clob
        self._normalizer = normalizer or PolymarketBookNormalizer()
        self._reporter = reporter

    async def load_market(self, slug: str, market_index: int = 0) -> MarketContext:
        """Resolve the event slug to a MarketContext."""
        event = await self._gamma.get_event(slug)
        market = GammaClient.market_context(event, market_index)
        logger.info(
            f"Market '{market.question}' pool=${market.daily_reward_pool:.2f} "
            f"outcomes={[o.label for o in market.outcomes]}"
        )
        return market

    async def rate_outcome(self, market: MarketContext, outcome: Outcome) -> OutcomeReport:
        """Fetch, normalize and rate a single outcome."""
        raw_book = await self._clob.get_book(outcome.token_id)
        if raw_book is None:
            return OutcomeReport.skipped(outcome, SkipReason.NO_DATA)

        book = self._normalizer.normalize(raw_book, token_id=outcome.token_id)
        logger.debug(
            f"{outcome.label}: {len(book.bids)} bids, {len(book.asks)} asks "
            f"best_bid={book.best_bid} best_ask={book.best_ask}"
        )
        return self._estimator.estimate(book, market.daily_reward_pool, outcome)

    async def rate_market(self, market: MarketContext) -> list[OutcomeReport]:
        """Rate all outcomes concurrently, returned in outcome order."""
        return list(await asyncio.gather(
            *(self.rate_outcome(market, outcome) for outcome in market.outcomes)
        ))

    async def run(self, slug: str, market_index: int = 0) -> list[OutcomeReport]:
        """Full pass: load market, rate outcomes, report."""
        market = await self.load_market(slug, market_index)
        reports = await self.rate_market(market)

        rated = sum(1 for r in reports if r.is_rated)
        logger.info(f"Rated {rated}/{len(reports)} outcomes")

        if self._reporter:
            self._reporter.report(market, self._estimator.capital, reports)
        return reports
