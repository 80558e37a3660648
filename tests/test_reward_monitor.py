"""
Tests for the reward monitor orchestration and report output.
"""
import io
import json

import httpx
import pytest

from reward_engine.core import (
    MarketContext,
    Outcome,
    OutcomeReport,
    RewardEstimator,
    SkipReason,
    SpreadBand,
)
from reward_engine.gateways.polymarket_rest import (
    ClobClient,
    EventNotFoundError,
    GammaClient,
    PolymarketConfig,
)
from reward_engine.monitor import RewardMonitor, RewardReporter

CONFIG = PolymarketConfig(gamma_url="https://gamma.test", clob_url="https://clob.test")

EVENT = {
    "slug": "test-event",
    "markets": [
        {
            "question": "Will it happen?",
            "clobTokenIds": json.dumps(["yes-token", "no-token", "dead-token", "broken-token"]),
            "outcomes": json.dumps(["Yes", "No", "Maybe", "Broken"]),
            "clobRewards": [{"rewardsDailyRate": 1000}],
        }
    ],
}

BOOKS = {
    "yes-token": {
        "bids": [{"price": "0.50", "size": "100"}],
        "asks": [{"price": "0.52", "size": "50"}],
    },
    "no-token": {
        "bids": [],
        "asks": [{"price": "0.30", "size": "10"}],
    },
    "dead-token": {},
}


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/events":
        if request.url.params.get("slug") == "test-event":
            return httpx.Response(200, json=[EVENT])
        return httpx.Response(200, json=[])
    if request.url.path == "/book":
        token_id = request.url.params.get("token_id")
        if token_id in BOOKS:
            return httpx.Response(200, json=BOOKS[token_id])
        return httpx.Response(500, text="upstream error")
    return httpx.Response(404)


@pytest.fixture
async def clients():
    transport = httpx.MockTransport(_handler)
    async with GammaClient(CONFIG, transport=transport) as gamma, ClobClient(CONFIG, transport=transport) as clob:
        yield gamma, clob


class TestRewardMonitor:

    @pytest.mark.asyncio
    async def test_run_rates_each_outcome_independently(self, clients):
        gamma, clob = clients
        out = io.StringIO()
        monitor = RewardMonitor(
            estimator=RewardEstimator(capital=1000, bands=[SpreadBand("1%", 0.01)]),
            gamma=gamma,
            clob=clob,
            reporter=RewardReporter(stream=out),
        )

        reports = await monitor.run("test-event")

        assert [r.outcome.label for r in reports] == ["Yes", "No", "Maybe", "Broken"]

        yes, no, maybe, broken = reports
        assert yes.is_rated
        assert yes.estimates[0].estimated_daily_reward == pytest.approx(510 * 1000 / 1076)
        assert no.skip_reason == SkipReason.EMPTY_BIDS
        assert maybe.skip_reason == SkipReason.EMPTY_BOOK
        assert broken.skip_reason == SkipReason.NO_DATA

        text = out.getvalue()
        assert "Will it happen?" in text
        assert "Mid Price: 0.5100" in text
        assert "Est. Daily Reward: $473.98" in text
        assert "skipped: empty_bids" in text

    @pytest.mark.asyncio
    async def test_unknown_event_raises(self, clients):
        gamma, clob = clients
        monitor = RewardMonitor(estimator=RewardEstimator(capital=1000), gamma=gamma, clob=clob)
        with pytest.raises(EventNotFoundError):
            await monitor.run("missing-event")

    @pytest.mark.asyncio
    async def test_load_market(self, clients):
        gamma, clob = clients
        monitor = RewardMonitor(estimator=RewardEstimator(capital=1000), gamma=gamma, clob=clob)

        market = await monitor.load_market("test-event")

        assert market.daily_reward_pool == 1000.0
        assert market.outcomes[0] == Outcome("yes-token", "Yes")


class TestRewardReporter:

    def _market(self) -> MarketContext:
        return MarketContext(
            question="Q?",
            daily_reward_pool=100.0,
            outcomes=(Outcome("1", "Yes"),),
            slug="q-event",
        )

    def test_json_output(self):
        out = io.StringIO()
        reports = [OutcomeReport.skipped(Outcome("1", "Yes"), SkipReason.EMPTY_ASKS)]

        RewardReporter(output_format="json", stream=out).report(self._market(), 500.0, reports)

        payload = json.loads(out.getvalue())
        assert payload["event_slug"] == "q-event"
        assert payload["capital"] == 500.0
        assert payload["outcomes"][0]["skip_reason"] == "empty_asks"

    def test_text_header(self):
        out = io.StringIO()
        RewardReporter(stream=out).report(self._market(), 1000.0, [])

        text = out.getvalue()
        assert "Target Event:      q-event" in text
        assert "Investment:        $1,000.00" in text
        assert "Daily Reward Pool: $100.00" in text
