"""Polymarket REST clients for event metadata (Gamma) and order books (CLOB)."""
import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Any

import httpx

from ..core.types import MarketContext, Outcome

logger = logging.getLogger(__name__)


class PolymarketError(Exception):
    """Base error for upstream Polymarket failures."""


class EventNotFoundError(PolymarketError):
    """No event matches the requested slug."""


class MarketDataError(PolymarketError):
    """Event/market payload is missing fields or has an unexpected shape."""


@dataclass
class PolymarketConfig:
    gamma_url: str = "https://gamma-api.polymarket.com"
    clob_url: str = "https://clob.polymarket.com"
    timeout_sec: float = 10.0


def extract_slug(event_url_or_slug: str) -> str:
    """
    Accept a bare slug or a polymarket.com event URL.

    "https://polymarket.com/event/some-slug?tid=1" -> "some-slug"
    """
    s = (event_url_or_slug or "").strip()
    if not s:
        raise ValueError("Empty event slug")

    if s.startswith("http://") or s.startswith("https://"):
        s = re.sub(r"[?#].*$", "", s)
        # Drop scheme and host; only path segments can name the event.
        parts = [p for p in s.split("/")[3:] if p]
        if parts and parts[-1] in {"event", "market", "markets"}:
            parts = parts[:-1]
        if not parts or parts[-1] in {"event", "market", "markets"}:
            raise ValueError(f"No event slug in URL: {event_url_or_slug!r}")
        return parts[-1]

    return s


def _json_list(value: Any, field_name: str) -> list[str]:
    """Gamma returns some lists JSON-encoded as strings, e.g. '["Yes","No"]'."""
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            raise MarketDataError(f"{field_name} is not valid JSON: {value!r}") from e
    if not isinstance(value, list):
        raise MarketDataError(f"{field_name} missing or not a list")
    return [str(x) for x in value]


def _daily_reward_rate(market: dict) -> float:
    """First clobRewards entry's daily rate; 0 when the market has no rewards."""
    rewards = market.get("clobRewards") or []
    if not isinstance(rewards, list) or not rewards or not isinstance(rewards[0], dict):
        return 0.0
    rate = rewards[0].get("rewardsDailyRate")
    if rate is None:
        return 0.0
    try:
        daily_rate = float(rate)
    except (TypeError, ValueError):
        logger.warning(f"Unparseable rewardsDailyRate {rate!r}, using 0")
        return 0.0
    if not math.isfinite(daily_rate) or daily_rate < 0:
        raise MarketDataError(f"rewardsDailyRate must be a finite number >= 0, got {rate!r}")
    return daily_rate


class _RestClient:
    """Shared httpx lifecycle for the Gamma and CLOB clients."""

    def __init__(self, base_url: str, timeout_sec: float, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self._timeout_sec = timeout_sec
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Initialize HTTP client."""
        self._client = httpx.AsyncClient(timeout=self._timeout_sec, transport=self._transport)

    async def disconnect(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        if not self._client:
            raise ConnectionError("Client not connected. Call connect() first.")

        response = await self._client.get(self.base_url + path, params=params)
        response.raise_for_status()
        return response.json()

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()


class GammaClient(_RestClient):
    """Gamma API client for event and market metadata."""

    def __init__(self, config: PolymarketConfig, transport: httpx.AsyncBaseTransport | None = None):
        super().__init__(config.gamma_url, config.timeout_sec, transport)

    async def get_event(self, slug: str) -> dict:
        """
        Fetch an event by slug.

        Raises:
            EventNotFoundError: Gamma returned no event for the slug
            MarketDataError: Response is not a list of events
            httpx.HTTPError: Transport or HTTP status failure
        """
        slug = extract_slug(slug)
        data = await self._get_json("/events", params={"slug": slug})

        if not isinstance(data, list):
            raise MarketDataError(f"Unexpected /events response type: {type(data).__name__}")
        if not data:
            raise EventNotFoundError(f"Event not found for slug '{slug}'. Check the slug.")
        if not isinstance(data[0], dict):
            raise MarketDataError("Unexpected /events entry shape")
        return data[0]

    @staticmethod
    def market_context(event: dict, market_index: int = 0) -> MarketContext:
        """Build the MarketContext for one market of an event."""
        markets = event.get("markets")
        if not isinstance(markets, list) or not markets:
            raise MarketDataError(f"Event '{event.get('slug')}' has no markets")
        if not 0 <= market_index < len(markets):
            raise MarketDataError(
                f"market_index {market_index} out of range (event has {len(markets)} markets)"
            )

        market = markets[market_index]
        if not isinstance(market, dict):
            raise MarketDataError("Unexpected market entry shape")

        token_ids = _json_list(market.get("clobTokenIds"), "clobTokenIds")
        labels = _json_list(market.get("outcomes"), "outcomes")
        if len(token_ids) != len(labels):
            raise MarketDataError(
                f"Mismatched outcomes/clobTokenIds: outcomes={len(labels)} token_ids={len(token_ids)}"
            )

        return MarketContext(
            question=str(market.get("question") or ""),
            daily_reward_pool=_daily_reward_rate(market),
            outcomes=tuple(Outcome(token_id=t, label=l) for t, l in zip(token_ids, labels)),
            slug=market.get("slug") or event.get("slug"),
        )


class ClobClient(_RestClient):
    """Public CLOB client for order books. No auth or signing."""

    def __init__(self, config: PolymarketConfig, transport: httpx.AsyncBaseTransport | None = None):
        super().__init__(config.clob_url, config.timeout_sec, transport)

    async def get_book(self, token_id: str) -> dict | None:
        """
        Fetch the raw order book for an outcome token.

        Returns None on any retrieval failure so the outcome is skipped
        instead of aborting the run.
        """
        try:
            data = await self._get_json("/book", params={"token_id": token_id})
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Order book fetch failed for token {token_id}: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Unexpected /book response for token {token_id}: {type(data).__name__}")
            return None
        return data
