"""HTTP client for a coinmarketcap-v1 style ticker endpoint."""

from __future__ import annotations

import logging

import httpx

from ..config import DEFAULT_TICKER_URL
from .interface import FeedError, PriceFeed
from .models import TickerSnapshot

logger = logging.getLogger(__name__)


class CoinTickerFeed(PriceFeed):
    """PriceFeed backed by GET <url>?limit=0, which returns a JSON list of coins.

    The endpoint keys its per-coin path by coin id ("bitcoin"), not by symbol
    ("btc"), so a filtered fetch downloads the list and filters it here.
    """

    def __init__(
        self,
        url: str = DEFAULT_TICKER_URL,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def fetch(self, symbol: str = "") -> list[TickerSnapshot]:
        records = await self._get_records()

        coins: list[TickerSnapshot] = []
        for record in records:
            try:
                coins.append(TickerSnapshot.from_api(record))
            except (AttributeError, TypeError, ValueError) as e:
                logger.warning("Skipping ticker record %r: %s", _record_id(record), e)

        wanted = symbol.strip().lower()
        if not wanted:
            return coins
        return [coin for coin in coins if coin.key == wanted][:1]

    async def aclose(self) -> None:
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def _get_records(self) -> list:
        try:
            response = await self._client.get(self._url, params={"limit": 0})
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            raise FeedError(f"ticker request failed: {e}") from e
        except ValueError as e:
            raise FeedError(f"ticker response is not JSON: {e}") from e

        if not isinstance(body, list):
            raise FeedError(f"unexpected ticker payload: {type(body).__name__}")
        logger.debug("Ticker feed returned %d records", len(body))
        return body


def _record_id(record: object) -> str:
    if isinstance(record, dict):
        return str(record.get("id", "???"))
    return "???"
