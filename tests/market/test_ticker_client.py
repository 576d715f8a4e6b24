"""Tests for CoinTickerFeed (mocked HTTP)."""

import httpx
import pytest

from coinbot.market.interface import FeedError
from coinbot.market.ticker_client import CoinTickerFeed

URL = "https://ticker.test/v1/ticker/"

RECORDS = [
    {"id": "bitcoin", "name": "Bitcoin", "symbol": "BTC", "price_usd": "50000.0", "market_cap_usd": "1000"},
    {"id": "ethereum", "name": "Ethereum", "symbol": "ETH", "price_usd": "3000.0", "market_cap_usd": "500"},
]


def _feed(handler) -> CoinTickerFeed:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CoinTickerFeed(url=URL, client=client)


def _json(payload, status: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=payload)

    return handler


@pytest.mark.asyncio
class TestCoinTickerFeed:
    """Unit tests for CoinTickerFeed with a mocked transport."""

    async def test_fetch_all(self):
        """Test that an unfiltered fetch returns every coin."""
        feed = _feed(_json(RECORDS))
        coins = await feed.fetch()
        assert [c.symbol for c in coins] == ["BTC", "ETH"]
        assert coins[0].price_usd == 50000.0

    async def test_fetch_requests_full_list(self):
        """Test that the feed asks for all coins with limit=0."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=RECORDS)

        await _feed(handler).fetch()
        assert len(seen) == 1
        assert seen[0].url.params["limit"] == "0"
        assert str(seen[0].url).startswith(URL)

    async def test_fetch_symbol_case_insensitive(self):
        """Test that a symbol filter matches regardless of case."""
        feed = _feed(_json(RECORDS))
        coins = await feed.fetch("eth")
        assert len(coins) == 1
        assert coins[0].name == "Ethereum"

    async def test_fetch_unknown_symbol_is_empty(self):
        """Test that an unlisted symbol yields no records."""
        feed = _feed(_json(RECORDS))
        assert await feed.fetch("xyz") == []

    async def test_http_error_raises_feed_error(self):
        """Test that an HTTP error status becomes FeedError."""
        feed = _feed(_json({"error": "boom"}, status=500))
        with pytest.raises(FeedError):
            await feed.fetch()

    async def test_network_error_raises_feed_error(self):
        """Test that a connection failure becomes FeedError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(FeedError):
            await _feed(handler).fetch("btc")

    async def test_non_json_raises_feed_error(self):
        """Test that a non-JSON body becomes FeedError."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        with pytest.raises(FeedError):
            await _feed(handler).fetch()

    async def test_unexpected_payload_raises_feed_error(self):
        """Test that a JSON object instead of a list becomes FeedError."""
        feed = _feed(_json({"error": "id not found"}))
        with pytest.raises(FeedError):
            await feed.fetch()

    async def test_malformed_record_skipped(self):
        """Test that one bad record doesn't spoil the rest."""
        records = RECORDS + [{"id": "broken", "symbol": "BRK", "price_usd": "n/a"}, "garbage"]
        feed = _feed(_json(records))
        coins = await feed.fetch()
        assert [c.symbol for c in coins] == ["BTC", "ETH"]

    async def test_aclose_leaves_injected_client_open(self):
        """Test that aclose() only closes clients the feed created."""
        client = httpx.AsyncClient(transport=httpx.MockTransport(_json(RECORDS)))
        feed = CoinTickerFeed(url=URL, client=client)
        await feed.aclose()
        assert not client.is_closed
        await client.aclose()

    async def test_aclose_is_idempotent(self):
        """Test that aclose() can be called twice on an owned client."""
        feed = CoinTickerFeed(url=URL)
        await feed.aclose()
        await feed.aclose()
