"""Pytest configuration and shared fixtures."""

import pytest

from coinbot.market.interface import FeedError, PriceFeed
from coinbot.market.models import TickerSnapshot


def make_coin(
    symbol: str,
    price: float,
    name: str | None = None,
    market_cap: float = 0.0,
    change_1h: float = 0.0,
    change_24h: float = 0.0,
) -> TickerSnapshot:
    return TickerSnapshot(
        id=(name or symbol).lower(),
        name=name or symbol,
        symbol=symbol,
        price_usd=price,
        market_cap_usd=market_cap,
        percent_change_1h=change_1h,
        percent_change_24h=change_24h,
    )


class FakeFeed(PriceFeed):
    """In-memory PriceFeed. Set prices with set(), failures with fail()."""

    def __init__(self, coins: list[TickerSnapshot] | None = None) -> None:
        self.coins: dict[str, TickerSnapshot] = {c.key: c for c in coins or []}
        self.failing: set[str] = set()
        self.calls: list[str] = []
        self.closed = False

    def set(self, coin: TickerSnapshot) -> None:
        self.coins[coin.key] = coin

    def fail(self, symbol: str = "") -> None:
        """Make fetch(symbol) raise FeedError. "" fails the unfiltered fetch."""
        self.failing.add(symbol.lower())

    async def fetch(self, symbol: str = "") -> list[TickerSnapshot]:
        key = symbol.lower()
        self.calls.append(key)
        if key in self.failing:
            raise FeedError(f"feed down for {key!r}")
        if not key:
            return list(self.coins.values())
        coin = self.coins.get(key)
        return [coin] if coin else []

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def event_loop_policy():
    """Use the default event loop policy for all async tests."""
    import asyncio

    return asyncio.DefaultEventLoopPolicy()


@pytest.fixture
def coin():
    """Factory for TickerSnapshot test data."""
    return make_coin


@pytest.fixture
def feed():
    """FakeFeed preloaded with BTC, ETH and DOGE."""
    return FakeFeed(
        [
            make_coin("BTC", 50000.0, name="Bitcoin", market_cap=1_000_000_000_000.0, change_1h=0.5, change_24h=1.2),
            make_coin("ETH", 3000.0, name="Ethereum", market_cap=360_000_000_000.0, change_1h=-0.25, change_24h=2.0),
            make_coin("DOGE", 0.15, name="Dogecoin", market_cap=21_000_000_000.0),
        ]
    )
