"""Abstract interface for price feeds."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import TickerSnapshot


class FeedError(Exception):
    """Raised when a price feed can't produce ticker data (network, HTTP, parse)."""


class PriceFeed(ABC):
    """Contract for coin price providers.

    The poll loop and the command router pull from the feed on demand; the
    feed itself keeps no watch state.

    Lifecycle:
        feed = create_price_feed(settings)
        coins = await feed.fetch()          # every listed coin
        btc = await feed.fetch("btc")       # [] or [TickerSnapshot]
        await feed.aclose()
    """

    @abstractmethod
    async def fetch(self, symbol: str = "") -> list[TickerSnapshot]:
        """Return current ticker data.

        An empty symbol returns all known coins. A non-empty symbol returns
        zero or one record, matched case-insensitively.
        Raises FeedError on failure.
        """

    async def aclose(self) -> None:
        """Release any held resources. Safe to call multiple times."""
