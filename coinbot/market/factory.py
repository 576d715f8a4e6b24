"""Factory for creating price feeds."""

from __future__ import annotations

import logging

from ..config import FEED_SIMULATOR, Settings
from .interface import PriceFeed

logger = logging.getLogger(__name__)


def create_price_feed(settings: Settings) -> PriceFeed:
    """Create the price feed selected by the settings.

    - feed == "simulator" → SimulatedPriceFeed (GBM simulation, no network)
    - Otherwise → CoinTickerFeed (real data from settings.feed_url)
    """
    if settings.feed == FEED_SIMULATOR:
        from .simulator import SimulatedPriceFeed

        logger.info("Price feed: GBM simulator")
        return SimulatedPriceFeed()
    else:
        from .ticker_client import CoinTickerFeed

        logger.info("Price feed: %s", settings.feed_url)
        return CoinTickerFeed(url=settings.feed_url, timeout=settings.http_timeout)
