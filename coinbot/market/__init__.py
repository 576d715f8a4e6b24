"""Market data subsystem for coinbot.

Public API:
    TickerSnapshot      - Immutable per-coin market data dataclass
    PriceFeed           - Abstract interface for price providers
    FeedError           - Raised when a feed can't produce data
    create_price_feed   - Factory that selects the HTTP feed or the simulator
    quote_coins         - Quote lines for a list of symbols
    rank_coins          - Top-N coins by market cap
"""

from .factory import create_price_feed
from .interface import FeedError, PriceFeed
from .models import TickerSnapshot
from .quotes import quote_coins, rank_coins

__all__ = [
    "TickerSnapshot",
    "PriceFeed",
    "FeedError",
    "create_price_feed",
    "quote_coins",
    "rank_coins",
]
