"""Runtime settings, read from environment variables."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

logger = logging.getLogger(__name__)

DEFAULT_TICKER_URL = "https://api.coinmarketcap.com/v1/ticker/"
FEED_HTTP = "http"
FEED_SIMULATOR = "simulator"

N = TypeVar("N", int, float)


@dataclass(frozen=True)
class Settings:
    """Bot configuration.

    Environment variables (all optional):
        COINBOT_POLL_INTERVAL  seconds between watch poll cycles (default 30)
        COINBOT_FEED           "http" or "simulator" (default "http")
        COINBOT_FEED_URL       ticker endpoint for the http feed
        COINBOT_HTTP_TIMEOUT   per-request timeout in seconds (default 10)
        COINBOT_MAX_RANK       upper bound for the rank command (default 30)
        COINBOT_LOG_LEVEL      logging level name (default INFO)
    """

    poll_interval: float = 30.0
    feed: str = FEED_HTTP
    feed_url: str = DEFAULT_TICKER_URL
    http_timeout: float = 10.0
    max_rank: int = 30
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        feed = os.environ.get("COINBOT_FEED", "").strip().lower() or FEED_HTTP
        if feed not in (FEED_HTTP, FEED_SIMULATOR):
            logger.warning("Unknown COINBOT_FEED %r, using %r", feed, FEED_HTTP)
            feed = FEED_HTTP

        return cls(
            poll_interval=_positive("COINBOT_POLL_INTERVAL", float, cls.poll_interval),
            feed=feed,
            feed_url=os.environ.get("COINBOT_FEED_URL", "").strip() or DEFAULT_TICKER_URL,
            http_timeout=_positive("COINBOT_HTTP_TIMEOUT", float, cls.http_timeout),
            max_rank=_positive("COINBOT_MAX_RANK", int, cls.max_rank),
            log_level=os.environ.get("COINBOT_LOG_LEVEL", "").strip().upper() or cls.log_level,
        )


def _positive(name: str, cast: Callable[[str], N], default: N) -> N:
    """Read a positive number from the environment, falling back to default."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", name, raw)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive", name, raw)
        return default
    return value
