"""Periodic price poll that drives watch alerts."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from ..chat.models import Message
from ..market.interface import FeedError, PriceFeed
from .registry import WatchRegistry

logger = logging.getLogger(__name__)


class PollLoop:
    """Every `interval` seconds, fetch each watched coin and evaluate it.

    Alerts are passed to `post` as soon as they are produced. A failure for
    one coin (feed error, empty result) skips that coin for the cycle and
    leaves its watch alone.

    Shutdown is cooperative: stop() sets an event checked at every tick
    boundary and after every fetch; results that arrive after it is set are
    discarded.
    """

    def __init__(
        self,
        registry: WatchRegistry,
        feed: PriceFeed,
        post: Callable[[Message], Awaitable[bool]],
        interval: float = 30.0,
        stop_event: asyncio.Event | None = None,
    ) -> None:
        self._registry = registry
        self._feed = feed
        self._post = post
        self._interval = interval
        self._stopping = stop_event or asyncio.Event()
        self._task: asyncio.Task | None = None

    def start(self) -> None:
        self._task = asyncio.create_task(self._poll_loop(), name="watch-poller")
        logger.info("Watch poller started: %.1fs interval", self._interval)

    async def stop(self) -> None:
        self._stopping.set()
        if self._task and not self._task.done():
            await self._task
        self._task = None
        logger.info("Watch poller stopped")

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    # --- Internal ---

    async def _poll_loop(self) -> None:
        """Wait one interval (or until stopped), then poll. First poll is one interval in."""
        while not self._stopping.is_set():
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self._interval)
            except TimeoutError:
                pass
            else:
                break
            try:
                await self.poll_once()
            except Exception:
                logger.exception("Watch poll cycle failed")

    async def poll_once(self) -> int:
        """Run one poll cycle. Returns the number of coins evaluated."""
        symbols: list[str] = []
        self._registry.enumerate(lambda symbol, watch: symbols.append(symbol))
        if not symbols:
            return 0

        evaluated = 0
        for symbol in symbols:
            if self._stopping.is_set():
                break

            try:
                coins = await self._feed.fetch(symbol)
            except FeedError as e:
                logger.warning("Skipping %s this cycle: %s", symbol, e)
                continue
            except Exception:
                logger.exception("Skipping %s this cycle: unexpected feed failure", symbol)
                continue

            if self._stopping.is_set():
                logger.debug("Discarding %s quote fetched during shutdown", symbol)
                break
            if not coins:
                continue

            alert = self._registry.evaluate(coins[0])
            evaluated += 1
            if alert is not None:
                try:
                    await self._post(alert)
                except Exception:
                    logger.exception("Failed to deliver alert for %s", symbol)

        logger.debug("Watch poll: evaluated %d/%d coins", evaluated, len(symbols))
        return evaluated
