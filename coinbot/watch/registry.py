"""Thread-safe registry of per-coin price watches."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from threading import Lock

from ..chat.models import Message
from ..market.models import TickerSnapshot
from .models import Watch

logger = logging.getLogger(__name__)


class WatchRegistry:
    """Thread-safe map of coin symbol -> Watch.

    Writers: command handlers (register/deregister), the poll loop (evaluate).
    Readers: the watchlist command and the poll loop (enumerate).

    Every operation holds the lock only for dict work; no I/O happens inside
    it. Symbols are normalized to lowercase on the way in.
    """

    def __init__(self) -> None:
        self._watches: dict[str, Watch] = {}
        self._lock = Lock()

    def register(self, channel: str, threshold: int, snapshot: TickerSnapshot | None) -> Message | None:
        """Start (or replace) the watch for snapshot's coin and evaluate it once.

        The new watch's baseline is the snapshot's own price, so the immediate
        evaluation sees a zero delta: it only records the baseline and always
        returns None for a fresh registration.
        """
        if snapshot is None:
            return None
        if threshold <= 0:
            raise ValueError(f"threshold must be positive, got {threshold}")

        with self._lock:
            self._watches[snapshot.key] = Watch(
                channel=channel,
                name=snapshot.name,
                last_price=snapshot.price_usd,
                threshold=threshold,
            )
            logger.info("Watching %s for %s (threshold $%d)", snapshot.key, channel, threshold)
            return self._evaluate(snapshot)

    def deregister(self, symbol: str) -> None:
        """Stop watching a coin. No-op if it isn't watched."""
        with self._lock:
            if self._watches.pop(symbol.lower(), None) is not None:
                logger.info("Unwatched %s", symbol.lower())

    def enumerate(self, visitor: Callable[[str, Watch], None]) -> None:
        """Call visitor(symbol, watch) for every watch.

        The pairs are copied under the lock first, then visited without it,
        so a visitor sees one point-in-time view and may safely call back into
        the registry.
        """
        for symbol, watch in self.snapshot().items():
            visitor(symbol, watch)

    def snapshot(self) -> dict[str, Watch]:
        """Point-in-time copy of all watches."""
        with self._lock:
            return {symbol: replace(watch) for symbol, watch in self._watches.items()}

    def evaluate(self, snapshot: TickerSnapshot | None) -> Message | None:
        """Record a fresh price for a watched coin. Returns an alert on breach."""
        if snapshot is None:
            return None
        with self._lock:
            return self._evaluate(snapshot)

    def get(self, symbol: str) -> Watch | None:
        """Copy of the watch for a coin, or None if not watched."""
        with self._lock:
            watch = self._watches.get(symbol.lower())
            return replace(watch) if watch else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._watches)

    def __contains__(self, symbol: str) -> bool:
        with self._lock:
            return symbol.lower() in self._watches

    # --- Internal (caller holds the lock) ---

    def _evaluate(self, snapshot: TickerSnapshot) -> Message | None:
        watch = self._watches.get(snapshot.key)
        if watch is None:
            # Only symbols from enumerate() should get here; a concurrent unwatch can race it.
            logger.warning("Evaluate for unwatched coin %s ignored", snapshot.key)
            return None

        delta = snapshot.price_usd - watch.last_price
        watch.last_price = snapshot.price_usd

        if abs(delta) > watch.threshold:
            logger.info("Alert %s: moved %+.2f (threshold %d)", snapshot.key, delta, watch.threshold)
            return Message(
                channel=watch.channel,
                text=f"[ {snapshot.symbol} ] ${delta:+.2f} to ${snapshot.price_usd:.2f}",
            )
        return None
