"""GBM-based coin price simulator."""

from __future__ import annotations

import logging
import math
import random
import time
from collections import deque
from collections.abc import Callable

import numpy as np

from .interface import PriceFeed
from .models import TickerSnapshot
from .seed_prices import (
    COIN_PARAMS,
    CORRELATION_GROUPS,
    CROSS_GROUP_CORR,
    DEFAULT_PARAMS,
    INTRA_ALTS_CORR,
    INTRA_MAJORS_CORR,
    SEED_COINS,
    STABLE_CORR,
    STABLECOINS,
)

logger = logging.getLogger(__name__)


class GBMSimulator:
    """Geometric Brownian Motion simulator for correlated coin prices.

    Math:
        S(t+dt) = S(t) * exp((mu - sigma^2/2) * dt + sigma * sqrt(dt) * Z)

    Where:
        S(t)   = current price
        mu     = annualized drift (expected return)
        sigma  = annualized volatility
        dt     = time step as fraction of a year
        Z      = correlated standard normal random variable

    Coins trade around the clock, so a year is 365 * 24 * 3600 seconds.
    """

    SECONDS_PER_YEAR = 365 * 24 * 3600  # 31,536,000

    def __init__(
        self,
        symbols: list[str],
        event_probability: float = 0.001,
    ) -> None:
        self._event_prob = event_probability

        self._symbols: list[str] = []
        self._prices: dict[str, float] = {}
        self._params: dict[str, dict[str, float]] = {}

        # Cholesky decomposition of the correlation matrix (for correlated moves)
        self._cholesky: np.ndarray | None = None

        for symbol in symbols:
            self._add_symbol_internal(symbol)
        self._rebuild_cholesky()

    # --- Public API ---

    def step(self, seconds: float) -> dict[str, float]:
        """Advance all coins by `seconds` of wall-clock time. Returns {symbol: new_price}."""
        n = len(self._symbols)
        if n == 0:
            return {}
        if seconds <= 0:
            return {symbol: self._prices[symbol] for symbol in self._symbols}

        dt = seconds / self.SECONDS_PER_YEAR
        z_independent = np.random.standard_normal(n)

        if self._cholesky is not None:
            z_correlated = self._cholesky @ z_independent
        else:
            z_correlated = z_independent

        result: dict[str, float] = {}
        for i, symbol in enumerate(self._symbols):
            params = self._params[symbol]
            mu = params["mu"]
            sigma = params["sigma"]

            drift = (mu - 0.5 * sigma**2) * dt
            diffusion = sigma * math.sqrt(dt) * z_correlated[i]
            self._prices[symbol] *= math.exp(drift + diffusion)

            # Random pump or dump, never on stablecoins
            if symbol not in STABLECOINS and random.random() < self._event_prob:
                shock_magnitude = random.uniform(0.03, 0.10)
                shock_sign = random.choice([-1, 1])
                self._prices[symbol] *= 1 + shock_magnitude * shock_sign
                logger.debug(
                    "Random event on %s: %.1f%% %s",
                    symbol,
                    shock_magnitude * 100,
                    "up" if shock_sign > 0 else "down",
                )

            result[symbol] = self._prices[symbol]

        return result

    def get_price(self, symbol: str) -> float | None:
        """Current price for a coin, or None if not simulated."""
        return self._prices.get(symbol)

    @property
    def symbols(self) -> list[str]:
        return list(self._symbols)

    # --- Internals ---

    def _add_symbol_internal(self, symbol: str) -> None:
        if symbol in self._prices:
            return
        self._symbols.append(symbol)
        seed = SEED_COINS.get(symbol)
        self._prices[symbol] = seed[2] if seed else random.uniform(1.0, 100.0)
        self._params[symbol] = COIN_PARAMS.get(symbol, dict(DEFAULT_PARAMS))

    def _rebuild_cholesky(self) -> None:
        n = len(self._symbols)
        if n <= 1:
            self._cholesky = None
            return

        corr = np.eye(n)
        for i in range(n):
            for j in range(i + 1, n):
                rho = self._pairwise_correlation(self._symbols[i], self._symbols[j])
                corr[i, j] = rho
                corr[j, i] = rho

        self._cholesky = np.linalg.cholesky(corr)

    @staticmethod
    def _pairwise_correlation(s1: str, s2: str) -> float:
        """Correlation between two coins based on grouping.

          - Stablecoin with anything: 0.0
          - BTC/ETH:                  0.8
          - Alt with alt:             0.6
          - Alt with major:           0.7
          - Unknown coins:            0.7
        """
        if s1 in STABLECOINS or s2 in STABLECOINS:
            return STABLE_CORR

        majors = CORRELATION_GROUPS["majors"]
        alts = CORRELATION_GROUPS["alts"]

        if s1 in majors and s2 in majors:
            return INTRA_MAJORS_CORR
        if s1 in alts and s2 in alts:
            return INTRA_ALTS_CORR

        return CROSS_GROUP_CORR


class SimulatedPriceFeed(PriceFeed):
    """PriceFeed backed by the GBM simulator.

    There is no background task: every fetch advances the simulation by the
    wall-clock time elapsed since the previous fetch. Percent changes over
    1h/24h/7d come from the feed's own price history.
    """

    WINDOWS = {"1h": 3600, "24h": 86400, "7d": 7 * 86400}

    def __init__(
        self,
        symbols: list[str] | None = None,
        event_probability: float = 0.001,
        clock: Callable[[], float] = time.time,
        history_size: int = 10_000,
    ) -> None:
        self._clock = clock
        self._sim = GBMSimulator(
            symbols=list(symbols) if symbols is not None else list(SEED_COINS),
            event_probability=event_probability,
        )
        self._last_step = clock()
        self._history: dict[str, deque[tuple[float, float]]] = {
            symbol: deque([(self._last_step, self._sim.get_price(symbol))], maxlen=history_size)
            for symbol in self._sim.symbols
        }
        logger.info("Price simulator started with %d coins", len(self._history))

    async def fetch(self, symbol: str = "") -> list[TickerSnapshot]:
        now = self._clock()
        prices = self._sim.step(now - self._last_step)
        self._last_step = max(now, self._last_step)

        for sym, price in prices.items():
            self._history[sym].append((now, price))

        by_cap = sorted(self._sim.symbols, key=self._market_cap, reverse=True)
        coins = [self._snapshot(sym, now, rank) for rank, sym in enumerate(by_cap, start=1)]

        wanted = symbol.strip().upper()
        if not wanted:
            return coins
        return [coin for coin in coins if coin.symbol == wanted][:1]

    def _market_cap(self, symbol: str) -> float:
        supply = SEED_COINS[symbol][3] if symbol in SEED_COINS else 0.0
        return self._sim.get_price(symbol) * supply

    def _snapshot(self, symbol: str, now: float, rank: int) -> TickerSnapshot:
        price = self._sim.get_price(symbol)
        coin_id, name, _, supply = SEED_COINS.get(symbol, (symbol.lower(), symbol, 0.0, 0.0))
        btc_price = self._sim.get_price("BTC")
        changes = {label: self._percent_change(symbol, now, seconds) for label, seconds in self.WINDOWS.items()}

        return TickerSnapshot(
            id=coin_id,
            name=name,
            symbol=symbol,
            rank=rank,
            price_usd=round(price, 6),
            price_btc=round(price / btc_price, 8) if btc_price else 0.0,
            market_cap_usd=round(price * supply, 2),
            available_supply=supply,
            total_supply=supply,
            percent_change_1h=changes["1h"],
            percent_change_24h=changes["24h"],
            percent_change_7d=changes["7d"],
            last_updated=int(now),
        )

    def _percent_change(self, symbol: str, now: float, window: float) -> float:
        """Change vs. the last sample at or before now - window (or the oldest sample)."""
        history = self._history[symbol]
        reference = history[0][1]
        cutoff = now - window
        for ts, price in history:
            if ts > cutoff:
                break
            reference = price
        if reference == 0:
            return 0.0
        return round((history[-1][1] - reference) / reference * 100, 2)
