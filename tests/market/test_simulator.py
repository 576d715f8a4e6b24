"""Tests for GBMSimulator."""

import pytest

from coinbot.market.seed_prices import SEED_COINS
from coinbot.market.simulator import GBMSimulator


class TestGBMSimulator:
    """Unit tests for the GBM price simulator."""

    def test_step_returns_all_coins(self):
        """Test that step() returns prices for all coins."""
        sim = GBMSimulator(symbols=["BTC", "ETH"])
        result = sim.step(30)
        assert set(result.keys()) == {"BTC", "ETH"}

    def test_prices_are_positive(self):
        """GBM prices can never go negative (exp() is always positive)."""
        sim = GBMSimulator(symbols=["DOGE"])
        for _ in range(10_000):
            prices = sim.step(60)
            assert prices["DOGE"] > 0

    def test_initial_prices_match_seeds(self):
        """Test that initial prices match seed prices."""
        sim = GBMSimulator(symbols=["BTC"])
        assert sim.get_price("BTC") == SEED_COINS["BTC"][2]

    def test_zero_step_keeps_prices(self):
        """Test that no elapsed time means no movement."""
        sim = GBMSimulator(symbols=["BTC"], event_probability=1.0)
        assert sim.step(0) == {"BTC": SEED_COINS["BTC"][2]}

    def test_empty_step(self):
        """Test stepping with no coins."""
        sim = GBMSimulator(symbols=[])
        assert sim.step(30) == {}

    def test_prices_change_over_time(self):
        """After many steps, prices should have drifted from their seeds."""
        sim = GBMSimulator(symbols=["BTC"])
        initial_price = sim.get_price("BTC")

        for _ in range(1000):
            sim.step(30)

        assert sim.get_price("BTC") != initial_price

    def test_unknown_coin_gets_random_seed_price(self):
        """Test that unknown coins get random seed prices."""
        sim = GBMSimulator(symbols=["ZZZ"])
        price = sim.get_price("ZZZ")
        assert price is not None
        assert 1.0 <= price <= 100.0

    def test_duplicate_symbols_ignored(self):
        """Test that a repeated symbol is only simulated once."""
        sim = GBMSimulator(symbols=["BTC", "BTC"])
        assert sim.symbols == ["BTC"]

    def test_get_price_returns_none_for_unknown(self):
        """Test that get_price returns None for an unsimulated coin."""
        sim = GBMSimulator(symbols=["BTC"])
        assert sim.get_price("XYZ") is None

    def test_cholesky_none_with_one_coin(self):
        """Test that Cholesky is None with only one coin."""
        sim = GBMSimulator(symbols=["BTC"])
        assert sim._cholesky is None

    def test_cholesky_built_for_all_seeds(self):
        """The seeded correlation matrix must be positive definite."""
        sim = GBMSimulator(symbols=list(SEED_COINS))
        assert sim._cholesky is not None

    def test_pairwise_correlation_majors(self):
        """Test that BTC and ETH are highly correlated."""
        assert GBMSimulator._pairwise_correlation("BTC", "ETH") == 0.8

    def test_pairwise_correlation_alts(self):
        """Test alt-to-alt correlation."""
        assert GBMSimulator._pairwise_correlation("SOL", "DOGE") == 0.6

    def test_pairwise_correlation_cross_group(self):
        """Test that alts follow the majors."""
        assert GBMSimulator._pairwise_correlation("BTC", "SOL") == 0.7

    def test_pairwise_correlation_stablecoin(self):
        """Test that stablecoins are uncorrelated with everything."""
        assert GBMSimulator._pairwise_correlation("USDT", "BTC") == 0.0
        assert GBMSimulator._pairwise_correlation("DOGE", "USDT") == 0.0

    def test_stablecoin_skips_random_events(self):
        """Test that shocks never hit stablecoins."""
        sim = GBMSimulator(symbols=["USDT"], event_probability=1.0)
        for _ in range(100):
            sim.step(1)
        assert sim.get_price("USDT") == pytest.approx(1.0, abs=0.01)
