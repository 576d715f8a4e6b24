"""Tests for TickerSnapshot dataclass."""

import pytest

from coinbot.market.models import TickerSnapshot

API_RECORD = {
    "id": "bitcoin",
    "name": "Bitcoin",
    "symbol": "BTC",
    "rank": "1",
    "price_usd": "50123.45",
    "price_btc": "1.0",
    "24h_volume_usd": "30000000000.0",
    "market_cap_usd": "987654321000.0",
    "available_supply": "19700000.0",
    "total_supply": "19700000.0",
    "percent_change_1h": "0.52",
    "percent_change_24h": "-1.3",
    "percent_change_7d": "4.1",
    "last_updated": "1707580800",
}


class TestTickerSnapshot:
    """Unit tests for the TickerSnapshot model."""

    def test_from_api_parses_string_numbers(self):
        """Test that numeric strings from the feed become numbers."""
        snap = TickerSnapshot.from_api(API_RECORD)
        assert snap.id == "bitcoin"
        assert snap.name == "Bitcoin"
        assert snap.symbol == "BTC"
        assert snap.rank == 1
        assert snap.price_usd == 50123.45
        assert snap.volume_24h_usd == 30000000000.0
        assert snap.market_cap_usd == 987654321000.0
        assert snap.percent_change_1h == 0.52
        assert snap.percent_change_24h == -1.3
        assert snap.percent_change_7d == 4.1
        assert snap.last_updated == 1707580800

    def test_from_api_null_numbers_default_to_zero(self):
        """Test that null or missing numbers become zero."""
        record = {"id": "newcoin", "name": "New Coin", "symbol": "NEW", "price_usd": "1.5", "market_cap_usd": None}
        snap = TickerSnapshot.from_api(record)
        assert snap.market_cap_usd == 0.0
        assert snap.total_supply == 0.0
        assert snap.rank == 0

    def test_from_api_without_symbol_raises(self):
        """Test that a record without a symbol is rejected."""
        with pytest.raises(ValueError):
            TickerSnapshot.from_api({"id": "mystery", "price_usd": "1.0"})

    def test_from_api_bad_number_raises(self):
        """Test that an unparseable number is rejected."""
        with pytest.raises(ValueError):
            TickerSnapshot.from_api({"symbol": "BTC", "price_usd": "lots"})

    def test_key_is_lowercase_symbol(self):
        """Test that the registry key is the lowercased symbol."""
        snap = TickerSnapshot.from_api(API_RECORD)
        assert snap.key == "btc"

    def test_immutability(self):
        """Test that TickerSnapshot is immutable."""
        snap = TickerSnapshot.from_api(API_RECORD)

        with pytest.raises(AttributeError):
            snap.price_usd = 1.0  # Should raise error
