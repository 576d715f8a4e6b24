"""Data models for market data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _as_float(value: Any) -> float:
    """Upstream numbers arrive as strings (or null). Missing -> 0.0."""
    if value is None or value == "":
        return 0.0
    return float(value)


def _as_int(value: Any) -> int:
    if value is None or value == "":
        return 0
    return int(float(value))


@dataclass(frozen=True, slots=True)
class TickerSnapshot:
    """Immutable snapshot of a single coin's market data at a point in time."""

    id: str
    name: str
    symbol: str
    price_usd: float
    rank: int = 0
    price_btc: float = 0.0
    volume_24h_usd: float = 0.0
    market_cap_usd: float = 0.0
    available_supply: float = 0.0
    total_supply: float = 0.0
    percent_change_1h: float = 0.0
    percent_change_24h: float = 0.0
    percent_change_7d: float = 0.0
    last_updated: int = 0  # Unix seconds

    @property
    def key(self) -> str:
        """Normalized symbol used as the watch registry key."""
        return self.symbol.lower()

    @classmethod
    def from_api(cls, record: dict[str, Any]) -> TickerSnapshot:
        """Build a snapshot from one record of the ticker endpoint.

        Raises ValueError if the record has no symbol or a number can't be parsed.
        """
        symbol = (record.get("symbol") or "").strip()
        if not symbol:
            raise ValueError(f"ticker record without symbol: {record.get('id')!r}")

        return cls(
            id=str(record.get("id") or symbol.lower()),
            name=str(record.get("name") or symbol),
            symbol=symbol,
            rank=_as_int(record.get("rank")),
            price_usd=_as_float(record.get("price_usd")),
            price_btc=_as_float(record.get("price_btc")),
            volume_24h_usd=_as_float(record.get("24h_volume_usd")),
            market_cap_usd=_as_float(record.get("market_cap_usd")),
            available_supply=_as_float(record.get("available_supply")),
            total_supply=_as_float(record.get("total_supply")),
            percent_change_1h=_as_float(record.get("percent_change_1h")),
            percent_change_24h=_as_float(record.get("percent_change_24h")),
            percent_change_7d=_as_float(record.get("percent_change_7d")),
            last_updated=_as_int(record.get("last_updated")),
        )
