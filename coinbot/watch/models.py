"""Data models for price watches."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Watch:
    """Alert configuration and last-seen price for one watched coin.

    Mutable: last_price moves on every evaluation. The registry only ever
    hands out copies.
    """

    channel: str
    name: str
    last_price: float
    threshold: int  # Alert when |price move| exceeds this many USD
