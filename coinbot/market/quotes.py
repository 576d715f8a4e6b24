"""Read-only text views over ticker data: quotes and market-cap ranking."""

from __future__ import annotations

from .models import TickerSnapshot


def format_quote(coin: TickerSnapshot) -> str:
    return (
        f"{coin.symbol} ${coin.price_usd:.2f}, "
        f"update 1H: {coin.percent_change_1h:.2f}%, "
        f"update 24H: {coin.percent_change_24h:.2f}%"
    )


def quote_coins(symbols: list[str], coins: list[TickerSnapshot]) -> str:
    """One quote line per requested symbol, in request order.

    Symbols are matched case-insensitively. Each symbol missing from `coins`
    gets a "'sym' not found" line instead, so one bad symbol never hides the
    others.
    """
    by_key = {coin.key: coin for coin in coins}
    lines: list[str] = []
    seen: set[str] = set()
    for symbol in symbols:
        key = symbol.lower()
        if key in seen:
            continue
        seen.add(key)
        coin = by_key.get(key)
        lines.append(format_quote(coin) if coin else f"'{key}' not found")
    return "\n".join(lines)


def rank_coins(coins: list[TickerSnapshot], limit: int, max_rank: int = 30) -> str:
    """Top `limit` coins by descending market cap, at most `max_rank` lines."""
    top = sorted(coins, key=lambda c: c.market_cap_usd, reverse=True)[: min(limit, max_rank)]
    return "\n".join(
        f"{c.name} : {c.symbol} => price: ${c.price_usd:.2f} : market: ${c.market_cap_usd:.2f}"
        for c in top
    )
