"""Chat command parsing and dispatch."""

from __future__ import annotations

import asyncio
import logging

from ..market.interface import FeedError, PriceFeed
from ..market.quotes import quote_coins, rank_coins
from ..watch.registry import WatchRegistry
from .models import Message

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Commands:\n"
    "coin <symbol symbol ...> - get coin stats\n"
    "rank <n> - get top N coins sorted by market cap\n"
    "watch <symbol> <threshold> - watch coin price change\n"
    "unwatch <symbol> - unwatch coin\n"
    "watchlist - list current watched coins"
)

DEFAULT_RANK = 10


class CommandError(Exception):
    """A command failed in a way the user should be told about."""


class UsageError(CommandError):
    """The command was malformed; the user gets the help text."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or "bad usage")


class CommandRouter:
    """Turns addressed chat messages into registry calls and feed queries.

    dispatch() never raises for bad input: every handler either returns its
    replies or raises CommandError, and the router turns errors into replies.
    All argument validation happens here, before the registry is touched.

    Once `stop_event` is set, a feed answer that arrives late is dropped: the
    command replies with nothing and leaves the registry alone.
    """

    def __init__(
        self,
        registry: WatchRegistry,
        feed: PriceFeed,
        max_rank: int = 30,
        stop_event: asyncio.Event | None = None,
    ) -> None:
        self._registry = registry
        self._feed = feed
        self._max_rank = max_rank
        self._stopping = stop_event or asyncio.Event()
        self._handlers = {
            "coin": self._coin,
            "rank": self._rank,
            "watch": self._watch,
            "unwatch": self._unwatch,
            "watchlist": self._watchlist,
        }

    @staticmethod
    def parse(text: str, mention: str) -> list[str] | None:
        """Split an addressed message into [command, *args], or None if not for us.

        Accepted forms: "@bot watch btc 100", "/watch btc 100", "/watch@bot btc 100".
        """
        parts = text.split()
        if not parts:
            return None

        head = parts[0]
        if head.lower() == mention.lower():
            parts = parts[1:]
        elif head.startswith("/") and len(head) > 1:
            command, _, addressee = head[1:].partition("@")
            if addressee and f"@{addressee}".lower() != mention.lower():
                return None
            parts = [command, *parts[1:]]
        else:
            return None

        if not parts:
            return ["help"]
        return [parts[0].lower(), *parts[1:]]

    async def dispatch(self, message: Message, mention: str) -> list[Message]:
        """Handle one incoming message. Returns the messages to send (maybe none)."""
        if message.type != "message":
            return []
        parts = self.parse(message.text, mention)
        if parts is None:
            return []

        command, args = parts[0], parts[1:]
        handler = self._handlers.get(command)
        if handler is None:
            return [message.reply(HELP_TEXT)]

        logger.debug("Command %s %s from %s", command, args, message.channel)
        try:
            return await handler(message, args)
        except UsageError as e:
            logger.debug("Bad usage of %s: %s", command, e)
            return [message.reply(HELP_TEXT)]
        except CommandError as e:
            return [message.reply(str(e))]
        except Exception:
            logger.exception("Command %s failed", command)
            return [message.reply(HELP_TEXT)]

    # --- Handlers ---

    async def _coin(self, message: Message, args: list[str]) -> list[Message]:
        if not args:
            raise UsageError("coin needs at least one symbol")
        try:
            coins = await self._feed.fetch()
        except FeedError as e:
            logger.warning("Quote lookup failed: %s", e)
            raise CommandError("n/a") from e
        if self._stopping.is_set():
            return []
        if not coins:
            raise CommandError("n/a")
        return [message.reply(quote_coins(args, coins))]

    async def _rank(self, message: Message, args: list[str]) -> list[Message]:
        limit = DEFAULT_RANK
        if args:
            try:
                limit = int(args[0])
            except ValueError:
                limit = DEFAULT_RANK
        if limit <= 0:
            limit = DEFAULT_RANK

        try:
            coins = await self._feed.fetch()
        except FeedError as e:
            logger.warning("Rank lookup failed: %s", e)
            raise CommandError("n/a") from e
        if self._stopping.is_set():
            return []
        if not coins:
            raise CommandError("n/a")
        return [message.reply(rank_coins(coins, limit, self._max_rank))]

    async def _watch(self, message: Message, args: list[str]) -> list[Message]:
        if len(args) != 2:
            raise UsageError("watch needs a symbol and a threshold")
        symbol, raw_threshold = args[0].lower(), args[1]

        try:
            threshold = int(raw_threshold)
        except ValueError:
            threshold = 0
        if threshold <= 0:
            raise CommandError(f"Cannot parse threshold {raw_threshold}")

        try:
            coins = await self._feed.fetch()
        except FeedError as e:
            logger.warning("Coin lookup for watch failed: %s", e)
            raise CommandError("Cannot fetch coins") from e
        if self._stopping.is_set():
            logger.debug("Shutting down, not registering %s", symbol)
            return []

        snapshot = next((coin for coin in coins if coin.key == symbol), None)
        if snapshot is None:
            raise CommandError(f"Coin '{symbol}' does not exist")

        # Registration only records the baseline price, it never alerts
        self._registry.register(message.channel, threshold, snapshot)
        return [
            message.reply(
                f"Watching {snapshot.symbol} ({snapshot.name}) at ${snapshot.price_usd:.2f}, "
                f"alert on moves over ${threshold}"
            )
        ]

    async def _unwatch(self, message: Message, args: list[str]) -> list[Message]:
        if len(args) != 1:
            raise UsageError("unwatch needs exactly one symbol")
        symbol = args[0].lower()
        self._registry.deregister(symbol)
        return [message.reply(f"Stopped watching {symbol}")]

    async def _watchlist(self, message: Message, args: list[str]) -> list[Message]:
        symbols: list[str] = []
        self._registry.enumerate(lambda symbol, watch: symbols.append(symbol))
        return [message.reply(f"Tickers: [{' '.join(sorted(symbols))}]")]
