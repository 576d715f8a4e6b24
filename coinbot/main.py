"""Command-line entry point: coinbot TELEGRAM_BOT_TOKEN."""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
from dataclasses import replace

from .bot import CoinBot
from .chat.interface import TransportError
from .chat.telegram import TelegramTransport
from .config import FEED_SIMULATOR, Settings
from .market.factory import create_price_feed

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coinbot",
        description="Chat bot for coin quotes and price-move alerts.",
    )
    parser.add_argument("token", help="chat bot API token")
    parser.add_argument("--interval", type=float, help="seconds between watch polls (default 30)")
    parser.add_argument("--simulate", action="store_true", help="use the GBM price simulator instead of the HTTP feed")
    parser.add_argument("--feed-url", help="ticker endpoint for the HTTP feed")
    parser.add_argument("--log-level", help="logging level (default INFO)")
    return parser


def settings_from_args(args: argparse.Namespace, base: Settings) -> Settings:
    """Command-line flags override environment settings."""
    overrides = {}
    if args.interval is not None:
        if args.interval <= 0:
            raise ValueError("--interval must be positive")
        overrides["poll_interval"] = args.interval
    if args.simulate:
        overrides["feed"] = FEED_SIMULATOR
    if args.feed_url:
        overrides["feed_url"] = args.feed_url
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    return replace(base, **overrides)


async def serve(token: str, settings: Settings) -> None:
    loop = asyncio.get_running_loop()
    bot = CoinBot(
        transport=TelegramTransport(token),
        feed=create_price_feed(settings),
        settings=settings,
    )
    for sig in (signal.SIGINT, signal.SIGTERM, signal.SIGQUIT):
        loop.add_signal_handler(sig, bot.shutdown.set)
    await bot.run()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = settings_from_args(args, Settings.from_env())
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, settings.log_level, logging.INFO),
    )

    try:
        asyncio.run(serve(args.token, settings))
    except TransportError as e:
        logger.error("Cannot connect to chat service: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
