"""Bot orchestration: listener, command handlers and the watch poller."""

from __future__ import annotations

import asyncio
import logging

from .chat.interface import ChatTransport, TransportError
from .chat.models import BotIdentity, Message
from .chat.router import CommandRouter
from .config import Settings
from .market.interface import PriceFeed
from .watch.poller import PollLoop
from .watch.registry import WatchRegistry

logger = logging.getLogger(__name__)


class CoinBot:
    """Runs one chat session until `shutdown` is set.

    Tasks:
        listener  - receives messages, spawns one handler task per message
        handlers  - route a message and post the replies
        poller    - PollLoop over the shared WatchRegistry

    A transport read failure ends the session by setting `shutdown`. Work
    still in flight at shutdown is awaited, but its results are discarded.

    Usage:
        bot = CoinBot(transport, feed, settings)
        await bot.run()          # returns after bot.shutdown.set()
    """

    def __init__(
        self,
        transport: ChatTransport,
        feed: PriceFeed,
        settings: Settings | None = None,
        registry: WatchRegistry | None = None,
        shutdown: asyncio.Event | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._transport = transport
        self._feed = feed
        self.registry = registry or WatchRegistry()
        self.shutdown = shutdown or asyncio.Event()
        self._router = CommandRouter(
            self.registry, feed, max_rank=self._settings.max_rank, stop_event=self.shutdown
        )
        self._poller = PollLoop(
            registry=self.registry,
            feed=feed,
            post=transport.post,
            interval=self._settings.poll_interval,
            stop_event=self.shutdown,
        )
        self._handlers: set[asyncio.Task] = set()
        self.identity: BotIdentity | None = None

    async def run(self) -> None:
        try:
            self.identity = await self._transport.connect()
            logger.info("coinbot ready as %s, ^C exits", self.identity.mention)

            self._poller.start()
            listener = asyncio.create_task(self._listen(), name="chat-listener")

            await self.shutdown.wait()
            logger.info("Shutting down")

            await listener
            await self._poller.stop()
            if self._handlers:
                await asyncio.gather(*self._handlers, return_exceptions=True)
        finally:
            self.shutdown.set()
            await self._poller.stop()
            await self._transport.close()
            await self._feed.aclose()
            logger.info("coinbot stopped")

    async def handle(self, message: Message) -> None:
        """Route one message and post every reply.

        Replies computed after shutdown has begun are dropped.
        """
        replies = await self._router.dispatch(message, self.identity.mention)
        if self.shutdown.is_set():
            if replies:
                logger.debug("Shutting down, dropping %d replies to %s", len(replies), message.channel)
            return
        for reply in replies:
            await self._transport.post(reply)

    # --- Internal ---

    async def _listen(self) -> None:
        """Receive until shutdown; a pending receive is abandoned on shutdown."""
        stop_wait = asyncio.create_task(self.shutdown.wait())
        try:
            while not self.shutdown.is_set():
                receive = asyncio.create_task(self._transport.receive())
                done, _ = await asyncio.wait({receive, stop_wait}, return_when=asyncio.FIRST_COMPLETED)

                if receive not in done:
                    receive.cancel()
                    await asyncio.gather(receive, return_exceptions=True)
                    break

                try:
                    message = receive.result()
                except TransportError as e:
                    logger.error("Chat read failed, ending session: %s", e)
                    break
                except Exception:
                    logger.exception("Chat read failed, ending session")
                    break

                task = asyncio.create_task(self._handle_safely(message))
                self._handlers.add(task)
                task.add_done_callback(self._handlers.discard)
        finally:
            stop_wait.cancel()
            # No listener, no session
            self.shutdown.set()

    async def _handle_safely(self, message: Message) -> None:
        try:
            await self.handle(message)
        except Exception:
            logger.exception("Handling message from %s failed", message.channel)
