"""Telegram Bot API transport."""

from __future__ import annotations

import logging
from collections import deque
from typing import Any

import httpx

from .interface import ChatTransport, TransportError
from .models import BotIdentity, Message

logger = logging.getLogger(__name__)

API_BASE = "https://api.telegram.org"
MAX_MESSAGE_LENGTH = 4096  # Telegram's hard limit per message


class TelegramTransport(ChatTransport):
    """ChatTransport over the Telegram Bot HTTP API.

    Incoming messages come from long-polling getUpdates; each batch is buffered
    and handed out one message at a time by receive(). The chat id is used as
    the message channel.
    """

    def __init__(
        self,
        token: str,
        client: httpx.AsyncClient | None = None,
        poll_timeout: int = 25,
        api_base: str = API_BASE,
    ) -> None:
        self._base = f"{api_base}/bot{token}"
        self._poll_timeout = poll_timeout
        self._owns_client = client is None
        # The HTTP timeout must outlast the server-side long-poll timeout
        self._client = client or httpx.AsyncClient(timeout=poll_timeout + 10)
        self._offset = 0
        self._pending: deque[Message] = deque()

    async def connect(self) -> BotIdentity:
        me = await self._call("getMe")
        identity = BotIdentity(id=str(me["id"]), name=me.get("username") or str(me["id"]))
        logger.info("Connected to Telegram as %s (id %s)", identity.mention, identity.id)
        return identity

    async def receive(self) -> Message:
        while not self._pending:
            updates = await self._call(
                "getUpdates",
                offset=self._offset,
                timeout=self._poll_timeout,
                allowed_updates=["message"],
            )
            for update in updates:
                self._offset = max(self._offset, update["update_id"] + 1)
                message = _to_message(update)
                if message is not None:
                    self._pending.append(message)
        return self._pending.popleft()

    async def post(self, message: Message) -> bool:
        text = message.text
        if len(text) > MAX_MESSAGE_LENGTH:
            text = text[: MAX_MESSAGE_LENGTH - 3] + "..."
        try:
            await self._call("sendMessage", chat_id=message.channel, text=text)
        except TransportError as e:
            logger.error("Failed to post to %s: %s", message.channel, e)
            return False
        return True

    async def close(self) -> None:
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def _call(self, method: str, **params: Any) -> Any:
        """POST a Bot API method and return its `result`. Raises TransportError."""
        try:
            response = await self._client.post(f"{self._base}/{method}", json=params)
            body = response.json()
        except httpx.HTTPError as e:
            raise TransportError(f"{method} failed: {e}") from e
        except ValueError as e:
            raise TransportError(f"{method} returned non-JSON (HTTP {response.status_code})") from e

        if not body.get("ok"):
            raise TransportError(f"{method} rejected: {body.get('description', response.status_code)}")
        return body["result"]


def _to_message(update: dict) -> Message | None:
    """Extract a text message from an update, or None for anything else."""
    msg = update.get("message")
    if not msg or "text" not in msg:
        return None
    return Message(
        channel=str(msg["chat"]["id"]),
        text=msg["text"],
        id=msg.get("message_id", 0),
    )
