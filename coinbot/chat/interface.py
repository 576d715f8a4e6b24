"""Abstract interface for chat transports."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import BotIdentity, Message


class TransportError(Exception):
    """Raised when the chat service can't be reached or read. Fatal for the session."""


class ChatTransport(ABC):
    """Contract for chat services the bot talks through.

    Lifecycle:
        identity = await transport.connect()
        while running:
            message = await transport.receive()
            await transport.post(message.reply("..."))
        await transport.close()
    """

    @abstractmethod
    async def connect(self) -> BotIdentity:
        """Authenticate and return the bot's identity. Raises TransportError."""

    @abstractmethod
    async def receive(self) -> Message:
        """Wait for the next incoming message. Raises TransportError on read failure."""

    @abstractmethod
    async def post(self, message: Message) -> bool:
        """Deliver a message. Fire-and-forget: failures are logged and return False."""

    @abstractmethod
    async def close(self) -> None:
        """Release the connection. Safe to call multiple times."""
