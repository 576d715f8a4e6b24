"""Data models for chat messages."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Message:
    """A chat message, incoming or outgoing. Alerts are outgoing Messages."""

    channel: str
    text: str
    type: str = "message"
    id: int = 0

    def reply(self, text: str) -> Message:
        """A new message to the same channel."""
        return Message(channel=self.channel, text=text)


@dataclass(frozen=True, slots=True)
class BotIdentity:
    """Who the bot is on the chat service, as reported at connect time."""

    id: str
    name: str

    @property
    def mention(self) -> str:
        """The token that addresses the bot at the start of a message."""
        return f"@{self.name}"
