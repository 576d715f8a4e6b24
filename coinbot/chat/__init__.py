"""Chat subsystem for coinbot.

Public API:
    Message             - Immutable chat message dataclass
    BotIdentity         - The bot's id and name on the chat service
    ChatTransport       - Abstract interface for chat services
    TransportError      - Raised when the chat service fails (fatal)
    TelegramTransport   - Telegram Bot API implementation

The command router lives in coinbot.chat.router.
"""

from .interface import ChatTransport, TransportError
from .models import BotIdentity, Message
from .telegram import TelegramTransport

__all__ = [
    "Message",
    "BotIdentity",
    "ChatTransport",
    "TransportError",
    "TelegramTransport",
]
