"""Price watch subsystem for coinbot.

Public API:
    Watch           - Per-coin alert configuration and last-seen price
    WatchRegistry   - Thread-safe symbol -> Watch store with alert evaluation
    PollLoop        - Periodic task that refreshes prices and posts alerts
"""

from .models import Watch
from .poller import PollLoop
from .registry import WatchRegistry

__all__ = [
    "Watch",
    "WatchRegistry",
    "PollLoop",
]
