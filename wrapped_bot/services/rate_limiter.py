"""
Rate limiting for image-producing Discord commands.

Each ``user:command`` key keeps the timestamps of its recent calls. Keys whose
window has fully elapsed are dropped, so memory only grows with the users
active within the longest window.
"""

import asyncio
import time
from collections import deque
from functools import wraps
from typing import Callable, Deque, Dict, Optional, Tuple

from wrapped_bot.config import Config
from wrapped_bot.utils.error_embeds import ErrorEmbeds
from wrapped_bot.utils.logger import setup_logger

logger = setup_logger(__name__)


class SimpleRateLimiter:
    """In-memory sliding-window rate limiter keyed by user and command."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._requests: Dict[str, Tuple[float, Deque[float]]] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._requests)

    async def is_allowed(self, user_id: int, command: str, limit: int, window: float) -> bool:
        """Record a call and report whether it fits within ``limit`` per ``window`` seconds."""
        if limit <= 0 or window <= 0:
            return False

        key = f"{user_id}:{command}"
        async with self._lock:
            now = self._clock()
            self._evict_expired(now)

            entry = self._requests.get(key)
            if entry is None:
                self._requests[key] = (window, deque([now]))
                return True

            _, calls = entry
            if len(calls) >= limit:
                return False
            calls.append(now)
            return True

    async def retry_after(self, user_id: int, command: str) -> Optional[float]:
        """Seconds until the oldest call for this key leaves its window."""
        async with self._lock:
            entry = self._requests.get(f"{user_id}:{command}")
            if entry is None:
                return None
            window, calls = entry
            return max(0.0, calls[0] + window - self._clock())

    def _evict_expired(self, now: float):
        for key in list(self._requests):
            window, calls = self._requests[key]
            while calls and calls[0] <= now - window:
                calls.popleft()
            if not calls:
                del self._requests[key]


def rate_limit(command: str, limit: int = 1, window: float = 60):
    """Decorator for rate limiting slash commands; the bot owner is exempt."""
    def decorator(func):
        @wraps(func)
        async def wrapper(self, interaction, *args, **kwargs):
            if interaction.user.id == Config.OWNER_DISCORD_ID:
                return await func(self, interaction, *args, **kwargs)

            limiter = self.bot.rate_limiter
            if not await limiter.is_allowed(interaction.user.id, command, limit, window):
                wait = await limiter.retry_after(interaction.user.id, command)
                logger.info(f"Rate limited /{command} for user {interaction.user.id}")
                await interaction.response.send_message(
                    embed=ErrorEmbeds.rate_limited(command, wait), ephemeral=True
                )
                return

            return await func(self, interaction, *args, **kwargs)
        return wrapper
    return decorator
