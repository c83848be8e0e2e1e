import logging
import threading
from collections import deque
from datetime import datetime, timedelta, timezone

from fastapi import Request

from core.config import settings
from core.errors import RateLimitError

logger = logging.getLogger(__name__)


class RateLimiter:
    """Rolling-window attempt counter keyed by client address.

    Used as a FastAPI dependency; excess attempts are rejected, never queued.
    """

    def __init__(self, max_attempts: int, window: timedelta):
        self.max_attempts = max_attempts
        self.window = window
        self._history: dict[str, deque] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> bool:
        now = datetime.now(timezone.utc)
        cutoff = now - self.window
        with self._lock:
            history = self._history.setdefault(key, deque())
            while history and history[0] < cutoff:
                history.popleft()
            if len(history) >= self.max_attempts:
                return False
            history.append(now)
            return True

    def reset(self) -> None:
        with self._lock:
            self._history.clear()

    def __call__(self, request: Request) -> None:
        key = request.client.host if request.client else "unknown"
        if not self.hit(key):
            logger.warning("Rate limit exceeded for %s on %s", key, request.url.path)
            raise RateLimitError("Too many attempts, please try again later")


auth_limiter = RateLimiter(
    max_attempts=settings.AUTH_RATE_LIMIT,
    window=timedelta(minutes=settings.AUTH_RATE_WINDOW_MINUTES),
)
