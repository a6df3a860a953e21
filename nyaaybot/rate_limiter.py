"""In-memory sliding-window rate limiter for the analyze endpoint."""

import threading
import time
from collections import defaultdict, deque
from typing import Optional


class RateLimiter:
    """Allow at most ``max_requests`` per client key in any ``window_seconds``.

    Analysis requests are expensive (OCR plus a model call), so the
    limit is per API key rather than per connection. Safe to share
    between threads.
    """

    def __init__(self, max_requests: int = 100, window_seconds: int = 3600):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._hits: dict[str, deque[float]] = defaultdict(deque)
        self._lock = threading.Lock()

    def _prune(self, key: str, now: float) -> deque[float]:
        hits = self._hits[key]
        while hits and hits[0] <= now - self.window_seconds:
            hits.popleft()
        return hits

    def is_allowed(self, key: str) -> bool:
        """Record a request for *key* and report whether it fits the window.

        Denied attempts are not recorded.
        """
        with self._lock:
            now = time.monotonic()
            hits = self._prune(key, now)
            if len(hits) >= self.max_requests:
                return False
            hits.append(now)
            return True

    def remaining(self, key: str) -> int:
        with self._lock:
            hits = self._prune(key, time.monotonic())
            return max(0, self.max_requests - len(hits))

    def retry_after(self, key: str) -> Optional[int]:
        """Whole seconds until *key* may retry, or ``None`` if not limited."""
        with self._lock:
            now = time.monotonic()
            hits = self._prune(key, now)
            if len(hits) < self.max_requests:
                return None
            return int(hits[0] + self.window_seconds - now) + 1
