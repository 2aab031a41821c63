"""
Rate Limiter - per-client request budget for the /api routes.

Keeps the timestamps of each client's requests inside a sliding window.
Provider calls cost money and take seconds, so the limit is applied
before any validation or provider work happens.

State is process-local; several workers each enforce their own budget.
"""
import math
import threading
import time
from collections import deque
from typing import Deque, Dict, Tuple

from devstudio.core.logging_config import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """
    Sliding-window limiter keyed by client identifier.

    Example:
        >>> limiter = RateLimiter(max_requests=100, window_seconds=60)
        >>> limiter.is_allowed("127.0.0.1")
        (True, 99)
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 60,
        cleanup_interval_seconds: float = 300
    ):
        """
        Args:
            max_requests: Requests allowed per client inside one window
            window_seconds: Window length
            cleanup_interval_seconds: How often idle clients are forgotten
        """
        self.limit = max_requests
        self.window = float(window_seconds)
        self.cleanup_interval = cleanup_interval_seconds

        self._hits: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()
        self._last_cleanup = time.monotonic()

        logger.info(f"RateLimiter initialized: {max_requests} requests/{window_seconds:g}s")

    def is_allowed(self, identifier: str) -> Tuple[bool, int]:
        """
        Record a request if the client still has budget.

        Returns:
            (allowed, requests left in the current window)
        """
        now = time.monotonic()
        with self._lock:
            self._maybe_cleanup(now)
            hits = self._hits.setdefault(identifier, deque())
            self._expire(hits, now)

            if len(hits) >= self.limit:
                logger.warning(f"Rate limit exceeded for: {identifier}")
                return False, 0

            hits.append(now)
            return True, self.limit - len(hits)

    def retry_after_seconds(self, identifier: str) -> int:
        """Whole seconds until the oldest tracked request leaves the window (at least 1)."""
        now = time.monotonic()
        with self._lock:
            hits = self._hits.get(identifier)
            if not hits:
                return 1
            wait = hits[0] + self.window - now
        return max(1, math.ceil(wait))

    def _expire(self, hits: Deque[float], now: float) -> None:
        cutoff = now - self.window
        while hits and hits[0] <= cutoff:
            hits.popleft()

    def _maybe_cleanup(self, now: float) -> None:
        if now - self._last_cleanup < self.cleanup_interval:
            return

        for identifier in list(self._hits):
            hits = self._hits[identifier]
            self._expire(hits, now)
            if not hits:
                del self._hits[identifier]

        self._last_cleanup = now
        logger.debug(f"Rate limiter cleanup: {len(self._hits)} active clients")
