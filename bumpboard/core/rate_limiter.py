"""
BumpBoard Rate Limiter

Limits how fast a single origin can open threads and post replies.
"""

import time
import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Dict

logger = logging.getLogger(__name__)


@dataclass
class RateBucket:
    """Token bucket for rate limiting."""
    tokens: float
    last_update: float
    max_tokens: int
    refill_rate: float  # tokens per second

    def consume(self, now: float, tokens: int = 1) -> bool:
        """
        Try to consume tokens from the bucket.

        Returns True if tokens were consumed, False if rate limited.
        """
        elapsed = max(now - self.last_update, 0.0)
        self.tokens = min(
            self.max_tokens,
            self.tokens + (elapsed * self.refill_rate)
        )
        self.last_update = now

        if self.tokens >= tokens:
            self.tokens -= tokens
            return True

        return False


class RateLimiter:
    """
    Per-origin posting limiter.

    Token buckets per (sender, action) with a global bucket per action at
    10x the per-sender limit. Senders are poster tags, never raw origins.
    """

    def __init__(
        self,
        threads_per_minute: int = 3,
        replies_per_minute: int = 10,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize rate limiter with per-minute limits.

        Args:
            threads_per_minute: Thread creation limit per sender
            replies_per_minute: Reply limit per sender
            clock: Time source in seconds
        """
        self.limits = {
            "thread": threads_per_minute,
            "reply": replies_per_minute,
        }
        self._clock = clock
        self._lock = threading.Lock()

        # Per-sender buckets: {sender: {action: RateBucket}}
        self._buckets: Dict[str, Dict[str, RateBucket]] = defaultdict(dict)
        self._global_buckets: Dict[str, RateBucket] = {}

        self._init_global_buckets()

        logger.debug(f"RateLimiter initialized: {self.limits}")

    def _init_global_buckets(self):
        """Initialize global rate limit buckets."""
        now = self._clock()

        for action, limit in self.limits.items():
            self._global_buckets[action] = RateBucket(
                tokens=limit * 10,
                last_update=now,
                max_tokens=limit * 10,
                refill_rate=(limit * 10) / 60.0
            )

    def _get_bucket(self, sender: str, action: str, now: float) -> RateBucket:
        """Get or create a rate bucket for a sender."""
        if action not in self._buckets[sender]:
            limit = self.limits[action]
            self._buckets[sender][action] = RateBucket(
                tokens=limit,
                last_update=now,
                max_tokens=limit,
                refill_rate=limit / 60.0
            )

        return self._buckets[sender][action]

    def check(self, sender: str, action: str) -> bool:
        """
        Check if a post should be allowed, consuming a token if so.

        Args:
            sender: Poster tag
            action: "thread" or "reply"

        Returns:
            True if allowed, False if rate limited
        """
        if action not in self.limits:
            raise ValueError(f"Unknown rate limit action: {action}")

        with self._lock:
            now = self._clock()

            global_bucket = self._global_buckets[action]
            if not global_bucket.consume(now):
                logger.warning(f"Global rate limit exceeded for {action}")
                return False

            allowed = self._get_bucket(sender, action, now).consume(now)

        if not allowed:
            logger.warning(f"Rate limit exceeded for {sender} ({action})")

        return allowed

    def cleanup(self, max_age_seconds: int = 300) -> int:
        """
        Remove stale buckets to free memory.

        Returns the number of senders dropped.
        """
        with self._lock:
            now = self._clock()
            stale_senders = [
                sender for sender, buckets in self._buckets.items()
                if all(now - b.last_update > max_age_seconds for b in buckets.values())
            ]

            for sender in stale_senders:
                del self._buckets[sender]

        if stale_senders:
            logger.debug(f"Cleaned up {len(stale_senders)} stale rate limit buckets")

        return len(stale_senders)

    def get_stats(self) -> dict:
        """Return rate limiter statistics."""
        with self._lock:
            return {
                "active_senders": len(self._buckets),
                "limits": dict(self.limits),
            }
