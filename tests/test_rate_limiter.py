"""
Tests for BumpBoard Rate Limiter
"""

import pytest

from bumpboard.core.rate_limiter import RateBucket, RateLimiter


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class TestRateBucket:
    """Tests for the token bucket."""

    def test_consume_until_empty(self):
        bucket = RateBucket(tokens=2, last_update=0.0, max_tokens=2, refill_rate=1 / 60)

        assert bucket.consume(0.0)
        assert bucket.consume(0.0)
        assert not bucket.consume(0.0)

    def test_refill_capped(self):
        """Refill never exceeds max_tokens."""
        bucket = RateBucket(tokens=0, last_update=0.0, max_tokens=2, refill_rate=1.0)
        bucket.consume(1000.0)

        assert bucket.tokens == 1


class TestRateLimiter:
    """Tests for RateLimiter class."""

    def setup_method(self):
        self.clock = FakeClock()
        self.limiter = RateLimiter(threads_per_minute=2, replies_per_minute=5, clock=self.clock)

    def test_limit_per_sender(self):
        assert self.limiter.check("alice", "thread")
        assert self.limiter.check("alice", "thread")
        assert not self.limiter.check("alice", "thread")
        assert self.limiter.check("bob", "thread")

    def test_actions_independent(self):
        """Using up the thread allowance leaves replies alone."""
        self.limiter.check("alice", "thread")
        self.limiter.check("alice", "thread")

        assert self.limiter.check("alice", "reply")

    def test_refill(self):
        self.limiter.check("alice", "thread")
        self.limiter.check("alice", "thread")
        self.clock.advance(31)

        assert self.limiter.check("alice", "thread")
        assert not self.limiter.check("alice", "thread")

    def test_global_limit(self):
        """The global bucket caps all senders together at 10x."""
        results = [self.limiter.check(f"sender{i}", "thread") for i in range(21)]

        assert all(results[:20])
        assert not results[20]

    def test_cleanup(self):
        """Idle senders are dropped."""
        self.limiter.check("alice", "thread")
        self.clock.advance(301)
        self.limiter.check("bob", "thread")

        assert self.limiter.cleanup(max_age_seconds=300) == 1
        assert self.limiter.get_stats()["active_senders"] == 1

    def test_unknown_action(self):
        with pytest.raises(ValueError):
            self.limiter.check("alice", "vote")
