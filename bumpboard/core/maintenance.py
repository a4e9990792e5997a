"""
BumpBoard Maintenance Module

Handles periodic maintenance tasks:
- Pruning cached renders of evicted threads
- Rate limiter bucket cleanup
- Statistics logging
"""

import logging
import threading
import time
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .forum import Forum

logger = logging.getLogger(__name__)


class MaintenanceManager:
    """
    Runs periodic maintenance for a Forum.

    tick() is safe to call as often as wanted; each task tracks its own
    interval. start() runs ticks on a daemon thread until stop().
    """

    def __init__(self, forum: "Forum"):
        """
        Initialize maintenance manager.

        Args:
            forum: Forum instance
        """
        self.forum = forum
        self.config = forum.config.maintenance

        # Last run timestamps
        self._last_cleanup = 0.0
        self._last_stats_log = 0.0

        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def tick(self, now: Optional[float] = None):
        """Run any maintenance task that is due."""
        if now is None:
            now = time.time()

        if now - self._last_cleanup >= self.config.interval_seconds:
            self._last_cleanup = now
            self.run_cleanup()

        if now - self._last_stats_log >= self.config.stats_interval_seconds:
            self._last_stats_log = now
            self.log_stats()

    def run_cleanup(self) -> dict:
        """
        Prune orphaned renders and idle rate limit buckets.

        Returns dict with:
        - renders_pruned: Cache entries dropped for evicted threads
        - senders_cleaned: Idle rate limiter senders dropped
        """
        result = {
            "renders_pruned": self.forum.prune_cache(),
            "senders_cleaned": self.forum.rate_limiter.cleanup(),
        }

        if result["renders_pruned"] or result["senders_cleaned"]:
            logger.info(
                f"Cleanup complete: {result['renders_pruned']} renders, "
                f"{result['senders_cleaned']} rate limit senders"
            )

        return result

    def log_stats(self):
        """Log current forum statistics."""
        stats = self.forum.get_stats()
        cache = stats["cache"]
        logger.info(
            f"Stats: boards={stats['boards']}, threads={stats['threads']}, "
            f"replies={stats['replies']}, cache={cache['entries']}/{cache['max_entries']} "
            f"(hits={cache['hits']}, misses={cache['misses']})"
        )

    def start(self):
        """Start the background maintenance thread."""
        if self._thread and self._thread.is_alive():
            return

        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run,
            name="bumpboard-maintenance",
            daemon=True
        )
        self._thread.start()
        logger.debug("Maintenance thread started")

    def stop(self, timeout: float = 5.0):
        """Stop the background maintenance thread."""
        self._stop.set()
        if self._thread:
            self._thread.join(timeout)
            self._thread = None
        logger.debug("Maintenance thread stopped")

    def _run(self):
        # Wake often enough to honour the shortest interval
        wait = max(min(self.config.interval_seconds, self.config.stats_interval_seconds), 1)
        while not self._stop.wait(wait):
            try:
                self.tick()
            except Exception as e:
                logger.error(f"Error in maintenance tick: {e}")
