"""
BumpBoard Board Store

In-memory owner of one board's threads: id allocation, capacity eviction,
bump ordering, inactivity expiry and reply limits.
"""

import time
import logging
import threading
from typing import Callable, Optional

from ..config import BoardConfig
from .errors import BoardError, THREAD_FULL, THREAD_INACTIVE, not_found, validation
from .identity import IdentityHasher
from .models import ReplyRecord, ThreadRecord, ThreadSnapshot, ThreadSummary

logger = logging.getLogger(__name__)


class BoardStore:
    """
    Bounded, bump-ordered thread collection for a single board.

    Every operation runs under the board's lock, so a reader never sees a
    reply appended without the matching bump. Boards never share a lock.

    Bump order is modified_at descending, ties broken by id descending.
    The thread at the tail of that order is evicted when a new thread
    would exceed max_threads. Expired threads are kept; expiry only
    blocks replies and is reported by assert_thread_active().
    """

    def __init__(
        self,
        config: BoardConfig,
        hasher: IdentityHasher,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize an empty board.

        Args:
            config: Board name and limits
            hasher: Poster identity hasher shared by all boards
            clock: Time source in seconds since epoch
        """
        self.name = config.name
        self.description = config.description
        self.max_threads = config.max_threads
        self.max_replies = config.max_replies
        self.expiry_seconds = config.expiry_seconds

        self._hasher = hasher
        self._clock = clock
        self._lock = threading.Lock()
        self._threads: dict[int, ThreadRecord] = {}
        self._next_id = 1
        self._last_now = 0.0

    def __len__(self) -> int:
        with self._lock:
            return len(self._threads)

    def __contains__(self, thread_id: int) -> bool:
        with self._lock:
            return thread_id in self._threads

    def _now(self) -> float:
        # Clamped so modified_at never moves backwards if the clock does
        now = max(self._clock(), self._last_now)
        self._last_now = now
        return now

    def _is_active(self, thread: ThreadRecord, now: float) -> bool:
        return now - thread.modified_at < self.expiry_seconds

    def create_thread(
        self,
        title: str,
        text: str,
        origin: str
    ) -> tuple[Optional[int], Optional[BoardError]]:
        """
        Create a new thread at the head of bump order.

        Evicts the least recently bumped thread first if the board is full.

        Returns:
            (thread_id, None) on success
            (None, BoardError) on failure
        """
        if not isinstance(title, str) or not title.strip():
            return None, validation("Bad title")
        if not isinstance(text, str) or not text.strip():
            return None, validation("Bad text")

        with self._lock:
            now = self._now()

            if len(self._threads) >= self.max_threads:
                victim = min(self._threads.values(), key=ThreadRecord.bump_key)
                del self._threads[victim.id]
                logger.debug(f"{self.name}: evicted thread {victim.id}")

            thread_id = self._next_id
            self._next_id += 1

            self._threads[thread_id] = ThreadRecord(
                id=thread_id,
                title=title,
                text=text,
                poster_hash=self._hasher.tag(origin, now),
                created_at=now,
                modified_at=now,
            )

        logger.debug(f"{self.name}: created thread {thread_id}")
        return thread_id, None

    def reply_to_thread(
        self,
        thread_id: int,
        text: str,
        origin: str
    ) -> tuple[bool, Optional[BoardError]]:
        """
        Append a reply and bump the thread.

        Returns:
            (True, None) on success
            (False, BoardError) on failure; the board is left unchanged
        """
        if not isinstance(text, str) or not text.strip():
            return False, validation("Bad text")

        with self._lock:
            thread = self._threads.get(thread_id)
            if thread is None:
                return False, not_found()

            now = self._now()
            if not self._is_active(thread, now):
                return False, THREAD_INACTIVE

            if thread.reply_count >= self.max_replies:
                return False, THREAD_FULL

            thread.replies.append(ReplyRecord(
                text=text,
                poster_hash=self._hasher.tag(origin, now),
                created_at=now,
            ))
            thread.modified_at = now

        logger.debug(f"{self.name}: reply to thread {thread_id}")
        return True, None

    def get_thread(self, thread_id: int) -> tuple[Optional[ThreadSnapshot], Optional[BoardError]]:
        """Get an immutable snapshot of a thread, active or not."""
        with self._lock:
            thread = self._threads.get(thread_id)
            if thread is None:
                return None, not_found()
            return thread.snapshot(), None

    def recent_threads(self, limit: Optional[int] = None) -> list[ThreadSummary]:
        """List thread summaries in bump order, most recently active first."""
        with self._lock:
            ordered = sorted(
                self._threads.values(),
                key=ThreadRecord.bump_key,
                reverse=True
            )
            if limit is not None:
                ordered = ordered[:max(limit, 0)]
            return [thread.summary() for thread in ordered]

    def is_thread_full(self, thread_id: int) -> tuple[Optional[bool], Optional[BoardError]]:
        """Check whether a thread has reached its reply limit."""
        with self._lock:
            thread = self._threads.get(thread_id)
            if thread is None:
                return None, not_found()
            return thread.reply_count >= self.max_replies, None

    def assert_thread_active(self, thread_id: int) -> Optional[BoardError]:
        """
        Check that a thread exists and is still active.

        Returns None when active, otherwise NOT_FOUND or THREAD_INACTIVE.
        """
        with self._lock:
            thread = self._threads.get(thread_id)
            if thread is None:
                return not_found()
            if not self._is_active(thread, self._now()):
                return THREAD_INACTIVE
            return None

    def thread_ids(self) -> set[int]:
        """Return the ids of all live threads."""
        with self._lock:
            return set(self._threads)

    def get_stats(self) -> dict:
        """Return board statistics."""
        with self._lock:
            return {
                "name": self.name,
                "threads": len(self._threads),
                "replies": sum(t.reply_count for t in self._threads.values()),
                "max_threads": self.max_threads,
                "max_replies": self.max_replies,
                "next_id": self._next_id,
            }
