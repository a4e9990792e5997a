"""
BumpBoard Render Cache

Memoizes rendered thread pages keyed by (board, thread id).
"""

import logging
import threading
from collections import OrderedDict
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

CacheKey = tuple[str, int]


class RenderCache:
    """
    Bounded render cache shared by all boards.

    Eviction is by insertion order: when over max_entries the entry that
    was stored first goes, however often it was read. The bound is global,
    so a burst of renders on one board can push out another board's pages.

    Writers call invalidate() after a successful mutation. Readers that
    render on a miss read `epoch` before taking their store snapshot and
    pass it back to put(); the render is dropped if any invalidation
    happened in between.
    """

    def __init__(self, max_entries: int = 20):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")

        self.max_entries = max_entries
        self._entries: "OrderedDict[CacheKey, str]" = OrderedDict()
        self._lock = threading.Lock()
        self._epoch = 0

        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries

    @property
    def epoch(self) -> int:
        """Invalidation counter; changes every time an entry is invalidated."""
        with self._lock:
            return self._epoch

    def get(self, board: str, thread_id: int) -> Optional[str]:
        """Return the cached render or None on a miss."""
        with self._lock:
            rendered = self._entries.get((board, thread_id))
            if rendered is None:
                self.misses += 1
            else:
                self.hits += 1
            return rendered

    def put(
        self,
        board: str,
        thread_id: int,
        rendered: str,
        epoch: Optional[int] = None
    ) -> bool:
        """
        Store a render.

        Args:
            board: Board name
            thread_id: Thread id
            rendered: Rendered page
            epoch: Value of `epoch` read before the render's snapshot was taken

        Returns True if stored, False if discarded as possibly stale.
        """
        key = (board, thread_id)
        with self._lock:
            if epoch is not None and epoch != self._epoch:
                logger.debug(f"Discarded render for {board}/{thread_id}: invalidated meanwhile")
                return False

            # A re-put counts as a fresh insertion
            self._entries.pop(key, None)
            self._entries[key] = rendered

            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                self.evictions += 1
                logger.debug(f"Evicted render for {evicted[0]}/{evicted[1]}")

            return True

    def invalidate(self, board: str, thread_id: int) -> bool:
        """Drop a thread's render. Returns True if an entry was removed."""
        with self._lock:
            self._epoch += 1
            return self._entries.pop((board, thread_id), None) is not None

    def prune(self, board: str, live_ids: Iterable[int]) -> int:
        """Drop entries of a board whose threads no longer exist."""
        live = set(live_ids)
        with self._lock:
            orphaned = [
                key for key in self._entries
                if key[0] == board and key[1] not in live
            ]
            for key in orphaned:
                del self._entries[key]

        if orphaned:
            logger.debug(f"Pruned {len(orphaned)} orphaned renders from {board}")
        return len(orphaned)

    def clear(self):
        """Drop every entry."""
        with self._lock:
            self._epoch += 1
            self._entries.clear()

    def get_stats(self) -> dict:
        """Return cache statistics."""
        with self._lock:
            return {
                "entries": len(self._entries),
                "max_entries": self.max_entries,
                "hits": self.hits,
                "misses": self.misses,
                "evictions": self.evictions,
            }
