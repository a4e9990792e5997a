"""
BumpBoard Forum

Central orchestrator: owns the boards, the shared poster hasher, the
render cache and the posting rate limiter.
"""

import time
import logging
from typing import Callable, Optional

from ..config import Config
from .board_store import BoardStore
from .errors import BoardError, RATE_LIMITED, THREAD_FULL, not_found
from .identity import IdentityHasher
from .models import ThreadSnapshot, ThreadSummary
from .rate_limiter import RateLimiter
from .render_cache import RenderCache

logger = logging.getLogger(__name__)

# render(store, snapshot, can_reply) -> rendered page
Renderer = Callable[[BoardStore, ThreadSnapshot, bool], str]


class Forum:
    """
    Board registry for BumpBoard.

    Responsibilities:
    - Resolve board names to their stores
    - Rate limit posting per origin
    - Invalidate cached renders before a successful reply returns
    - Serve thread renders through the cache, checking activity every time
    """

    def __init__(self, config: Config, clock: Callable[[], float] = time.time):
        """
        Initialize the forum from configuration.

        Args:
            config: Loaded configuration object
            clock: Time source shared by all boards
        """
        self.config = config
        self.clock = clock

        self.hasher = IdentityHasher(
            bucket_seconds=config.identity.bucket_seconds,
            tag_length=config.identity.tag_length
        )
        self.cache = RenderCache(max_entries=config.cache.max_entries)
        self.rate_limiter = RateLimiter(
            threads_per_minute=config.rate_limits.threads_per_minute,
            replies_per_minute=config.rate_limits.replies_per_minute,
            clock=clock
        )

        self._boards: dict[str, BoardStore] = {
            board.name: BoardStore(board, self.hasher, clock=clock)
            for board in config.boards
        }

        logger.info(f"Forum initialized with {len(self._boards)} boards")

    @property
    def default_board(self) -> str:
        return self.config.forum.default_board

    def board_names(self) -> list[str]:
        return list(self._boards)

    def describe_boards(self) -> list[dict]:
        """Board descriptions for listings."""
        return [
            {
                "name": store.name,
                "description": store.description,
                "expiry": store.expiry_seconds,
            }
            for store in self._boards.values()
        ]

    def get_board(self, name: str) -> tuple[Optional[BoardStore], Optional[BoardError]]:
        """
        Resolve a board by name.

        Returns:
            (BoardStore, None) on success
            (None, BoardError) if no such board
        """
        store = self._boards.get(name)
        if store is None:
            return None, not_found("Board not found")
        return store, None

    def _allowed(self, origin: str, action: str) -> bool:
        sender = self.hasher.tag(origin, self.clock())
        return self.rate_limiter.check(sender, action)

    def create_thread(
        self,
        board: str,
        title: str,
        text: str,
        origin: str
    ) -> tuple[Optional[int], Optional[BoardError]]:
        """Create a thread on a board."""
        store, error = self.get_board(board)
        if error:
            return None, error

        if not self._allowed(origin, "thread"):
            return None, RATE_LIMITED

        thread_id, error = store.create_thread(title, text, origin)
        if error:
            return None, error

        logger.info(f"Thread created on {board}: {thread_id}")
        return thread_id, None

    def reply(
        self,
        board: str,
        thread_id: int,
        text: str,
        origin: str
    ) -> tuple[bool, Optional[BoardError]]:
        """
        Reply to a thread.

        The thread's cached render is dropped before this returns, so no
        later read can be served a page without the new reply.

        Replies to missing, inactive or full threads are refused before
        they spend the poster's rate limit allowance.
        """
        store, error = self.get_board(board)
        if error:
            return False, error

        error = store.assert_thread_active(thread_id)
        if error:
            return False, error

        full, error = store.is_thread_full(thread_id)
        if error:
            return False, error
        if full:
            return False, THREAD_FULL

        if not self._allowed(origin, "reply"):
            return False, RATE_LIMITED

        ok, error = store.reply_to_thread(thread_id, text, origin)
        if not ok:
            return False, error

        self.cache.invalidate(board, thread_id)
        logger.info(f"Reply posted on {board}: thread {thread_id}")
        return True, None

    def get_thread(self, board: str, thread_id: int) -> tuple[Optional[ThreadSnapshot], Optional[BoardError]]:
        store, error = self.get_board(board)
        if error:
            return None, error
        return store.get_thread(thread_id)

    def recent_threads(
        self,
        board: str,
        limit: Optional[int] = None
    ) -> tuple[Optional[list[ThreadSummary]], Optional[BoardError]]:
        store, error = self.get_board(board)
        if error:
            return None, error
        return store.recent_threads(limit), None

    def render_thread(
        self,
        board: str,
        thread_id: int,
        render: Renderer
    ) -> tuple[Optional[str], Optional[BoardError]]:
        """
        Get a thread's rendered page, from cache when possible.

        The activity check runs on every call, cache hit or not.
        """
        store, error = self.get_board(board)
        if error:
            return None, error

        error = store.assert_thread_active(thread_id)
        if error:
            return None, error

        cached = self.cache.get(board, thread_id)
        if cached is not None:
            return cached, None

        epoch = self.cache.epoch
        snapshot, error = store.get_thread(thread_id)
        if error:
            return None, error

        rendered = render(store, snapshot, snapshot.reply_count < store.max_replies)
        self.cache.put(board, thread_id, rendered, epoch=epoch)
        return rendered, None

    def prune_cache(self) -> int:
        """Drop cached renders of evicted threads. Returns entries removed."""
        return sum(
            self.cache.prune(name, store.thread_ids())
            for name, store in self._boards.items()
        )

    def get_stats(self) -> dict:
        """Return forum statistics."""
        boards = [store.get_stats() for store in self._boards.values()]
        return {
            "boards": len(boards),
            "threads": sum(b["threads"] for b in boards),
            "replies": sum(b["replies"] for b in boards),
            "cache": self.cache.get_stats(),
            "rate_limiter": self.rate_limiter.get_stats(),
        }
