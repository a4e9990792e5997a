"""
BumpBoard Data Models

Dataclasses for threads and replies held by a board store.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ReplyRecord:
    """A reply appended to a thread. Never modified after append."""
    text: str
    poster_hash: str
    created_at: Optional[float] = None


@dataclass
class ThreadRecord:
    """Live thread owned by a board store."""
    id: int
    title: str
    text: str
    poster_hash: str
    created_at: float
    modified_at: float
    replies: list[ReplyRecord] = field(default_factory=list)

    @property
    def reply_count(self) -> int:
        return len(self.replies)

    def bump_key(self) -> tuple[float, int]:
        """Sort key for bump order (sort descending for newest first)."""
        return (self.modified_at, self.id)

    def snapshot(self) -> "ThreadSnapshot":
        return ThreadSnapshot(
            id=self.id,
            title=self.title,
            text=self.text,
            poster_hash=self.poster_hash,
            created_at=self.created_at,
            modified_at=self.modified_at,
            replies=tuple(self.replies),
        )

    def summary(self) -> "ThreadSummary":
        return ThreadSummary(
            id=self.id,
            title=self.title,
            poster_hash=self.poster_hash,
            created_at=self.created_at,
            modified_at=self.modified_at,
            reply_count=self.reply_count,
        )


@dataclass(frozen=True)
class ThreadSnapshot:
    """Point-in-time copy of a thread, safe to use without the board lock."""
    id: int
    title: str
    text: str
    poster_hash: str
    created_at: float
    modified_at: float
    replies: tuple[ReplyRecord, ...] = ()

    @property
    def reply_count(self) -> int:
        return len(self.replies)


@dataclass(frozen=True)
class ThreadSummary:
    """Thread header for board listings."""
    id: int
    title: str
    poster_hash: str
    created_at: float
    modified_at: float
    reply_count: int
