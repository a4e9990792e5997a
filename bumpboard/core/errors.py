"""
BumpBoard Error Kinds

Closed set of failure outcomes returned by the board store and forum.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Failure kind enumeration."""
    NOT_FOUND = "not_found"
    THREAD_INACTIVE = "thread_inactive"
    THREAD_FULL = "thread_full"
    VALIDATION = "validation"
    RATE_LIMITED = "rate_limited"
    INTERNAL = "internal"


@dataclass(frozen=True)
class BoardError:
    """A failed operation: its kind plus a user-facing message."""
    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


def not_found(message: str = "Thread not found") -> BoardError:
    return BoardError(ErrorKind.NOT_FOUND, message)


def validation(message: str) -> BoardError:
    return BoardError(ErrorKind.VALIDATION, message)


THREAD_INACTIVE = BoardError(ErrorKind.THREAD_INACTIVE, "Thread is no longer active")
THREAD_FULL = BoardError(ErrorKind.THREAD_FULL, "Thread is full")
RATE_LIMITED = BoardError(ErrorKind.RATE_LIMITED, "Rate limited")
INTERNAL = BoardError(ErrorKind.INTERNAL, "Internal error")
