"""BumpBoard Core Module - Board store, render cache, identity and forum."""

from .board_store import BoardStore
from .errors import BoardError, ErrorKind
from .forum import Forum
from .identity import IdentityHasher
from .maintenance import MaintenanceManager
from .rate_limiter import RateLimiter
from .render_cache import RenderCache

__all__ = [
    "BoardStore",
    "BoardError",
    "ErrorKind",
    "Forum",
    "IdentityHasher",
    "MaintenanceManager",
    "RateLimiter",
    "RenderCache",
]
