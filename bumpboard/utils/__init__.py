"""BumpBoard Utilities Module."""

from .formatting import format_iso, format_timestamp

__all__ = ["format_iso", "format_timestamp"]
