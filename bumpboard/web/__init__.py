"""BumpBoard Web Module - Flask routes, request schemas and page rendering."""

from .app import create_app

__all__ = ["create_app"]
