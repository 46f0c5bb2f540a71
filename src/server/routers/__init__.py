"""API routers."""

from server.routers import notes

__all__ = ["notes"]
