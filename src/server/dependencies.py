"""FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache

from trilium_explorer.service import NoteService


@lru_cache(maxsize=1)
def get_note_service() -> NoteService:
    """Return the process-wide service; it keeps no note state between calls."""
    return NoteService()
