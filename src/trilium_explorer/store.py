"""Read-only access to a Trilium SQLite database."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path

from trilium_explorer.config import TRILIUM_EXPLORER_DB_PATH
from trilium_explorer.exceptions import StoreError
from trilium_explorer.schemas import Branch, Note
from trilium_explorer.utils.logging_config import get_logger

logger = get_logger(__name__)

NOTES_QUERY = """
    SELECT n.noteId, n.title, b.content
    FROM notes n
    LEFT JOIN blobs b ON n.blobId = b.blobId
    WHERE n.isDeleted = 0
"""

BRANCHES_QUERY = """
    SELECT branchId, noteId, parentNoteId, notePosition
    FROM branches
    WHERE isDeleted = 0
"""


@dataclass
class StoreSnapshot:
    """Notes and branches read together in one session."""

    notes: list[Note]
    branches: list[Branch]


class NoteStore:
    """Open an independent read-only SQLite session per load."""

    def __init__(self, db_path: str | Path | None = None):
        self.db_path = Path(db_path) if db_path else TRILIUM_EXPLORER_DB_PATH

    def connect(self) -> sqlite3.Connection:
        """Return a read-only connection; the file is never created or written."""
        uri = f"{self.db_path.resolve().as_uri()}?mode=ro"
        try:
            conn = sqlite3.connect(uri, uri=True)
        except sqlite3.Error as exc:
            raise StoreError(
                f"Could not open note store at {self.db_path}: {exc}", query="connect"
            ) from exc
        conn.row_factory = sqlite3.Row
        return conn

    def load_all(self) -> StoreSnapshot:
        """Load every live note and branch, or raise ``StoreError``."""
        conn = self.connect()
        try:
            notes = self._load_notes(conn)
            branches = self._load_branches(conn)
        finally:
            conn.close()

        logger.info(
            "Loaded note store",
            extra={"db_path": str(self.db_path), "notes": len(notes), "branches": len(branches)},
        )
        return StoreSnapshot(notes=notes, branches=branches)

    def _load_notes(self, conn: sqlite3.Connection) -> list[Note]:
        try:
            rows = conn.execute(NOTES_QUERY).fetchall()
        except sqlite3.Error as exc:
            logger.error("Notes query failed", extra={"error": str(exc)})
            raise StoreError(f"Notes query failed: {exc}", query="notes") from exc
        return [
            Note(id=row["noteId"], title=row["title"] or "", content=row["content"])
            for row in rows
        ]

    def _load_branches(self, conn: sqlite3.Connection) -> list[Branch]:
        try:
            rows = conn.execute(BRANCHES_QUERY).fetchall()
        except sqlite3.Error as exc:
            logger.error("Branches query failed", extra={"error": str(exc)})
            raise StoreError(f"Branches query failed: {exc}", query="branches") from exc
        return [
            Branch(
                branch_id=row["branchId"],
                child_id=row["noteId"],
                parent_id=row["parentNoteId"],
                position=row["notePosition"] or 0,
            )
            for row in rows
        ]


__all__ = ["BRANCHES_QUERY", "NOTES_QUERY", "NoteStore", "StoreSnapshot"]
