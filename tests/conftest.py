"""Test setup for trilium_explorer."""

from __future__ import annotations

import sqlite3
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from trilium_explorer.service import NoteService  # noqa: E402
from trilium_explorer.store import NoteStore  # noqa: E402

SCHEMA = (
    "CREATE TABLE notes (noteId TEXT PRIMARY KEY, title TEXT, blobId TEXT, isDeleted INTEGER DEFAULT 0)",
    "CREATE TABLE blobs (blobId TEXT PRIMARY KEY, content BLOB)",
    """
    CREATE TABLE branches (
        branchId TEXT PRIMARY KEY,
        noteId TEXT,
        parentNoteId TEXT,
        notePosition INTEGER,
        isDeleted INTEGER DEFAULT 0
    )
    """,
)

REFERENCE_HTML = (
    '<p>See <a class="reference-link" href="#root/tres/chap2">Chapter&nbsp;Two</a> '
    'and <a class="reference-link" href="#root/tres/gone">Lost note</a>.</p>'
)

# (noteId, title, content, isDeleted)
SAMPLE_NOTES = [
    ("root", "root", "", 0),
    ("tres", "Tres", "<p>Book root</p>", 0),
    ("chap1", "Chapter One", REFERENCE_HTML, 0),
    ("chap2", "Chapter Two", "<p>Second <b>chapter</b></p>", 0),
    ("sub1", "Subchapter A", "<p>Sub &amp; more</p>", 0),
    ("note1", "Deep note", "<p>" + "x" * 250 + "</p>", 0),
    ("hid1", "Hidden Notes", "<p>secret</p>", 0),
    ("hidchild", "Inside hidden", "", 0),
    ("_options", "Options", "", 0),
    ("deleted", "Deleted note", "<p>gone</p>", 1),
]

# (branchId, noteId, parentNoteId, notePosition, isDeleted)
SAMPLE_BRANCHES = [
    ("b-root", "root", "none", 0, 0),
    ("b-tres", "tres", "root", 10, 0),
    ("b-options", "_options", "root", 20, 0),
    ("b-chap2", "chap2", "tres", 20, 0),
    ("b-chap1", "chap1", "tres", 10, 0),
    ("b-hid1", "hid1", "tres", 30, 0),
    ("b-hidchild", "hidchild", "hid1", 10, 0),
    ("b-sub1", "sub1", "chap1", 10, 0),
    ("b-note1", "note1", "sub1", 10, 0),
    ("b-deleted", "deleted", "chap1", 20, 1),
]


def make_trilium_db(path: Path, notes=SAMPLE_NOTES, branches=SAMPLE_BRANCHES) -> Path:
    """Create a minimal Trilium database at ``path``."""
    conn = sqlite3.connect(path)
    try:
        with conn:
            for statement in SCHEMA:
                conn.execute(statement)
            for note_id, title, content, is_deleted in notes:
                blob_id = f"blob-{note_id}"
                conn.execute(
                    "INSERT INTO notes (noteId, title, blobId, isDeleted) VALUES (?, ?, ?, ?)",
                    (note_id, title, blob_id, is_deleted),
                )
                conn.execute(
                    "INSERT INTO blobs (blobId, content) VALUES (?, ?)", (blob_id, content)
                )
            conn.executemany(
                "INSERT INTO branches (branchId, noteId, parentNoteId, notePosition, isDeleted) "
                "VALUES (?, ?, ?, ?, ?)",
                branches,
            )
    finally:
        conn.close()
    return path


@pytest.fixture
def trilium_db(tmp_path: Path) -> Path:
    return make_trilium_db(tmp_path / "document.db")


@pytest.fixture
def note_store(trilium_db: Path) -> NoteStore:
    return NoteStore(trilium_db)


@pytest.fixture
def note_service(note_store: NoteStore) -> NoteService:
    return NoteService(note_store, root_titles=["Tres"])
