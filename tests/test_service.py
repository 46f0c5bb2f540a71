"""Tests for the note query service."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from trilium_explorer.exceptions import NotFoundError, StoreError
from trilium_explorer.service import NoteService
from trilium_explorer.store import NoteStore
from trilium_explorer.tree import find_node_by_id


class TestCompleteTree:
    """Tests for get_complete_tree."""

    @pytest.mark.asyncio
    async def test_returns_filtered_root(self, note_service: NoteService) -> None:
        """Hidden subtrees below the root are removed; order follows position."""
        tree = await note_service.get_complete_tree()

        assert tree.id == "tres"
        assert [child.id for child in tree.children] == ["chap1", "chap2"]
        assert [child.id for child in tree.children[0].children] == ["sub1"]
        assert find_node_by_id(tree, "hid1") is None
        assert find_node_by_id(tree, "hidchild") is None

    @pytest.mark.asyncio
    async def test_matches_root_title_variants(self, note_store: NoteStore) -> None:
        service = NoteService(note_store, root_titles=["tres"])

        tree = await service.get_complete_tree()

        assert tree.title == "Tres"

    @pytest.mark.asyncio
    async def test_missing_root_raises_not_found(self, note_store: NoteStore) -> None:
        service = NoteService(note_store, root_titles=["Nowhere"])

        with pytest.raises(NotFoundError, match="Nowhere"):
            await service.get_complete_tree()

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, tmp_path) -> None:
        service = NoteService(NoteStore(tmp_path / "absent.db"), root_titles=["Tres"])

        with pytest.raises(StoreError):
            await service.get_complete_tree()


class TestNoteLookups:
    """Tests for the single-note and multi-note lookups."""

    @pytest.mark.asyncio
    async def test_get_note_content(self, note_service: NoteService) -> None:
        note = await note_service.get_note_content("chap2")

        assert note is not None
        assert (note.id, note.title) == ("chap2", "Chapter Two")
        assert note.content == "<p>Second <b>chapter</b></p>"

    @pytest.mark.asyncio
    async def test_get_note_content_missing(self, note_service: NoteService) -> None:
        assert await note_service.get_note_content("missing-id") is None

    @pytest.mark.asyncio
    async def test_get_note_content_includes_hidden_notes(self, note_service: NoteService) -> None:
        """Direct lookup is not restricted to the visible tree."""
        note = await note_service.get_note_content("hid1")
        assert note is not None

    @pytest.mark.asyncio
    async def test_get_notes_by_ids_keeps_order_and_drops_misses(
        self, note_service: NoteService
    ) -> None:
        notes = await note_service.get_notes_by_ids(["sub1", "nope", "chap1"])

        assert [note.id for note in notes] == ["sub1", "chap1"]

    @pytest.mark.asyncio
    async def test_find_by_title_is_case_insensitive_substring(
        self, note_service: NoteService
    ) -> None:
        note = await note_service.find_by_title("TWO")

        assert note is not None
        assert note.id == "chap2"

    @pytest.mark.asyncio
    async def test_find_by_title_miss(self, note_service: NoteService) -> None:
        assert await note_service.find_by_title("no such title") is None

    @pytest.mark.asyncio
    async def test_find_in_tree(self, note_service: NoteService) -> None:
        note = await note_service.find_in_tree("note1")

        assert note is not None
        assert note.title == "Deep note"
        assert await note_service.find_in_tree("hid1") is None


class TestBatch:
    """Tests for load_notes_batch."""

    @pytest.mark.asyncio
    async def test_reports_each_item(self, note_service: NoteService) -> None:
        items = await note_service.load_notes_batch(["chap1", "missing"])

        assert [(item.note_id, item.status) for item in items] == [
            ("chap1", "loaded"),
            ("missing", "not_found"),
        ]
        assert items[0].note.title == "Chapter One"

    @pytest.mark.asyncio
    async def test_failure_is_isolated(self, note_service: NoteService) -> None:
        original = note_service.get_note_content

        async def flaky(note_id: str):
            if note_id == "chap2":
                raise RuntimeError("disk gone")
            return await original(note_id)

        with patch.object(note_service, "get_note_content", AsyncMock(side_effect=flaky)):
            items = await note_service.load_notes_batch(["chap1", "chap2"])

        assert [item.status for item in items] == ["loaded", "error"]
        assert items[1].error == "disk gone"


class TestDisplay:
    """Tests for the display structure, search and stats."""

    @pytest.mark.asyncio
    async def test_structure_labels_levels(self, note_service: NoteService) -> None:
        structure = await note_service.get_structure_for_display()

        chap1 = structure.children[0]
        sub1 = chap1.children[0]
        note1 = sub1.children[0]
        assert [structure.type, chap1.type, sub1.type, note1.type] == [
            "root",
            "chapter",
            "subchapter",
            "note",
        ]
        assert structure.preview == "<p>Book root</p>"

    @pytest.mark.asyncio
    async def test_structure_truncates_preview(self, note_service: NoteService) -> None:
        structure = await note_service.get_structure_for_display()

        preview = structure.children[0].children[0].children[0].preview
        assert len(preview) == 203
        assert preview.endswith("...")

    @pytest.mark.asyncio
    async def test_search_tree(self, note_service: NoteService) -> None:
        results = await note_service.search_tree("CHAPTER")

        assert [result["id"] for result in results] == ["chap1", "sub1", "chap2"]
        assert [result["type"] for result in results] == ["chapter", "subchapter", "chapter"]
        assert results[2]["preview"] == "Second chapter..."

    @pytest.mark.asyncio
    async def test_search_tree_skips_hidden_notes(self, note_service: NoteService) -> None:
        assert await note_service.search_tree("hidden") == []

    @pytest.mark.asyncio
    async def test_stats(self, note_service: NoteService) -> None:
        stats = await note_service.get_stats()

        assert stats.model_dump(by_alias=True) == {
            "totalNotes": 5,
            "root": 1,
            "chapters": 2,
            "subchapters": 1,
            "notes": 1,
        }
