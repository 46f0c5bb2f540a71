"""Query service: load the store, build and filter the tree, answer note queries."""

from __future__ import annotations

import asyncio
from typing import Iterable

from trilium_explorer.config import TRILIUM_EXPLORER_ROOT_TITLES
from trilium_explorer.display import (
    count_by_level,
    node_type_for_depth,
    plain_preview,
    to_display_tree,
)
from trilium_explorer.exceptions import NotFoundError
from trilium_explorer.html_utils import coerce_text
from trilium_explorer.schemas import (
    BatchItem,
    DisplayNode,
    Note,
    NoteRecord,
    TreeNode,
    TreeStats,
)
from trilium_explorer.store import NoteStore, StoreSnapshot
from trilium_explorer.tree import (
    build_tree,
    filter_hidden,
    find_node_by_id,
    find_node_by_title,
    iter_nodes,
    root_title_variants,
)
from trilium_explorer.utils.logging_config import get_logger

logger = get_logger(__name__)


def _to_record(note: Note | TreeNode) -> NoteRecord:
    return NoteRecord(id=note.id, title=note.title, content=coerce_text(note.content))


class NoteService:
    """Answer tree and note queries; every call re-reads the store."""

    def __init__(self, store: NoteStore | None = None, root_titles: Iterable[str] | None = None):
        self.store = store or NoteStore()
        self.root_titles = tuple(root_titles or TRILIUM_EXPLORER_ROOT_TITLES)

    async def _load(self) -> StoreSnapshot:
        return await asyncio.to_thread(self.store.load_all)

    async def get_complete_tree(self) -> TreeNode:
        """Return the root note with hidden subtrees removed from below it.

        Raises:
            NotFoundError: If no root title variant matches.
        """
        snapshot = await self._load()
        tree = build_tree(snapshot.notes, snapshot.branches)

        variants = root_title_variants(self.root_titles)
        matches = (find_node_by_title(tree, variant) for variant in variants)
        root = next((found for found in matches if found is not None), None)
        if root is None:
            logger.error("Root note not found", extra={"attempted": variants})
            raise NotFoundError(f"Root note not found; tried titles: {', '.join(variants)}")

        children = [
            kept for kept in (filter_hidden(child) for child in root.children) if kept is not None
        ]
        logger.info(
            "Root note located",
            extra={
                "title": root.title,
                "children": len(root.children),
                "visible_children": len(children),
            },
        )
        return root.model_copy(update={"children": children})

    async def get_note_content(self, note_id: str) -> NoteRecord | None:
        """Return the note with ``note_id`` by scanning the loaded notes, or None."""
        snapshot = await self._load()
        note = next((n for n in snapshot.notes if n.id == note_id), None)
        if note is None:
            logger.info("Note not found", extra={"note_id": note_id})
            return None
        return _to_record(note)

    async def get_notes_by_ids(self, note_ids: Iterable[str]) -> list[NoteRecord]:
        """Return the notes found for ``note_ids`` in input order; misses are dropped."""
        snapshot = await self._load()
        by_id: dict[str, Note] = {}
        for note in snapshot.notes:
            by_id.setdefault(note.id, note)
        return [_to_record(by_id[note_id]) for note_id in note_ids if note_id in by_id]

    async def find_by_title(self, title: str) -> NoteRecord | None:
        """Case-insensitive substring match over titles; first hit in load order."""
        snapshot = await self._load()
        needle = title.lower()
        note = next((n for n in snapshot.notes if needle in n.title.lower()), None)
        return _to_record(note) if note is not None else None

    async def find_in_tree(self, note_id: str) -> NoteRecord | None:
        """Fallback lookup of ``note_id`` inside the filtered tree."""
        node = find_node_by_id(await self.get_complete_tree(), note_id)
        return _to_record(node) if node is not None else None

    async def load_notes_batch(self, note_ids: Iterable[str]) -> list[BatchItem]:
        """Load each id independently; one failure never affects the others."""
        ids = list(note_ids)
        return list(await asyncio.gather(*(self._load_batch_item(note_id) for note_id in ids)))

    async def _load_batch_item(self, note_id: str) -> BatchItem:
        try:
            note = await self.get_note_content(note_id)
        except Exception as exc:
            logger.warning("Batch item failed", extra={"note_id": note_id, "error": str(exc)})
            return BatchItem(note_id=note_id, status="error", error=str(exc))
        if note is None:
            return BatchItem(note_id=note_id, status="not_found")
        return BatchItem(note_id=note_id, status="loaded", note=note)

    async def get_structure_for_display(self) -> DisplayNode:
        return to_display_tree(await self.get_complete_tree())

    async def search_tree(self, query: str) -> list[dict[str, str]]:
        """Case-insensitive title substring search over the filtered tree."""
        needle = query.lower()
        root = await self.get_complete_tree()
        return [
            {
                "id": node.id,
                "title": node.title,
                "type": node_type_for_depth(depth),
                "preview": plain_preview(node.content),
            }
            for node, depth in iter_nodes(root)
            if needle in node.title.lower()
        ]

    async def get_stats(self) -> TreeStats:
        return count_by_level(await self.get_complete_tree())
