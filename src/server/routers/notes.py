"""Note tree endpoints consumed by the 2D and 3D viewers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any

from fastapi import APIRouter, Depends

from server.dependencies import get_note_service
from server.models import COMMON_ERROR_RESPONSES, BatchRequest
from server.server_config import SERVICE_FEATURES, SERVICE_NAME, SERVICE_VERSION
from trilium_explorer.content import (
    extract_references,
    process_content,
    sanitize_and_rewrite,
    to_plain_text,
    word_count,
)
from trilium_explorer.exceptions import NotFoundError, ValidationError
from trilium_explorer.references import resolve_references
from trilium_explorer.schemas import NoteRecord
from trilium_explorer.service import NoteService
from trilium_explorer.tree import count_nodes
from trilium_explorer.utils.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()

Service = Annotated[NoteService, Depends(get_note_service)]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def _require_note(service: NoteService, note_id: str, *, tree_fallback: bool = False) -> NoteRecord:
    note = await service.get_note_content(note_id)
    if note is None and tree_fallback:
        logger.info("Direct lookup missed, searching tree", extra={"note_id": note_id})
        note = await service.find_in_tree(note_id)
    if note is None:
        raise NotFoundError(f"Note {note_id!r} not found")
    return note


@router.get("/structure", responses=COMMON_ERROR_RESPONSES)
async def get_structure(service: Service) -> dict[str, Any]:
    """Return the filtered note tree decorated for display.

    **Returns**

    - ``data``: root display node with ``id``, ``title``, ``type``, ``preview`` and ``children``
    - ``metadata``: ``totalNodes`` and ``generatedAt``
    """
    structure = await service.get_structure_for_display()
    total = count_nodes(structure)
    logger.info("Structure generated", extra={"total_nodes": total})
    return {
        "success": True,
        "data": structure.model_dump(),
        "metadata": {"totalNodes": total, "generatedAt": _now()},
    }


@router.get("/note/{note_id}/content", responses=COMMON_ERROR_RESPONSES)
async def get_note_content(note_id: str, service: Service) -> dict[str, Any]:
    """Return one note as raw, sanitized HTML, plain text and Markdown.

    Falls back to searching the tree when the direct lookup misses.
    """
    note = await _require_note(service, note_id, tree_fallback=True)
    processed = process_content(note.content)
    references = [ref.model_dump(by_alias=True) for ref in processed.references]
    return {
        "success": True,
        "data": {
            "id": note.id,
            "title": note.title,
            "content": {
                "raw": processed.raw,
                "html": processed.html,
                "plain": processed.plain,
                "markdown": processed.markdown,
            },
            "metadata": {
                "references": references,
                "referenceCount": len(references),
                "type": "note",
                "lastModified": _now(),
                "wordCount": word_count(processed.plain),
            },
        },
    }


@router.get("/note/{note_id}/references", responses=COMMON_ERROR_RESPONSES)
async def get_note_references(note_id: str, service: Service) -> dict[str, Any]:
    """Return the reference-links of a note with the title of each target."""
    note = await _require_note(service, note_id)
    resolved = await resolve_references(extract_references(note.content), service.get_note_content)
    return {
        "success": True,
        "data": {
            "noteId": note.id,
            "noteTitle": note.title,
            "references": [ref.model_dump(by_alias=True, exclude_none=True) for ref in resolved],
            "count": len(resolved),
        },
    }


@router.post("/notes/batch", responses=COMMON_ERROR_RESPONSES)
async def load_notes_batch(batch: BatchRequest, service: Service) -> dict[str, Any]:
    """Load several notes at once; misses and failures are reported per item."""
    items = await service.load_notes_batch(batch.note_ids)
    notes = [
        {
            "id": item.note.id,
            "title": item.note.title,
            "content": {
                "html": sanitize_and_rewrite(item.note.content),
                "plain": to_plain_text(item.note.content),
            },
        }
        for item in items
        if item.note is not None
    ]
    logger.info("Batch loaded", extra={"requested": len(items), "loaded": len(notes)})
    return {
        "success": True,
        "data": {
            "notes": notes,
            "items": [item.model_dump(by_alias=True, exclude={"note"}, exclude_none=True) for item in items],
            "requested": len(items),
            "loaded": len(notes),
            "failed": len(items) - len(notes),
        },
    }


@router.get("/search", responses=COMMON_ERROR_RESPONSES)
async def search(service: Service, q: str | None = None) -> dict[str, Any]:
    """Case-insensitive title search over the filtered tree."""
    query = (q or "").strip()
    if not query:
        raise ValidationError("Query parameter 'q' is required")
    results = await service.search_tree(query)
    return {
        "success": True,
        "data": {"query": query.lower(), "results": results, "count": len(results)},
    }


@router.get("/stats", responses=COMMON_ERROR_RESPONSES)
async def get_stats(service: Service) -> dict[str, Any]:
    """Return node counts by level."""
    stats = await service.get_stats()
    return {"success": True, "data": {**stats.model_dump(by_alias=True), "lastUpdated": _now()}}


@router.get("/health")
async def health() -> dict[str, Any]:
    return {
        "success": True,
        "service": SERVICE_NAME,
        "status": "OK",
        "version": SERVICE_VERSION,
        "features": list(SERVICE_FEATURES),
        "timestamp": _now(),
    }
