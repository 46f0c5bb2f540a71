"""Resolve extracted reference-links against the note store."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Iterable

from trilium_explorer.schemas import NoteRecord, Reference, ReferenceResolution, ResolvedReference
from trilium_explorer.utils.logging_config import get_logger

logger = get_logger(__name__)

NoteLookup = Callable[[str], Awaitable[NoteRecord | None]]


async def resolve_references(
    references: Iterable[Reference], lookup: NoteLookup
) -> list[ResolvedReference]:
    """Look up every referenced note concurrently, in input order.

    A failed lookup marks only its own reference as an error; the others are
    resolved regardless.
    """
    return list(await asyncio.gather(*(_resolve_one(ref, lookup) for ref in references)))


async def _resolve_one(reference: Reference, lookup: NoteLookup) -> ResolvedReference:
    try:
        note = await lookup(reference.note_id)
    except Exception as exc:
        logger.warning(
            "Reference lookup failed",
            extra={"note_id": reference.note_id, "error": str(exc)},
        )
        resolution = ReferenceResolution(title="error", exists=False, error=str(exc))
    else:
        if note is None:
            resolution = ReferenceResolution(title="not found", exists=False)
        else:
            resolution = ReferenceResolution(title=note.title, exists=True)
    return ResolvedReference(**reference.model_dump(), resolved=resolution)
