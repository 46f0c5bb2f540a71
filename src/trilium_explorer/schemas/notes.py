"""Note store row models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Note(BaseModel):
    """A note row; ``content`` is the raw blob and may be bytes."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    content: str | bytes | None = None


class Branch(BaseModel):
    """A parent/child placement edge ordered by ``position``."""

    model_config = ConfigDict(frozen=True)

    child_id: str
    parent_id: str
    position: int = 0
    branch_id: str | None = None


class NoteRecord(BaseModel):
    """Normalized ``{id, title, content}`` view of a note with decoded content."""

    id: str
    title: str
    content: str = ""


class BatchItem(BaseModel):
    """Outcome of loading one id of a batch."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    note_id: str
    status: Literal["loaded", "not_found", "error"]
    note: NoteRecord | None = None
    error: str | None = None
