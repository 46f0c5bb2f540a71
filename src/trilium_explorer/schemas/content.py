"""Processed note content and cross-reference models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Reference(BaseModel):
    """An inline reference-link found in note content."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    note_id: str
    text: str
    original_href: str


class ReferenceResolution(BaseModel):
    """Lookup outcome for a referenced note."""

    title: str
    exists: bool
    error: str | None = None


class ResolvedReference(Reference):
    """A reference with the lookup outcome attached."""

    resolved: ReferenceResolution


class ProcessedContent(BaseModel):
    """All representations derived from one raw note body."""

    raw: str = ""
    html: str = ""
    plain: str = ""
    markdown: str = ""
    references: list[Reference] = Field(default_factory=list)
