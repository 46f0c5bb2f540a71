"""Note tree models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

NodeType = Literal["root", "chapter", "subchapter", "note"]


class TreeNode(BaseModel):
    """A note with its ordered children."""

    id: str
    title: str
    content: str | bytes | None = None
    children: list["TreeNode"] = Field(default_factory=list)


class DisplayNode(BaseModel):
    """A tree node decorated for the client: level label and content preview."""

    id: str
    title: str
    type: NodeType
    preview: str = ""
    children: list["DisplayNode"] = Field(default_factory=list)


class TreeStats(BaseModel):
    """Node counts by level of the filtered tree."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_notes: int
    root: int
    chapters: int
    subchapters: int
    notes: int
