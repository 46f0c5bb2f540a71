"""Shared schemas for trilium_explorer."""

from trilium_explorer.schemas.content import (
    ProcessedContent,
    Reference,
    ReferenceResolution,
    ResolvedReference,
)
from trilium_explorer.schemas.notes import BatchItem, Branch, Note, NoteRecord
from trilium_explorer.schemas.tree import DisplayNode, TreeNode, TreeStats

__all__ = [
    "BatchItem",
    "Branch",
    "DisplayNode",
    "Note",
    "NoteRecord",
    "ProcessedContent",
    "Reference",
    "ReferenceResolution",
    "ResolvedReference",
    "TreeNode",
    "TreeStats",
]
