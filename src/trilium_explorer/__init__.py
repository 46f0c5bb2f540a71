"""trilium_explorer: browse a Trilium note tree as clean HTML, text and Markdown."""

from trilium_explorer.content import (
    extract_references,
    process_content,
    sanitize_and_rewrite,
    to_plain_text,
)
from trilium_explorer.exceptions import (
    NotFoundError,
    ProcessingError,
    StoreError,
    TriliumExplorerError,
    ValidationError,
)
from trilium_explorer.html_utils import decode_entities
from trilium_explorer.markdown import to_markdown
from trilium_explorer.references import resolve_references
from trilium_explorer.schemas import Branch, Note, ProcessedContent, Reference, TreeNode
from trilium_explorer.service import NoteService
from trilium_explorer.store import NoteStore
from trilium_explorer.tree import build_tree, filter_hidden, find_node_by_id, find_node_by_title

__all__ = [
    "Branch",
    "Note",
    "NoteService",
    "NoteStore",
    "NotFoundError",
    "ProcessedContent",
    "ProcessingError",
    "Reference",
    "StoreError",
    "TreeNode",
    "TriliumExplorerError",
    "ValidationError",
    "build_tree",
    "decode_entities",
    "extract_references",
    "filter_hidden",
    "find_node_by_id",
    "find_node_by_title",
    "process_content",
    "resolve_references",
    "sanitize_and_rewrite",
    "to_markdown",
    "to_plain_text",
]
