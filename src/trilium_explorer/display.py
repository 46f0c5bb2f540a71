"""Format the filtered note tree for the client: display tree, previews and counts."""

from __future__ import annotations

from trilium_explorer.config import (
    TRILIUM_EXPLORER_PREVIEW_LENGTH,
    TRILIUM_EXPLORER_SEARCH_PREVIEW_LENGTH,
)
from trilium_explorer.content import to_plain_text
from trilium_explorer.html_utils import coerce_text
from trilium_explorer.schemas import DisplayNode, TreeNode, TreeStats
from trilium_explorer.schemas.tree import NodeType
from trilium_explorer.tree import iter_nodes

_LEVEL_TYPES: tuple[NodeType, ...] = ("root", "chapter", "subchapter")


def node_type_for_depth(depth: int) -> NodeType:
    """Depth 0 is the root, 1 chapters, 2 subchapters, anything deeper notes."""
    if depth < len(_LEVEL_TYPES):
        return _LEVEL_TYPES[depth]
    return "note"


def content_preview(content: object, length: int = TRILIUM_EXPLORER_PREVIEW_LENGTH) -> str:
    """First ``length`` characters of the raw (unsanitized) content."""
    text = coerce_text(content)
    if len(text) > length:
        return text[:length] + "..."
    return text


def plain_preview(content: object, length: int = TRILIUM_EXPLORER_SEARCH_PREVIEW_LENGTH) -> str:
    """First ``length`` characters of the plain-text rendering of ``content``."""
    text = to_plain_text(content)
    if not text:
        return ""
    return text[:length] + "..."


def to_display_tree(node: TreeNode, depth: int = 0) -> DisplayNode:
    return DisplayNode(
        id=node.id,
        title=node.title or "Untitled",
        type=node_type_for_depth(depth),
        preview=content_preview(node.content),
        children=[to_display_tree(child, depth + 1) for child in node.children],
    )


def count_by_level(root: TreeNode) -> TreeStats:
    counts = {"root": 0, "chapter": 0, "subchapter": 0, "note": 0}
    for _, depth in iter_nodes(root):
        counts[node_type_for_depth(depth)] += 1
    return TreeStats(
        total_notes=sum(counts.values()),
        root=counts["root"],
        chapters=counts["chapter"],
        subchapters=counts["subchapter"],
        notes=counts["note"],
    )
