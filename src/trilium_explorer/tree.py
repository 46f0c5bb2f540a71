"""Build the note hierarchy from flat note and branch rows."""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Sequence

from trilium_explorer.config import TRILIUM_EXPLORER_HIDDEN_TITLES
from trilium_explorer.schemas import Branch, Note, TreeNode

Tree = TreeNode | Sequence[TreeNode]


def build_tree(notes: Iterable[Note], branches: Iterable[Branch]) -> Tree:
    """Attach every note under its parent, ordered by branch position.

    A branch whose child or parent is missing from ``notes`` is skipped. When a
    note has several branches, the last one processed wins. Notes without a
    surviving placement are roots: a single root is returned as is, several
    as a list, in input order.
    """
    notes_by_id: dict[str, Note] = {}
    for note in notes:
        notes_by_id.setdefault(note.id, note)

    placements: dict[str, tuple[str, int, int]] = {}
    for order, branch in enumerate(branches):
        if branch.child_id not in notes_by_id or branch.parent_id not in notes_by_id:
            continue
        placements[branch.child_id] = (branch.parent_id, branch.position, order)

    children_of: dict[str, list[tuple[int, int, str]]] = {}
    for child_id, (parent_id, position, order) in placements.items():
        children_of.setdefault(parent_id, []).append((position, order, child_id))
    for entries in children_of.values():
        entries.sort()

    visited: set[str] = set()

    def materialize(note_id: str) -> TreeNode:
        visited.add(note_id)
        note = notes_by_id[note_id]
        children = [
            materialize(child_id)
            for _, _, child_id in children_of.get(note_id, [])
            if child_id not in visited
        ]
        return TreeNode(id=note.id, title=note.title, content=note.content, children=children)

    roots = [materialize(note_id) for note_id in notes_by_id if note_id not in placements]
    if len(roots) == 1:
        return roots[0]
    return roots


def _as_roots(tree: Tree | None) -> Sequence[TreeNode]:
    if tree is None:
        return []
    if isinstance(tree, (list, tuple)):
        return tree
    return [tree]


def iter_nodes(tree: Tree | None) -> Iterator[tuple[TreeNode, int]]:
    """Yield ``(node, depth)`` depth-first in declaration order."""
    stack = [(root, 0) for root in reversed(_as_roots(tree))]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((child, depth + 1) for child in reversed(node.children))


def _find(tree: Tree | None, predicate: Callable[[TreeNode], bool]) -> TreeNode | None:
    return next((node for node, _ in iter_nodes(tree) if predicate(node)), None)


def find_node_by_title(tree: Tree | None, title: str, *, prefix: bool = False) -> TreeNode | None:
    """Return the first node whose title equals ``title`` (or starts with it)."""
    if prefix:
        return _find(tree, lambda node: node.title.startswith(title))
    return _find(tree, lambda node: node.title == title)


def find_node_by_id(tree: Tree | None, note_id: str) -> TreeNode | None:
    return _find(tree, lambda node: node.id == note_id)


def count_nodes(tree: Tree | None) -> int:
    return sum(1 for _ in iter_nodes(tree))


def is_hidden(node: TreeNode | Note) -> bool:
    """Trilium system notes have ids starting with ``_``; hidden titles are configured."""
    return node.id.startswith("_") or node.title in TRILIUM_EXPLORER_HIDDEN_TITLES


def filter_hidden(node: TreeNode) -> TreeNode | None:
    """Return a copy of ``node`` without hidden subtrees, or None if it is hidden itself."""
    if is_hidden(node):
        return None
    children = [
        kept for kept in (filter_hidden(child) for child in node.children) if kept is not None
    ]
    return node.model_copy(update={"children": children})


def root_title_variants(titles: Iterable[str]) -> list[str]:
    """Expand each title to as-is, Title Case, UPPER and lower variants, in order."""
    variants: list[str] = []
    for title in titles:
        for variant in (title, title.title(), title.upper(), title.lower()):
            if variant not in variants:
                variants.append(variant)
    return variants
