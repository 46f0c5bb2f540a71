"""Inspect a Trilium database: print the filtered tree outline and level counts."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from trilium_explorer.config import TRILIUM_EXPLORER_DB_PATH
from trilium_explorer.display import count_by_level, node_type_for_depth
from trilium_explorer.schemas import TreeNode
from trilium_explorer.service import NoteService
from trilium_explorer.store import NoteStore
from trilium_explorer.tree import iter_nodes


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect the note tree of a Trilium database.")
    parser.add_argument("--db", default=str(TRILIUM_EXPLORER_DB_PATH), help="Path to document.db")
    parser.add_argument("--root", action="append", help="Root title to look for (repeatable)")
    parser.add_argument("--max-depth", type=int, default=None, help="Do not print deeper nodes")
    args = parser.parse_args()

    db_path = Path(args.db)
    if not db_path.is_file():
        parser.error(f"Database file not found: {db_path}")

    service = NoteService(NoteStore(db_path), root_titles=args.root)
    root = asyncio.run(service.get_complete_tree())

    print("Tree:")
    for line in outline(root, max_depth=args.max_depth):
        print(line)

    stats = count_by_level(root)
    print("\nCounts:")
    for name, count in stats.model_dump(by_alias=True).items():
        print(f"{name}: {count}")


def outline(root: TreeNode, *, max_depth: int | None = None) -> list[str]:
    lines = []
    for node, depth in iter_nodes(root):
        if max_depth is not None and depth > max_depth:
            continue
        lines.append(f"{'    ' * depth}{node.title} [{node_type_for_depth(depth)}] ({node.id})")
    return lines


if __name__ == "__main__":
    main()
