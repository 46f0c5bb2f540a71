"""Local configuration for trilium_explorer."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_DB_PATH = "document.db"
DEFAULT_ROOT_TITLES = "Tres,Tres Estudios Abiertos"
DEFAULT_HIDDEN_TITLES = "Hidden Notes"
DEFAULT_PREVIEW_LENGTH = 200
DEFAULT_SEARCH_PREVIEW_LENGTH = 100
DEFAULT_LOG_LEVEL = "INFO"


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


# Trilium database file; always opened read-only.
TRILIUM_EXPLORER_DB_PATH = Path(os.getenv("TRILIUM_EXPLORER_DB_PATH", DEFAULT_DB_PATH)).expanduser()
TRILIUM_EXPLORER_ROOT_TITLES = _split_csv(os.getenv("TRILIUM_EXPLORER_ROOT_TITLES", DEFAULT_ROOT_TITLES))
TRILIUM_EXPLORER_HIDDEN_TITLES = frozenset(
    _split_csv(os.getenv("TRILIUM_EXPLORER_HIDDEN_TITLES", DEFAULT_HIDDEN_TITLES))
)
TRILIUM_EXPLORER_PREVIEW_LENGTH = int(
    os.getenv("TRILIUM_EXPLORER_PREVIEW_LENGTH", str(DEFAULT_PREVIEW_LENGTH))
)
TRILIUM_EXPLORER_SEARCH_PREVIEW_LENGTH = int(
    os.getenv("TRILIUM_EXPLORER_SEARCH_PREVIEW_LENGTH", str(DEFAULT_SEARCH_PREVIEW_LENGTH))
)
TRILIUM_EXPLORER_LOG_LEVEL = os.getenv("TRILIUM_EXPLORER_LOG_LEVEL", DEFAULT_LOG_LEVEL)
