"""Configuration for the server."""

from __future__ import annotations

import os
from pathlib import Path

API_PREFIX: str = os.getenv("TRILIUM_EXPLORER_API_PREFIX", "/api/3d")
CORS_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.getenv("TRILIUM_EXPLORER_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

_static_dir = os.getenv("TRILIUM_EXPLORER_STATIC_DIR")
STATIC_DIR: Path | None = Path(_static_dir).expanduser() if _static_dir else None

SERVICE_NAME: str = "Trilium Explorer API"
SERVICE_VERSION: str = "2.0"
SERVICE_FEATURES: tuple[str, ...] = (
    "html-processing",
    "reference-extraction",
    "batch-loading",
)
