"""Utility helpers for trilium_explorer."""
