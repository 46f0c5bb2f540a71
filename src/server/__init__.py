"""HTTP API for trilium_explorer."""
