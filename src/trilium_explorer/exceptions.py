"""Custom exceptions for trilium_explorer."""


class TriliumExplorerError(Exception):
    """Base exception for trilium_explorer operations."""


class StoreError(TriliumExplorerError):
    """Reading the note store failed.

    ``query`` names the failed step: ``"connect"``, ``"notes"`` or ``"branches"``.
    """

    def __init__(self, message: str, *, query: str) -> None:
        super().__init__(message)
        self.query = query


class NotFoundError(TriliumExplorerError):
    """Root note, note or id is absent."""


class ValidationError(TriliumExplorerError):
    """Malformed request input."""


class ProcessingError(TriliumExplorerError):
    """Content transform failed on unexpected input."""
