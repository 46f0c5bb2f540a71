"""Client-side viewer state: API client, note cache, navigation history, selection.

Each ``ViewerSession`` owns its own state, so several viewers can run side by
side against the same API.
"""

from __future__ import annotations

from typing import Any

import httpx

from trilium_explorer.exceptions import NotFoundError, TriliumExplorerError
from trilium_explorer.utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_API_BASE = "http://localhost:8000/api/3d"


class NavigationHistory:
    """Linear history with a cursor; visiting from a non-tip entry drops the forward entries."""

    def __init__(self) -> None:
        self.entries: list[str] = []
        self.index = -1

    @property
    def current(self) -> str | None:
        return self.entries[self.index] if self.index >= 0 else None

    def visit(self, note_id: str) -> None:
        if note_id == self.current:
            return
        del self.entries[self.index + 1 :]
        self.entries.append(note_id)
        self.index = len(self.entries) - 1

    def can_go_back(self) -> bool:
        return self.index > 0

    def can_go_forward(self) -> bool:
        return self.index < len(self.entries) - 1

    def back(self) -> str | None:
        if not self.can_go_back():
            return None
        self.index -= 1
        return self.current

    def forward(self) -> str | None:
        if not self.can_go_forward():
            return None
        self.index += 1
        return self.current


class ViewerSession:
    """State of one note viewer talking to the JSON API."""

    def __init__(
        self,
        api_base: str = DEFAULT_API_BASE,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_base = api_base.rstrip("/")
        self._client = client
        self._owns_client = client is None
        self.note_cache: dict[str, dict[str, Any]] = {}
        self.history = NavigationHistory()
        self.selected_id: str | None = None

    async def __aenter__(self) -> ViewerSession:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(10.0))
        return self._client

    async def _get_data(self, path: str) -> Any:
        response = await self._http().get(f"{self.api_base}{path}")
        if response.status_code == 404:
            raise NotFoundError(f"Resource not found at {path}")
        response.raise_for_status()
        payload = response.json()
        if not payload.get("success"):
            raise TriliumExplorerError(payload.get("details") or payload.get("error") or path)
        return payload

    async def fetch_tree(self) -> dict[str, Any]:
        payload = await self._get_data("/structure")
        logger.info("Tree loaded", extra={"total_nodes": payload.get("metadata", {}).get("totalNodes")})
        return payload["data"]

    async def fetch_note_content(self, note_id: str, *, use_cache: bool = True) -> dict[str, Any]:
        """Return note content, from the cache when present; successful fetches are cached forever."""
        if use_cache and note_id in self.note_cache:
            return self.note_cache[note_id]
        payload = await self._get_data(f"/note/{note_id}/content")
        self.note_cache[note_id] = payload["data"]
        return payload["data"]

    async def open_note(self, note_id: str) -> dict[str, Any]:
        """Fetch a note and record it in the history."""
        note = await self.fetch_note_content(note_id)
        self.history.visit(note_id)
        return note

    async def go_back(self) -> dict[str, Any] | None:
        note_id = self.history.back()
        return await self.fetch_note_content(note_id) if note_id else None

    async def go_forward(self) -> dict[str, Any] | None:
        note_id = self.history.forward()
        return await self.fetch_note_content(note_id) if note_id else None

    async def select(self, note_id: str) -> dict[str, Any] | None:
        """Select an object; selecting the selected object again deselects it."""
        if self.selected_id == note_id:
            self.selected_id = None
            return None
        self.selected_id = note_id
        return await self.open_note(note_id)

    def deselect(self) -> None:
        self.selected_id = None
