"""Pydantic models for API requests and responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class BatchRequest(BaseModel):
    """Request model for ``POST /notes/batch``.

    Attributes
    ----------
    note_ids : list[str]
        Ids of the notes to load, sent as ``noteIds``. Must not be empty.

    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    note_ids: list[str] = Field(..., description="Ids of the notes to load")

    @field_validator("note_ids")
    @classmethod
    def validate_note_ids(cls, v: list[str]) -> list[str]:
        """Validate that ``note_ids`` is a non-empty list."""
        if not v:
            err = "noteIds must be a non-empty array"
            raise ValueError(err)
        return v


class SuccessResponse(BaseModel):
    """Envelope of every successful response."""

    success: bool = True
    data: Any = None
    metadata: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Envelope of every error response.

    Attributes
    ----------
    error : str
        Machine-readable error code.
    details : Any
        Human-readable message or structured validation errors.

    """

    success: bool = False
    error: str = Field(..., description="Machine-readable error code")
    details: Any = Field(default=None, description="Human-readable details")


COMMON_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid request input"},
    404: {"model": ErrorResponse, "description": "Note not found"},
    500: {"model": ErrorResponse, "description": "Store or processing failure"},
}
