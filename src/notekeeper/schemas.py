from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _require_text(value: str, field: str) -> str:
    """
    Strip whitespace and reject empty values.
    """
    if value is None:
        raise ValueError(f"{field} is required")
    s = value.strip()
    if not s:
        raise ValueError(f"{field} must not be empty")
    return s


# PUBLIC_INTERFACE
class NoteIn(BaseModel):
    """
    Body of POST /notes and PUT /notes/{id}. Both fields are required and
    stored trimmed.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Groceries",
                "content": "Milk, eggs",
            }
        }
    )

    title: str = Field(..., description="Note title")
    content: str = Field(..., description="Note body")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _require_text(v, "title")

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return _require_text(v, "content")


# PUBLIC_INTERFACE
class Note(BaseModel):
    """
    A persisted note as returned by the API.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Groceries",
                "content": "Milk, eggs",
                "created_at": "2025-01-25T10:15:30.123456+00:00",
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the note")
    title: str = Field(..., description="Note title")
    content: str = Field(..., description="Note body")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")


class NoteEnvelope(BaseModel):
    """Single-note response body."""

    data: Note


class NoteListEnvelope(BaseModel):
    """List response body."""

    data: List[Note] = Field(..., description="Notes in creation order")
