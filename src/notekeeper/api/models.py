from __future__ import annotations

from datetime import datetime
from typing import TypedDict


# PUBLIC_INTERFACE
class NoteEntity(TypedDict):
    """
    Storage-level representation of a note, shared by every repository.

    Fields:
    - id: Unique integer identifier, never reused
    - title: Trimmed, non-empty title
    - content: Trimmed, non-empty body
    - created_at: UTC creation timestamp (timezone-aware)
    """

    id: int
    title: str
    content: str
    created_at: datetime
