from __future__ import annotations

from typing import Optional


class NoteError(Exception):
    """Base class for every error raised by the note store and client."""

    default_message = "Unexpected error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message
        super().__init__(message or self.default_message)


# PUBLIC_INTERFACE
class ValidationError(NoteError):
    """A required field is missing or empty after trimming."""

    default_message = "Title and content are required"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None) -> None:
        self.field = field
        super().__init__(message)


# PUBLIC_INTERFACE
class NotFoundError(NoteError):
    """The operation targets a note id that does not exist."""

    default_message = "Note not found"

    def __init__(self, note_id: Optional[int] = None, message: Optional[str] = None) -> None:
        self.note_id = note_id
        super().__init__(message)


# PUBLIC_INTERFACE
class TransportError(NoteError):
    """The store (database or HTTP service) could not be reached."""

    default_message = "Could not reach the note store"


# PUBLIC_INTERFACE
class ServerError(NoteError):
    """Non-2xx response not covered by a more specific error."""

    default_message = "The note service returned an error"

    def __init__(self, message: Optional[str] = None, status_code: int = 500) -> None:
        self.status_code = status_code
        super().__init__(message)
