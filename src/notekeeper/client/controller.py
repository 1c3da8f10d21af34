from __future__ import annotations

import logging
import time
from typing import Callable, Dict, Iterable, Optional, Set

import httpx

from ..errors import NoteError, TransportError
from ..schemas import Note
from .notifications import NotificationChannel
from .settings import ClientSettings, get_client_settings
from .state import NotesState
from .transport import NotesApi

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def validate_note_form(title: str, content: str) -> Dict[str, str]:
    """
    Check a create/edit form before it is sent.

    Returns a mapping of field name to message; empty when the form is valid.
    This is a convenience for the user only, the service validates again.
    """
    errors: Dict[str, str] = {}
    if not (title or "").strip():
        errors["title"] = "Title is required."
    if not (content or "").strip():
        errors["content"] = "Content is required."
    return errors


def _message(exc: NoteError, fallback: str) -> str:
    # Server-provided messages are shown verbatim; transport errors are not server messages.
    if isinstance(exc, TransportError):
        return fallback
    return exc.message or fallback


def _best_match(notes: Iterable[Note], title: str) -> Optional[Note]:
    candidates = list(notes)
    wanted = title.casefold()
    for note in candidates:
        if note.title.casefold() == wanted:
            return note
    return candidates[0] if candidates else None


# PUBLIC_INTERFACE
class NoteClient:
    """
    Drives the notes service and keeps a local NotesState in step with it.

    Every user action (create, update, delete, search) ends with exactly one
    notification on `notifications`. While a form's request is pending,
    submitting the same form again is ignored; unrelated requests can run
    concurrently.
    """

    def __init__(
        self,
        api: NotesApi,
        notifications: Optional[NotificationChannel] = None,
        state: Optional[NotesState] = None,
    ) -> None:
        self.api = api
        self.notifications = notifications or NotificationChannel()
        self.state = state or NotesState()
        self._in_flight: Set[str] = set()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[ClientSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "NoteClient":
        """
        Build a client with its own httpx.AsyncClient. `transport` lets tests
        route requests to an in-process ASGI app.
        """
        settings = settings or get_client_settings()
        http = httpx.AsyncClient(base_url=settings.base_url, timeout=settings.timeout, transport=transport)
        return cls(NotesApi(http), NotificationChannel(settings.notification_seconds, clock))

    async def __aenter__(self) -> "NoteClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.api.aclose()

    def is_busy(self, form: str) -> bool:
        return form in self._in_flight

    def _begin(self, form: str) -> bool:
        if form in self._in_flight:
            logger.debug("Ignoring duplicate %s submission", form)
            return False
        self._in_flight.add(form)
        return True

    def _end(self, form: str) -> None:
        self._in_flight.discard(form)

    async def load(self) -> bool:
        """
        Replace local state with the full list from the service.
        """
        try:
            notes = await self.api.list_notes()
        except NoteError as exc:
            logger.error("Error fetching notes: %s", exc)
            self.notifications.error(_message(exc, "Could not fetch notes"))
            return False
        self.state.replace_all(notes)
        return True

    async def _reconcile(self) -> None:
        try:
            notes = await self.api.list_notes()
        except NoteError as exc:
            logger.warning("Could not refresh notes: %s", exc)
            return
        self.state.replace_all(notes)

    async def create(self, title: str, content: str) -> Optional[Note]:
        if validate_note_form(title, content):
            self.notifications.error("Title and content are required")
            return None
        if not self._begin("create"):
            return None
        try:
            note = await self.api.create_note(title.strip(), content.strip())
        except NoteError as exc:
            logger.error("Error adding note: %s", exc)
            self.notifications.error(_message(exc, "Could not add the note"))
            return None
        finally:
            self._end("create")
        self.state.append(note)
        self.notifications.success("Note added")
        return note

    async def update(self, note_id: int, title: str, content: str) -> Optional[Note]:
        if validate_note_form(title, content):
            self.notifications.error("Title and content are required")
            return None
        form = f"update:{note_id}"
        if not self._begin(form):
            return None
        try:
            note = await self.api.update_note(note_id, title.strip(), content.strip())
        except NoteError as exc:
            logger.error("Error updating note %s: %s", note_id, exc)
            self.notifications.error(_message(exc, "Could not update the note"))
            return None
        finally:
            self._end(form)
        self.state.replace(note)
        self.notifications.success("Note updated")
        return note

    async def delete(self, note_id: int) -> bool:
        """
        Delete a note: drop it locally as soon as the service confirms, then
        re-fetch the whole list so local state matches the store.
        """
        form = f"delete:{note_id}"
        if not self._begin(form):
            return False
        try:
            try:
                await self.api.delete_note(note_id)
            except TransportError as exc:
                logger.error("Error deleting note %s: %s", note_id, exc)
                self.notifications.error("Could not delete the note")
                return False
            except NoteError as exc:
                self.notifications.error(_message(exc, "Could not delete the note"))
                deleted = False
            else:
                self.state.remove(note_id)
                self.notifications.success("Note deleted")
                deleted = True
            await self._reconcile()
            return deleted
        finally:
            self._end(form)

    async def search(self, title: str) -> Optional[Note]:
        """
        Look a note up by title into `state.search`; the main list is untouched.
        An exact (case-insensitive) title match wins over other partial matches.
        """
        if not self._begin("search"):
            return None
        try:
            query = (title or "").strip()
            slot = self.state.search
            slot.reset(query)
            if not query:
                slot.error = "Enter a title to search"
                self.notifications.error(slot.error)
                return None
            try:
                results = await self.api.list_notes(query)
            except NoteError as exc:
                slot.error = _message(exc, "Could not search notes")
                self.notifications.error(slot.error)
                return None
            match = _best_match(results, query)
            if match is None:
                slot.error = "Note not found."
                self.notifications.info(slot.error)
                return None
            slot.result = match
            self.notifications.success(f'Found "{match.title}"')
            return match
        finally:
            self._end("search")
