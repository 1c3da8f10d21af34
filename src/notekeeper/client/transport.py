from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..errors import NotFoundError, ServerError, TransportError, ValidationError
from ..schemas import Note

logger = logging.getLogger(__name__)


def _message_from(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str) and body["message"]:
        return body["message"]
    return None


def _raise_for_status(response: httpx.Response, note_id: Optional[int] = None) -> None:
    if response.is_success:
        return
    message = _message_from(response)
    if response.status_code == 404:
        raise NotFoundError(note_id, message)
    if response.status_code in (400, 422):
        raise ValidationError(message)
    raise ServerError(message, status_code=response.status_code)


# PUBLIC_INTERFACE
class NotesApi:
    """
    Async HTTP binding of the notes service.

    Each method performs exactly one request and either returns decoded
    notes or raises a NoteError subclass; transport failures (refused
    connections, timeouts) become TransportError. Nothing is retried.
    """

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    async def _request(self, method: str, url: str, note_id: Optional[int] = None, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TransportError(str(exc) or None) from exc
        _raise_for_status(response, note_id)
        return response

    @staticmethod
    def _note(response: httpx.Response) -> Note:
        try:
            return Note.model_validate(response.json()["data"])
        except (ValueError, KeyError, TypeError) as exc:
            raise ServerError("Malformed response from the note service", response.status_code) from exc

    async def list_notes(self, title: Optional[str] = None) -> List[Note]:
        params: Dict[str, str] = {"title": title} if title else {}
        response = await self._request("GET", "/notes", params=params)
        try:
            return [Note.model_validate(n) for n in response.json()["data"]]
        except (ValueError, KeyError, TypeError) as exc:
            raise ServerError("Malformed response from the note service", response.status_code) from exc

    async def get_note(self, note_id: int) -> Note:
        return self._note(await self._request("GET", f"/notes/{note_id}", note_id))

    async def create_note(self, title: str, content: str) -> Note:
        response = await self._request("POST", "/notes", json={"title": title, "content": content})
        return self._note(response)

    async def update_note(self, note_id: int, title: str, content: str) -> Note:
        response = await self._request(
            "PUT", f"/notes/{note_id}", note_id, json={"title": title, "content": content}
        )
        return self._note(response)

    async def delete_note(self, note_id: int) -> None:
        await self._request("DELETE", f"/notes/{note_id}", note_id)

    async def aclose(self) -> None:
        await self._http.aclose()
