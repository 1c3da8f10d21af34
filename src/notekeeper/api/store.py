from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..errors import NotFoundError, ValidationError
from .models import NoteEntity
from .repositories import ListQuery, Repository

logger = logging.getLogger(__name__)


def _clean(title: Optional[str], content: Optional[str]) -> Tuple[str, str]:
    t = (title or "").strip()
    c = (content or "").strip()
    if not t:
        raise ValidationError("title must not be empty", field="title")
    if not c:
        raise ValidationError("content must not be empty", field="content")
    return t, c


# PUBLIC_INTERFACE
class NoteStore:
    """
    Note lifecycle operations on top of a Repository.

    The store is the authority on what may be persisted: it trims input and
    rejects empty titles or contents before storage is touched, and turns a
    missing id into NotFoundError.
    """

    def __init__(self, repository: Repository) -> None:
        self.repository = repository

    @property
    def backend(self) -> str:
        return self.repository.name

    def create(self, title: Optional[str], content: Optional[str]) -> NoteEntity:
        t, c = _clean(title, content)
        note = self.repository.create(t, c)
        logger.info("Created note %s", note["id"])
        return note

    def list(self, title: Optional[str] = None) -> List[NoteEntity]:
        needle = title.strip() if title else None
        return self.repository.list(ListQuery(title=needle or None))

    def get(self, note_id: int) -> NoteEntity:
        note = self.repository.get(note_id)
        if note is None:
            logger.debug("Note %s not found", note_id)
            raise NotFoundError(note_id)
        return note

    def update(self, note_id: int, title: Optional[str], content: Optional[str]) -> NoteEntity:
        t, c = _clean(title, content)
        note = self.repository.update(note_id, t, c)
        if note is None:
            logger.debug("Update of missing note %s", note_id)
            raise NotFoundError(note_id)
        logger.info("Updated note %s", note_id)
        return note

    def delete(self, note_id: int) -> None:
        if not self.repository.delete(note_id):
            logger.debug("Delete of missing note %s", note_id)
            raise NotFoundError(note_id)
        logger.info("Deleted note %s", note_id)

    def close(self) -> None:
        self.repository.close()
