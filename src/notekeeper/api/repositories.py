from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from threading import RLock
from typing import Dict, List, Optional

from .models import NoteEntity
from .settings import Settings


@dataclass(frozen=True)
class ListQuery:
    """
    Query parameters for listing notes.
    """
    title: Optional[str] = None  # case-insensitive substring match


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for note storage backends."""

    name: str = "abstract"

    @abstractmethod
    def create(self, title: str, content: str) -> NoteEntity:
        """Persist a new note and return it with its assigned id and created_at."""

    @abstractmethod
    def get(self, note_id: int) -> Optional[NoteEntity]:
        """Return a NoteEntity by id, or None if not found."""

    @abstractmethod
    def update(self, note_id: int, title: str, content: str) -> Optional[NoteEntity]:
        """Overwrite title and content. Return the updated entity or None if not found."""

    @abstractmethod
    def delete(self, note_id: int) -> bool:
        """Delete a note by id. Return True if deleted, False if not found."""

    @abstractmethod
    def list(self, query: Optional[ListQuery] = None) -> List[NoteEntity]:
        """
        Return notes in creation order (ascending id).
        - Optional case-insensitive substring filter on title
        """

    def close(self) -> None:
        """Release any resources held by the backend."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and quick local runs.
    """

    name = "memory"

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: Dict[int, NoteEntity] = {}
        self._next_id = 1

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def create(self, title: str, content: str) -> NoteEntity:
        entity: NoteEntity = {
            "id": self._allocate_id(),
            "title": title,
            "content": content,
            "created_at": self._now(),
        }
        with self._lock:
            self._items[entity["id"]] = entity
        return entity.copy()  # type: ignore[return-value]

    def get(self, note_id: int) -> Optional[NoteEntity]:
        with self._lock:
            item = self._items.get(note_id)
            return None if item is None else item.copy()  # type: ignore[return-value]

    def update(self, note_id: int, title: str, content: str) -> Optional[NoteEntity]:
        with self._lock:
            existing = self._items.get(note_id)
            if existing is None:
                return None
            updated: NoteEntity = {**existing, "title": title, "content": content}
            self._items[note_id] = updated
            return updated.copy()  # type: ignore[return-value]

    def delete(self, note_id: int) -> bool:
        with self._lock:
            return self._items.pop(note_id, None) is not None

    def list(self, query: Optional[ListQuery] = None) -> List[NoteEntity]:
        q = query or ListQuery()
        with self._lock:
            items = sorted(self._items.values(), key=lambda n: n["id"])
            if q.title:
                needle = q.title.casefold()
                items = [n for n in items if needle in n["title"].casefold()]
            # Return copies to avoid external mutation
            return [n.copy() for n in items]  # type: ignore[misc]


# PUBLIC_INTERFACE
def build_repository(settings: Settings) -> Repository:
    """
    Return the repository configured by settings.
    - memory: InMemoryRepository
    - sql: SQLRepository bound to settings.database_url with a bounded pool
    """
    if settings.persistence_backend == "memory":
        return InMemoryRepository()

    from .db import SQLRepository

    return SQLRepository(
        settings.database_url,
        pool_size=settings.db_pool_size,
        pool_timeout=settings.db_pool_timeout,
    )
