from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..schemas import Note


@dataclass
class SearchSlot:
    """
    Result of the last title search. Kept apart from the main list so a
    search never changes what the list shows.
    """
    query: str = ""
    result: Optional[Note] = None
    error: Optional[str] = None

    def reset(self, query: str = "") -> None:
        self.query = query
        self.result = None
        self.error = None


# PUBLIC_INTERFACE
class NotesState:
    """
    Client-side copy of the store's note list.

    Notes are kept keyed by id in insertion order; replacing a note keeps its
    position. The copy is disposable: `replace_all` rebuilds it from a fresh
    fetch.
    """

    def __init__(self, notes: Iterable[Note] = ()) -> None:
        self._notes: Dict[int, Note] = {}
        self.search = SearchSlot()
        self.replace_all(notes)

    def replace_all(self, notes: Iterable[Note]) -> None:
        self._notes = {n.id: n for n in notes}

    def append(self, note: Note) -> None:
        # A re-delivered note must not be listed twice
        self._notes.pop(note.id, None)
        self._notes[note.id] = note

    def replace(self, note: Note) -> bool:
        """Swap in the new version of a note. Returns False if the id is not held."""
        if note.id not in self._notes:
            return False
        self._notes[note.id] = note
        return True

    def remove(self, note_id: int) -> Optional[Note]:
        return self._notes.pop(note_id, None)

    def get(self, note_id: int) -> Optional[Note]:
        return self._notes.get(note_id)

    @property
    def notes(self) -> List[Note]:
        return list(self._notes.values())

    def newest_first(self) -> List[Note]:
        return list(reversed(self._notes.values()))

    def __len__(self) -> int:
        return len(self._notes)

    def __contains__(self, note_id: object) -> bool:
        return note_id in self._notes
