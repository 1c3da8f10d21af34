"""
Async client for the notes service: an owned NotesState, a single-slot
NotificationChannel, and the NoteClient controller tying them to the API.
"""

from .controller import NoteClient, validate_note_form  # noqa: F401
from .notifications import ChannelState, Notification, NotificationChannel  # noqa: F401
from .state import NotesState, SearchSlot  # noqa: F401
from .transport import NotesApi  # noqa: F401
