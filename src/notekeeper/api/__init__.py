"""
Notes HTTP service: FastAPI routes over a NoteStore backed by either an
in-memory repository or SQLAlchemy.

Run with ``uvicorn notekeeper.api.main:app``.
"""

from .main import app, create_app  # noqa: F401
