from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Generator, List, Optional

from sqlalchemy import Column, DateTime, Integer, Text, create_engine, delete, select, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool

from ..errors import TransportError
from .models import NoteEntity
from .repositories import ListQuery, Repository

logger = logging.getLogger(__name__)

Base = declarative_base()


# PUBLIC_INTERFACE
class NoteRecord(Base):
    """
    ORM mapping of the notes table.
    """
    __tablename__ = "notes"
    # Never hand out the id of a deleted row again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)


def _escape_like(value: str, escape: str = "\\") -> str:
    return (
        value.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_entity(record: NoteRecord) -> NoteEntity:
    return {
        "id": int(record.id),
        "title": str(record.title),
        "content": str(record.content),
        "created_at": _as_utc(record.created_at),
    }


class SQLRepository(Repository):
    """
    SQLAlchemy repository backed by a bounded, process-wide connection pool.

    Each operation checks a connection out of the pool for the duration of a
    single session and always returns it, whether the operation succeeds or
    fails. Driver and connectivity failures surface as TransportError.
    """

    name = "sql"

    def __init__(self, database_url: str, pool_size: int = 5, pool_timeout: float = 30.0) -> None:
        url = make_url(database_url)
        connect_args = {}
        if url.get_backend_name() == "sqlite":
            # Routes run in a worker thread pool
            connect_args["check_same_thread"] = False
            if url.database and url.database != ":memory:":
                os.makedirs(os.path.dirname(os.path.abspath(url.database)), exist_ok=True)

        self._engine = create_engine(
            url,
            poolclass=QueuePool,
            pool_size=pool_size,
            max_overflow=0,
            pool_timeout=pool_timeout,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        self._init_db()

    @property
    def engine(self):
        return self._engine

    def _init_db(self) -> None:
        try:
            Base.metadata.create_all(self._engine)
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.error("Error connecting to the database: %s", exc)
            raise TransportError("Database is unavailable") from exc
        logger.info("Database connection established (%s)", self._engine.url.render_as_string(hide_password=True))

    @contextmanager
    def _session(self) -> Generator[Session, None, None]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Database operation failed")
            raise TransportError("Database operation failed") from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create(self, title: str, content: str) -> NoteEntity:
        with self._session() as session:
            record = NoteRecord(title=title, content=content, created_at=datetime.now(timezone.utc))
            session.add(record)
            session.flush()
            return _to_entity(record)

    def get(self, note_id: int) -> Optional[NoteEntity]:
        with self._session() as session:
            record = session.get(NoteRecord, note_id)
            return _to_entity(record) if record else None

    def update(self, note_id: int, title: str, content: str) -> Optional[NoteEntity]:
        with self._session() as session:
            record = session.get(NoteRecord, note_id)
            if record is None:
                return None
            record.title = title
            record.content = content
            session.flush()
            return _to_entity(record)

    def delete(self, note_id: int) -> bool:
        with self._session() as session:
            result = session.execute(delete(NoteRecord).where(NoteRecord.id == note_id))
            return result.rowcount > 0

    def list(self, query: Optional[ListQuery] = None) -> List[NoteEntity]:
        q = query or ListQuery()
        stmt = select(NoteRecord).order_by(NoteRecord.id.asc())
        if q.title:
            stmt = stmt.where(NoteRecord.title.ilike(f"%{_escape_like(q.title)}%", escape="\\"))
        with self._session() as session:
            return [_to_entity(r) for r in session.scalars(stmt).all()]

    def close(self) -> None:
        self._engine.dispose()
