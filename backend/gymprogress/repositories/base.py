# gymprogress/repositories/base.py
from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Generic, Iterator, Optional, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gymprogress.errors import PersistenceError

T = TypeVar("T")  # SQLAlchemy model type

log = logging.getLogger(__name__)

class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style.

    With ``autocommit=False`` writes are flushed but not committed, so the
    caller owns the transaction (used by the machine cascades).
    """
    model: type[T]

    def __init__(self, db: Session, *, autocommit: bool = True):
        self.db = db
        self.autocommit = autocommit

    # READS
    def get(self, entity_id: int) -> Optional[T]:
        with self.translate_errors(f"load {self.model.__name__} {entity_id}"):
            return self.db.get(self.model, entity_id)

    def list_all(self) -> list[T]:
        stmt = select(self.model).order_by(self.model.id.asc())
        with self.translate_errors(f"list {self.model.__name__}"):
            return list(self.db.execute(stmt).scalars().all())

    # WRITES
    def add_and_refresh(self, entity: T) -> T:
        with self.translate_errors(f"insert {self.model.__name__}"):
            self.db.add(entity)
            self._save()
            self.db.refresh(entity)
        return entity

    def remove(self, entity: T) -> None:
        with self.translate_errors(f"delete {self.model.__name__} {entity.id}"):
            self.db.delete(entity)
            self._save()

    def _save(self) -> None:
        self.db.flush()
        if self.autocommit:
            self.db.commit()

    @contextmanager
    def translate_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            if self.autocommit:
                self.db.rollback()
            log.warning("failed to %s: %s", action, exc)
            raise PersistenceError(action) from exc
