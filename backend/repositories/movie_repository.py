"""
Movie repository backed by SQLAlchemy.

Translates between MovieRecord rows and Movie entities so nothing above this
layer sees ORM objects.
"""

import logging
from datetime import timezone
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from domain.entities import MUTABLE_FIELDS, Movie
from exceptions import DatabaseError
from models import MovieRecord
from .base_repository import BaseRepository
from .interfaces import MovieStore

logger = logging.getLogger(__name__)

# Largest value a signed 64-bit INTEGER column can hold
MAX_ROW_ID = 2 ** 63 - 1


def _storable_id(movie_id: int) -> bool:
    """Ids outside the column range can never have been assigned."""
    return 1 <= movie_id <= MAX_ROW_ID


def record_to_entity(record: MovieRecord) -> Movie:
    """Convert a table row into an immutable Movie."""
    created_at = record.created_at
    # SQLite hands back naive datetimes; values are always stored as UTC
    if created_at is not None and created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return Movie(
        id=record.id,
        title=record.title,
        genre=record.genre,
        duration_minutes=record.duration_minutes,
        description=record.description,
        created_at=created_at,
    )


class SqlMovieRepository(BaseRepository[MovieRecord], MovieStore):
    """Repository for MovieRecord operations.

    Each mutation commits its own transaction, so one call is one atomic change.
    """

    def __init__(self, db: Session):
        super().__init__(db, MovieRecord)

    def find_by_id(self, movie_id: int) -> Optional[Movie]:
        if not _storable_id(movie_id):
            return None
        try:
            record = self.get_by_id(movie_id)
        except SQLAlchemyError as e:
            raise self._failure("find_by_id", e) from e
        return record_to_entity(record) if record else None

    def find_page(self, page_number: int, page_size: int) -> Tuple[List[Movie], int]:
        offset = (page_number - 1) * page_size
        try:
            total = self.count()
            if offset >= total:
                return [], total
            records = self.get_page(limit=page_size, offset=offset)
        except SQLAlchemyError as e:
            raise self._failure("find_page", e) from e
        return [record_to_entity(r) for r in records], total

    def insert(self, movie: Movie) -> Movie:
        record = MovieRecord(**movie.mutable_values())
        try:
            self.create(record)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise self._failure("insert", e) from e
        logger.debug(f"Inserted movie {record.id}")
        return record_to_entity(record)

    def replace(self, movie_id: int, movie: Movie) -> bool:
        if not _storable_id(movie_id):
            return False
        try:
            record = self.get_by_id(movie_id)
            if record is None:
                return False
            for name in MUTABLE_FIELDS:
                setattr(record, name, getattr(movie, name))
            self.db.flush()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise self._failure("replace", e) from e
        return True

    def delete(self, movie_id: int) -> bool:
        if not _storable_id(movie_id):
            return False
        try:
            record = self.get_by_id(movie_id)
            if record is None:
                return False
            super().delete(record)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise self._failure("delete", e) from e
        return True

    def _failure(self, operation: str, error: SQLAlchemyError) -> DatabaseError:
        logger.error(f"Movie repository {operation} failed: {error}", exc_info=True)
        return DatabaseError(operation, f"Storage operation '{operation}' failed")
