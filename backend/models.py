from sqlalchemy import Column, Integer, String, Text, DateTime, CheckConstraint, Index
from datetime import datetime, timezone
from database import Base
from constants import MovieLimits


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MovieRecord(Base):
    """
    Table row backing the Movie entity.

    Ids come from SQLite AUTOINCREMENT so a deleted id is never handed out again.
    created_at is written once on insert; replace() never touches it.
    """
    __tablename__ = 'movies'

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(MovieLimits.TITLE_MAX_LENGTH), nullable=False)
    genre = Column(String(MovieLimits.GENRE_MAX_LENGTH), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    __table_args__ = (
        CheckConstraint("title != ''", name='ck_movies_title_not_empty'),
        CheckConstraint("genre != ''", name='ck_movies_genre_not_empty'),
        CheckConstraint(
            f"duration_minutes BETWEEN {MovieLimits.DURATION_MIN_MINUTES} "
            f"AND {MovieLimits.DURATION_MAX_MINUTES}",
            name='ck_movies_duration_range',
        ),
        Index('idx_movies_genre', 'genre'),
        {'sqlite_autoincrement': True},
    )

    def __repr__(self) -> str:
        return f"<MovieRecord id={self.id} title={self.title!r}>"
