"""
Movie Entity

The persisted representation of a movie, independent of both the wire DTOs
and the SQLAlchemy table.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

# Fields a client may change after creation
MUTABLE_FIELDS = ("title", "genre", "duration_minutes", "description")


@dataclass(frozen=True)
class Movie:
    """
    Movie entity.

    id and created_at are None until the storage adapter assigns them on
    insert; after that they never change.
    """

    title: str
    genre: str
    duration_minutes: int
    description: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def is_persisted(self) -> bool:
        """True once storage has assigned an identifier."""
        return self.id is not None

    def with_identity(self, id: int, created_at: datetime) -> "Movie":
        """Return a copy carrying the storage-assigned id and timestamp."""
        return replace(self, id=id, created_at=created_at)

    def mutable_values(self) -> dict:
        """Current values of the client-mutable fields."""
        return {name: getattr(self, name) for name in MUTABLE_FIELDS}
