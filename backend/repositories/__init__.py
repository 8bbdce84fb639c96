"""
Repository layer for data access abstraction.

This package contains the storage contract for movies and its adapters,
which encapsulate persistence and return domain entities.
"""

from .base_repository import BaseRepository
from .interfaces import MovieStore
from .memory_repository import InMemoryMovieRepository
from .movie_repository import SqlMovieRepository

__all__ = [
    "BaseRepository",
    "MovieStore",
    "InMemoryMovieRepository",
    "SqlMovieRepository",
]
