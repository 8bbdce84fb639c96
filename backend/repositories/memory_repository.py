"""
In-process movie store.

Keeps movies in an insertion-ordered dict guarded by a lock. Used when the
configured database URL is memory:// and as a lightweight store in tests.
"""

import itertools
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from domain.entities import Movie
from .interfaces import MovieStore


class InMemoryMovieRepository(MovieStore):
    """MovieStore holding entities in process memory."""

    def __init__(self, clock=None):
        self._movies: Dict[int, Movie] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def find_by_id(self, movie_id: int) -> Optional[Movie]:
        with self._lock:
            return self._movies.get(movie_id)

    def find_page(self, page_number: int, page_size: int) -> Tuple[List[Movie], int]:
        offset = (page_number - 1) * page_size
        with self._lock:
            movies = list(self._movies.values())
        return movies[offset:offset + page_size], len(movies)

    def insert(self, movie: Movie) -> Movie:
        with self._lock:
            stored = movie.with_identity(next(self._ids), self._clock())
            self._movies[stored.id] = stored
        return stored

    def replace(self, movie_id: int, movie: Movie) -> bool:
        with self._lock:
            current = self._movies.get(movie_id)
            if current is None:
                return False
            # dict assignment to an existing key keeps insertion order
            self._movies[movie_id] = replace(movie, id=current.id, created_at=current.created_at)
        return True

    def delete(self, movie_id: int) -> bool:
        with self._lock:
            return self._movies.pop(movie_id, None) is not None
