"""
Repository Interfaces

Abstract storage contract for the Movie entity, following the Dependency
Inversion Principle. The service layer depends only on this interface, so
the SQL and in-memory adapters (or a test double) are interchangeable.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from domain.entities import Movie


class MovieStore(ABC):
    """
    Storage adapter for Movie entities.

    Every operation is atomic for the single entity it touches.
    """

    @abstractmethod
    def find_by_id(self, movie_id: int) -> Optional[Movie]:
        """
        Look up one movie.

        Args:
            movie_id: Storage-assigned identifier

        Returns:
            The movie, or None if no movie has that id
        """
        pass

    @abstractmethod
    def find_page(self, page_number: int, page_size: int) -> Tuple[List[Movie], int]:
        """
        Return one page of movies in insertion order.

        Args:
            page_number: 1-based page index
            page_size: Maximum number of movies on the page

        Returns:
            (movies at offset (page_number - 1) * page_size, total movie count)
        """
        pass

    @abstractmethod
    def insert(self, movie: Movie) -> Movie:
        """
        Persist a new movie.

        Args:
            movie: Movie without id or created_at

        Returns:
            The stored movie with its new id and creation timestamp.
            Ids increase monotonically and are never reused.
        """
        pass

    @abstractmethod
    def replace(self, movie_id: int, movie: Movie) -> bool:
        """
        Overwrite the mutable fields of an existing movie.

        The stored id and created_at are kept regardless of what the
        given movie carries.

        Returns:
            True if replaced, False if not found
        """
        pass

    @abstractmethod
    def delete(self, movie_id: int) -> bool:
        """
        Remove a movie.

        Returns:
            True if deleted, False if not found
        """
        pass
