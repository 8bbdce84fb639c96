"""
Dependency injection providers for FastAPI.

This module provides factory functions for creating repository and service instances,
following the Dependency Inversion Principle. Tests swap any of them through
``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Iterator

from fastapi import Depends

from config.app_config import AppConfig, get_config
from constants import MEMORY_DATABASE_URL
from database import get_db
from repositories.interfaces import MovieStore
from repositories.memory_repository import InMemoryMovieRepository
from repositories.movie_repository import SqlMovieRepository
from services.movie_service import MovieService


def get_app_config() -> AppConfig:
    """
    Provide the process-wide configuration.

    Returns:
        AppConfig loaded at startup
    """
    return get_config()


@lru_cache
def get_memory_store() -> InMemoryMovieRepository:
    """
    Process-wide in-memory store, used when the database URL is memory://.

    Returns:
        The shared InMemoryMovieRepository
    """
    return InMemoryMovieRepository()


def get_movie_store(config: AppConfig = Depends(get_app_config)) -> Iterator[MovieStore]:
    """
    Factory for the configured MovieStore.

    A SQL store gets its own session for the duration of the request.

    Args:
        config: Application configuration (injected)

    Yields:
        MovieStore implementation
    """
    if config.database_url == MEMORY_DATABASE_URL:
        yield get_memory_store()
        return
    db_session = get_db()
    db = next(db_session)
    try:
        yield SqlMovieRepository(db)
    finally:
        db_session.close()


def get_movie_service(
    store: MovieStore = Depends(get_movie_store),
    config: AppConfig = Depends(get_app_config),
) -> MovieService:
    """
    Factory function for creating MovieService instances.

    Args:
        store: Storage adapter (injected)
        config: Application configuration (injected)

    Returns:
        MovieService bound to the given store
    """
    return MovieService(store, config)
