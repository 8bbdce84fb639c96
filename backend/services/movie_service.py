"""
Movie Service

Business logic for the movie resource: validates incoming DTOs, maps them to
entities, calls the storage adapter and maps results back to response DTOs.

Validation always happens before any storage mutation, so a rejected request
never leaves a partial change behind.
"""

from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError as PydanticValidationError

from config.app_config import AppConfig
from constants import Pagination
from dtos import mapper
from dtos.internal.movie_patch import MoviePatch
from dtos.request.movie_request import MovieCreateRequest, MovieUpdateRequest
from dtos.response.movie_response import MovieListResponse, MovieResponse
from exceptions import NotFoundError, ValidationError
from repositories.interfaces import MovieStore
from utils.keyed_lock import KeyedLock, movie_locks
from utils.logging_utils import StructuredLogger, log_operation

logger = StructuredLogger(__name__)

RESOURCE_NAME = "Movie"

DtoT = TypeVar("DtoT", bound=BaseModel)


def _coerce(dto_class: Type[DtoT], payload: Union[DtoT, Mapping[str, Any]]) -> DtoT:
    """Accept a DTO instance or a raw mapping, validating the latter."""
    if isinstance(payload, dto_class):
        return payload
    if not isinstance(payload, Mapping):
        raise ValidationError(f"Expected a JSON object for {dto_class.__name__}")
    try:
        return dto_class.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError.from_errors(f"Invalid {dto_class.__name__}", e.errors()) from e


class MovieService:
    """Service for movie CRUD operations."""

    def __init__(self, store: MovieStore, config: AppConfig, locks: Optional[KeyedLock] = None):
        """
        Initialize MovieService.

        Args:
            store: Storage adapter the service reads and writes through
            config: Application configuration (page size defaults)
            locks: Per-id locks for read-modify-write; defaults to the
                process-wide movie locks
        """
        self.store = store
        self.default_page_size = config.default_page_size
        self.max_page_size = config.max_page_size
        self.locks = locks or movie_locks

    @log_operation("create_movie")
    def create(self, dto: Union[MovieCreateRequest, Mapping[str, Any]]) -> MovieResponse:
        """
        Create a movie.

        Raises:
            ValidationError: If the payload is malformed
        """
        dto = _coerce(MovieCreateRequest, dto)
        stored = self.store.insert(mapper.from_create_dto(dto))
        logger.info("Movie created", extra={"movie_id": stored.id, "title": stored.title})
        return mapper.to_read_dto(stored)

    @log_operation("list_movies")
    def list(self, page: Optional[int] = None, page_size: Optional[int] = None) -> MovieListResponse:
        """
        Return one page of movies in insertion order.

        Missing values fall back to page 1 and the configured default page
        size; both are clamped to at least 1 and the page size to the
        configured maximum. A page past the end is empty, not an error.
        """
        page = max(1, page if page is not None else Pagination.DEFAULT_PAGE)
        page_size = page_size if page_size is not None else self.default_page_size
        page_size = min(max(1, page_size), self.max_page_size)

        movies, total = self.store.find_page(page, page_size)
        return mapper.to_list_response(movies, page, page_size, total)

    @log_operation("get_movie")
    def get_by_id(self, movie_id: int) -> MovieResponse:
        """
        Raises:
            NotFoundError: If no movie has this id
        """
        movie = self.store.find_by_id(movie_id)
        if movie is None:
            raise NotFoundError(RESOURCE_NAME, movie_id)
        return mapper.to_read_dto(movie)

    @log_operation("update_movie")
    def update_full(self, movie_id: int, dto: Union[MovieUpdateRequest, Mapping[str, Any]]) -> None:
        """
        Replace every mutable field of a movie.

        Raises:
            ValidationError: If the payload is malformed
            NotFoundError: If no movie has this id
        """
        dto = _coerce(MovieUpdateRequest, dto)
        with self.locks.hold(movie_id):
            original = self.store.find_by_id(movie_id)
            if original is None:
                raise NotFoundError(RESOURCE_NAME, movie_id)
            if not self.store.replace(movie_id, mapper.apply_full_update(original, dto)):
                raise NotFoundError(RESOURCE_NAME, movie_id)
        logger.info("Movie replaced", extra={"movie_id": movie_id})

    @log_operation("patch_movie")
    def update_partial(self, movie_id: int, patch: Union[MoviePatch, Mapping[str, Any]]) -> None:
        """
        Change only the fields present in the patch.

        Raises:
            ValidationError: If a patched field is unknown, read-only or invalid
            NotFoundError: If no movie has this id
        """
        if not isinstance(patch, MoviePatch):
            if not isinstance(patch, Mapping):
                raise ValidationError("Expected a JSON object or a list of patch operations")
            patch = MoviePatch.from_document(patch)

        with self.locks.hold(movie_id):
            original = self.store.find_by_id(movie_id)
            if original is None:
                raise NotFoundError(RESOURCE_NAME, movie_id)
            updated = mapper.apply_patch(original, patch)
            if not self.store.replace(movie_id, updated):
                raise NotFoundError(RESOURCE_NAME, movie_id)
        logger.info("Movie patched", extra={"movie_id": movie_id, "fields": ",".join(sorted(patch.fields))})

    @log_operation("delete_movie")
    def delete(self, movie_id: int) -> None:
        """
        Raises:
            NotFoundError: If no movie has this id (including one already deleted)
        """
        with self.locks.hold(movie_id):
            if not self.store.delete(movie_id):
                raise NotFoundError(RESOURCE_NAME, movie_id)
        logger.info("Movie deleted", extra={"movie_id": movie_id})
