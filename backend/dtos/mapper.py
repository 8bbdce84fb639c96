"""
Movie DTO Mapper

Pure translation between the wire DTOs and the Movie entity. Nothing here
touches storage; identical input always yields identical output.
"""

import math
from typing import List

from pydantic import ValidationError as PydanticValidationError

from domain.entities import Movie
from domain.value_objects import Runtime
from dtos.internal.movie_patch import MoviePatch
from dtos.request.movie_request import MovieCreateRequest, MovieUpdateRequest
from dtos.response.movie_response import MovieListResponse, MovieResponse
from exceptions import ValidationError


def from_create_dto(dto: MovieCreateRequest) -> Movie:
    """New, unsaved entity; storage fills in id and created_at."""
    return Movie(
        title=dto.title,
        genre=dto.genre,
        duration_minutes=dto.duration_minutes,
        description=dto.description,
    )


def to_read_dto(movie: Movie) -> MovieResponse:
    """Entity to response DTO, computing the derived fields."""
    runtime = Runtime(movie.duration_minutes)
    return MovieResponse(
        id=movie.id,
        title=movie.title,
        genre=movie.genre,
        duration_minutes=movie.duration_minutes,
        description=movie.description,
        created_at=movie.created_at,
        duration_formatted=runtime.to_human_readable(),
        length_category=runtime.category,
    )


def apply_full_update(original: Movie, dto: MovieUpdateRequest) -> Movie:
    """Replacement entity: every mutable field from the DTO, identity from the original."""
    return Movie(
        id=original.id,
        created_at=original.created_at,
        title=dto.title,
        genre=dto.genre,
        duration_minutes=dto.duration_minutes,
        description=dto.description,
    )


def apply_patch(original: Movie, patch: MoviePatch) -> Movie:
    """
    Merge a patch into an entity.

    Fields in the patch overwrite the original, all others are copied.
    The merged result must satisfy the same rules as a full update.

    Raises:
        ValidationError: If a patched value is out of type or range
    """
    merged = original.mutable_values()
    merged.update(patch.values)
    try:
        validated = MovieUpdateRequest.model_validate(merged)
    except PydanticValidationError as e:
        # Only report fields the client actually sent
        errors = [err for err in e.errors() if not err["loc"] or err["loc"][0] in patch]
        raise ValidationError.from_errors("Invalid patch", errors or e.errors()) from e
    return apply_full_update(original, validated)


def to_list_response(movies: List[Movie], page: int, page_size: int, total: int) -> MovieListResponse:
    """Page of entities to the paginated response DTO."""
    return MovieListResponse(
        items=[to_read_dto(movie) for movie in movies],
        page=page,
        page_size=page_size,
        total=total,
        total_pages=math.ceil(total / page_size) if page_size else 0,
    )
