from fastapi import APIRouter, Body, Depends, Query, Request, Response
from typing import Any, Dict, List, Optional, Union
import logging

from constants import HTTPStatus
from dependencies import get_movie_service
from dtos.internal.movie_patch import MoviePatch
from dtos.request.movie_request import MovieCreateRequest, MovieUpdateRequest, PatchOperation
from dtos.response.movie_response import MovieListResponse, MovieResponse
from services.movie_service import MovieService
from utils.error_handlers import handle_api_errors

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=MovieResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Create movie")
def create_movie(
    movie: MovieCreateRequest,
    request: Request,
    response: Response,
    service: MovieService = Depends(get_movie_service),
):
    """
    Create a movie.

    Returns the stored movie with a Location header pointing at it.
    """
    created = service.create(movie)
    response.headers["Location"] = str(request.app.url_path_for("get_movie", movie_id=str(created.id)))
    return created


@router.get("", response_model=MovieListResponse, status_code=HTTPStatus.OK)
@handle_api_errors("List movies")
def list_movies(
    page: Optional[int] = Query(None, description="1-based page number (default 1)"),
    page_size: Optional[int] = Query(None, alias="pageSize", description="Movies per page (default from settings)"),
    service: MovieService = Depends(get_movie_service),
):
    """
    Paginated movie list in insertion order.

    Out-of-range values are clamped; a page past the end returns no items.
    """
    return service.list(page=page, page_size=page_size)


@router.get("/{movie_id}", response_model=MovieResponse, status_code=HTTPStatus.OK, name="get_movie")
@handle_api_errors("Get movie")
def get_movie(movie_id: int, service: MovieService = Depends(get_movie_service)):
    """
    Get a specific movie

    Raises:
        HTTPException: 404 if the movie does not exist
    """
    return service.get_by_id(movie_id)


@router.put("/{movie_id}", status_code=HTTPStatus.NO_CONTENT, response_class=Response)
@handle_api_errors("Update movie")
def update_movie(
    movie_id: int,
    movie: MovieUpdateRequest,
    service: MovieService = Depends(get_movie_service),
):
    """
    Replace all mutable fields of a movie. An omitted description is cleared.
    """
    service.update_full(movie_id, movie)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.patch("/{movie_id}", status_code=HTTPStatus.NO_CONTENT, response_class=Response)
@handle_api_errors("Patch movie")
def patch_movie(
    movie_id: int,
    body: Union[List[PatchOperation], Dict[str, Any]] = Body(
        ...,
        description=(
            "Either a sparse object of fields to change, or a list of "
            "add/replace/remove operations on top-level fields"
        ),
    ),
    service: MovieService = Depends(get_movie_service),
):
    """
    Change only the supplied fields of a movie.

    A field counts as supplied when its key is present, even if the value is
    null; fields not mentioned keep their current value.
    """
    if isinstance(body, list):
        patch = MoviePatch.from_operations(body)
    else:
        patch = MoviePatch.from_document(body)
    service.update_partial(movie_id, patch)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.delete("/{movie_id}", status_code=HTTPStatus.NO_CONTENT, response_class=Response)
@handle_api_errors("Delete movie")
def delete_movie(movie_id: int, service: MovieService = Depends(get_movie_service)):
    """
    Delete a movie. Deleting it again returns 404.
    """
    service.delete(movie_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)
