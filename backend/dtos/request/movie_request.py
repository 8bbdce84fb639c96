"""
Movie Request DTOs

DTOs for movie-related API requests.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from constants import MovieLimits


class MovieFields(BaseModel):
    """Client-supplied movie fields shared by create and full update."""

    title: str = Field(
        min_length=1,
        max_length=MovieLimits.TITLE_MAX_LENGTH,
        description="Movie title",
    )
    genre: str = Field(
        min_length=1,
        max_length=MovieLimits.GENRE_MAX_LENGTH,
        description="Movie genre",
    )
    duration_minutes: int = Field(
        ge=MovieLimits.DURATION_MIN_MINUTES,
        le=MovieLimits.DURATION_MAX_MINUTES,
        description="Running time in minutes",
    )
    description: Optional[str] = Field(
        None,
        max_length=MovieLimits.DESCRIPTION_MAX_LENGTH,
        description="Free-text synopsis",
    )

    class Config:
        """Pydantic configuration."""
        str_strip_whitespace = True

    @field_validator("duration_minutes", mode="before")
    @classmethod
    def require_integer_duration(cls, v):
        """Only JSON integers are running times; strings, floats and booleans are not coerced."""
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError("Duration must be an integer number of minutes")
        return v


class MovieCreateRequest(MovieFields):
    """
    Request DTO for creating a movie.

    id and created_at are assigned by the server and ignored if sent.
    """

    class Config:
        """Pydantic configuration."""
        str_strip_whitespace = True
        json_schema_extra = {
            "example": {
                "title": "The Godfather",
                "genre": "Crime",
                "duration_minutes": 175,
                "description": "The aging patriarch of a crime dynasty transfers control to his son.",
            }
        }


class MovieUpdateRequest(MovieFields):
    """
    Request DTO for replacing a movie.

    Every mutable field is replaced; an omitted description resets to null.
    """


class PatchOperation(BaseModel):
    """
    One field-level patch operation.

    Only top-level paths naming a mutable field are accepted, e.g. "/title".
    "remove" resets the field to its default.
    """

    op: Literal["add", "replace", "remove"]
    path: str = Field(description="JSON pointer to a top-level field, e.g. /title")
    value: Any = None

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {
            "example": {"op": "replace", "path": "/duration_minutes", "value": 178}
        }
