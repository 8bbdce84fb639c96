"""
Movie Response DTOs

DTOs for movie-related API responses.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.value_objects import LengthCategory


class MovieResponse(BaseModel):
    """
    Response DTO for movie information.

    Adds read-time derived fields to the stored ones; derived fields are
    never persisted.
    """

    id: int = Field(description="Movie ID")
    title: str = Field(description="Movie title")
    genre: str = Field(description="Movie genre")
    duration_minutes: int = Field(description="Running time in minutes")
    description: Optional[str] = Field(None, description="Free-text synopsis")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    duration_formatted: str = Field(description="Human-readable running time")
    length_category: LengthCategory = Field(description="SHORT, FEATURE or EPIC")

    class Config:
        """Pydantic configuration."""
        from_attributes = True


class MovieListResponse(BaseModel):
    """
    Response DTO for one page of movies.

    Includes pagination information.
    """

    items: List[MovieResponse] = Field(description="Movies on this page, in insertion order")
    page: int = Field(description="1-based page number")
    page_size: int = Field(description="Maximum number of movies per page")
    total: int = Field(description="Total number of movies")
    total_pages: int = Field(description="Number of non-empty pages")
