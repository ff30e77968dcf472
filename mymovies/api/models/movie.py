"""
Pydantic schemas for Movie API.
"""

from pydantic import BaseModel


class MovieResponse(BaseModel):
    """Response model for a single movie."""

    tmdb_id: int
    title: str
    poster_path: str | None
    release_date: str | None

    class Config:
        from_attributes = True


class MovieList(BaseModel):
    """Response model for list of movies with total count."""

    movies: list[MovieResponse]
    total: int
