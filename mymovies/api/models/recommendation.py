"""
Pydantic schemas for Recommendation API.
"""

from pydantic import BaseModel, Field


class RecommendationRequestBody(BaseModel):
    """Request body for generating recommendations."""

    prompt: str | None = Field(None, max_length=500)


class RecommendationItem(BaseModel):
    """Single recommended movie; ids and posters only come from TMDb matches."""

    tmdb_id: int | None
    title: str
    year: int
    poster_path: str | None

    class Config:
        from_attributes = True


class RecommendationResponse(BaseModel):
    """Response model for recommendations list."""

    user_id: str
    recommendations: list[RecommendationItem]
    n: int
    duration_ms: int
