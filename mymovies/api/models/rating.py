"""
Pydantic schemas for Rating API.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class RatingCreate(BaseModel):
    """Request body for creating or updating a rating."""

    tmdb_id: int = Field(..., gt=0, strict=True)
    rating: int = Field(..., ge=1, le=10, strict=True)


class RatingResponse(BaseModel):
    """Response model for rating."""

    tmdb_id: int
    rating: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RatingList(BaseModel):
    """Response model for a user's ratings."""

    ratings: list[RatingResponse]
    count: int
