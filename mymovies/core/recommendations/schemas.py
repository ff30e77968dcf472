"""
Data shapes for the AI recommendation flow.
"""

from typing import List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field

RECOMMENDATION_COUNT = 5
MIN_YEAR = 1888
MAX_YEAR = 2100


class UserRating(NamedTuple):
    """One entry of a user's rating history."""

    tmdb_id: int
    rating: int


class AIRecommendation(BaseModel):
    """A single item as proposed by the completion model."""

    model_config = ConfigDict(strict=True, str_strip_whitespace=True)

    tmdb_id: int = Field(..., gt=0)
    title: str = Field(..., min_length=1)
    year: int = Field(..., ge=MIN_YEAR, le=MAX_YEAR)


class AIRecommendationsPayload(BaseModel):
    """The JSON object the completion model must return."""

    model_config = ConfigDict(strict=True)

    recommendations: List[AIRecommendation] = Field(
        ..., min_length=RECOMMENDATION_COUNT, max_length=RECOMMENDATION_COUNT
    )


class Recommendation(BaseModel):
    """
    Recommendation returned to the caller.

    ``tmdb_id`` and ``poster_path`` come from the TMDb match only and are
    None when no match was found; the model-proposed id is never used.
    """

    tmdb_id: Optional[int] = None
    title: str
    year: int
    poster_path: Optional[str] = None


# Strict JSON schema sent with the completion request
RECOMMENDATIONS_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "recommendations": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "tmdb_id": {"type": "integer", "description": "TMDb movie ID"},
                    "title": {"type": "string", "description": "Movie title"},
                    "year": {"type": "integer", "description": "Release year"},
                },
                "required": ["tmdb_id", "title", "year"],
                "additionalProperties": False,
            },
            "minItems": RECOMMENDATION_COUNT,
            "maxItems": RECOMMENDATION_COUNT,
        },
    },
    "required": ["recommendations"],
    "additionalProperties": False,
}
