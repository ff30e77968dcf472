"""
Pydantic schemas for API request/response validation.
"""

from mymovies.api.models.movie import MovieResponse, MovieList
from mymovies.api.models.rating import RatingCreate, RatingResponse, RatingList
from mymovies.api.models.user_list import (
    ListItemCreate,
    ListItemResponse,
    AddedListItemResponse,
    UserListsResponse,
)
from mymovies.api.models.recommendation import (
    RecommendationRequestBody,
    RecommendationResponse,
    RecommendationItem,
)

__all__ = [
    "MovieResponse",
    "MovieList",
    "RatingCreate",
    "RatingResponse",
    "RatingList",
    "ListItemCreate",
    "ListItemResponse",
    "AddedListItemResponse",
    "UserListsResponse",
    "RecommendationRequestBody",
    "RecommendationResponse",
    "RecommendationItem",
]
