"""
Pydantic schemas for User List API.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

ListType = Literal["watchlist", "favorite"]


class ListItemCreate(BaseModel):
    """Request body for adding a movie to a list."""

    tmdb_id: int = Field(..., gt=0, strict=True)
    list_type: ListType


class ListItemResponse(BaseModel):
    """A movie on one of the user's lists."""

    tmdb_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class AddedListItemResponse(ListItemResponse):
    """Response after adding a movie to a list."""

    list_type: ListType


class UserListsResponse(BaseModel):
    """Both of the user's lists, newest additions first."""

    watchlist: list[ListItemResponse]
    favorite: list[ListItemResponse]
