"""
User list (watchlist / favorite) API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Path, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mymovies.api.dependencies import get_current_user_id, get_db
from mymovies.api.models.user_list import (
    AddedListItemResponse,
    ListItemCreate,
    ListItemResponse,
    ListType,
    UserListsResponse,
)
from mymovies.database import crud

router = APIRouter(prefix="/api/lists", tags=["lists"])


@router.get("", response_model=UserListsResponse)
def get_lists(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Get the caller's watchlist and favorites."""
    lists = crud.get_user_lists(db, user_id)
    return UserListsResponse(
        watchlist=[ListItemResponse.model_validate(i) for i in lists["watchlist"]],
        favorite=[ListItemResponse.model_validate(i) for i in lists["favorite"]],
    )


@router.post("", response_model=AddedListItemResponse, status_code=201)
def add_to_list(
    item_in: ListItemCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Add a movie to a list."""
    try:
        item = crud.add_movie_to_list(
            db,
            user_id=user_id,
            tmdb_id=item_in.tmdb_id,
            list_type=item_in.list_type,
        )
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Movie already exists in this list")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return item


@router.delete("/{list_type}/{tmdb_id}", status_code=204)
def remove_from_list(
    list_type: ListType,
    tmdb_id: int = Path(..., gt=0),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Remove a movie from a list."""
    if not crud.remove_movie_from_list(db, user_id, tmdb_id, list_type):
        raise HTTPException(status_code=404, detail="Movie not found in this list")
    return Response(status_code=204)
