"""
Rating API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Path, Response
from sqlalchemy.orm import Session

from mymovies.api.dependencies import get_current_user_id, get_db
from mymovies.api.models.rating import RatingCreate, RatingResponse, RatingList
from mymovies.database import crud

router = APIRouter(prefix="/api/ratings", tags=["ratings"])


@router.post("", response_model=RatingResponse)
def upsert_rating(
    rating_in: RatingCreate,
    response: Response,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Rate a movie; re-rating updates the score in place (201 created, 200 updated)."""
    try:
        rating, created = crud.upsert_rating(
            db,
            user_id=user_id,
            tmdb_id=rating_in.tmdb_id,
            rating=rating_in.rating,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    response.status_code = 201 if created else 200
    return rating


@router.get("", response_model=RatingList)
def list_ratings(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Get the caller's ratings, most recently updated first."""
    ratings = crud.get_user_ratings(db, user_id)
    return RatingList(
        ratings=[RatingResponse.model_validate(r) for r in ratings],
        count=len(ratings),
    )


@router.delete("/{tmdb_id}", status_code=204)
def delete_rating(
    tmdb_id: int = Path(..., gt=0),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Remove the caller's rating for a movie."""
    if not crud.delete_rating(db, user_id, tmdb_id):
        raise HTTPException(status_code=404, detail="Rating not found")
    return Response(status_code=204)
