"""
CRUD operations for Rating, RecommendationRequest, and UserListItem models.

This module provides Create, Read, Update, Delete operations for all database models.
"""

from datetime import datetime
from typing import List, Optional, Dict, Tuple
from sqlalchemy import func, and_
from sqlalchemy.orm import Session

from mymovies.database.models import Rating, RecommendationRequest, UserListItem, LIST_TYPES
from mymovies.utils.dates import utcnow


MIN_RATING = 1
MAX_RATING = 10


def _validate_rating(rating: int) -> None:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValueError("Rating must be an integer between 1 and 10")
    if not (MIN_RATING <= rating <= MAX_RATING):
        raise ValueError("Rating must be an integer between 1 and 10")


def _validate_tmdb_id(tmdb_id: int) -> None:
    if isinstance(tmdb_id, bool) or not isinstance(tmdb_id, int) or tmdb_id <= 0:
        raise ValueError("tmdb_id must be a positive integer")


# ==================== RATING CRUD OPERATIONS ====================

def get_rating_by_user_movie(
    session: Session,
    user_id: str,
    tmdb_id: int
) -> Optional[Rating]:
    """
    Get a rating by user and movie.
    
    Args:
        session: Database session
        user_id: User ID
        tmdb_id: TMDb movie ID
        
    Returns:
        Rating object or None if not found
    """
    return session.query(Rating).filter(
        and_(Rating.user_id == user_id, Rating.tmdb_id == tmdb_id)
    ).first()


def upsert_rating(
    session: Session,
    user_id: str,
    tmdb_id: int,
    rating: int,
    now: Optional[datetime] = None
) -> Tuple[Rating, bool]:
    """
    Create a rating, or update the score of an existing one in place.
    
    Args:
        session: Database session
        user_id: User ID
        tmdb_id: TMDb movie ID
        rating: Rating value (integer 1 to 10)
        now: Timestamp to record (defaults to current UTC time)
        
    Returns:
        Tuple of (Rating object, True if it was newly created)
        
    Raises:
        ValueError: If rating is not an integer between 1 and 10, or
            tmdb_id is not positive
    """
    _validate_rating(rating)
    _validate_tmdb_id(tmdb_id)
    now = now or utcnow()
    
    existing = get_rating_by_user_movie(session, user_id, tmdb_id)
    if existing:
        existing.rating = rating
        existing.updated_at = now
        session.commit()
        session.refresh(existing)
        return existing, False
    
    rating_obj = Rating(
        user_id=user_id,
        tmdb_id=tmdb_id,
        rating=rating,
        created_at=now,
        updated_at=now
    )
    session.add(rating_obj)
    session.commit()
    session.refresh(rating_obj)
    return rating_obj, True


def get_user_ratings(session: Session, user_id: str) -> List[Rating]:
    """
    Get all ratings by a user, most recently updated first.
    
    Args:
        session: Database session
        user_id: User ID
        
    Returns:
        List of Rating objects
    """
    return session.query(Rating).filter(
        Rating.user_id == user_id
    ).order_by(Rating.updated_at.desc(), Rating.id.desc()).all()


def list_user_rating_history(session: Session, user_id: str) -> List[Tuple[int, int]]:
    """
    Get a user's (tmdb_id, rating) pairs, newest rating first.
    """
    rows = session.query(Rating.tmdb_id, Rating.rating).filter(
        Rating.user_id == user_id
    ).order_by(Rating.created_at.desc(), Rating.id.desc()).all()
    return [(row.tmdb_id, row.rating) for row in rows]


def count_user_ratings(session: Session, user_id: str) -> int:
    """
    Get number of ratings a user has.
    
    Args:
        session: Database session
        user_id: User ID
        
    Returns:
        Number of ratings
    """
    return session.query(func.count(Rating.id)).filter(
        Rating.user_id == user_id
    ).scalar() or 0


def delete_rating(session: Session, user_id: str, tmdb_id: int) -> bool:
    """
    Delete a user's rating for a movie.
    
    Returns:
        True if rating was deleted, False if not found
    """
    rating = get_rating_by_user_movie(session, user_id, tmdb_id)
    if rating:
        session.delete(rating)
        session.commit()
        return True
    return False


def get_rating_count(session: Session) -> int:
    """Get total count of ratings."""
    return session.query(func.count(Rating.id)).scalar()


# ==================== RECOMMENDATION REQUEST LOG ====================

def log_recommendation_request(
    session: Session,
    user_id: str,
    created_at: Optional[datetime] = None
) -> RecommendationRequest:
    """
    Append a recommendation request to the log.
    
    Args:
        session: Database session
        user_id: User ID making the request
        created_at: Request timestamp (defaults to current UTC time)
        
    Returns:
        Created RecommendationRequest object
    """
    request = RecommendationRequest(
        user_id=user_id,
        created_at=created_at or utcnow()
    )
    session.add(request)
    session.commit()
    session.refresh(request)
    return request


def count_recommendation_requests_since(
    session: Session,
    user_id: str,
    since: datetime
) -> int:
    """
    Count a user's recommendation requests made at or after ``since``.
    
    Args:
        session: Database session
        user_id: User ID
        since: Inclusive lower bound (naive UTC)
        
    Returns:
        Number of requests
    """
    return session.query(func.count(RecommendationRequest.id)).filter(
        and_(
            RecommendationRequest.user_id == user_id,
            RecommendationRequest.created_at >= since
        )
    ).scalar() or 0


# ==================== USER LIST OPERATIONS ====================

def get_user_lists(session: Session, user_id: str) -> Dict[str, List[UserListItem]]:
    """
    Get a user's watchlist and favorite list, newest additions first.
    
    Args:
        session: Database session
        user_id: User ID
        
    Returns:
        Dictionary with 'watchlist' and 'favorite' keys
    """
    items = session.query(UserListItem).filter(
        UserListItem.user_id == user_id
    ).order_by(UserListItem.created_at.desc(), UserListItem.id.desc()).all()
    
    lists: Dict[str, List[UserListItem]] = {list_type: [] for list_type in LIST_TYPES}
    for item in items:
        lists[item.list_type].append(item)
    return lists


def add_movie_to_list(
    session: Session,
    user_id: str,
    tmdb_id: int,
    list_type: str
) -> UserListItem:
    """
    Add a movie to one of the user's lists.
    
    Raises:
        ValueError: If list_type is unknown or tmdb_id is not positive
        sqlalchemy.exc.IntegrityError: If the movie is already on the list
    """
    if list_type not in LIST_TYPES:
        raise ValueError("list_type must be either 'watchlist' or 'favorite'")
    _validate_tmdb_id(tmdb_id)
    
    item = UserListItem(user_id=user_id, tmdb_id=tmdb_id, list_type=list_type)
    session.add(item)
    session.commit()
    session.refresh(item)
    return item


def remove_movie_from_list(
    session: Session,
    user_id: str,
    tmdb_id: int,
    list_type: str
) -> bool:
    """
    Remove a movie from one of the user's lists.
    
    Returns:
        True if the movie was removed, False if it was not on the list
    """
    item = session.query(UserListItem).filter(
        and_(
            UserListItem.user_id == user_id,
            UserListItem.tmdb_id == tmdb_id,
            UserListItem.list_type == list_type
        )
    ).first()
    if item:
        session.delete(item)
        session.commit()
        return True
    return False
