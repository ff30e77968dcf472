"""
System API endpoints (health).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mymovies.api.dependencies import get_db, get_metadata_cache
from mymovies.core.cache import TTLCache
from mymovies.database import crud

router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health")
def health_check(
    db: Session = Depends(get_db),
    cache: TTLCache = Depends(get_metadata_cache),
):
    """Health check: database reachable and cache size."""
    try:
        rating_count = crud.get_rating_count(db)
    except SQLAlchemyError as e:
        return {"status": "unhealthy", "database": str(e), "cached_responses": len(cache)}
    return {
        "status": "healthy",
        "database": "connected",
        "ratings": rating_count,
        "cached_responses": len(cache),
    }
