"""
Movie API endpoints (TMDb proxy).
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from mymovies.api.dependencies import get_current_user_id, get_tmdb_client
from mymovies.api.models.movie import MovieResponse, MovieList
from mymovies.core.errors import UpstreamError
from mymovies.core.tmdb import TMDbClient

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/movies",
    tags=["movies"],
    dependencies=[Depends(get_current_user_id)],
)


@router.get("/search", response_model=MovieList)
def search_movies(
    query: str = Query(..., min_length=1),
    tmdb: TMDbClient = Depends(get_tmdb_client),
):
    """Search TMDb movies by title."""
    try:
        results = tmdb.search(query)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UpstreamError as e:
        logger.error("Error searching movies: %s", e)
        raise HTTPException(
            status_code=500,
            detail="An unexpected error occurred while searching for movies",
        )
    return MovieList(
        movies=[MovieResponse.model_validate(r, from_attributes=True) for r in results],
        total=len(results),
    )


@router.get("/{tmdb_id}", response_model=MovieResponse)
def get_movie(
    tmdb_id: int = Path(..., gt=0),
    tmdb: TMDbClient = Depends(get_tmdb_client),
):
    """Get movie details by TMDb ID."""
    try:
        movie = tmdb.get_details(tmdb_id)
    except UpstreamError as e:
        logger.error("Error fetching movie details for ID %d: %s", tmdb_id, e)
        if e.status_code == 404:
            raise HTTPException(status_code=404, detail="Movie not found")
        raise HTTPException(status_code=500, detail="Failed to fetch movie details")
    return MovieResponse.model_validate(movie, from_attributes=True)
