"""
FastAPI dependency injection for database access, provider clients,
and the recommendation orchestrator.
"""

import logging
from typing import Generator

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from mymovies.api.config import (
    get_daily_recommendation_limit,
    get_database_path,
    get_http_timeout,
    get_metadata_cache_ttl,
    get_openrouter_api_key,
    get_openrouter_model,
    get_tmdb_api_key,
    get_tmdb_language,
)
from mymovies.core.cache import TTLCache
from mymovies.core.openrouter import OpenRouterClient
from mymovies.core.recommendations import RatingStore, RecommendationOrchestrator, RequestLogStore
from mymovies.core.tmdb import TMDbClient
from mymovies.database.connection import DatabaseManager, get_db_manager

logger = logging.getLogger(__name__)


def get_database_manager() -> DatabaseManager:
    """Get the process-wide DatabaseManager."""
    db_path = get_database_path()
    if not db_path.strip():
        return get_db_manager()
    return get_db_manager(db_path=db_path)


def get_db(db_manager: DatabaseManager = Depends(get_database_manager)) -> Generator[Session, None, None]:
    """Yield database session for FastAPI Depends()."""
    with db_manager.session_scope() as session:
        yield session


def get_current_user_id(x_user_id: str | None = Header(None)) -> str:
    """
    Identity of the caller.

    Authentication happens in front of this service; the authenticating
    proxy forwards the user's id in the ``X-User-Id`` header.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id.strip()


def get_metadata_cache(request: Request) -> TTLCache:
    """TMDb response cache owned by the application."""
    return request.app.state.metadata_cache


def get_tmdb_client(cache: TTLCache = Depends(get_metadata_cache)) -> TMDbClient:
    """TMDb client sharing the application's cache."""
    api_key = get_tmdb_api_key()
    if not api_key:
        logger.error("TMDB_API_KEY environment variable is not set")
        raise HTTPException(status_code=500, detail="Movie service is not configured properly")
    return TMDbClient(
        api_key=api_key,
        cache=cache,
        language=get_tmdb_language(),
        timeout=get_http_timeout(),
        cache_ttl=get_metadata_cache_ttl(),
    )


def get_completion_client() -> OpenRouterClient:
    """OpenRouter client for AI recommendations."""
    api_key = get_openrouter_api_key()
    if not api_key:
        logger.error("OPENROUTER_API_KEY environment variable is not set")
        raise HTTPException(status_code=500, detail="Service temporarily unavailable")
    return OpenRouterClient(api_key=api_key, timeout=get_http_timeout())


def get_orchestrator(
    db_manager: DatabaseManager = Depends(get_database_manager),
    completion_client: OpenRouterClient = Depends(get_completion_client),
    tmdb_client: TMDbClient = Depends(get_tmdb_client),
) -> RecommendationOrchestrator:
    """Recommendation orchestrator wired to the configured stores and clients."""
    return RecommendationOrchestrator(
        rating_store=RatingStore(db_manager),
        request_log_store=RequestLogStore(db_manager),
        completion_client=completion_client,
        metadata_client=tmdb_client,
        model=get_openrouter_model(),
        daily_limit=get_daily_recommendation_limit(),
    )
