"""
Recommendation API endpoints.
"""

import logging
import time

from fastapi import APIRouter, Depends

from mymovies.api.dependencies import get_current_user_id, get_orchestrator
from mymovies.api.errors import error_response
from mymovies.api.models.recommendation import (
    RecommendationItem,
    RecommendationRequestBody,
    RecommendationResponse,
)
from mymovies.core.errors import RecommendationError
from mymovies.core.recommendations import RecommendationOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])


@router.post("", response_model=RecommendationResponse)
def generate_recommendations(
    body: RecommendationRequestBody | None = None,
    user_id: str = Depends(get_current_user_id),
    orchestrator: RecommendationOrchestrator = Depends(get_orchestrator),
):
    """Generate 5 AI movie recommendations (requires 10 ratings, limited per day)."""
    start = time.monotonic()
    try:
        recs = orchestrator.generate(user_id, body.prompt if body else None)
    except RecommendationError as e:
        duration_ms = int((time.monotonic() - start) * 1000)
        logger.warning(
            "Recommendation request failed after %dms: %s: %s",
            duration_ms, type(e).__name__, e,
        )
        return error_response(e)

    items = [RecommendationItem.model_validate(r, from_attributes=True) for r in recs]
    return RecommendationResponse(
        user_id=user_id,
        recommendations=items,
        n=len(items),
        duration_ms=int((time.monotonic() - start) * 1000),
    )
