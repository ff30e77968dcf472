"""
HTTP mapping for recommendation flow errors.

``ERROR_RESPONSES`` has one entry per concrete error class; a test keeps
it in sync with ``mymovies.core.errors``.
"""

from typing import Dict, Tuple, Type

from fastapi.responses import JSONResponse

from mymovies.core.errors import (
    AIResponseParsingError,
    DailyLimitExceededError,
    DataAccessError,
    InsufficientRatingsError,
    RecommendationError,
    UpstreamError,
)

GENERIC_FAILURE = "Failed to generate recommendations. Please try again later."

ERROR_RESPONSES: Dict[Type[RecommendationError], Tuple[int, str, str]] = {
    InsufficientRatingsError: (
        403,
        "Forbidden",
        "You must have at least 10 rated movies to generate recommendations",
    ),
    DailyLimitExceededError: (
        429,
        "Too Many Requests",
        "Daily recommendation limit exceeded. Please try again tomorrow.",
    ),
    AIResponseParsingError: (
        500,
        "Internal Server Error",
        "Failed to process AI response. Please try again.",
    ),
    UpstreamError: (500, "Internal Server Error", GENERIC_FAILURE),
    DataAccessError: (500, "Internal Server Error", GENERIC_FAILURE),
}


def error_response(error: RecommendationError) -> JSONResponse:
    """Build the JSON response for a recommendation flow error."""
    status_code, title, message = ERROR_RESPONSES.get(
        type(error), (500, "Internal Server Error", GENERIC_FAILURE)
    )
    body = {"error": title, "message": message}
    details = error.details()
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)
