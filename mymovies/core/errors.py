"""
Error taxonomy for the recommendation flow.

Every failure the flow can surface is one of the concrete classes below;
``EligibilityError`` and ``GenerationError`` name the closed unions so
the HTTP layer can map each case to a response. Status codes are not
chosen here.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Union


class RecommendationError(Exception):
    """Base class for failures surfaced by the recommendation flow."""

    def details(self) -> Dict[str, Any]:
        """Structured detail safe to show to the caller."""
        return {}


class InsufficientRatingsError(RecommendationError):
    """User has rated fewer movies than required."""

    def __init__(self, current_count: int, required_count: int = 10):
        self.current_count = current_count
        self.required_count = required_count
        super().__init__(
            f"User has only {current_count} ratings, minimum {required_count} required"
        )

    def details(self) -> Dict[str, Any]:
        return {
            "currentRatingsCount": self.current_count,
            "requiredRatingsCount": self.required_count,
        }


class DailyLimitExceededError(RecommendationError):
    """User already used up today's recommendation requests."""

    def __init__(self, daily_limit: int, requests_today: int, reset_time: datetime):
        self.daily_limit = daily_limit
        self.requests_today = requests_today
        self.reset_time = reset_time
        super().__init__(f"Daily limit of {daily_limit} requests exceeded")

    def details(self) -> Dict[str, Any]:
        return {
            "dailyLimit": self.daily_limit,
            "requestsToday": self.requests_today,
            "resetTime": self.reset_time.isoformat() + "Z",
        }


class UpstreamError(RecommendationError):
    """An external provider was unreachable or answered with an error or a malformed body."""

    def __init__(
        self,
        provider: str,
        operation: str,
        message: str,
        status_code: Optional[int] = None,
    ):
        self.provider = provider
        self.operation = operation
        self.status_code = status_code
        super().__init__(f"{provider} {operation} failed: {message}")


class AIResponseParsingError(RecommendationError):
    """The completion model's output was not valid JSON or failed validation."""


class DataAccessError(RecommendationError):
    """A read from the rating or request-log store failed."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation} failed: {message}")


EligibilityError = Union[InsufficientRatingsError, DailyLimitExceededError]

GenerationError = Union[
    InsufficientRatingsError,
    DailyLimitExceededError,
    UpstreamError,
    AIResponseParsingError,
    DataAccessError,
]
