"""
Tests for the HTTP mapping of recommendation flow errors.
"""

import json
from datetime import datetime

import pytest

from mymovies.api.errors import ERROR_RESPONSES, error_response
from mymovies.core import errors


def concrete_error_classes(base=errors.RecommendationError):
    found = set()
    for cls in base.__subclasses__():
        found.add(cls)
        found |= concrete_error_classes(cls)
    return found


class TestErrorResponses:
    """Every error class has exactly one response."""

    def test_every_error_class_is_mapped(self):
        assert concrete_error_classes() == set(ERROR_RESPONSES)

    def test_eligibility_and_generation_unions_are_mapped(self):
        for cls in errors.GenerationError.__args__:
            assert cls in ERROR_RESPONSES
        assert set(errors.EligibilityError.__args__) <= set(errors.GenerationError.__args__)

    @pytest.mark.parametrize(
        "error, status_code",
        [
            (errors.InsufficientRatingsError(4), 403),
            (errors.DailyLimitExceededError(10, 10, datetime(2026, 1, 2)), 429),
            (errors.AIResponseParsingError("Invalid JSON in AI response"), 500),
            (errors.UpstreamError("openrouter", "chat completion", "API error: 502"), 500),
            (errors.DataAccessError("count ratings", "locked"), 500),
        ],
    )
    def test_status_codes(self, error, status_code):
        assert error_response(error).status_code == status_code

    def test_internal_messages_are_not_exposed(self):
        """Provider messages stay in the logs, not in the response."""
        response = error_response(errors.UpstreamError("openrouter", "chat completion", "sk-secret leaked"))
        body = json.loads(response.body)
        assert "sk-secret" not in json.dumps(body)
        assert "details" not in body

    def test_daily_limit_body(self):
        body = json.loads(error_response(
            errors.DailyLimitExceededError(10, 12, datetime(2026, 1, 2))
        ).body)
        assert body == {
            "error": "Too Many Requests",
            "message": "Daily recommendation limit exceeded. Please try again tomorrow.",
            "details": {"dailyLimit": 10, "requestsToday": 12, "resetTime": "2026-01-02T00:00:00Z"},
        }
