"""
API tests for the recommendation endpoint.

Uses FastAPI TestClient against the real app with a temporary SQLite
database; the completion and TMDb providers are fakes from conftest.py.
"""

import json

from mymovies.database import crud
from mymovies.utils.dates import start_of_utc_day, utcnow

HEADERS = {"X-User-Id": "user-1"}


def rate_movies(client, count, headers=HEADERS):
    for i in range(count):
        r = client.post("/api/ratings", json={"tmdb_id": 1000 + i, "rating": (i % 10) + 1}, headers=headers)
        assert r.status_code == 201


class TestRecommendationEndpoint:
    """Tests for POST /api/recommendations."""

    def test_requires_user_header(self, client):
        r = client.post("/api/recommendations", json={})
        assert r.status_code == 401

    def test_insufficient_ratings(self, client, completion_client):
        """Fewer than ten ratings returns 403 with counts in details."""
        rate_movies(client, 3)

        r = client.post("/api/recommendations", json={}, headers=HEADERS)

        assert r.status_code == 403
        data = r.json()
        assert data["error"] == "Forbidden"
        assert data["details"] == {"currentRatingsCount": 3, "requiredRatingsCount": 10}
        assert completion_client.requests == []

    def test_response_structure(self, client):
        """With ten ratings the endpoint returns five recommendations."""
        rate_movies(client, 10)

        r = client.post("/api/recommendations", json={"prompt": "something tense"}, headers=HEADERS)

        assert r.status_code == 200
        data = r.json()
        assert data["user_id"] == "user-1"
        assert data["n"] == 5
        assert isinstance(data["duration_ms"], int)
        for item in data["recommendations"]:
            assert "tmdb_id" in item
            assert "title" in item
            assert "year" in item
            assert "poster_path" in item
        assert data["recommendations"][1]["tmdb_id"] == 949

    def test_body_is_optional(self, client):
        rate_movies(client, 10)
        r = client.post("/api/recommendations", headers=HEADERS)
        assert r.status_code == 200

    def test_prompt_too_long(self, client):
        rate_movies(client, 10)
        r = client.post("/api/recommendations", json={"prompt": "x" * 501}, headers=HEADERS)
        assert r.status_code == 422

    def test_daily_limit(self, client, db_manager):
        """After ten requests today the endpoint returns 429 with reset time."""
        rate_movies(client, 10)
        with db_manager.session_scope() as session:
            for _ in range(10):
                crud.log_recommendation_request(session, "user-1")

        r = client.post("/api/recommendations", json={}, headers=HEADERS)

        assert r.status_code == 429
        details = r.json()["details"]
        assert details["dailyLimit"] == 10
        assert details["requestsToday"] == 10
        assert details["resetTime"].endswith("T00:00:00Z")

    def test_each_success_is_logged(self, client, db_manager):
        rate_movies(client, 10)
        client.post("/api/recommendations", json={}, headers=HEADERS)
        client.post("/api/recommendations", json={}, headers=HEADERS)

        with db_manager.session_scope() as session:
            assert crud.count_recommendation_requests_since(session, "user-1", start_of_utc_day(utcnow())) == 2

    def test_invalid_ai_output(self, client, completion_client):
        """Malformed model output returns 500 with the parsing message."""
        rate_movies(client, 10)
        completion_client.content = json.dumps({"recommendations": []})

        r = client.post("/api/recommendations", json={}, headers=HEADERS)

        assert r.status_code == 500
        assert r.json()["message"] == "Failed to process AI response. Please try again."

    def test_failed_lookup_degrades_item(self, client, metadata_client):
        rate_movies(client, 10)
        metadata_client.failing = {"Heat"}

        r = client.post("/api/recommendations", json={}, headers=HEADERS)

        assert r.status_code == 200
        heat = r.json()["recommendations"][1]
        assert heat["title"] == "Heat"
        assert heat["tmdb_id"] is None
        assert heat["poster_path"] is None
