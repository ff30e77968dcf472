"""
Shared fixtures and provider fakes for the test suite.
"""

import json

import pytest
from fastapi.testclient import TestClient

from mymovies.api.dependencies import (
    get_completion_client,
    get_database_manager,
    get_tmdb_client,
)
from mymovies.api.main import app
from mymovies.core.errors import DataAccessError, UpstreamError
from mymovies.core.openrouter import ChatCompletionResponse
from mymovies.core.recommendations import RecommendationOrchestrator
from mymovies.core.recommendations.schemas import UserRating
from mymovies.core.tmdb import MovieSearchResult
from mymovies.database.connection import DatabaseManager


AI_MOVIES = [
    {"tmdb_id": 111, "title": "Arrival", "year": 2016},
    {"tmdb_id": 222, "title": "Heat", "year": 1995},
    {"tmdb_id": 333, "title": "Amelie", "year": 2001},
    {"tmdb_id": 444, "title": "Parasite", "year": 2019},
    {"tmdb_id": 555, "title": "Alien", "year": 1979},
]

TMDB_MATCHES = {
    "Arrival": MovieSearchResult(tmdb_id=329865, title="Nowy początek", poster_path="/arrival.jpg", release_date="2016-11-10"),
    "Heat": MovieSearchResult(tmdb_id=949, title="Gorączka", poster_path="/heat.jpg", release_date="1995-12-15"),
    "Amelie": MovieSearchResult(tmdb_id=194, title="Amelia", poster_path="/amelie.jpg", release_date="2001-04-25"),
    "Parasite": MovieSearchResult(tmdb_id=496243, title="Parasite", poster_path="/parasite.jpg", release_date="2019-05-30"),
    "Alien": MovieSearchResult(tmdb_id=348, title="Obcy", poster_path=None, release_date="1979-05-25"),
}


def ai_content(items=None) -> str:
    """JSON text as the completion model would return it."""
    return json.dumps({"recommendations": AI_MOVIES if items is None else items})


class FakeCompletionClient:
    """Records requests and answers with fixed content."""

    def __init__(self, content=None, error=None):
        self.content = ai_content() if content is None else content
        self.error = error
        self.requests = []

    def complete(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return ChatCompletionResponse.model_validate({
            "id": "gen-1",
            "choices": [{"message": {"role": "assistant", "content": self.content}}],
        })


class FakeMetadataClient:
    """TMDb stand-in keyed by title; titles in ``failing`` raise UpstreamError."""

    def __init__(self, matches=None, failing=()):
        self.matches = dict(TMDB_MATCHES if matches is None else matches)
        self.failing = set(failing)
        self.lookups = []

    def find_by_title_and_year(self, title, year):
        self.lookups.append((title, year))
        if title in self.failing:
            raise UpstreamError("tmdb", "GET /search/movie", "connection reset")
        return self.matches.get(title)

    def search(self, query):
        if not query.strip():
            raise ValueError("Search query cannot be empty")
        return [m for t, m in self.matches.items() if query.lower() in t.lower()]

    def get_details(self, tmdb_id):
        for match in self.matches.values():
            if match.tmdb_id == tmdb_id:
                return match
        raise UpstreamError("tmdb", f"GET /movie/{tmdb_id}", "returned error status: 404 Not Found", status_code=404)


class InMemoryRatingStore:
    def __init__(self, ratings=(), error=None):
        self.ratings = [UserRating(*r) for r in ratings]
        self.error = error

    def count_ratings(self, user_id):
        if self.error is not None:
            raise self.error
        return len(self.ratings)

    def list_ratings(self, user_id):
        return list(self.ratings)


class InMemoryRequestLogStore:
    def __init__(self, count=0, fail_append=False):
        self.count = count
        self.fail_append = fail_append
        self.appended = []

    def count_requests_today(self, user_id):
        return self.count

    def append_request(self, user_id):
        if self.fail_append:
            raise DataAccessError("log request", "database is locked")
        self.appended.append(user_id)
        self.count += 1


def ten_ratings():
    return [(100 + i, (i % 10) + 1) for i in range(10)]


@pytest.fixture
def db_manager(tmp_path):
    """File-backed SQLite database so worker threads get their own connections."""
    manager = DatabaseManager(db_path=str(tmp_path / "test.db"))
    manager.create_tables()
    yield manager
    manager.close()


@pytest.fixture
def completion_client():
    return FakeCompletionClient()


@pytest.fixture
def metadata_client():
    return FakeMetadataClient()


@pytest.fixture
def client(db_manager, completion_client, metadata_client):
    """TestClient with database and providers replaced by test doubles."""
    app.dependency_overrides[get_database_manager] = lambda: db_manager
    app.dependency_overrides[get_completion_client] = lambda: completion_client
    app.dependency_overrides[get_tmdb_client] = lambda: metadata_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def build_orchestrator(completion_client, metadata_client):
    """
    Factory for an orchestrator over in-memory stores and the provider fakes.

    The stores are reachable as ``orchestrator.rating_store`` and
    ``orchestrator.request_log_store``.
    """

    def build(ratings=None, requests_today=0, **kwargs):
        return RecommendationOrchestrator(
            InMemoryRatingStore(ten_ratings() if ratings is None else ratings),
            InMemoryRequestLogStore(requests_today),
            completion_client,
            metadata_client,
            **kwargs,
        )

    return build
