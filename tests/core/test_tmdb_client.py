"""
Unit tests for the TMDb client.

The requests session is replaced with a Mock, so no network access is needed.
"""

from unittest.mock import Mock

import pytest
import requests

from mymovies.core.cache import TTLCache
from mymovies.core.errors import UpstreamError
from mymovies.core.tmdb import TMDbClient


def make_response(payload=None, status_code=200, reason="OK"):
    resp = Mock()
    resp.ok = 200 <= status_code < 300
    resp.status_code = status_code
    resp.reason = reason
    resp.json.return_value = payload
    return resp


SEARCH_PAYLOAD = {
    "results": [
        {"id": 949, "title": "Gorączka", "poster_path": "/heat.jpg", "release_date": "1995-12-15"},
        {"id": 12345, "title": "Heat Wave", "poster_path": None, "release_date": ""},
    ]
}


@pytest.fixture
def session():
    return Mock()


@pytest.fixture
def cache():
    return TTLCache()


@pytest.fixture
def tmdb(session, cache):
    return TMDbClient(api_key="test-key", cache=cache, timeout=5.0, session=session)


class TestSearch:
    """Tests for free-text search."""

    def test_search_maps_results(self, tmdb, session):
        session.get.return_value = make_response(SEARCH_PAYLOAD)

        results = tmdb.search("heat")

        assert [r.tmdb_id for r in results] == [949, 12345]
        assert results[0].poster_path == "/heat.jpg"
        assert results[1].release_date is None

    def test_search_sends_key_language_and_timeout(self, tmdb, session):
        session.get.return_value = make_response(SEARCH_PAYLOAD)

        tmdb.search("heat")

        args, kwargs = session.get.call_args
        assert args[0] == "https://api.themoviedb.org/3/search/movie"
        assert kwargs["params"] == {"api_key": "test-key", "language": "pl-PL", "query": "heat"}
        assert kwargs["timeout"] == 5.0

    def test_search_rejects_empty_query(self, tmdb, session):
        with pytest.raises(ValueError):
            tmdb.search("   ")
        session.get.assert_not_called()

    def test_repeated_search_is_served_from_cache(self, tmdb, session):
        """A second identical call does not touch the network."""
        session.get.return_value = make_response(SEARCH_PAYLOAD)

        first = tmdb.search("heat")
        second = tmdb.search("heat")

        assert first == second
        assert session.get.call_count == 1

    def test_different_params_use_different_keys(self):
        assert TMDbClient.cache_key("/search/movie", {"query": "a"}) != TMDbClient.cache_key(
            "/search/movie", {"query": "b"}
        )


class TestFindByTitleAndYear:
    """Tests for the enrichment lookup."""

    def test_returns_first_result(self, tmdb, session):
        session.get.return_value = make_response(SEARCH_PAYLOAD)

        match = tmdb.find_by_title_and_year("Heat", 1995)

        assert match.tmdb_id == 949
        assert session.get.call_args.kwargs["params"]["year"] == "1995"

    def test_returns_none_when_no_results(self, tmdb, session):
        session.get.return_value = make_response({"results": []})
        assert tmdb.find_by_title_and_year("Nonexistent", 2001) is None

    @pytest.mark.parametrize("year", [1800, 2101, 0])
    def test_rejects_out_of_range_year(self, tmdb, year):
        with pytest.raises(ValueError):
            tmdb.find_by_title_and_year("Heat", year)

    def test_rejects_empty_title(self, tmdb):
        with pytest.raises(ValueError):
            tmdb.find_by_title_and_year("", 1995)


class TestErrors:
    """Tests for upstream failure handling."""

    def test_connection_error(self, tmdb, session):
        session.get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(UpstreamError, match="failed to connect"):
            tmdb.search("heat")

    def test_error_status_keeps_code(self, tmdb, session):
        session.get.return_value = make_response(status_code=404, reason="Not Found")

        with pytest.raises(UpstreamError) as exc_info:
            tmdb.get_details(1)

        assert exc_info.value.status_code == 404
        assert exc_info.value.provider == "tmdb"

    def test_invalid_json(self, tmdb, session):
        resp = make_response()
        resp.json.side_effect = ValueError("Expecting value")
        session.get.return_value = resp
        with pytest.raises(UpstreamError, match="failed to parse"):
            tmdb.search("heat")

    def test_missing_results_list(self, tmdb, session):
        session.get.return_value = make_response({"page": 1})
        with pytest.raises(UpstreamError):
            tmdb.search("heat")

    def test_failures_are_not_cached(self, tmdb, session, cache):
        session.get.return_value = make_response(status_code=500, reason="Server Error")
        with pytest.raises(UpstreamError):
            tmdb.search("heat")
        assert len(cache) == 0


class TestGetDetails:
    def test_get_details(self, tmdb, session):
        session.get.return_value = make_response(
            {"id": 949, "title": "Gorączka", "poster_path": "/heat.jpg", "release_date": "1995-12-15"}
        )
        movie = tmdb.get_details(949)
        assert movie.title == "Gorączka"
        assert session.get.call_args.args[0].endswith("/movie/949")

    def test_get_details_rejects_invalid_id(self, tmdb):
        with pytest.raises(ValueError):
            tmdb.get_details(0)

    def test_requires_api_key(self, cache):
        with pytest.raises(ValueError):
            TMDbClient(api_key="", cache=cache)
