"""
TMDb (The Movie Database) API client.

Wraps the v3 search and details endpoints behind typed methods. Every
GET goes through a ``TTLCache`` keyed by endpoint path and parameters;
a hit returns without touching the network. See
https://developer.themoviedb.org for API documentation.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import BaseModel

from mymovies.core.cache import TTLCache
from mymovies.core.errors import UpstreamError

logger = logging.getLogger(__name__)

PROVIDER = "tmdb"
MIN_YEAR = 1888
MAX_YEAR = 2100


class MovieSearchResult(BaseModel):
    """Subset of TMDb movie fields exposed by the API."""

    tmdb_id: int
    title: str
    poster_path: Optional[str] = None
    release_date: Optional[str] = None


def _to_result(raw: Dict[str, Any]) -> MovieSearchResult:
    if not isinstance(raw, dict) or not isinstance(raw.get("id"), int):
        raise UpstreamError(PROVIDER, "parse movie", "entry has no numeric id")
    return MovieSearchResult(
        tmdb_id=raw["id"],
        title=raw.get("title") or "",
        poster_path=raw.get("poster_path"),
        release_date=raw.get("release_date") or None,
    )


class TMDbClient:
    """
    Client for movie-related TMDb operations with response caching.

    Args:
        api_key: TMDb v3 API key
        cache: Cache shared across requests (owned by the application)
        language: Language passed with every request
        timeout: Seconds before an outbound request is abandoned
        cache_ttl: Seconds a cached response stays valid
        session: Optional requests session (injected in tests)
    """

    BASE_URL = "https://api.themoviedb.org/3"

    def __init__(
        self,
        api_key: str,
        cache: TTLCache,
        language: str = "pl-PL",
        timeout: float = 10.0,
        cache_ttl: int = 3600,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not api_key:
            raise ValueError("TMDb API key is required")
        self.api_key = api_key
        self.cache = cache
        self.language = language
        self.timeout = timeout
        self.cache_ttl = cache_ttl
        self.session = session or requests.Session()

    @staticmethod
    def cache_key(path: str, params: Optional[Dict[str, Any]] = None) -> str:
        return f"tmdb:{path}:{json.dumps(params or {}, sort_keys=True)}"

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        key = self.cache_key(path, params)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        query = {"api_key": self.api_key, "language": self.language}
        query.update(params or {})
        try:
            resp = self.session.get(f"{self.BASE_URL}{path}", params=query, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamError(PROVIDER, f"GET {path}", f"failed to connect: {e}") from e

        if not resp.ok:
            raise UpstreamError(
                PROVIDER,
                f"GET {path}",
                f"returned error status: {resp.status_code} {resp.reason}",
                status_code=resp.status_code,
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamError(PROVIDER, f"GET {path}", f"failed to parse response: {e}") from e

        self.cache.set(key, data, self.cache_ttl)
        return data

    def _results(self, data: Dict[str, Any], path: str) -> List[Dict[str, Any]]:
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise UpstreamError(PROVIDER, f"GET {path}", "response has no results list")
        return results

    def search(self, query: str) -> List[MovieSearchResult]:
        """Search movies by free-text query."""
        if not query or not query.strip():
            raise ValueError("Search query cannot be empty")
        data = self._get("/search/movie", {"query": query.strip()})
        return [_to_result(movie) for movie in self._results(data, "/search/movie")]

    def get_details(self, tmdb_id: int) -> MovieSearchResult:
        """Fetch details of a single movie."""
        if not tmdb_id or tmdb_id <= 0:
            raise ValueError("Invalid TMDb ID")
        path = f"/movie/{tmdb_id}"
        return _to_result(self._get(path))

    def find_by_title_and_year(self, title: str, year: int) -> Optional[MovieSearchResult]:
        """
        Search by title restricted to a release year.

        Returns:
            The provider's first result as the best match, or None when
            the search returns nothing
        """
        if not title or not title.strip():
            raise ValueError("Movie title cannot be empty")
        if not year or year < MIN_YEAR or year > MAX_YEAR:
            raise ValueError("Invalid year")

        data = self._get("/search/movie", {"query": title.strip(), "year": str(year)})
        results = self._results(data, "/search/movie")
        if not results:
            return None
        return _to_result(results[0])
