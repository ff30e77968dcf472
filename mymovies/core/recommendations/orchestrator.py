"""
AI recommendation orchestrator.

Runs the full generation flow for one user:

1. Read rating count and today's request count in parallel
2. Reject users below the rating threshold or over the daily limit
3. Build prompts from the rating history
4. Ask the completion model for exactly five movies as strict JSON
5. Validate the model output
6. Resolve every proposal against TMDb by title and year, in parallel
7. Log the request (best effort)

Usage:
    orchestrator = RecommendationOrchestrator(
        rating_store, request_log_store, completion_client, metadata_client
    )
    recommendations = orchestrator.generate(user_id, prompt="something light")
"""

import json
import logging
import time
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from pydantic import ValidationError

from mymovies.core.errors import (
    AIResponseParsingError,
    DailyLimitExceededError,
    DataAccessError,
    InsufficientRatingsError,
    UpstreamError,
)
from mymovies.core.openrouter import ChatCompletionRequest, OpenRouterClient
from mymovies.core.recommendations.prompt_builder import build_prompts
from mymovies.core.recommendations.schemas import (
    AIRecommendation,
    AIRecommendationsPayload,
    RECOMMENDATIONS_JSON_SCHEMA,
    Recommendation,
)
from mymovies.core.recommendations.stores import RatingStore, RequestLogStore
from mymovies.core.tmdb import MovieSearchResult, TMDbClient
from mymovies.utils.dates import next_utc_midnight, utcnow
from mymovies.utils.result import Err, Ok, Result

logger = logging.getLogger(__name__)

MINIMUM_RATINGS = 10
DEFAULT_DAILY_LIMIT = 10
DEFAULT_MODEL = "openai/gpt-4o-mini"


@dataclass(frozen=True)
class SkippedLookup:
    """Why a proposal could not be matched on TMDb."""

    reason: str


LookupOutcome = Result[MovieSearchResult, SkippedLookup]


class RecommendationOrchestrator:
    """
    Composition root of the recommendation flow.

    Args:
        rating_store: Rating count and history reads
        request_log_store: Daily request count and append
        completion_client: Chat-completion provider client
        metadata_client: TMDb client used for enrichment
        model: Completion model identifier
        daily_limit: Maximum requests per user per UTC day
        minimum_ratings: Ratings required before recommendations unlock
        temperature: Sampling temperature for the completion model
        max_tokens: Token cap for the completion
        clock: Returns the current naive UTC time
    """

    def __init__(
        self,
        rating_store: RatingStore,
        request_log_store: RequestLogStore,
        completion_client: OpenRouterClient,
        metadata_client: TMDbClient,
        model: str = DEFAULT_MODEL,
        daily_limit: int = DEFAULT_DAILY_LIMIT,
        minimum_ratings: int = MINIMUM_RATINGS,
        temperature: float = 0.7,
        max_tokens: int = 1000,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.rating_store = rating_store
        self.request_log_store = request_log_store
        self.completion_client = completion_client
        self.metadata_client = metadata_client
        self.model = model
        self.daily_limit = daily_limit
        self.minimum_ratings = minimum_ratings
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.clock = clock

    def generate(self, user_id: str, prompt: Optional[str] = None) -> List[Recommendation]:
        """
        Generate five enriched recommendations for ``user_id``.

        Raises:
            InsufficientRatingsError: User has fewer than ``minimum_ratings`` ratings
            DailyLimitExceededError: User reached ``daily_limit`` requests today
            AIResponseParsingError: Model output was not valid JSON or failed validation
            UpstreamError: Completion provider failed
            DataAccessError: A store read failed
        """
        start = time.monotonic()

        self.check_eligibility(user_id)

        ratings = self.rating_store.list_ratings(user_id)
        system_prompt, user_prompt = build_prompts(ratings, prompt)

        content = self._request_completion(system_prompt, user_prompt)
        proposals = self.parse_response(content)

        recommendations = self._enrich(proposals)
        self._log_request(user_id)

        logger.info(
            "Generated %d recommendations for user %s in %.0fms",
            len(recommendations), user_id, (time.monotonic() - start) * 1000,
        )
        return recommendations

    def check_eligibility(self, user_id: str) -> None:
        """Raise an eligibility error unless the user may generate recommendations now."""
        with ThreadPoolExecutor(max_workers=2) as executor:
            ratings_future = executor.submit(self.rating_store.count_ratings, user_id)
            requests_future = executor.submit(self.request_log_store.count_requests_today, user_id)
            done, _ = wait([ratings_future, requests_future], return_when=FIRST_EXCEPTION)
            for future in done:
                error = future.exception()
                if error is not None:
                    raise error
            ratings_count = ratings_future.result()
            requests_today = requests_future.result()

        if ratings_count < self.minimum_ratings:
            logger.info("User %s has %d ratings, %d required", user_id, ratings_count, self.minimum_ratings)
            raise InsufficientRatingsError(ratings_count, self.minimum_ratings)

        if requests_today >= self.daily_limit:
            logger.info("User %s reached daily limit (%d/%d)", user_id, requests_today, self.daily_limit)
            raise DailyLimitExceededError(
                self.daily_limit, requests_today, next_utc_midnight(self.clock())
            )

    def _request_completion(self, system_prompt: str, user_prompt: str) -> str:
        request = ChatCompletionRequest.model_validate({
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "response_format": {
                "type": "json_schema",
                "json_schema": {
                    "name": "movie_recommendations",
                    "strict": True,
                    "schema": RECOMMENDATIONS_JSON_SCHEMA,
                },
            },
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        })
        response = self.completion_client.complete(request)
        content = response.content
        if not content or not content.strip():
            raise AIResponseParsingError("Empty response from AI")
        return content

    @staticmethod
    def parse_response(content: str) -> List[AIRecommendation]:
        """Parse and validate the model's JSON output."""
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error("AI returned invalid JSON: %s", e)
            raise AIResponseParsingError("Invalid JSON in AI response") from e

        try:
            payload = AIRecommendationsPayload.model_validate(parsed)
        except ValidationError as e:
            logger.error("AI response failed validation: %s", e)
            raise AIResponseParsingError(f"AI response validation failed: {e}") from e
        return payload.recommendations

    def _lookup(self, proposal: AIRecommendation) -> LookupOutcome:
        try:
            match = self.metadata_client.find_by_title_and_year(proposal.title, proposal.year)
        except (UpstreamError, ValueError) as e:
            logger.error("Failed to search TMDb for %r (%d): %s", proposal.title, proposal.year, e)
            return Err(SkippedLookup(f"lookup failed: {e}"))
        except Exception as e:
            logger.exception("Unexpected error searching TMDb for %r (%d)", proposal.title, proposal.year)
            return Err(SkippedLookup(f"lookup failed: {e!r}"))
        if match is None:
            logger.warning("No TMDb match found for %r (%d)", proposal.title, proposal.year)
            return Err(SkippedLookup("no match"))
        return Ok(match)

    def _enrich(self, proposals: List[AIRecommendation]) -> List[Recommendation]:
        """
        Resolve every proposal on TMDb.

        All lookups run to completion; a failed lookup only drops that
        item's id and poster.
        """
        with ThreadPoolExecutor(max_workers=max(len(proposals), 1)) as executor:
            outcomes = list(executor.map(self._lookup, proposals))

        recommendations = []
        for proposal, outcome in zip(proposals, outcomes):
            unmatched = Recommendation(title=proposal.title, year=proposal.year)
            recommendations.append(
                outcome.map(
                    lambda match, p=proposal: Recommendation(
                        tmdb_id=match.tmdb_id,
                        title=p.title,
                        year=p.year,
                        poster_path=match.poster_path,
                    )
                ).unwrap_or(unmatched)
            )
        return recommendations

    def _log_request(self, user_id: str) -> None:
        # The response is already computed; a lost log row only loosens rate limiting
        try:
            self.request_log_store.append_request(user_id)
        except DataAccessError:
            logger.exception("Failed to log recommendation request for user %s", user_id)
