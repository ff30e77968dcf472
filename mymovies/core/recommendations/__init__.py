"""
AI recommendation flow.

This package contains:
- Prompt construction
- Rating and request-log stores
- The orchestrator that validates eligibility, calls the completion
  model, and enriches results with TMDb data
"""

from mymovies.core.recommendations.orchestrator import RecommendationOrchestrator
from mymovies.core.recommendations.prompt_builder import PromptBuilder, build_prompts
from mymovies.core.recommendations.schemas import Recommendation, UserRating
from mymovies.core.recommendations.stores import RatingStore, RequestLogStore

__all__ = [
    'RecommendationOrchestrator',
    'PromptBuilder',
    'build_prompts',
    'Recommendation',
    'UserRating',
    'RatingStore',
    'RequestLogStore',
]
