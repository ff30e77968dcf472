"""
Prompt construction for AI movie recommendations.

Pure functions of their inputs: no I/O, and the same ratings and
context always produce the same prompts.
"""

from typing import Optional, Sequence, Tuple

from mymovies.core.recommendations.schemas import UserRating

DEFAULT_USER_PROMPT = "Suggest 5 great movies for me."

SYSTEM_PROMPT_TEMPLATE = """You are an expert movie recommendation system. Based on the user's rating history below, suggest 5 movies they would love.

Rating interpretation:
- 8-10: User loved these movies
- 5-7: User liked these movies
- 1-4: User disliked these movies

User's rating history:
{ratings}

Provide 5 diverse movie recommendations with valid TMDb IDs, titles, and release years. Ensure variety in genres and eras while matching user preferences."""


class PromptBuilder:
    """
    Builds the system and user prompts sent to the completion model.

    Args:
        ratings: User's rating history, newest first
        user_context: Already-sanitized free text from the user, if any
    """

    def __init__(
        self,
        ratings: Sequence[UserRating] = (),
        user_context: Optional[str] = None,
    ):
        self.ratings = list(ratings)
        self.user_context = user_context

    def build_system_prompt(self) -> str:
        ratings_text = "\n".join(
            f"- TMDb ID {tmdb_id}: Rating {rating}/10" for tmdb_id, rating in self.ratings
        )
        return SYSTEM_PROMPT_TEMPLATE.format(ratings=ratings_text)

    def build_user_prompt(self) -> str:
        return self.user_context or DEFAULT_USER_PROMPT

    def build(self) -> Tuple[str, str]:
        """Return ``(system_prompt, user_prompt)``."""
        return self.build_system_prompt(), self.build_user_prompt()

    @staticmethod
    def sanitize(prompt: Optional[str]) -> Optional[str]:
        """Strip angle brackets and surrounding whitespace; empty input becomes None."""
        if not prompt:
            return None
        cleaned = prompt.replace("<", "").replace(">", "").strip()
        return cleaned or None


def build_prompts(
    ratings: Sequence[UserRating], user_prompt: Optional[str] = None
) -> Tuple[str, str]:
    """Sanitize ``user_prompt`` and build both prompts for ``ratings``."""
    return PromptBuilder(ratings, PromptBuilder.sanitize(user_prompt)).build()
