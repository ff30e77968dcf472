"""
Unit tests for prompt construction.
"""

from mymovies.core.recommendations.prompt_builder import (
    DEFAULT_USER_PROMPT,
    PromptBuilder,
    build_prompts,
)
from mymovies.core.recommendations.schemas import UserRating


class TestSanitize:
    """Tests for PromptBuilder.sanitize."""

    def test_strips_angle_brackets(self):
        """Angle brackets are removed, the rest of the text is kept."""
        assert PromptBuilder.sanitize("<script>x</script>") == "scriptx/script"

    def test_trims_whitespace(self):
        assert PromptBuilder.sanitize("  something light  ") == "something light"

    def test_empty_becomes_none(self):
        """Missing, empty, or bracket-only input yields None."""
        assert PromptBuilder.sanitize(None) is None
        assert PromptBuilder.sanitize("") is None
        assert PromptBuilder.sanitize("   ") is None
        assert PromptBuilder.sanitize("<>") is None


class TestSystemPrompt:
    """Tests for the rating-history system prompt."""

    def test_renders_each_rating(self):
        """Each rating is rendered as one line in history order."""
        builder = PromptBuilder([UserRating(1, 9), UserRating(2, 3)])
        prompt = builder.build_system_prompt()

        assert "- TMDb ID 1: Rating 9/10" in prompt
        assert "- TMDb ID 2: Rating 3/10" in prompt
        assert prompt.index("TMDb ID 1:") < prompt.index("TMDb ID 2:")

    def test_contains_rating_bands(self):
        prompt = PromptBuilder([UserRating(1, 9)]).build_system_prompt()
        assert "8-10" in prompt
        assert "5-7" in prompt
        assert "1-4" in prompt
        assert "5 movies" in prompt

    def test_empty_history_still_valid(self):
        """No ratings gives the full template with an empty history section."""
        prompt = PromptBuilder([]).build_system_prompt()

        assert "8-10: User loved these movies" in prompt
        assert "1-4: User disliked these movies" in prompt
        assert "User's rating history:" in prompt
        assert "TMDb ID" not in prompt

    def test_is_deterministic(self):
        """Same ratings always produce the same prompt."""
        ratings = [UserRating(10, 7), UserRating(20, 1)]
        assert PromptBuilder(ratings).build() == PromptBuilder(ratings).build()


class TestUserPrompt:
    """Tests for the user prompt."""

    def test_default_when_no_context(self):
        assert PromptBuilder([]).build_user_prompt() == DEFAULT_USER_PROMPT

    def test_uses_context(self):
        assert PromptBuilder([], "a heist movie").build_user_prompt() == "a heist movie"

    def test_build_prompts_sanitizes(self):
        """build_prompts sanitizes the user text before using it."""
        system_prompt, user_prompt = build_prompts([UserRating(1, 9)], " <b>noir</b> ")
        assert user_prompt == "bnoir/b"
        assert "1: Rating 9/10" in system_prompt

    def test_build_prompts_falls_back_to_default(self):
        _, user_prompt = build_prompts([UserRating(1, 9)], "<>")
        assert user_prompt == DEFAULT_USER_PROMPT
