"""Blog content generation service built on the Gemini client."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from app.config import settings
from app.services.gemini_client import GenerationResult, get_gemini_client
from app.services.prompt_builder import (
    PostGenerationOptions,
    build_improve_prompt,
    build_post_prompt,
    build_titles_prompt,
    build_topics_prompt,
)
from app.services.response_parser import GeneratedPost, parse_line_list, parse_post_response

logger = logging.getLogger(__name__)

SUGGESTION_MAX_TOKENS = 1000
TITLES_TEMPERATURE = 0.8
TOPICS_TEMPERATURE = 0.9


@dataclass
class UsageStats:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    cost: float = 0.0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


def calculate_cost(prompt_tokens: int, completion_tokens: int) -> float:
    """Cost in USD from the configured per-1K token prices."""
    return (
        prompt_tokens / 1000 * settings.GEMINI_INPUT_COST_PER_1K
        + completion_tokens / 1000 * settings.GEMINI_OUTPUT_COST_PER_1K
    )


def _usage_from(result: GenerationResult) -> UsageStats:
    return UsageStats(
        prompt_tokens=result.prompt_tokens,
        completion_tokens=result.completion_tokens,
        cost=calculate_cost(result.prompt_tokens, result.completion_tokens),
    )


class ContentGenerationError(Exception):
    """Generation succeeded upstream but the output was unusable.

    Carries the usage of the call so it can still be recorded.
    """

    def __init__(self, message: str, usage: Optional[UsageStats] = None):
        super().__init__(message)
        self.usage = usage or UsageStats()


class ContentGenerator:
    """
    High-level writing operations: full drafts, rewrites and suggestions.

    Each call is a single request to the model; nothing is retried or cached.
    """

    def __init__(self, client):
        self.client = client

    @property
    def model_name(self) -> str:
        return getattr(self.client, "model_name", settings.GEMINI_MODEL)

    async def generate_blog_post(self, options: PostGenerationOptions) -> Tuple[GeneratedPost, UsageStats]:
        """
        Generate a complete blog post draft.

        Raises:
            GenerationError: If the model call fails
            ContentGenerationError: If the response holds no usable post
        """
        logger.info(
            f"Generating blog post: topic='{options.topic}', "
            f"words={options.word_count}, language={options.language}"
        )
        result = await self.client.generate(
            build_post_prompt(options),
            temperature=settings.GEMINI_TEMPERATURE,
            top_k=settings.GEMINI_TOP_K,
            top_p=settings.GEMINI_TOP_P,
            max_output_tokens=settings.GEMINI_MAX_OUTPUT_TOKENS,
            response_mime_type="application/json",
        )
        usage = _usage_from(result)

        try:
            parsed = parse_post_response(result.text)
        except ValueError as e:
            logger.error(f"Failed to parse AI response: {str(e)}")
            raise ContentGenerationError(f"Failed to parse AI response: {str(e)}", usage) from e

        logger.info(f"Blog post generated ({parsed.strategy.value}): '{parsed.post.title}'")
        return parsed.post, usage

    async def improve_content(self, content: str, instructions: str) -> Tuple[str, UsageStats]:
        result = await self.client.generate(
            build_improve_prompt(content, instructions),
            temperature=settings.GEMINI_TEMPERATURE,
            max_output_tokens=settings.GEMINI_MAX_OUTPUT_TOKENS,
        )
        improved = result.text.strip()
        if not improved:
            raise ContentGenerationError("AI returned empty content", _usage_from(result))
        return improved, _usage_from(result)

    async def suggest_titles(self, topic: str, count: int = 5, language: str = "tr") -> Tuple[List[str], UsageStats]:
        result = await self.client.generate(
            build_titles_prompt(topic, count, language),
            temperature=TITLES_TEMPERATURE,
            max_output_tokens=SUGGESTION_MAX_TOKENS,
        )
        return parse_line_list(result.text, count), _usage_from(result)

    async def suggest_topics(self, category: str, count: int = 5, language: str = "tr") -> Tuple[List[str], UsageStats]:
        result = await self.client.generate(
            build_topics_prompt(category, count, language),
            temperature=TOPICS_TEMPERATURE,
            max_output_tokens=SUGGESTION_MAX_TOKENS,
        )
        return parse_line_list(result.text, count), _usage_from(result)


def get_content_generator() -> ContentGenerator:
    """FastAPI dependency; raises ValueError when the API key is missing."""
    return ContentGenerator(get_gemini_client())
