"""Client for the Google Gemini generative-language API."""

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

import google.generativeai as genai
from google.generativeai.types import HarmCategory, HarmBlockThreshold

from app.config import settings

logger = logging.getLogger(__name__)

SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
}


class GenerationError(Exception):
    """Raised when the generative service call fails."""


@dataclass
class GenerationResult:
    text: str
    prompt_tokens: int
    completion_tokens: int
    usage_reported: bool = False


def estimate_tokens(text: str) -> int:
    """Rough token estimate: about 4 characters per token."""
    if not text:
        return 0
    return math.ceil(len(text) / 4)


class GeminiClient:
    """Single-attempt text generation against Gemini. No retries."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        api_key = api_key or settings.GEMINI_API_KEY
        if not api_key:
            raise ValueError("GEMINI_API_KEY is not configured")

        genai.configure(api_key=api_key)
        self.model_name = model_name or settings.GEMINI_MODEL
        self.timeout = timeout or settings.GEMINI_REQUEST_TIMEOUT
        logger.info(f"Gemini client configured for model: {self.model_name}")

    def _build_model(self, generation_config: Dict[str, Any]) -> "genai.GenerativeModel":
        return genai.GenerativeModel(
            self.model_name,
            generation_config=generation_config,
            safety_settings=SAFETY_SETTINGS,
        )

    async def generate(
        self,
        prompt: str,
        *,
        temperature: float,
        max_output_tokens: int,
        top_k: Optional[int] = None,
        top_p: Optional[float] = None,
        response_mime_type: Optional[str] = None,
    ) -> GenerationResult:
        """
        Send one prompt and return the raw text.

        Args:
            prompt: Full instruction text
            temperature: Sampling temperature
            max_output_tokens: Upper bound on generated tokens
            top_k: Optional top-k sampling
            top_p: Optional nucleus sampling
            response_mime_type: e.g. "application/json" to request structured output

        Returns:
            GenerationResult with text and token counts (estimated when the
            service does not report usage)

        Raises:
            GenerationError: On timeout or any service error
        """
        generation_config: Dict[str, Any] = {
            "temperature": temperature,
            "max_output_tokens": max_output_tokens,
        }
        if top_k is not None:
            generation_config["top_k"] = top_k
        if top_p is not None:
            generation_config["top_p"] = top_p
        if response_mime_type:
            generation_config["response_mime_type"] = response_mime_type

        model = self._build_model(generation_config)

        try:
            # The SDK call is blocking; keep it off the event loop
            response = await asyncio.wait_for(
                asyncio.to_thread(model.generate_content, prompt),
                timeout=self.timeout,
            )
            text = response.text
        except asyncio.TimeoutError:
            logger.warning(f"Gemini API request timeout after {self.timeout} seconds")
            raise GenerationError(f"AI service did not respond within {self.timeout} seconds")
        except Exception as e:
            raise self._translate_error(e) from e

        prompt_tokens, completion_tokens, reported = self._usage(response, prompt, text)
        logger.info(
            f"Gemini response generated: {len(text)} chars, "
            f"{prompt_tokens} input tokens, {completion_tokens} output tokens"
        )
        return GenerationResult(
            text=text,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            usage_reported=reported,
        )

    def _usage(self, response: Any, prompt: str, text: str):
        usage = getattr(response, "usage_metadata", None)
        prompt_tokens = getattr(usage, "prompt_token_count", None) if usage else None
        completion_tokens = getattr(usage, "candidates_token_count", None) if usage else None
        if prompt_tokens and completion_tokens:
            return int(prompt_tokens), int(completion_tokens), True

        logger.warning("Gemini did not report token usage, estimating locally")
        return estimate_tokens(prompt), estimate_tokens(text), False

    def _translate_error(self, error: Exception) -> GenerationError:
        error_msg = str(error)
        lowered = error_msg.lower()
        logger.error(f"Gemini API error: {error_msg}")

        if "404" in error_msg or "not found" in lowered:
            return GenerationError(f"AI model '{self.model_name}' was not found: {error_msg}")
        if "safety" in lowered or "blocked" in lowered:
            return GenerationError("The request was blocked by the AI safety filters")
        if "quota" in lowered or "rate limit" in lowered or "429" in error_msg:
            return GenerationError("AI service quota exceeded, try again later")
        if "api key" in lowered or "permission" in lowered or "authentication" in lowered:
            return GenerationError("AI service credentials are invalid")
        return GenerationError(error_msg)


# Singleton instance - lazy initialization
_gemini_client_instance: Optional[GeminiClient] = None


def get_gemini_client() -> GeminiClient:
    """Get or create the Gemini client (lazy initialization)."""
    global _gemini_client_instance
    if _gemini_client_instance is None:
        try:
            _gemini_client_instance = GeminiClient()
        except Exception as e:
            logger.error(f"Failed to initialize GeminiClient: {str(e)}")
            raise
    return _gemini_client_instance
