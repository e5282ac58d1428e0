"""Prompt building, the Gemini client wrapper and the content generator."""

import asyncio
import json
import time
from types import SimpleNamespace

import pytest

from app.services.content_generator import ContentGenerationError, ContentGenerator, calculate_cost
from app.services.gemini_client import GeminiClient, GenerationError, estimate_tokens
from app.services.prompt_builder import (
    PostGenerationOptions,
    build_post_prompt,
    build_titles_prompt,
)
from tests.conftest import FakeGenerationClient


class TestPromptBuilder:
    def test_includes_every_provided_input(self):
        prompt = build_post_prompt(PostGenerationOptions(
            topic="Edge computing",
            keywords=["edge", "latency"],
            tone="technical",
            word_count=1500,
            language="en",
            category_name="Technology",
        ))
        assert "Edge computing" in prompt
        assert "edge, latency" in prompt
        assert "technical and detailed" in prompt
        assert "1500 words" in prompt
        assert "Write in English" in prompt
        assert "**CATEGORY:** Technology" in prompt
        assert '"suggestedTags"' in prompt
        assert "<h2>, <h3>, <p>, <ul>, <ol>, <li>, <strong>, <em>" in prompt

    def test_omits_empty_optional_inputs(self):
        prompt = build_post_prompt(PostGenerationOptions(topic="Minimal"))
        assert "**CATEGORY:**" not in prompt
        assert "**KEYWORDS:**" not in prompt
        assert "Write in Turkish" in prompt

    def test_titles_prompt(self):
        prompt = build_titles_prompt("Rust", 7, "en")
        assert "Suggest 7" in prompt
        assert "English" in prompt


class TestGeminiClient:
    def test_requires_api_key(self, monkeypatch):
        monkeypatch.setattr("app.services.gemini_client.settings.GEMINI_API_KEY", None)
        with pytest.raises(ValueError):
            GeminiClient()

    def test_reports_usage_metadata(self, monkeypatch):
        client = GeminiClient(api_key="test-key", model_name="gemini-test")
        response = SimpleNamespace(
            text="hello",
            usage_metadata=SimpleNamespace(prompt_token_count=11, candidates_token_count=7),
        )
        model = SimpleNamespace(generate_content=lambda prompt: response)
        monkeypatch.setattr(client, "_build_model", lambda config: model)

        result = asyncio.run(client.generate("prompt", temperature=0.5, max_output_tokens=100))
        assert (result.text, result.prompt_tokens, result.completion_tokens) == ("hello", 11, 7)
        assert result.usage_reported is True

    def test_estimates_usage_when_missing(self, monkeypatch):
        client = GeminiClient(api_key="test-key")
        model = SimpleNamespace(generate_content=lambda prompt: SimpleNamespace(text="x" * 40, usage_metadata=None))
        monkeypatch.setattr(client, "_build_model", lambda config: model)

        result = asyncio.run(client.generate("p" * 9, temperature=0.5, max_output_tokens=100))
        assert result.prompt_tokens == 3
        assert result.completion_tokens == 10
        assert result.usage_reported is False

    def test_timeout_becomes_generation_error(self, monkeypatch):
        client = GeminiClient(api_key="test-key", timeout=1)
        client.timeout = 0.05

        def slow(prompt):
            time.sleep(0.5)
            return SimpleNamespace(text="late", usage_metadata=None)

        monkeypatch.setattr(client, "_build_model", lambda config: SimpleNamespace(generate_content=slow))
        with pytest.raises(GenerationError):
            asyncio.run(client.generate("p", temperature=0.5, max_output_tokens=10))

    def test_upstream_errors_are_translated(self, monkeypatch):
        client = GeminiClient(api_key="test-key")

        def boom(prompt):
            raise RuntimeError("429 Resource has been exhausted (check quota)")

        monkeypatch.setattr(client, "_build_model", lambda config: SimpleNamespace(generate_content=boom))
        with pytest.raises(GenerationError, match="quota"):
            asyncio.run(client.generate("p", temperature=0.5, max_output_tokens=10))

    def test_estimate_tokens(self):
        assert estimate_tokens("") == 0
        assert estimate_tokens("abcde") == 2


class TestContentGenerator:
    def test_generate_blog_post(self):
        fake = FakeGenerationClient(text=json.dumps({"title": "T", "content": "<p>Body</p>"}))
        post, usage = asyncio.run(ContentGenerator(fake).generate_blog_post(PostGenerationOptions(topic="T")))
        assert post.title == "T"
        assert post.estimated_reading_time == 1
        assert usage.total_tokens == 600

    def test_parse_failure_keeps_usage(self):
        fake = FakeGenerationClient(text="no json here")
        with pytest.raises(ContentGenerationError) as excinfo:
            asyncio.run(ContentGenerator(fake).generate_blog_post(PostGenerationOptions(topic="T")))
        assert excinfo.value.usage.completion_tokens == 480

    def test_cost_uses_configured_prices(self, monkeypatch):
        monkeypatch.setattr("app.services.content_generator.settings.GEMINI_INPUT_COST_PER_1K", 0.5)
        monkeypatch.setattr("app.services.content_generator.settings.GEMINI_OUTPUT_COST_PER_1K", 1.0)
        assert calculate_cost(2000, 1000) == pytest.approx(2.0)
