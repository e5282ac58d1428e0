"""AI assistant endpoints with a fake generation client."""

import json
import logging

from sqlalchemy import select

from app.api.deps import get_generator
from app.main import app
from app.models.ai_usage import AIUsage
from app.services.gemini_client import GenerationError

GENERATED = {
    "title": "Getting Started with FastAPI",
    "content": "<h2>Intro</h2><p>" + " ".join(["fast"] * 250) + "</p>",
    "excerpt": "FastAPI in a nutshell.",
    "metaTitle": "FastAPI Guide",
    "metaDescription": "Build APIs quickly.",
    "keywords": ["fastapi", "python"],
    "suggestedTags": ["FastAPI"],
}


def _usage_rows(db):
    return list(db.scalars(select(AIUsage).order_by(AIUsage.id)).all())


def test_generate_returns_draft_and_usage(client, auth_headers, fake_ai, db):
    fake_ai.text = "```json\n" + json.dumps(GENERATED) + "\n```"

    response = client.post(
        "/api/ai/generate",
        json={"topic": "FastAPI basics", "keywords": ["fastapi"], "wordCount": 500, "language": "en"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["data"]["title"] == "Getting Started with FastAPI"
    assert body["data"]["estimatedReadingTime"] == 2
    assert body["data"]["suggestedTags"] == ["FastAPI"]
    assert body["usage"] == {"promptTokens": 120, "completionTokens": 480, "totalTokens": 600, "cost": 0.0}

    call = fake_ai.calls[0]
    assert "FastAPI basics" in call["prompt"]
    assert "500 words" in call["prompt"]
    assert call["response_mime_type"] == "application/json"

    rows = _usage_rows(db)
    assert len(rows) == 1
    assert rows[0].success is True
    assert rows[0].purpose == "post_generation"
    assert rows[0].total_tokens == 600


def test_generate_includes_category_name(client, auth_headers, fake_ai, category):
    fake_ai.text = json.dumps(GENERATED)
    response = client.post(
        "/api/ai/generate",
        json={"topic": "Routing", "categoryId": category.id},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert "Web Development" in fake_ai.calls[0]["prompt"]


def test_generate_unknown_category_is_left_out(client, auth_headers, fake_ai):
    fake_ai.text = json.dumps(GENERATED)
    response = client.post("/api/ai/generate", json={"topic": "Routing", "categoryId": 77}, headers=auth_headers)
    assert response.status_code == 200
    assert "CATEGORY" not in fake_ai.calls[0]["prompt"]


def test_generate_word_count_bounds(client, auth_headers):
    response = client.post("/api/ai/generate", json={"topic": "x", "wordCount": 100}, headers=auth_headers)
    assert response.status_code == 400


def test_unparsable_output_is_logged_with_usage(client, auth_headers, fake_ai, db):
    fake_ai.text = "Sorry, I can only answer in prose."

    response = client.post("/api/ai/generate", json={"topic": "Anything"}, headers=auth_headers)

    assert response.status_code == 500
    assert "parse" in response.json()["error"].lower()
    rows = _usage_rows(db)
    assert len(rows) == 1
    assert rows[0].success is False
    assert rows[0].prompt_tokens == 120


def test_upstream_failure_is_surfaced(client, auth_headers, fake_ai, db):
    fake_ai.error = GenerationError("AI service quota exceeded, try again later")

    response = client.post("/api/ai/titles", json={"topic": "Python"}, headers=auth_headers)

    assert response.status_code == 500
    assert response.json()["error"] == "AI service quota exceeded, try again later"
    rows = _usage_rows(db)
    assert rows[0].success is False
    assert rows[0].purpose == "title_suggestions"


def test_improve_content(client, auth_headers, fake_ai):
    fake_ai.text = "  <p>Better text</p>\n"
    response = client.post(
        "/api/ai/improve",
        json={"content": "<p>Text</p>", "instructions": "Make it better"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"] == {"improvedContent": "<p>Better text</p>"}
    assert "Make it better" in fake_ai.calls[0]["prompt"]


def test_suggest_titles_honours_count(client, auth_headers, fake_ai):
    fake_ai.text = "1. Alpha\n2. Beta\n3. Gamma\n4. Delta"
    response = client.post("/api/ai/titles", json={"topic": "Python", "count": 3}, headers=auth_headers)
    assert response.json()["data"] == ["Alpha", "Beta", "Gamma"]
    assert fake_ai.calls[0]["temperature"] == 0.8


def test_suggest_topics(client, auth_headers, fake_ai):
    fake_ai.text = "- Edge AI\n- Prompt design\n"
    response = client.post("/api/ai/topics", json={"category": "AI", "language": "en"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"] == ["Edge AI", "Prompt design"]
    assert "English" in fake_ai.calls[0]["prompt"]


def test_ai_requires_admin(client):
    assert client.post("/api/ai/titles", json={"topic": "x"}).status_code == 401


def test_failed_ledger_write_does_not_fail_the_request(client, auth_headers, fake_ai, engine, caplog):
    AIUsage.__table__.drop(bind=engine)
    fake_ai.text = json.dumps(GENERATED)

    with caplog.at_level(logging.ERROR, logger="app.crud.ai_usage"):
        response = client.post("/api/ai/generate", json={"topic": "FastAPI basics"}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Getting Started with FastAPI"
    assert "Failed to log AI usage" in caplog.text


def test_missing_api_key_is_a_server_error(client, auth_headers, monkeypatch):
    app.dependency_overrides.pop(get_generator)
    monkeypatch.setattr("app.services.gemini_client.settings.GEMINI_API_KEY", None)
    monkeypatch.setattr("app.services.gemini_client._gemini_client_instance", None)

    response = client.post("/api/ai/titles", json={"topic": "Python"}, headers=auth_headers)

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert "GEMINI_API_KEY" in body["error"]
