"""Recovery of structured posts from raw model output."""

import json
import math

import pytest

from app.services.response_parser import (
    ExtractionStrategy,
    ResponseParseError,
    extract_json_candidate,
    parse_line_list,
    parse_post_response,
    repair_json,
)
from app.utils.text import strip_html

CONTENT = "<h2>Intro</h2><p>" + " ".join(["word"] * 450) + "</p>"

POST = {
    "title": "Async Python in Practice",
    "content": CONTENT,
    "excerpt": "A short tour of asyncio.",
    "metaTitle": "Async Python",
    "metaDescription": "Learn asyncio.",
    "keywords": ["python", "asyncio"],
    "suggestedTags": ["Python", "Concurrency"],
}


def test_strict_json():
    parsed = parse_post_response(json.dumps(POST))
    assert parsed.strategy is ExtractionStrategy.STRICT
    assert parsed.post.title == "Async Python in Practice"
    assert parsed.post.keywords == ["python", "asyncio"]
    assert parsed.post.suggested_tags == ["Python", "Concurrency"]


def test_fenced_json_and_reading_time():
    text = "Here is your post:\n```json\n" + json.dumps(POST, indent=2) + "\n```\nEnjoy!"
    parsed = parse_post_response(text)

    assert parsed.strategy is ExtractionStrategy.FENCED
    words = len(strip_html(CONTENT).split())
    assert parsed.post.estimated_reading_time == math.ceil(words / 200)
    assert parsed.post.estimated_reading_time == 3


def test_bare_object_inside_prose():
    text = "Sure! " + json.dumps(POST) + " Let me know if you need changes."
    parsed = parse_post_response(text)
    assert parsed.strategy is ExtractionStrategy.BRACES
    assert parsed.post.content == CONTENT


def test_trailing_commas_and_raw_newlines_are_repaired():
    text = '{"title": "Fixed", "content": "<p>line one\nline two</p>", "keywords": ["a", "b",],}'
    parsed = parse_post_response(text)
    assert parsed.strategy is ExtractionStrategy.REPAIRED
    assert parsed.post.content == "<p>line one\nline two</p>"
    assert parsed.post.keywords == ["a", "b"]


def test_single_quoted_object_is_coerced():
    parsed = parse_post_response("{'title': 'Quoted', 'content': '<p>Body</p>'}")
    assert parsed.strategy is ExtractionStrategy.REPAIRED
    assert parsed.post.title == "Quoted"


def test_field_scrape_fallback():
    text = '{"title": "Scraped", "content": "<p>He said \\"hi\\"</p>", "excerpt": "Short", "keywords": [oops]}'
    parsed = parse_post_response(text)
    assert parsed.strategy is ExtractionStrategy.FIELD_SCRAPE
    assert parsed.post.title == "Scraped"
    assert parsed.post.content == '<p>He said "hi"</p>'
    assert parsed.post.excerpt == "Short"


def test_defaults_are_filled_in():
    parsed = parse_post_response(json.dumps({"title": "Only basics", "content": "<p>Tiny body</p>", "keywords": "x"}))
    post = parsed.post
    assert post.excerpt == "Tiny body"
    assert post.meta_title == "Only basics"
    assert post.meta_description == ""
    assert post.keywords == []
    assert post.suggested_tags == []


def test_missing_content_is_an_error():
    with pytest.raises(ResponseParseError):
        parse_post_response(json.dumps({"title": "No body"}))


def test_no_json_at_all_is_an_error():
    with pytest.raises(ResponseParseError):
        parse_post_response("I cannot help with that request.")


def test_unrecoverable_object_is_an_error():
    with pytest.raises(ResponseParseError):
        parse_post_response("{ this is : not [ json at all }")


def test_extract_prefers_fenced_block():
    text = '{"noise": 1}\n```json\n{"title": "x"}\n```'
    candidate, strategy = extract_json_candidate(text)
    assert candidate == '{"title": "x"}'
    assert strategy is ExtractionStrategy.FENCED


def test_repair_leaves_escaped_sequences_alone():
    assert repair_json('{"a": "x\\ny"}') == '{"a": "x\\ny"}'


def test_parse_line_list_strips_markers():
    text = "# Titles\n1. First title\n- Second title\n\n**Third title**\n* Fourth\n5) Fifth\n6. Sixth"
    assert parse_line_list(text, 5) == ["First title", "Second title", "Third title", "Fourth", "Fifth"]
