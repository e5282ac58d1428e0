"""Extract structured blog drafts from model output.

The post prompt asks for a bare JSON object, so a strict parse of the whole
response is tried first. Models do not always comply, so the fallbacks below
recover the object from fenced blocks, surrounding prose, and common JSON
mistakes before giving up.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from app.utils.text import calculate_reading_time, strip_html

logger = logging.getLogger(__name__)

FENCED_JSON_RE = re.compile(r"```json\s*([\s\S]*?)\s*```", re.IGNORECASE)
TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")
TITLE_RE = re.compile(r'"title"\s*:\s*"((?:[^"\\]|\\.)+)"')
CONTENT_RE = re.compile(r'"content"\s*:\s*"([\s\S]*?)"\s*(?:,\s*"\w+"\s*:|\})')
EXCERPT_RE = re.compile(r'"excerpt"\s*:\s*"((?:[^"\\]|\\.)+)"')
LIST_MARKER_RE = re.compile(r"^(?:[-*•]|\d+[.)])\s*")

EXCERPT_FALLBACK_LENGTH = 200


class ResponseParseError(ValueError):
    """Raised when no usable post can be recovered from model output."""


class ExtractionStrategy(str, Enum):
    """How the post object was recovered, from cleanest to roughest."""
    STRICT = "strict"
    FENCED = "fenced"
    BRACES = "braces"
    REPAIRED = "repaired"
    FIELD_SCRAPE = "field_scrape"


@dataclass
class GeneratedPost:
    title: str
    content: str
    excerpt: str
    meta_title: str
    meta_description: str
    keywords: List[str] = field(default_factory=list)
    suggested_tags: List[str] = field(default_factory=list)
    estimated_reading_time: int = 0


@dataclass
class ParsedPost:
    post: GeneratedPost
    strategy: ExtractionStrategy


def _load_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        data = json.loads(text)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def extract_json_candidate(text: str) -> Tuple[str, ExtractionStrategy]:
    """Locate the JSON object inside free text.

    Prefers a ```json fenced block, then the span from the first ``{`` to the
    last ``}``.
    """
    match = FENCED_JSON_RE.search(text)
    if match:
        return match.group(1).strip(), ExtractionStrategy.FENCED

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        return text[start:end + 1], ExtractionStrategy.BRACES

    raise ResponseParseError("No JSON object found in AI response")


def escape_newlines_in_strings(text: str) -> str:
    """Escape raw line breaks and tabs that appear inside JSON string values."""
    out = []
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            elif ch == "\n":
                out.append("\\n")
                continue
            elif ch == "\r":
                continue
            elif ch == "\t":
                out.append("\\t")
                continue
        elif ch == '"':
            in_string = True
        out.append(ch)
    return "".join(out)


def repair_json(text: str) -> str:
    """Drop trailing commas and escape bare newlines inside strings."""
    return escape_newlines_in_strings(TRAILING_COMMA_RE.sub(r"\1", text))


def coerce_quotes(text: str) -> str:
    # Also rewrites apostrophes inside values; only used after cleaner repairs fail
    return text.replace("'", '"')


def _unescape(value: str) -> str:
    try:
        return json.loads(f'"{value}"')
    except ValueError:
        return value


def scrape_fields(text: str) -> Optional[Dict[str, Any]]:
    """Last resort: pull title, content and excerpt out with regexes."""
    title = TITLE_RE.search(text)
    content = CONTENT_RE.search(text)
    if not title or not content:
        return None

    excerpt = EXCERPT_RE.search(text)
    data: Dict[str, Any] = {
        "title": _unescape(title.group(1)),
        "content": _unescape(content.group(1)),
    }
    if excerpt:
        data["excerpt"] = _unescape(excerpt.group(1))
    return data


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if str(item).strip()]


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def build_post(data: Dict[str, Any]) -> GeneratedPost:
    """Normalize a decoded object into a GeneratedPost with defaults filled in."""
    title = _text(data.get("title"))
    content = _text(data.get("content"))
    if not title or not content:
        raise ResponseParseError("AI response is missing the title or content field")

    excerpt = _text(data.get("excerpt")) or strip_html(content)[:EXCERPT_FALLBACK_LENGTH].strip()
    return GeneratedPost(
        title=title,
        content=content,
        excerpt=excerpt,
        meta_title=_text(data.get("metaTitle")) or title,
        meta_description=_text(data.get("metaDescription")) or _text(data.get("excerpt")),
        keywords=_string_list(data.get("keywords")),
        suggested_tags=_string_list(data.get("suggestedTags")),
        estimated_reading_time=calculate_reading_time(content),
    )


def parse_post_response(text: str) -> ParsedPost:
    """
    Recover a blog post draft from raw model output.

    Order of attempts:
        1. the whole response as JSON
        2. a ```json fenced block, or the first-{ to last-} span
        3. the same candidate after repairs (trailing commas, raw newlines,
           then single quotes)
        4. regex capture of title/content/excerpt

    Raises:
        ResponseParseError: if none of the attempts yields a title and content
    """
    stripped = text.strip()
    logger.debug(f"Raw AI response (first 500 chars): {stripped[:500]}")

    data = _load_object(stripped)
    strategy = ExtractionStrategy.STRICT

    if data is None:
        candidate, strategy = extract_json_candidate(stripped)
        data = _load_object(candidate)

        if data is None:
            repaired = repair_json(candidate)
            data = _load_object(repaired)
            if data is None:
                data = _load_object(coerce_quotes(repaired))

            if data is not None:
                strategy = ExtractionStrategy.REPAIRED
            else:
                logger.warning("AI response is not valid JSON, attempting field extraction")
                data = scrape_fields(repaired)
                strategy = ExtractionStrategy.FIELD_SCRAPE
                if data is None:
                    raise ResponseParseError(
                        "AI response could not be parsed as JSON and field extraction failed"
                    )

    post = build_post(data)
    if strategy is not ExtractionStrategy.STRICT:
        logger.warning(f"AI response recovered with '{strategy.value}' strategy")
    logger.info(
        f"Parsed AI post: {len(post.content)} content chars, "
        f"{post.estimated_reading_time} min read"
    )
    return ParsedPost(post=post, strategy=strategy)


def parse_line_list(text: str, count: int) -> List[str]:
    """Split a one-item-per-line answer into clean items."""
    items: List[str] = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        line = LIST_MARKER_RE.sub("", line).strip().strip("*").strip().strip('"').strip()
        if line:
            items.append(line)
    return items[:count]
