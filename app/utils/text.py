"""Text helpers for slugs, HTML stripping and reading time."""
import math
import re
import unicodedata

# Average adult reading speed used for reading-time estimates
WORDS_PER_MINUTE = 200
META_DESCRIPTION_LENGTH = 160

# Letters that NFKD does not decompose to ASCII
_TRANSLITERATION = str.maketrans({
    "ı": "i",
    "İ": "i",
    "ğ": "g",
    "Ğ": "g",
    "ş": "s",
    "Ş": "s",
    "ç": "c",
    "Ç": "c",
    "ö": "o",
    "Ö": "o",
    "ü": "u",
    "Ü": "u",
    "ß": "ss",
    "æ": "ae",
    "ø": "o",
    "đ": "d",
    "ł": "l",
})

_TAG_RE = re.compile(r"<[^>]*>")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def create_slug(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated ASCII slug.

    Returns an empty string when nothing URL-safe is left.
    """
    text = text.translate(_TRANSLITERATION)
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM_RE.sub("-", text.lower()).strip("-")


def is_valid_slug(slug: str) -> bool:
    return bool(SLUG_RE.match(slug))


def strip_html(html: str) -> str:
    return _TAG_RE.sub("", html)


def count_words(text: str) -> int:
    return len(text.split())


def calculate_reading_time(content: str) -> int:
    """Minutes needed to read HTML content, rounded up."""
    return math.ceil(count_words(strip_html(content)) / WORDS_PER_MINUTE)


def truncate_text(text: str, max_length: int = META_DESCRIPTION_LENGTH) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."


def generate_meta_description(content: str, max_length: int = META_DESCRIPTION_LENGTH) -> str:
    """SEO description from HTML content.

    The result never exceeds ``max_length`` characters including the ellipsis.
    """
    plain = " ".join(strip_html(content).split())
    if len(plain) <= max_length:
        return plain
    return truncate_text(plain, max_length - 3)
