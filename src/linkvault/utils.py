"""Utility functions for linkvault."""

from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlparse

from dateutil import parser as date_parser

from .exceptions import InvalidInputError

_DATE_DEFAULT = datetime(1970, 1, 1)


def is_valid_url(url: str) -> bool:
    """Check that a URL is absolute http(s) with a host."""
    if not isinstance(url, str) or not url.strip():
        return False
    parsed = urlparse(url.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_urls(urls: list[str]) -> list[str]:
    """Return the URLs unchanged, or raise InvalidInputError if any is unusable."""
    if not urls:
        raise InvalidInputError("At least one URL is required.")
    bad = [u for u in urls if not is_valid_url(u)]
    if bad:
        raise InvalidInputError(f"Invalid URL(s): {', '.join(map(str, bad))}")
    return list(urls)


def to_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_published_at(value: Optional[str]) -> Optional[datetime]:
    """Parse a published-date candidate into UTC; anything unparseable becomes None.

    Missing parts fall to the start of the period, so "2024" is 2024-01-01.
    """
    if not value or not value.strip():
        return None
    try:
        parsed = date_parser.parse(value.strip(), default=_DATE_DEFAULT)
        return to_utc(parsed)
    except (ValueError, OverflowError):
        return None


def estimate_tokens(text: str) -> int:
    """Rough token estimate (~4 chars per token for English)."""
    return len(text) // 4


def fit_to_tokens(text: str, max_tokens: int) -> str:
    """Truncate text to roughly ``max_tokens``, preferring a paragraph boundary."""
    if estimate_tokens(text) <= max_tokens:
        return text

    max_chars = max_tokens * 4
    truncated = text[:max_chars]
    last_para = truncated.rfind("\n\n")
    if last_para > max_chars // 2:
        truncated = truncated[:last_para]
    return truncated + "\n\n[Content truncated to fit context window]"
