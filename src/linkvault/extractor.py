"""Firecrawl SDK wrapper for content extraction, link discovery and search."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from firecrawl import FirecrawlApp

from .config import Config
from .exceptions import ExtractionError
from .models import ExtractedContent, ExtractSchema, SearchResult

logger = logging.getLogger(__name__)

MAP_LIMIT = 10
SEARCH_LIMIT = 10
SEARCH_LOCATION = "US"
SEARCH_TIME_FILTER = "qdr:y"  # past year


def _field(obj: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from an SDK object or a plain dict."""
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _as_dict(obj: Any) -> dict:
    # Convert Pydantic model to dict if needed
    if obj is None:
        return {}
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if hasattr(obj, "dict"):
        return obj.dict()
    return obj if isinstance(obj, dict) else {}


def _json_text(value: Any) -> Optional[str]:
    """Loosely read a JSON side-channel value as text; lists, objects and bools are dropped."""
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _json_date(value: Any) -> Optional[str]:
    """Read a published-date candidate; numbers are epoch milliseconds."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc).isoformat()
        except (OverflowError, OSError, ValueError):
            return None
    return _json_text(value)


def _read_extraction(raw: Any) -> ExtractSchema:
    data = _as_dict(raw)
    return ExtractSchema(
        author=_json_text(data.get("author")),
        publishedAt=_json_date(data.get("publishedAt")),
    )


def scrape_options() -> dict:
    """Scrape options: main-content markdown plus the structured JSON extraction."""
    return {
        "formats": [
            "markdown",
            {"type": "json", "schema": ExtractSchema.model_json_schema()},
        ],
        "only_main_content": True,
    }


class Extractor:
    """Content extraction backed by Firecrawl.

    The client is created on first use so commands that never touch the
    network do not need an API key.
    """

    def __init__(self, api_key: str = "", client: Optional[Any] = None):
        self._api_key = api_key
        self._client = client

    @classmethod
    def from_config(cls, config: Config) -> "Extractor":
        return cls(api_key=config.firecrawl_api_key)

    @property
    def client(self):
        if self._client is None:
            self._client = FirecrawlApp(api_key=self._api_key)
        return self._client

    def scrape(self, url: str) -> ExtractedContent:
        """Scrape a single URL and return structured content."""
        try:
            result = self.client.scrape(url, **scrape_options())
        except Exception as e:
            raise ExtractionError(f"Failed to scrape {url}: {e}") from e

        if not result:
            raise ExtractionError(f"Empty response from Firecrawl for {url}")

        metadata = _as_dict(_field(result, "metadata"))
        extracted = _read_extraction(_field(result, "json"))

        return ExtractedContent(
            url=url,
            markdown=_field(result, "markdown") or "",
            title=metadata.get("title") or metadata.get("og_title") or None,
            og_image=metadata.get("og_image") or metadata.get("ogImage") or None,
            author=extracted.author or None,
            published_at=extracted.publishedAt or None,
            metadata=metadata,
        )

    def map_url(
        self,
        url: str,
        search: Optional[str] = None,
        limit: int = MAP_LIMIT,
    ) -> list[str]:
        """Discover links under a seed URL, optionally filtered by a search term."""
        try:
            result = self.client.map(url, search=search or None, limit=limit)
        except Exception as e:
            raise ExtractionError(f"Failed to map {url}: {e}") from e

        links = []
        for link in _field(result, "links", None) or []:
            link_url = link if isinstance(link, str) else _field(link, "url")
            if link_url:
                links.append(link_url)
        logger.info("Discovered %d link(s) from %s", len(links), url)
        return links

    def search_web(self, query: str, limit: int = SEARCH_LIMIT) -> list[SearchResult]:
        """Search the web, restricted to US results from the past year."""
        try:
            result = self.client.search(
                query,
                limit=limit,
                location=SEARCH_LOCATION,
                tbs=SEARCH_TIME_FILTER,
            )
        except Exception as e:
            raise ExtractionError(f"Search failed for {query!r}: {e}") from e

        hits = []
        for hit in _field(result, "web", None) or []:
            hit_url = _field(hit, "url")
            if not hit_url:
                continue
            hits.append(SearchResult(
                url=hit_url,
                title=_field(hit, "title") or "",
                description=_field(hit, "description") or "",
            ))
        return hits
