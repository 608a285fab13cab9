from __future__ import annotations

import pytest

from linkvault.db import create_db_engine
from linkvault.exceptions import ExtractionError
from linkvault.models import ExtractedContent
from linkvault.store import ItemStore


class FakeExtractor:
    """Stands in for the Firecrawl-backed extractor.

    ``pages`` maps a URL to the content to return; URLs in ``failing`` raise.
    Every call records the status the item had in the store at that moment.
    """

    def __init__(self, store=None, pages=None, failing=(), user_id="alice"):
        self.store = store
        self.pages = pages or {}
        self.failing = set(failing)
        self.user_id = user_id
        self.calls: list[str] = []
        self.status_at_call: dict[str, list[str]] = {}

    def scrape(self, url: str) -> ExtractedContent:
        self.calls.append(url)
        if self.store is not None:
            self.status_at_call[url] = [
                item.status.value
                for item in self.store.find_many(self.user_id)
                if item.url == url
            ]
        if url in self.failing:
            raise ExtractionError(f"Failed to scrape {url}: boom")
        return self.pages.get(url) or ExtractedContent(
            url=url,
            markdown=f"# Content of {url}",
            title=f"Title of {url}",
        )


@pytest.fixture
def store():
    s = ItemStore(create_db_engine("sqlite://"))
    s.init_schema()
    return s


@pytest.fixture
def make_extractor(store):
    def _make(pages=None, failing=(), user_id="alice"):
        return FakeExtractor(store=store, pages=pages, failing=failing, user_id=user_id)

    return _make
