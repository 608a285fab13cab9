"""Import pipeline: single URLs and sequential bulk runs.

Each URL follows the same steps: create the item, extract its content,
then move the item to COMPLETED or FAILED. A bulk run does this one URL at
a time and yields a progress event after every item reaches its terminal
state, so callers can render progress while the run is still going.
"""

import logging
from typing import Iterator

from .db import SavedItem
from .exceptions import InvalidInputError
from .extractor import Extractor
from .lifecycle import ItemStatus
from .models import BulkProgress, ExtractedContent, ImportOutcome
from .store import ItemStore
from .utils import is_valid_url, parse_published_at, validate_urls

logger = logging.getLogger(__name__)


def _completed_fields(content: ExtractedContent) -> dict:
    return {
        "status": ItemStatus.COMPLETED,
        "title": content.title or None,
        "content": content.markdown or None,
        "og_image": content.og_image or None,
        "author": content.author or None,
        "published_at": parse_published_at(content.published_at),
    }


def import_url(
    url: str,
    user_id: str,
    store: ItemStore,
    extractor: Extractor,
    initial_status: ItemStatus = ItemStatus.PENDING,
) -> ImportOutcome:
    """Create an item for ``url``, extract it, and record the terminal status.

    Extraction errors are captured in the returned outcome. Store errors
    propagate to the caller.
    """
    item = store.create(user_id=user_id, url=url, status=initial_status)

    try:
        content = extractor.scrape(url)
    except Exception as e:
        logger.warning("Extraction failed for %s: %s", url, e)
        failed = store.update(item.id, user_id, status=ItemStatus.FAILED)
        return ImportOutcome(url=url, item=failed, error=e)

    completed = store.update(item.id, user_id, **_completed_fields(content))
    logger.info("Imported %s as item %s", url, completed.id)
    return ImportOutcome(url=url, item=completed)


def single_import(
    url: str,
    user_id: str,
    store: ItemStore,
    extractor: Extractor,
) -> SavedItem:
    """Import one URL and return the item in its terminal state.

    A failed extraction still returns normally; check ``item.status``.
    """
    if not is_valid_url(url):
        raise InvalidInputError(f"Invalid URL: {url}")
    outcome = import_url(
        url, user_id, store, extractor, initial_status=ItemStatus.PROCESSING
    )
    return outcome.item


class BulkImportRun:
    """One pass of the bulk import pipeline over a fixed list of URLs.

    Iterating yields one ``BulkProgress`` per URL, in input order. The run
    is lazy: nothing is created or fetched until the caller asks for the
    next event. It cannot be restarted; iterating again continues where the
    previous iteration stopped.

    After the last event, ``finished`` is True and ``results`` maps every
    URL to whether it was imported successfully.
    """

    def __init__(
        self,
        urls: list[str],
        user_id: str,
        store: ItemStore,
        extractor: Extractor,
    ):
        self.urls = list(urls)
        self.total = len(self.urls)
        self.user_id = user_id
        self._store = store
        self._extractor = extractor
        self._results: dict[str, bool] = {}
        self._outcomes: list[ImportOutcome] = []
        self._events = self._run()
        self.finished = False

    def __iter__(self) -> Iterator[BulkProgress]:
        return self

    def __next__(self) -> BulkProgress:
        return next(self._events)

    @property
    def results(self) -> dict[str, bool]:
        """URL to success mapping for the URLs processed so far."""
        return dict(self._results)

    @property
    def outcomes(self) -> list[ImportOutcome]:
        return list(self._outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self._outcomes if o.succeeded)

    @property
    def failed(self) -> int:
        return len(self._outcomes) - self.succeeded

    def _run(self) -> Iterator[BulkProgress]:
        logger.info("Bulk import of %d URL(s) for %s", self.total, self.user_id)

        for i, url in enumerate(self.urls):
            outcome = import_url(url, self.user_id, self._store, self._extractor)
            self._outcomes.append(outcome)
            self._results[url] = outcome.succeeded

            yield BulkProgress(
                completed=i + 1,
                total=self.total,
                url=url,
                status=outcome.progress_status,
            )

        self.finished = True
        logger.info(
            "Bulk import finished: %d succeeded, %d failed",
            self.succeeded, self.failed,
        )

    def run_to_completion(self) -> dict[str, bool]:
        """Consume any remaining events and return the final results."""
        for _ in self:
            pass
        return self.results


def bulk_import(
    urls: list[str],
    user_id: str,
    store: ItemStore,
    extractor: Extractor,
) -> BulkImportRun:
    """Start a bulk import run.

    URLs are validated up front; an empty list or a malformed URL raises
    InvalidInputError before any item is created.
    """
    return BulkImportRun(validate_urls(urls), user_id, store, extractor)
