"""Data models for linkvault."""

from dataclasses import dataclass, field
from typing import Literal, Optional

from pydantic import BaseModel

from .db import SavedItem

ProgressStatus = Literal["success", "failed"]


class ExtractSchema(BaseModel):
    """Shape of the JSON side-channel requested from Firecrawl."""

    author: Optional[str] = None
    publishedAt: Optional[str] = None


@dataclass
class ExtractedContent:
    """Represents content extracted from a URL."""

    url: str
    markdown: str = ""
    title: Optional[str] = None
    og_image: Optional[str] = None
    author: Optional[str] = None
    published_at: Optional[str] = None  # raw candidate, parsed by the pipeline
    metadata: dict = field(default_factory=dict)


@dataclass
class SearchResult:
    """A single web search hit."""

    url: str
    title: str = ""
    description: str = ""


@dataclass(frozen=True)
class BulkProgress:
    """Progress event emitted once per URL in a bulk run."""

    completed: int
    total: int
    url: str
    status: ProgressStatus

    def to_dict(self) -> dict:
        return {
            "completed": self.completed,
            "total": self.total,
            "url": self.url,
            "status": self.status,
        }


@dataclass(frozen=True)
class ImportOutcome:
    """Result of importing one URL: the terminal item and the error, if any."""

    url: str
    item: SavedItem
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def progress_status(self) -> ProgressStatus:
        return "success" if self.succeeded else "failed"
