"""AI summaries and tag extraction for completed items."""

import logging

from .db import SavedItem
from .exceptions import ItemNotReadyError
from .lifecycle import ItemStatus
from .llm.base import LLMProvider
from .store import ItemStore
from .utils import fit_to_tokens

logger = logging.getLogger(__name__)

MAX_TAGS = 5

# Reserved for the system prompt and the reply
_PROMPT_OVERHEAD_TOKENS = 10_000

SUMMARY_SYSTEM_PROMPT = (
    "You are a helpful assistant that creates concise, informative summaries "
    "of web content. Your summaries should:\n"
    "- Be 2-3 paragraphs long.\n"
    "- Capture the main points and key takeaways.\n"
    "- Be written in a clear, professional tone.\n"
    "- Not include any markdown formatting."
)

TAGS_SYSTEM_PROMPT = (
    "You are a helpful assistant that extracts relevant tags from content "
    "summaries. Extract 3-5 short, relevant tags that categorize the content. "
    "Return ONLY a comma-separated list of tags, nothing else. "
    "Example: technology, programming, web development, javascript"
)


def extract_tags(text: str) -> list[str]:
    """Turn a comma-separated LLM reply into at most five clean, lowercase tags."""
    tags = [tag.strip().lower() for tag in text.split(",")]
    return [tag for tag in tags if tag][:MAX_TAGS]


def generate_summary(item: SavedItem, llm: LLMProvider) -> str:
    """Summarize the extracted content of a completed item."""
    if item.status != ItemStatus.COMPLETED or not item.content:
        raise ItemNotReadyError(
            f"Item {item.id} has no extracted content to summarize "
            f"(status {item.status.value})"
        )

    available = max(llm.max_input_tokens - _PROMPT_OVERHEAD_TOKENS, 1_000)
    content = fit_to_tokens(item.content, available)
    summary = llm.generate(
        SUMMARY_SYSTEM_PROMPT,
        f"Please summarize the following content:\n\n{content}",
    )
    return summary.strip()


def save_summary_and_generate_tags(
    item_id: str,
    user_id: str,
    summary: str,
    store: ItemStore,
    llm: LLMProvider,
) -> SavedItem:
    """Store a summary on an item along with tags generated from it.

    Raises ItemNotFoundError if the item does not belong to ``user_id``.
    """
    store.find_one(item_id, user_id)

    reply = llm.generate(
        TAGS_SYSTEM_PROMPT,
        f"Extract tags from this summary: \n\n{summary}",
    )
    tags = extract_tags(reply)
    logger.info("Tagged item %s with %s", item_id, ", ".join(tags) or "(none)")

    return store.update(item_id, user_id, summary=summary, tags=tags)
