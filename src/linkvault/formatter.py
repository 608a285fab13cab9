"""Text rendering for items and progress events."""

import json
from datetime import datetime
from typing import Optional

from .db import SavedItem
from .models import BulkProgress


def format_frontmatter(item: SavedItem) -> str:
    """Generate YAML frontmatter for an item."""
    lines = [
        "---",
        f"id: {item.id}",
        f"title: \"{_escape_yaml(item.title or '')}\"",
        f"source: \"{_escape_yaml(item.url)}\"",
        f"status: {item.status.value}",
    ]
    if item.author:
        lines.append(f"author: \"{_escape_yaml(item.author)}\"")
    if item.published_at:
        lines.append(f"published: {_format_date(item.published_at)}")
    if item.og_image:
        lines.append(f"image: \"{_escape_yaml(item.og_image)}\"")
    if item.tags:
        lines.append("tags:")
        for tag in item.tags:
            lines.append(f"  - {tag}")
    else:
        lines.append("tags: []")
    lines.extend([
        f"created: {_format_date(item.created_at)}",
        "---",
    ])
    return "\n".join(lines)


def format_item(item: SavedItem) -> str:
    """Format a complete item with frontmatter, summary and content."""
    parts = [format_frontmatter(item), f"# {item.title or item.url}"]
    if item.summary:
        parts.append(f"## Summary\n\n{item.summary}")
    if item.content:
        parts.append(item.content)
    return "\n\n".join(parts) + "\n"


def format_item_line(item: SavedItem) -> str:
    """One-line listing entry: id, status, title (or URL)."""
    return f"{item.id}  {item.status.value:<10}  {item.title or item.url}"


def format_progress(event: BulkProgress) -> str:
    mark = "✓" if event.status == "success" else "✗"
    return f"[{event.completed}/{event.total}] {mark} {event.status:<7} {event.url}"


def progress_json(event: BulkProgress) -> str:
    return json.dumps(event.to_dict())


def _format_date(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d") if value else ""


def _escape_yaml(text: str) -> str:
    """Escape special characters for YAML string values."""
    text = text.replace("\\", "\\\\")
    text = text.replace('"', '\\"')
    text = text.replace("\n", " ")
    return text
