"""Utility functions — HTML sanitization, date parsing, time formatting, truncation."""

import html
import re
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

# Items without a usable date sort after every dated item.
MIN_TIMESTAMP = float("-inf")


def sanitize_html(text: str | None) -> str:
    """Strip HTML tags and decode entities from text."""
    if not text:
        return ""
    # Decode HTML entities
    text = html.unescape(str(text))
    # Strip HTML tags
    text = re.sub(r"<[^>]+>", "", text)
    # Collapse whitespace
    text = re.sub(r"\s+", " ", text).strip()
    return text


class HtmlSanitizer:
    """Default sanitizer: entity decoding, tag stripping, whitespace collapsing."""

    def clean(self, text: str) -> str:
        return sanitize_html(text)


def parse_date(published: str | None) -> datetime | None:
    """Parse an RFC 822 or ISO 8601 date string into an aware datetime."""
    if not published:
        return None
    published = published.strip()
    try:
        dt = parsedate_to_datetime(published)
    except (TypeError, ValueError, IndexError):
        try:
            dt = datetime.fromisoformat(published.replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def published_ts(published: str | None, default: float = MIN_TIMESTAMP) -> float:
    """Return the epoch timestamp of a date string, or ``default`` if unparsable."""
    dt = parse_date(published)
    if dt is None:
        return default
    try:
        return dt.timestamp()
    except (OverflowError, ValueError, OSError):
        return default


def time_ago(published: str | None) -> str:
    """Convert a published date string to a human-readable 'time ago' format."""
    dt = parse_date(published)
    if dt is None:
        return ""
    diff = time.time() - dt.timestamp()

    if diff < 60:
        return "just now"
    elif diff < 3600:
        mins = int(diff / 60)
        return f"{mins}m ago"
    elif diff < 86400:
        hours = int(diff / 3600)
        return f"{hours}h ago"
    else:
        days = int(diff / 86400)
        return f"{days}d ago"


def truncate(text: str, max_len: int = 200) -> str:
    """Truncate text to max_len characters, adding ellipsis if needed."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 1].rsplit(" ", 1)[0] + "…"
