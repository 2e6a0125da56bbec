"""RSS parsing for Pinterest Feed."""

from typing import Any

import feedparser

from .errors import ParseError
from .logging_config import create_execution_logger
from .models import ParsedFeed, ParsedItem


def _entry_text(entry: Any, *names: str) -> str:
    for name in names:
        value = entry.get(name)
        if value:
            return str(value)
    return ""


class FeedParser:
    """Parses RSS bytes into raw channel items, tolerating malformed XML."""

    def __init__(self, execution_id: str | None = None):
        self.logger = create_execution_logger("parser", execution_id)

    def parse(self, data: bytes) -> ParsedFeed:
        """Parse an RSS document.

        feedparser falls back to its loose parser when the XML is not
        well-formed, so undefined entities and similar damage still yield
        items. Descriptions are kept verbatim: no sanitizing and no
        relative URI rewriting.

        Args:
            data: Raw document bytes

        Returns:
            ParsedFeed with items in document order

        Raises:
            ParseError: If the document is empty or not a feed at all
        """
        if not data or not data.strip():
            raise ParseError("Feed document is empty")

        feed = feedparser.parse(
            data, sanitize_html=False, resolve_relative_uris=False
        )
        version = feed.get("version", "") or ""

        if feed.bozo and not version and not feed.entries:
            reason = feed.get("bozo_exception", "unknown format")
            self.logger.error(f"Failed to parse feed: {reason}", error=str(reason))
            raise ParseError(f"Failed to parse feed: {reason}")

        if feed.bozo:
            self.logger.warning(
                f"Feed parsing warning: {feed.get('bozo_exception')}",
                error=str(feed.get("bozo_exception")),
            )

        items = [
            ParsedItem(
                description_html=_entry_text(entry, "description", "summary"),
                link=_entry_text(entry, "link"),
                title=_entry_text(entry, "title"),
            )
            for entry in feed.entries
        ]

        self.logger.info(
            "Successfully parsed feed",
            items_count=len(items),
            feed_version=version,
            bozo=bool(feed.bozo),
        )
        return ParsedFeed(items=items, bozo=bool(feed.bozo), version=version)
