"""Data models for Pinterest Feed."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FeedItem:
    """Represents a single image pin extracted from the feed."""

    image_url: str
    link: str
    title: str = ""

    def to_dict(self) -> dict[str, str]:
        """Serialize to the stored cache shape."""
        return {"image_url": self.image_url, "link": self.link, "title": self.title}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FeedItem":
        """Build a FeedItem from its stored cache shape."""
        return cls(
            image_url=str(data["image_url"]),
            link=str(data.get("link", "")),
            title=str(data.get("title", "")),
        )


@dataclass
class ParsedItem:
    """Raw channel item as found in the RSS document."""

    description_html: str = ""
    link: str = ""
    title: str = ""


@dataclass
class ParsedFeed:
    """Parsed RSS document."""

    items: list[ParsedItem] = field(default_factory=list)
    bozo: bool = False  # True when the XML needed lenient recovery
    version: str = ""


@dataclass
class CacheEntry:
    """Cached extraction result for one handle."""

    handle: str
    items: list[FeedItem]
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at
