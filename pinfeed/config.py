"""Configuration management for Pinterest Feed."""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

DEFAULT_ITEM_COUNT = 9
MIN_ITEM_COUNT = 1
MAX_ITEM_COUNT = 50
DEFAULT_CACHE_TTL_SECONDS = 6 * 60 * 60


@dataclass
class FeedConfig:
    """Configuration for the upstream feed download."""

    feed_host: str = "uk.pinterest.com"
    timeout: float = 30.0
    user_agent: str = "Pinterest-Feed/1.0 (Public RSS image feed)"


@dataclass
class CacheConfig:
    """Configuration for the feed cache."""

    backend: str = "memory"
    table_name: str = "pinterest-feed-cache"
    aws_region: str = "us-east-1"
    ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS


class ConfigProvider(Protocol):
    """Settings collaborator consumed by the display entry point."""

    def get_username(self) -> str: ...

    def get_item_limit(self) -> int: ...


def sanitize_item_count(value: Any) -> int:
    """Coerce a raw item count to an integer in [1, 50].

    Non-numeric input counts as 0 and negative input is taken as its
    absolute value, so both end up clamped into range.
    """
    try:
        count = abs(int(float(str(value).strip())))
    except (TypeError, ValueError, OverflowError):
        count = 0
    return max(MIN_ITEM_COUNT, min(MAX_ITEM_COUNT, count))


class Config:
    """Main configuration manager."""

    # Default settings file path
    SETTINGS_FILE = "settings.json"

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.settings_file = os.getenv("SETTINGS_FILE", self.SETTINGS_FILE)
        self.username = os.getenv("PINTEREST_USERNAME")
        self.item_count = os.getenv("PINTEREST_ITEM_COUNT")
        self.feed_host = os.getenv("PINTEREST_FEED_HOST", "uk.pinterest.com")
        self.fetch_timeout = float(os.getenv("FEED_FETCH_TIMEOUT", "30"))
        self.cache_backend = os.getenv("CACHE_BACKEND", "memory").lower()
        self.cache_ttl_seconds = int(
            os.getenv("CACHE_TTL_SECONDS", str(DEFAULT_CACHE_TTL_SECONDS))
        )
        self.dynamodb_table = os.getenv("DYNAMODB_TABLE", "pinterest-feed-cache")
        self.aws_region = os.getenv(
            "CURRENT_AWS_REGION", os.getenv("AWS_DEFAULT_REGION", "us-east-1")
        )
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self._settings: dict[str, Any] | None = None

    def load_settings(self) -> dict[str, Any]:
        """Load stored options from the settings file.

        A missing file yields no options. The file is read once.
        """
        if self._settings is not None:
            return self._settings

        settings_file = Path(self.settings_file)
        if not settings_file.exists():
            self._settings = {}
            return self._settings

        try:
            with open(settings_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in settings file: {e}")

        if not isinstance(data, dict):
            raise ValueError("Settings file must contain a JSON object")

        self._settings = data
        return self._settings

    def get_username(self) -> str:
        """Get the configured account handle, trimmed. May be empty."""
        username = self.username
        if username is None:
            username = self.load_settings().get("pinterest_username", "")
        return str(username or "").strip()

    def get_item_limit(self) -> int:
        """Get the number of items to display, clamped to [1, 50]."""
        item_count = self.item_count
        if item_count is None:
            item_count = self.load_settings().get(
                "pinterest_item_count", DEFAULT_ITEM_COUNT
            )
        return sanitize_item_count(item_count)

    def get_feed_config(self) -> FeedConfig:
        """Get feed download configuration."""
        return FeedConfig(feed_host=self.feed_host, timeout=self.fetch_timeout)

    def get_cache_config(self) -> CacheConfig:
        """Get cache configuration."""
        return CacheConfig(
            backend=self.cache_backend,
            table_name=self.dynamodb_table,
            aws_region=self.aws_region,
            ttl_seconds=self.cache_ttl_seconds,
        )
