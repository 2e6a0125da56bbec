"""Feed cache backends for Pinterest Feed."""

import threading
import time
from collections.abc import Callable
from decimal import Decimal
from typing import Any

import boto3
from botocore.exceptions import ClientError

from .config import DEFAULT_CACHE_TTL_SECONDS
from .logging_config import create_execution_logger
from .models import CacheEntry, FeedItem

CACHE_KEY_PREFIX = "pinterest_feed_"


def cache_key(handle: str) -> str:
    """Build the storage key for a handle."""
    return f"{CACHE_KEY_PREFIX}{handle}"


class FeedCache:
    """Expiring store of extracted items, one entry per handle.

    Subclasses implement _read, _write and _delete. Expiry is checked here,
    lazily, on every get.
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
        execution_id: str | None = None,
    ):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self.logger = create_execution_logger("cache", execution_id)

    def get(self, handle: str) -> CacheEntry | None:
        """Return the live entry for a handle, or None on miss or expiry."""
        key = cache_key(handle)
        entry = self._read(key)

        if entry is not None and entry.is_expired(self.clock()):
            self.logger.debug("Cache entry expired", handle=handle, cache_key=key)
            self._delete(key)
            entry = None

        self.logger.log_cache_lookup(handle, key, entry is not None)
        return entry

    def put(self, handle: str, items: list[FeedItem], ttl: int | None = None) -> None:
        """Store items for a handle. Empty item lists are never stored."""
        if not items:
            self.logger.debug("Skipping cache write for empty result", handle=handle)
            return

        ttl = self.ttl_seconds if ttl is None else ttl
        entry = CacheEntry(
            handle=handle, items=list(items), expires_at=self.clock() + ttl
        )
        self._write(cache_key(handle), entry)
        self.logger.info(
            "Stored feed items in cache",
            handle=handle,
            cache_key=cache_key(handle),
            items_count=len(items),
            ttl_seconds=ttl,
        )

    def _read(self, key: str) -> CacheEntry | None:
        raise NotImplementedError

    def _write(self, key: str, entry: CacheEntry) -> None:
        raise NotImplementedError

    def _delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryFeedCache(FeedCache):
    """In-process cache, shared by every caller holding the instance."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._store: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def _read(self, key: str) -> CacheEntry | None:
        with self._lock:
            return self._store.get(key)

    def _write(self, key: str, entry: CacheEntry) -> None:
        with self._lock:
            self._store[key] = entry

    def _delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()


class DynamoDBFeedCache(FeedCache):
    """Cache backed by a DynamoDB table keyed on cache_key.

    The ttl attribute lets DynamoDB evict stale rows on its own; reads still
    compare expires_at because native TTL deletion is not immediate.
    """

    def __init__(
        self,
        table_name: str,
        aws_region: str = "us-east-1",
        ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
        execution_id: str | None = None,
    ):
        """Initialize the cache with DynamoDB configuration.

        Args:
            table_name: Name of the DynamoDB table
            aws_region: AWS region for DynamoDB client
            ttl_seconds: Default time to live for new entries
            clock: Source of the current epoch time
            execution_id: Execution ID for logging context
        """
        super().__init__(ttl_seconds=ttl_seconds, clock=clock, execution_id=execution_id)
        self.table_name = table_name
        self.aws_region = aws_region
        self.dynamodb = boto3.resource("dynamodb", region_name=aws_region)
        self.table = self.dynamodb.Table(table_name)

        self.logger.info(
            "DynamoDBFeedCache initialized", table_name=table_name, aws_region=aws_region
        )

    def _read(self, key: str) -> CacheEntry | None:
        try:
            response = self.table.get_item(Key={"cache_key": key})
        except ClientError as e:
            self.logger.error(
                f"Error reading cache entry {key}: {e}", cache_key=key, error=str(e)
            )
            # Treat as a miss so the feed is fetched fresh
            return None

        record = response.get("Item")
        if not record:
            return None
        return self._entry_from_record(record)

    def _write(self, key: str, entry: CacheEntry) -> None:
        expires_at = int(entry.expires_at)
        try:
            self.table.put_item(
                Item={
                    "cache_key": key,
                    "handle": entry.handle,
                    "items": [item.to_dict() for item in entry.items],
                    "expires_at": expires_at,
                    "ttl": expires_at,
                }
            )
        except ClientError as e:
            self.logger.error(
                f"Error storing cache entry {key}: {e}", cache_key=key, error=str(e)
            )
            raise

    def _delete(self, key: str) -> None:
        try:
            self.table.delete_item(Key={"cache_key": key})
        except ClientError as e:
            self.logger.warning(
                f"Error deleting expired cache entry {key}: {e}",
                cache_key=key,
                error=str(e),
            )

    @staticmethod
    def _entry_from_record(record: dict[str, Any]) -> CacheEntry:
        expires_at = record.get("expires_at", 0)
        if isinstance(expires_at, Decimal):
            expires_at = float(expires_at)
        return CacheEntry(
            handle=str(record.get("handle", "")),
            items=[FeedItem.from_dict(raw) for raw in record.get("items", [])],
            expires_at=float(expires_at),
        )
