"""Feed acquisition pipeline for Pinterest Feed."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from .cache import FeedCache, MemoryFeedCache
from .config import DEFAULT_CACHE_TTL_SECONDS
from .errors import ExtractionEmpty, FetchError, ParseError, PreconditionError
from .extractor import ItemExtractor
from .fetcher import FeedFetcher
from .logging_config import create_execution_logger
from .models import FeedItem
from .parser import FeedParser


class _LockSlot:
    """Refresh lock for one handle and the number of callers using it."""

    def __init__(self):
        self.lock = threading.Lock()
        self.users = 0


class FeedService:
    """Cache lookup, then fetch, parse, extract and store on a miss.

    The feed is decorative, so get_items never raises: every failure is
    logged and returned as an empty list.
    """

    def __init__(
        self,
        fetcher: FeedFetcher | None = None,
        parser: FeedParser | None = None,
        extractor: ItemExtractor | None = None,
        cache: FeedCache | None = None,
        ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
        execution_id: str | None = None,
    ):
        """Initialize the service with its collaborators.

        Args:
            fetcher: Downloads the raw feed
            parser: Turns bytes into raw channel items
            extractor: Selects image items
            cache: Stores extracted items per handle
            ttl_seconds: Lifetime of a cache entry
            execution_id: Execution ID for logging context
        """
        self.fetcher = fetcher or FeedFetcher(execution_id=execution_id)
        self.parser = parser or FeedParser(execution_id=execution_id)
        self.extractor = extractor or ItemExtractor(execution_id=execution_id)
        self.cache = cache if cache is not None else MemoryFeedCache(ttl_seconds=ttl_seconds)
        self.ttl_seconds = ttl_seconds
        self.logger = create_execution_logger("feed_service", execution_id)
        self._locks: dict[str, _LockSlot] = {}
        self._locks_guard = threading.Lock()

    def get_items(self, handle: str, max_items: int) -> list[FeedItem]:
        """Return up to max_items image items for a handle.

        Args:
            handle: Account handle; surrounding whitespace is ignored
            max_items: Item cap, expected in [1, 50]

        Returns:
            FeedItems in feed order, possibly empty
        """
        try:
            handle = self._normalize_handle(handle)
        except PreconditionError as e:
            self.logger.debug(str(e))
            return []

        try:
            cached = self.cache.get(handle)
            if cached is not None:
                return list(cached.items)

            # Only one refresh per handle at a time; waiters reuse its result
            with self._single_flight(handle):
                cached = self.cache.get(handle)
                if cached is not None:
                    return list(cached.items)
                return self._refresh(handle, max_items)
        except Exception as e:
            self.logger.error(
                f"Unexpected error loading feed for {handle}: {e}",
                handle=handle,
                error=str(e),
            )
            return []

    def _refresh(self, handle: str, max_items: int) -> list[FeedItem]:
        try:
            data = self.fetcher.fetch(handle)
            parsed = self.parser.parse(data)
            items = self.extractor.extract(parsed.items, max_items)
            if not items:
                raise ExtractionEmpty(f"No image items found in feed for {handle}")
        except (FetchError, ParseError, ExtractionEmpty) as e:
            self.logger.warning(
                f"Feed unavailable for {handle}: {e}",
                handle=handle,
                error_type=type(e).__name__,
                error=str(e),
            )
            return []

        try:
            self.cache.put(handle, items, self.ttl_seconds)
        except Exception as e:
            self.logger.error(
                f"Failed to cache feed items for {handle}: {e}",
                handle=handle,
                error=str(e),
            )

        self.logger.info(
            f"Loaded {len(items)} feed items for {handle}",
            handle=handle,
            items_count=len(items),
        )
        return items

    @contextmanager
    def _single_flight(self, handle: str) -> Iterator[None]:
        """Hold the per-handle refresh lock.

        A lock is dropped from the table once no caller holds or waits on it.
        """
        with self._locks_guard:
            slot = self._locks.get(handle)
            if slot is None:
                slot = self._locks[handle] = _LockSlot()
            slot.users += 1

        try:
            with slot.lock:
                yield
        finally:
            with self._locks_guard:
                slot.users -= 1
                if slot.users == 0:
                    del self._locks[handle]

    @staticmethod
    def _normalize_handle(handle: str | None) -> str:
        handle = (handle or "").strip()
        if not handle:
            raise PreconditionError("No account handle configured")
        return handle
