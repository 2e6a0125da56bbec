"""Feed download for Pinterest Feed."""

from urllib.parse import quote_plus

import requests

from .config import FeedConfig
from .errors import FetchError
from .logging_config import create_execution_logger

FEED_URL_TEMPLATE = "https://{host}/{handle}/feed.rss"


def build_feed_url(handle: str, feed_host: str = "uk.pinterest.com") -> str:
    """Build the public RSS URL for an account handle."""
    return FEED_URL_TEMPLATE.format(host=feed_host, handle=quote_plus(handle))


class FeedFetcher:
    """Downloads the raw RSS document for a handle."""

    def __init__(
        self,
        config: FeedConfig | None = None,
        session: requests.Session | None = None,
        execution_id: str | None = None,
    ):
        """Initialize FeedFetcher with configuration.

        Args:
            config: Feed host, timeout and user agent
            session: Optional preconfigured requests session
            execution_id: Execution ID for logging context
        """
        self.config = config or FeedConfig()
        self.logger = create_execution_logger("fetcher", execution_id)
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.config.user_agent})

        self.logger.info(
            "FeedFetcher initialized",
            feed_host=self.config.feed_host,
            timeout=self.config.timeout,
        )

    def fetch(self, handle: str) -> bytes:
        """Download the feed for a handle with a single GET.

        Args:
            handle: Account handle, unencoded

        Returns:
            Raw response body

        Raises:
            FetchError: On any transport failure or non-2xx response
        """
        feed_url = build_feed_url(handle, self.config.feed_host)

        try:
            self.logger.info("Downloading feed content", handle=handle, feed_url=feed_url)
            response = self.session.get(feed_url, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            self.logger.error(
                f"Failed to download feed {feed_url}: {e}",
                handle=handle,
                feed_url=feed_url,
                error=str(e),
            )
            raise FetchError(feed_url, e) from e

        self.logger.info(
            "Feed downloaded successfully",
            handle=handle,
            feed_url=feed_url,
            status_code=response.status_code,
            content_length=len(response.content),
        )
        return response.content
