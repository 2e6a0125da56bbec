"""Error taxonomy for the feed pipeline.

None of these cross FeedService.get_items: the service catches them and
returns an empty list. They exist so the logs can tell the failure kinds apart.
"""


class FeedError(Exception):
    """Base class for feed pipeline errors."""


class PreconditionError(FeedError):
    """Raised when no account handle is configured."""


class FetchError(FeedError):
    """Raised when the feed could not be downloaded."""

    def __init__(self, feed_url: str, cause: Exception):
        super().__init__(f"Failed to download feed {feed_url}: {cause}")
        self.feed_url = feed_url
        self.cause = cause


class ParseError(FeedError):
    """Raised when the feed document cannot be parsed at all."""


class ExtractionEmpty(FeedError):
    """Raised when a parsed feed holds no image-bearing items."""
