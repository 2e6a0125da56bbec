"""Image item extraction for Pinterest Feed."""

import re
from collections.abc import Iterable

from .logging_config import create_execution_logger
from .models import FeedItem, ParsedItem

# First <img ... src="..."> in the description; later images are ignored
IMG_SRC_PATTERN = re.compile(r'<img[^>]+src="([^"]+)"')


def find_image_url(description_html: str) -> str | None:
    """Return the src of the first <img> tag, or None."""
    match = IMG_SRC_PATTERN.search(description_html or "")
    if not match:
        return None
    return match.group(1)


class ItemExtractor:
    """Selects image-bearing items from a parsed feed."""

    def __init__(self, execution_id: str | None = None):
        self.logger = create_execution_logger("extractor", execution_id)

    def extract(self, parsed_items: Iterable[ParsedItem], max_items: int) -> list[FeedItem]:
        """Build up to max_items FeedItems in feed order.

        Items without an image are skipped and do not count toward the cap.
        Scanning stops once the cap is reached.

        Args:
            parsed_items: Raw channel items in document order
            max_items: Maximum number of items to return, already clamped

        Returns:
            List of FeedItem objects
        """
        items: list[FeedItem] = []
        skipped = 0

        for parsed in parsed_items:
            if len(items) >= max_items:
                break

            image_url = find_image_url(parsed.description_html)
            if not image_url:
                skipped += 1
                continue

            items.append(
                FeedItem(image_url=image_url, link=parsed.link, title=parsed.title)
            )

        self.logger.debug(
            "Extracted image items",
            items_count=len(items),
            skipped=skipped,
            max_items=max_items,
        )
        return items
