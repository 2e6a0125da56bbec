"""Pinterest Feed: cached image grid from a public Pinterest RSS feed."""

from .models import FeedItem
from .renderer import Renderer
from .service import FeedService

__all__ = ["FeedItem", "FeedService", "Renderer"]
