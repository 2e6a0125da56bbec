"""Display entry points for Pinterest Feed."""

import os
from datetime import UTC, datetime
from typing import Any

from .cache import DynamoDBFeedCache, FeedCache, MemoryFeedCache
from .config import Config, ConfigProvider
from .extractor import ItemExtractor
from .fetcher import FeedFetcher
from .logging_config import create_execution_logger, setup_structured_logging
from .parser import FeedParser
from .renderer import NO_ITEMS_MARKUP, Renderer
from .service import FeedService

# Setup structured logging
setup_structured_logging(os.getenv("LOG_LEVEL", "INFO"))

HTML_HEADERS = {"Content-Type": "text/html; charset=utf-8"}

# Reused across warm invocations so the in-memory cache survives
_service: FeedService | None = None


def build_cache(config: Config, execution_id: str | None = None) -> FeedCache:
    """Create the cache backend named in the configuration."""
    cache_config = config.get_cache_config()

    if cache_config.backend == "dynamodb":
        return DynamoDBFeedCache(
            table_name=cache_config.table_name,
            aws_region=cache_config.aws_region,
            ttl_seconds=cache_config.ttl_seconds,
            execution_id=execution_id,
        )
    if cache_config.backend != "memory":
        raise ValueError(f"Unknown cache backend: {cache_config.backend}")

    return MemoryFeedCache(ttl_seconds=cache_config.ttl_seconds, execution_id=execution_id)


def build_service(config: Config, execution_id: str | None = None) -> FeedService:
    """Wire the feed pipeline from configuration."""
    cache_config = config.get_cache_config()
    return FeedService(
        fetcher=FeedFetcher(config.get_feed_config(), execution_id=execution_id),
        parser=FeedParser(execution_id=execution_id),
        extractor=ItemExtractor(execution_id=execution_id),
        cache=build_cache(config, execution_id),
        ttl_seconds=cache_config.ttl_seconds,
        execution_id=execution_id,
    )


def render_feed(
    settings: ConfigProvider, service: FeedService, renderer: Renderer | None = None
) -> str:
    """Render the configured account's feed as HTML."""
    renderer = renderer or Renderer()
    items = service.get_items(settings.get_username(), settings.get_item_limit())
    return renderer.render(items)


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Lambda handler that serves the rendered feed as an HTML fragment.

    Args:
        event: Lambda event data
        context: Lambda context object

    Returns:
        API Gateway style response with the markup as body
    """
    global _service

    execution_id = f"lambda_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"
    main_logger = create_execution_logger("main", execution_id)

    main_logger.log_execution_start(
        lambda_request_id=getattr(context, "aws_request_id", "unknown"),
        lambda_function_name=getattr(context, "function_name", "unknown"),
    )

    try:
        config = Config()
        if _service is None:
            _service = build_service(config, execution_id)
            main_logger.info("Feed service initialized")

        body = render_feed(config, _service)
        main_logger.log_execution_end(success=True, body_length=len(body))
    except Exception as e:
        # The feed is decorative: fall back to the placeholder
        error_msg = f"Critical error rendering feed: {str(e)}"
        main_logger.error(error_msg, error=str(e))
        main_logger.log_execution_end(success=False, error=error_msg)
        body = NO_ITEMS_MARKUP

    return {"statusCode": 200, "headers": dict(HTML_HEADERS), "body": body}
