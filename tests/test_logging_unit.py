"""Unit tests for structured logging."""

import json
import logging

from pinfeed.logging_config import (
    CONTEXT_FIELDS,
    ExecutionLogger,
    StructuredFormatter,
    create_execution_logger,
    setup_structured_logging,
)


def _record(**extra):
    record = logging.LogRecord(
        name="pinterest_feed.fetcher",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Feed downloaded",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    """Unit tests for StructuredFormatter."""

    def test_base_fields(self):
        entry = json.loads(StructuredFormatter().format(_record()))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "pinterest_feed.fetcher"
        assert entry["message"] == "Feed downloaded"
        assert "timestamp" in entry

    def test_context_fields(self):
        record = _record(
            execution_id="exec_1",
            component="fetcher",
            handle="example",
            feed_url="https://uk.pinterest.com/example/feed.rss",
            items_count=3,
        )

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["execution_id"] == "exec_1"
        assert entry["component"] == "fetcher"
        assert entry["handle"] == "example"
        assert entry["feed_url"].endswith("/feed.rss")
        assert entry["items_count"] == 3

    def test_unrelated_extras_are_left_out(self):
        entry = json.loads(StructuredFormatter().format(_record(secret="x")))

        assert "secret" not in entry


class TestExecutionLogger:
    """Unit tests for ExecutionLogger."""

    def test_generated_execution_id(self):
        logger = create_execution_logger("cache")

        assert isinstance(logger, ExecutionLogger)
        assert logger.execution_id.startswith("exec_")
        assert logger.logger.name == "pinterest_feed.cache"

    def test_context_attached_to_records(self, caplog):
        logger = create_execution_logger("feed_service", "exec_42")

        with caplog.at_level(logging.INFO, logger="pinterest_feed.feed_service"):
            logger.info("Loaded items", handle="example", items_count=2)

        record = caplog.records[-1]
        assert record.execution_id == "exec_42"
        assert record.component == "feed_service"
        assert record.handle == "example"

    def test_cache_lookup_logged_at_debug(self, caplog):
        logger = create_execution_logger("cache", "exec_1")

        with caplog.at_level(logging.DEBUG, logger="pinterest_feed.cache"):
            logger.log_cache_lookup("example", "pinterest_feed_example", hit=True)

        record = caplog.records[-1]
        assert record.levelno == logging.DEBUG
        assert record.cache_hit is True
        assert "hit" in record.getMessage()


class TestSetupStructuredLogging:
    """Unit tests for setup_structured_logging."""

    def test_configures_component_loggers(self):
        components = ("fetcher", "parser", "extractor", "cache", "feed_service")
        root_logger = logging.getLogger()
        original_handlers = root_logger.handlers[:]
        original_root_level = root_logger.level
        original_levels = {
            c: logging.getLogger(f"pinterest_feed.{c}").level for c in components
        }
        try:
            setup_structured_logging("DEBUG")

            assert any(
                isinstance(h.formatter, StructuredFormatter) for h in root_logger.handlers
            )
            for component in components:
                logger = create_execution_logger(component).logger
                assert logger.level == logging.DEBUG
        finally:
            root_logger.handlers[:] = original_handlers
            root_logger.setLevel(original_root_level)
            for component, level in original_levels.items():
                logging.getLogger(f"pinterest_feed.{component}").setLevel(level)

    def test_metrics_are_not_part_of_log_context(self):
        assert "metrics" not in CONTEXT_FIELDS
        assert not hasattr(ExecutionLogger, "log_metrics")
