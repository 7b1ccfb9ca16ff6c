"""Tests for structured logging helpers."""

from __future__ import annotations

import logging

from photosearch.logging import LogContext, StructuredFormatter, setup_logging


def _record(msg: str = "Search completed", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("photosearch.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    """Tests for StructuredFormatter."""

    def test_plain_message(self) -> None:
        """Test that records without extras format normally."""
        formatter = StructuredFormatter("%(levelname)s | %(message)s")

        assert formatter.format(_record()) == "INFO | Search completed"

    def test_extra_fields_appended(self) -> None:
        """Test that extra fields are appended as key=value pairs."""
        formatter = StructuredFormatter("%(message)s")

        output = formatter.format(_record(total=42, duration_ms=150))

        assert output == "Search completed | total=42 | duration_ms=150"

    def test_private_fields_skipped(self) -> None:
        """Test that underscore-prefixed attributes are not printed."""
        formatter = StructuredFormatter("%(message)s")

        assert formatter.format(_record(_internal="x")) == "Search completed"

    def test_credential_fields_masked(self) -> None:
        """Test that access_key and client_id values never reach the output."""
        formatter = StructuredFormatter("%(message)s")

        output = formatter.format(_record(access_key="abc123", client_id="abc123", total=1))

        assert "abc123" not in output
        assert output == "Search completed | access_key=*** | client_id=*** | total=1"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_single_stderr_handler(self) -> None:
        """Test that repeated setup leaves one structured handler on the root logger."""
        root = logging.getLogger()
        package = logging.getLogger("photosearch")
        saved_handlers, saved_level = root.handlers[:], root.level
        saved_package_level = package.level
        try:
            setup_logging(logging.DEBUG, include_timestamp=False)
            setup_logging(logging.DEBUG, include_timestamp=False)

            assert len(root.handlers) == 1
            formatter = root.handlers[0].formatter
            assert isinstance(formatter, StructuredFormatter)
            assert formatter.format(_record()) == "INFO     | photosearch.test | Search completed"
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
            package.setLevel(saved_package_level)


class TestLogContext:
    """Tests for LogContext."""

    def test_fields_added_inside_block(self) -> None:
        """Test that records created inside the block carry the fields."""
        with LogContext(action="search-photos"):
            record = logging.getLogRecordFactory()(
                "photosearch.test", logging.INFO, __file__, 1, "msg", None, None
            )

        assert record.action == "search-photos"

    def test_factory_restored(self) -> None:
        """Test that the original factory is restored on exit."""
        original = logging.getLogRecordFactory()

        with LogContext(action="search-photos"):
            pass

        assert logging.getLogRecordFactory() is original
