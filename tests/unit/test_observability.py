"""Unit tests for logging setup."""

import io
import json

import structlog

from curation.observability import (
    bind_session_context,
    clear_session_context,
    configure_logging,
)


class TestSessionContext:
    """Tests for session context binding."""

    def teardown_method(self) -> None:
        structlog.contextvars.clear_contextvars()

    def test_bind_and_clear(self) -> None:
        """The session id is added to and removed from the context."""
        bind_session_context("abc123")
        assert structlog.contextvars.get_contextvars()["session_id"] == "abc123"

        clear_session_context()
        assert "session_id" not in structlog.contextvars.get_contextvars()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def teardown_method(self) -> None:
        structlog.contextvars.clear_contextvars()
        structlog.reset_defaults()

    def test_json_lines_carry_session(self) -> None:
        """JSON output includes level, event and the bound session id."""
        stream = io.StringIO()
        configure_logging(output=stream, json_format=True)
        bind_session_context("s-1")

        structlog.get_logger().info("view_published", item_count=3)

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "view_published"
        assert record["level"] == "info"
        assert record["session_id"] == "s-1"
        assert record["item_count"] == 3
