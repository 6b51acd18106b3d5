"""
Tests for structured logging helpers.

## Test Perspectives Table
| Case ID | Input / Precondition | Perspective (Equivalence / Boundary) | Expected Result | Notes |
|---------|----------------------|---------------------------------------|-----------------|-------|
| TC-LOG-01 | Long string field | Boundary – truncation | cut with suffix | event untouched |
| TC-LOG-02 | LogContext | Equivalence – scoping | bound inside, gone after | - |
| TC-LOG-03 | configure_logging with file | Equivalence – JSON lines | JSON record in file | - |
"""

import json
import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

# All tests in this module are unit tests (no external dependencies)
pytestmark = pytest.mark.unit

from src.utils.logging import (
    MAX_LOGGED_VALUE_CHARS,
    LogContext,
    _truncate_long_values,
    configure_logging,
    get_logger,
)


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Drop handlers installed by configure_logging()."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


class TestTruncation:
    """TC-LOG-01: Tests for _truncate_long_values()."""

    def test_long_values_cut(self) -> None:
        event = {"event": "x" * 500, "content": "y" * 250, "count": 3}

        result = _truncate_long_values(None, "info", event)

        assert result["event"] == "x" * 500
        assert result["content"] == "y" * MAX_LOGGED_VALUE_CHARS + "...(+50)"
        assert result["count"] == 3

    def test_short_values_kept(self) -> None:
        assert _truncate_long_values(None, "info", {"kind": "json"}) == {"kind": "json"}


class TestLogContext:
    """TC-LOG-02: Tests for LogContext."""

    def test_binds_and_unbinds(self) -> None:
        with LogContext(clip_id=42):
            assert structlog.contextvars.get_contextvars()["clip_id"] == 42

        assert "clip_id" not in structlog.contextvars.get_contextvars()


class TestConfigureLogging:
    """TC-LOG-03: Tests for configure_logging()."""

    def test_json_lines_to_file(self, tmp_path: Path, restore_logging: None) -> None:
        log_file = tmp_path / "logs" / "reclip.log"

        configure_logging(log_level="INFO", log_file=log_file)
        get_logger("tests.logging").info("Preview rendered", kind="json")
        for handler in logging.getLogger().handlers:
            handler.flush()

        record = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert record["event"] == "Preview rendered"
        assert record["kind"] == "json"
        assert record["level"] == "INFO"
        assert record["logger"] == "tests.logging"
