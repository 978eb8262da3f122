"""Tests for the structured JSON logger."""

import json
import logging

import pytest

from signsheet.logger import (
    StructuredLogger,
    clear_context,
    get_context,
    set_context,
)


@pytest.fixture
def make_logger():
    """Build fresh loggers inside the test body.

    The handler binds sys.stdout when the logger is created, so creating it
    during fixture setup would miss the stream capsys reads from.
    """
    clear_context()
    yield lambda: StructuredLogger("signsheet.test", level=logging.DEBUG)
    clear_context()


def _lines(capsys) -> list[dict]:
    return [json.loads(line) for line in capsys.readouterr().out.splitlines() if line]


class TestStructuredLogger:
    """Tests for StructuredLogger output."""

    def test_json_line(self, make_logger, capsys):
        """Test the base fields of a log line."""
        log = make_logger()
        log.info("page text extracted", page_number=1, items=3)
        (entry,) = _lines(capsys)
        assert entry["level"] == "INFO"
        assert entry["msg"] == "page text extracted"
        assert entry["page_number"] == 1
        assert entry["items"] == 3
        assert "time" in entry
        assert entry["source"]["function"] == "test_json_line"

    def test_levels(self, make_logger, capsys):
        """Test that each helper logs at its own level."""
        log = make_logger()
        log.debug("d")
        log.warn("w")
        log.error("e")
        assert [e["level"] for e in _lines(capsys)] == ["DEBUG", "WARNING", "ERROR"]

    def test_set_level_by_name(self, make_logger, capsys):
        """Test that messages below the configured level are dropped."""
        log = make_logger()
        log.set_level("warn")
        log.info("hidden")
        log.warn("shown")
        assert [e["msg"] for e in _lines(capsys)] == ["shown"]

    def test_unknown_level(self, make_logger):
        """Test that an unknown level name is rejected."""
        log = make_logger()
        with pytest.raises(ValueError):
            log.set_level("loud")

    def test_non_ascii_fields(self, make_logger, capsys):
        """Test that Hangul names are written as-is."""
        log = make_logger()
        log.info("attendees located", missing=["홍길동"])
        (entry,) = _lines(capsys)
        assert entry["missing"] == ["홍길동"]


class TestLogContext:
    """Tests for context fields."""

    def test_context_added_to_lines(self, make_logger, capsys):
        """Test that context fields appear on every line."""
        log = make_logger()
        set_context(request_id="abc-123")
        log.info("one")
        log.info("two")
        entries = _lines(capsys)
        assert [e["msg"] for e in entries] == ["one", "two"]
        assert all(e["request_id"] == "abc-123" for e in entries)

    def test_context_merges(self, make_logger):
        """Test that set_context accumulates fields."""
        set_context(a=1)
        set_context(b=2)
        assert get_context() == {"a": 1, "b": 2}

    def test_clear_context(self, make_logger, capsys):
        """Test that cleared context is no longer logged."""
        log = make_logger()
        set_context(request_id="abc-123")
        clear_context()
        log.info("after")
        (entry,) = _lines(capsys)
        assert "request_id" not in entry
