"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import pytest

from sheetwright.core import logging as sw_logging
from sheetwright.core.logging import (
    ConsoleFormatter,
    JSONFormatter,
    get_logger,
    setup_logging,
)


def _record(message: str = "Palette opened", context=None) -> logging.LogRecord:
    record = logging.LogRecord(
        name="sheetwright.editor.palette",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    if context is not None:
        record.context = context
    return record


class TestGetLogger:
    """Test logger naming."""

    def test_module_name_is_namespaced_once(self):
        """Package module names are not prefixed twice."""
        logger = get_logger("sheetwright.engine.matcher")
        assert logger.name == "sheetwright.engine.matcher"

    def test_short_name_gets_namespace(self):
        """Short names go under the sheetwright namespace."""
        assert get_logger("main").name == "sheetwright.main"


class TestJSONFormatter:
    """Test JSON file formatter."""

    def test_includes_context(self):
        """Context fields are written as JSON."""
        line = JSONFormatter().format(_record(context={"trigger_offset": 4}))
        data = json.loads(line)
        assert data["level"] == "INFO"
        assert data["module"] == "sheetwright.editor.palette"
        assert data["message"] == "Palette opened"
        assert data["context"] == {"trigger_offset": 4}
        assert data["timestamp"].endswith("Z")

    def test_without_context(self):
        """No context key without context."""
        data = json.loads(JSONFormatter().format(_record()))
        assert "context" not in data


class TestConsoleFormatter:
    """Test console formatter."""

    def test_appends_context(self):
        """Context is appended in brackets."""
        line = ConsoleFormatter().format(_record(context={"query": "bgo"}))
        assert "Palette opened [query=bgo]" in line
        assert "INFO" in line


class TestSetupLogging:
    """Test logging initialization."""

    @pytest.fixture
    def fresh_logging(self, monkeypatch):
        monkeypatch.setattr(sw_logging, "_logging_initialized", False)
        root = logging.getLogger(sw_logging.ROOT_LOGGER_NAME)
        before = list(root.handlers)
        yield root
        for handler in list(root.handlers):
            if handler not in before:
                handler.close()
                root.removeHandler(handler)

    def test_writes_json_log_file(self, tmp_path: Path, fresh_logging):
        """Log records land in the JSON log file."""
        setup_logging(log_dir=tmp_path)
        get_logger("test").info("hello", extra={"context": {"n": 1}})
        for handler in fresh_logging.handlers:
            handler.flush()
        lines = (tmp_path / "sheetwright.log").read_text(encoding="utf-8").splitlines()
        assert json.loads(lines[-1])["message"] == "hello"

    def test_second_call_is_noop(self, tmp_path: Path, fresh_logging):
        """Setup runs only once."""
        setup_logging(log_dir=tmp_path)
        count = len(fresh_logging.handlers)
        setup_logging(log_dir=tmp_path / "other")
        assert len(fresh_logging.handlers) == count
        assert not (tmp_path / "other").exists()
