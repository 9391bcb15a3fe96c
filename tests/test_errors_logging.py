"""Tests for error handling and logging modules."""

import json
import logging

import pytest

from scriptx.errors import (
    CutError,
    DependencyError,
    ErrorCategory,
    FileError,
    InvalidRangeFormat,
    PrefixNotMatch,
    ScriptxError,
    VerseFromTitle,
    VerseNotFound,
    format_error_for_display,
)
from scriptx.logging import (
    LogConfig,
    LogLevel,
    StructuredFormatter,
    configure_logging,
    get_logger,
    log_operation_complete,
    log_operation_failed,
)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    configure_logging(LogConfig())


def make_record(msg: str = "Test message", level: int = logging.INFO, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="scriptx.test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestScriptxError:
    """Tests for ScriptxError base class."""

    def test_basic_error(self):
        error = ScriptxError("Test error")

        assert str(error) == "Test error"
        assert error.message == "Test error"
        assert error.context == {}
        assert error.category == ErrorCategory.INTERNAL

    def test_error_with_context(self):
        error = ScriptxError("Test error", context={"key": "value"})

        assert "context: {'key': 'value'}" in str(error)


class TestSpecificErrors:
    """Tests for specific error types."""

    def test_dependency_error(self):
        error = DependencyError("ffmpeg not found", tool="ffmpeg")

        assert error.category == ErrorCategory.DEPENDENCY
        assert error.tool == "ffmpeg"
        assert "apt install ffmpeg" in error.hint

    def test_file_error(self):
        error = FileError("not found", path="video.mp4")

        assert error.category == ErrorCategory.RESOURCE
        assert error.context == {"path": "video.mp4"}

    def test_verse_not_found(self):
        error = VerseNotFound("John 3:27")

        assert error.category == ErrorCategory.LOOKUP
        assert error.verse == "John 3:27"
        assert "John 3:27" in str(error)

    def test_prefix_not_match(self):
        assert PrefixNotMatch("Intro").title == "Intro"

    def test_verse_from_title(self):
        assert VerseFromTitle("abc").item == "abc"

    def test_invalid_range_format(self):
        error = InvalidRangeFormat("1-2-3")

        assert error.category == ErrorCategory.VALIDATION
        assert error.token == "1-2-3"

    def test_all_are_scriptx_errors(self):
        for error in (
            DependencyError("x"),
            FileError("x"),
            VerseNotFound("x"),
            PrefixNotMatch("x"),
            VerseFromTitle("x"),
            InvalidRangeFormat("x"),
            CutError("x"),
        ):
            assert isinstance(error, ScriptxError)


class TestFormatErrorForDisplay:
    """Tests for format_error_for_display."""

    def test_scriptx_error(self):
        assert (
            format_error_for_display(VerseNotFound("John 3:27"))
            == "[lookup] The verse 'John 3:27' was not found"
        )

    def test_with_context(self):
        assert format_error_for_display(FileError("Unreadable", path="a.mp4")) == (
            "[resource] Unreadable (path=a.mp4)"
        )

    def test_other_error(self):
        assert format_error_for_display(ValueError("bad")) == "[error] ValueError: bad"


class TestStructuredFormatter:
    """Tests for StructuredFormatter."""

    def test_text_format(self):
        formatter = StructuredFormatter(color=False, include_timestamp=False)
        output = formatter.format(make_record())

        assert "INFO" in output
        assert "Test message" in output
        assert "scriptx.test" in output

    def test_text_format_with_context(self):
        formatter = StructuredFormatter(color=False, include_timestamp=False)
        output = formatter.format(make_record(video="john3.mp4"))

        assert "[video=john3.mp4]" in output

    def test_json_format(self):
        formatter = StructuredFormatter(json_format=True, include_timestamp=False)
        data = json.loads(formatter.format(make_record(start_time=1.5)))

        assert data["level"] == "info"
        assert data["message"] == "Test message"
        assert data["logger"] == "scriptx.test"
        assert data["context"] == {"start_time": 1.5}

    def test_json_unserializable_context(self):
        formatter = StructuredFormatter(json_format=True, include_timestamp=False)
        data = json.loads(formatter.format(make_record(obj=object())))

        assert isinstance(data["context"]["obj"], str)

    def test_color(self):
        formatter = StructuredFormatter(color=True, include_timestamp=False)
        output = formatter.format(make_record(level=logging.ERROR))

        assert "\033[91m" in output


class TestConfigureLogging:
    """Tests for logging configuration."""

    def test_levels(self):
        configure_logging(LogConfig(level=LogLevel.QUIET))
        assert logging.getLogger("scriptx").level == logging.ERROR

        configure_logging(LogConfig(level=LogLevel.DEBUG))
        assert logging.getLogger("scriptx").level == logging.DEBUG

    def test_get_logger_namespace(self):
        logger = get_logger("scriptx.catalog")
        assert logger.name == "scriptx.catalog"

    def test_file_logging(self, tmp_path):
        log_file = tmp_path / "logs" / "scriptx.log"
        configure_logging(LogConfig(level=LogLevel.QUIET, log_file=log_file))

        logger = get_logger("scriptx.test")
        log_operation_complete(logger, "extract verse 16", duration=1.234, files=1)
        log_operation_failed(logger, "extract verse 27", VerseNotFound("John 3:27"))

        for handler in logging.getLogger("scriptx").handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "Completed: extract verse 16" in content
        assert "duration_seconds=1.23" in content
        assert "Failed: extract verse 27" in content
        assert "error_type=VerseNotFound" in content
