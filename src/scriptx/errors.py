"""Error types for scriptx.

Provides a small exception hierarchy with:
- Error categories for display
- Context dictionaries for diagnostics
- Consistent user-facing formatting

No error is retried: every failure is terminal for the current request.
"""

from __future__ import annotations

from enum import Enum

DEPENDENCY_HINT = """ffprobe and/or ffmpeg was not found on your system. Make sure it is installed.

    Installing with apt:
        $ sudo apt install ffmpeg
"""


class ErrorCategory(str, Enum):
    """Categories of errors for display decisions."""

    DEPENDENCY = "dependency"  # ffmpeg/ffprobe missing
    RESOURCE = "resource"  # Input file missing or unreadable
    LOOKUP = "lookup"  # Verse could not be resolved
    VALIDATION = "validation"  # Bad user input or config
    EXTERNAL = "external"  # External tool failed
    INTERNAL = "internal"  # Bug in code


class ScriptxError(Exception):
    """Base exception for scriptx errors.

    Attributes:
        message: Human-readable error message
        category: Error category for display
        context: Additional context information
    """

    category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} (context: {self.context})"
        return self.message


class DependencyError(ScriptxError):
    """ffprobe or ffmpeg is not installed or not executable."""

    category = ErrorCategory.DEPENDENCY

    def __init__(self, message: str, tool: str | None = None):
        super().__init__(message, {"tool": tool} if tool else None)
        self.tool = tool
        self.hint = DEPENDENCY_HINT


class FileError(ScriptxError):
    """Input file missing, unreadable by ffprobe, or probe output malformed."""

    category = ErrorCategory.RESOURCE

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message, {"path": path} if path else None)
        self.path = path


class VerseNotFound(ScriptxError):
    """No chapter title matches the constructed verse title."""

    category = ErrorCategory.LOOKUP

    def __init__(self, verse: str):
        super().__init__(f"The verse '{verse}' was not found")
        self.verse = verse


class PrefixNotMatch(ScriptxError):
    """The last chapter's title has no ':' separator."""

    category = ErrorCategory.LOOKUP

    def __init__(self, title: str):
        super().__init__(f"The prefix was not found in title '{title}'")
        self.title = title


class VerseFromTitle(ScriptxError):
    """The verse number of a title is not a parseable integer."""

    category = ErrorCategory.LOOKUP

    def __init__(self, item: str):
        super().__init__(f"Unable to parse verse number from '{item}'")
        self.item = item


class InvalidRangeFormat(ScriptxError):
    """A verse range is not of the form A-B."""

    category = ErrorCategory.VALIDATION

    def __init__(self, token: str):
        super().__init__(f"Invalid verse range '{token}', expected the form A-B (e.g. 2-5)")
        self.token = token


class ConfigurationError(ScriptxError):
    """Configuration file or environment value is invalid."""

    category = ErrorCategory.VALIDATION


class CutError(ScriptxError):
    """ffmpeg failed to cut a segment."""

    category = ErrorCategory.EXTERNAL


def format_error_for_display(error: Exception) -> str:
    """Format an error message for user display.

    Args:
        error: Error to format

    Returns:
        Human-readable error message
    """
    if isinstance(error, ScriptxError):
        category = error.category.value
        base_message = error.message

        if error.context:
            context_str = ", ".join(f"{k}={v}" for k, v in error.context.items())
            return f"[{category}] {base_message} ({context_str})"

        return f"[{category}] {base_message}"

    return f"[error] {type(error).__name__}: {error}"
