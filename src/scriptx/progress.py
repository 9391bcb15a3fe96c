"""Progress display for extracting many verses.

A rich progress bar with ETA, used when every verse of a chapter is cut
one after the other.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Iterator, TypeVar

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

T = TypeVar("T")


@dataclass
class ProgressStats:
    """Statistics for a progress tracker."""

    total: int = 0
    completed: int = 0
    failed: int = 0
    start_time: datetime | None = None
    end_time: datetime | None = None

    @property
    def pending(self) -> int:
        """Number of pending items."""
        return self.total - self.completed - self.failed

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        if self.start_time is None:
            return 0.0
        end = self.end_time or datetime.now()
        return (end - self.start_time).total_seconds()


class ProgressTracker:
    """Rich-based progress tracker with ETA support.

    Example:
        with ProgressTracker("Extracting verses") as tracker:
            for interval in tracker.track(intervals):
                cut(interval)
    """

    def __init__(
        self,
        description: str = "Processing",
        console: Console | None = None,
        transient: bool = False,
    ):
        """Initialize progress tracker.

        Args:
            description: Main description for the progress
            console: Rich console to use (creates new if None)
            transient: Whether to clear progress on completion
        """
        self.description = description
        self.console = console or Console()
        self.transient = transient

        self._progress: Progress | None = None
        self._main_task: TaskID | None = None
        self._stats = ProgressStats()

    @property
    def stats(self) -> ProgressStats:
        """Get current progress statistics."""
        return self._stats

    def _create_progress(self) -> Progress:
        columns = [
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            TextColumn("[cyan]ETA:[/cyan]"),
            TimeRemainingColumn(),
        ]

        return Progress(
            *columns,
            console=self.console,
            transient=self.transient,
            refresh_per_second=10,
        )

    def __enter__(self) -> "ProgressTracker":
        """Start the progress display."""
        self._progress = self._create_progress()
        self._progress.__enter__()
        self._stats.start_time = datetime.now()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Stop the progress display."""
        self._stats.end_time = datetime.now()
        if self._progress:
            self._progress.__exit__(exc_type, exc_val, exc_tb)
            self._progress = None

    def add_main_task(self, total: int, description: str | None = None) -> TaskID:
        """Add the main progress task.

        Args:
            total: Total number of items to process
            description: Override description (uses self.description if None)

        Returns:
            Task ID for the main task
        """
        if self._progress is None:
            raise RuntimeError("ProgressTracker must be used as a context manager")

        self._stats.total = total
        self._main_task = self._progress.add_task(description or self.description, total=total)
        return self._main_task

    def complete_item(self) -> None:
        self._stats.completed += 1
        self._advance()

    def fail_item(self) -> None:
        self._stats.failed += 1
        self._advance()

    def _advance(self) -> None:
        if self._progress is not None and self._main_task is not None:
            self._progress.advance(self._main_task)

    def track(self, items: Iterable[T], total: int | None = None) -> Iterator[T]:
        """Yield items one at a time, completing each once the loop body returns.

        An item whose loop body raises is left pending; call fail_item()
        before re-raising to record it.
        """
        items = list(items)
        self.add_main_task(total if total is not None else len(items))

        for item in items:
            yield item
            self.complete_item()


def format_duration(seconds: float) -> str:
    """Format a duration as ``1h 2m 3s`` / ``2m 3s`` / ``3.4s``."""
    if seconds < 60:
        return f"{seconds:.1f}s"

    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    return f"{minutes}m {secs}s"
