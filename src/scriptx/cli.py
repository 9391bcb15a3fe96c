"""Command-line interface for scriptx.

Uses Typer for a type-hinted CLI and Rich for console output.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from scriptx import __version__
from scriptx.catalog import ChapterCatalog
from scriptx.config import ScriptxConfig, load_config, load_env_files
from scriptx.errors import DependencyError, ScriptxError, format_error_for_display
from scriptx.ffmpeg import MediaTools, create_ffmpeg_wrapper
from scriptx.ffmpeg_binary import check_dependencies
from scriptx.logging import (
    LogConfig,
    LogLevel,
    configure_logging,
    get_logger,
    log_operation_complete,
    log_operation_failed,
    log_operation_start,
)
from scriptx.progress import ProgressTracker, format_duration

app = typer.Typer(
    name="scriptx",
    help="Cut Bible verses out of chapter-tagged sign language videos.",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()
logger = get_logger(__name__)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"scriptx version {__version__}")
        raise typer.Exit()


def numbered_output(output_path: Path, number: int) -> Path:
    """Output path for the n-th verse of --all: ``<dir>/<n>-<name>``."""
    return output_path.parent / f"{number}-{output_path.name}"


def print_times(start_time: float, end_time: float) -> None:
    console.print(f"Start time: {start_time}, End time: {end_time}")


def extract_verse(
    tools: MediaTools,
    catalog: ChapterCatalog,
    video_path: Path,
    verse: str,
    output_path: Path,
) -> Path:
    """Cut a single verse or verse range to ``output_path``."""
    start_time, end_time = catalog.verse(verse)
    written = tools.cut(start_time, end_time, video_path, output_path)
    print_times(start_time, end_time)
    return written


def extract_all_verses(
    tools: MediaTools,
    catalog: ChapterCatalog,
    video_path: Path,
    output_path: Path,
) -> list[Path]:
    """Cut every verse, one file per verse, numbered from 1."""
    intervals = catalog.resolve_all()
    written: list[Path] = []

    with ProgressTracker("Extracting verses", console=console) as tracker:
        for number, (start_time, end_time) in enumerate(tracker.track(intervals), start=1):
            try:
                written.append(
                    tools.cut(start_time, end_time, video_path, numbered_output(output_path, number))
                )
            except ScriptxError:
                tracker.fail_item()
                raise
            print_times(start_time, end_time)

    console.print(
        f"Extracted {len(written)} verses in {format_duration(tracker.stats.elapsed_seconds)}"
    )
    return written


def _log_config(
    verbose: bool,
    debug: bool,
    log_json: bool,
    log_file: Path | None,
    config_level: str = "normal",
) -> LogConfig:
    level = LogLevel[config_level.upper()]
    if verbose:
        level = LogLevel.VERBOSE
    if debug:
        level = LogLevel.DEBUG
    return LogConfig(level=level, log_file=log_file, json_format=log_json)


def _fail(operation: str, error: ScriptxError) -> NoReturn:
    log_operation_failed(logger, operation, error)
    if isinstance(error, DependencyError):
        console.print(f"[red]ScriptX Error:[/red]\n{escape(error.hint)}")
    console.print(f"[red]Error:[/red] {escape(format_error_for_display(error))}")
    raise typer.Exit(1)


def run(
    video_path: Path,
    verse: str | None,
    output_path: Path,
    config: ScriptxConfig,
) -> list[Path]:
    """Check dependencies, probe the video and cut the requested verses."""
    check_dependencies(config)

    tools = create_ffmpeg_wrapper(config)
    catalog = tools.probe_chapters(video_path)

    if verse is None:
        return extract_all_verses(tools, catalog, video_path, output_path)
    return [extract_verse(tools, catalog, video_path, verse, output_path)]


@app.command()
def main(
    file: Annotated[
        Path,
        typer.Option("--file", "-f", help="The input video file to process."),
    ],
    verse: Annotated[
        Optional[str],
        typer.Option(
            "--verse",
            "-v",
            help="The verse to be extracted out. A single verse or a range of verses, e.g. 2-5",
        ),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="The path where to save the output file. [default: output.m4v]"),
    ] = None,
    all_verses: Annotated[
        bool,
        typer.Option("--all", "-a", help="Extracts all scriptures from the file."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Show progress information in the log."),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Show debug logging."),
    ] = False,
    log_json: Annotated[
        bool,
        typer.Option("--log-json", help="Write log records as JSON lines."),
    ] = False,
    log_file: Annotated[
        Optional[Path],
        typer.Option("--log-file", help="Also write the full log to this file."),
    ] = None,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", help="Config file (default: ~/.scriptx/config.json)."),
    ] = None,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """ScriptX - A Sign Language Bible verse slicer.

    Extracts verses out of a chapter video where every verse is a chapter
    titled like [bold]John 3:16[/bold]. Pass [bold]--verse 16[/bold] or
    [bold]--verse 16-18[/bold] for specific verses, or [bold]--all[/bold]
    for one file per verse.
    """
    if all_verses == (verse is not None):
        raise typer.BadParameter("Use exactly one of --verse or --all.")

    load_env_files()

    operation = "extract all verses" if all_verses else f"extract verse {verse}"
    started = time.monotonic()

    try:
        config = load_config(config_file)
    except ScriptxError as e:
        configure_logging(_log_config(verbose, debug, log_json, log_file))
        _fail(operation, e)

    configure_logging(_log_config(verbose, debug, log_json, log_file, config.log_level))
    output_path = output or Path(config.default_output)
    log_operation_start(logger, operation, video=str(file), output=str(output_path))

    try:
        written = run(file, verse, output_path, config)
    except ScriptxError as e:
        _fail(operation, e)

    log_operation_complete(
        logger, operation, duration=time.monotonic() - started, files=len(written)
    )


if __name__ == "__main__":
    app()
