"""FFmpeg wrapper for verse extraction.

Two external collaborators do the real work:
- ffprobe lists the chapters (verses) of a video as JSON
- ffmpeg stream-copies the segment between two timestamps

Both run synchronously; nothing is decoded or re-encoded here.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Protocol

from scriptx.catalog import ChapterCatalog
from scriptx.config import ScriptxConfig
from scriptx.errors import CutError, DependencyError, FileError
from scriptx.ffmpeg_binary import get_ffmpeg_path, get_ffprobe_path, subprocess_flags
from scriptx.logging import get_logger

logger = get_logger(__name__)


class MediaTools(Protocol):
    """What the CLI needs from the probing and cutting tools."""

    def probe_chapters(self, video_path: str | Path) -> ChapterCatalog: ...

    def cut(
        self,
        start_time: float,
        end_time: float,
        input_path: str | Path,
        output_path: str | Path,
    ) -> Path: ...


def format_seconds(value: float) -> str:
    """Render seconds the way ffmpeg's -ss/-to accept them (``197.597``)."""
    return repr(float(value))


class FFmpegWrapper:
    """Runs ffprobe and ffmpeg as blocking subprocesses.

    Timeouts come from the config and default to None, in which case a hung
    tool hangs the caller.
    """

    def __init__(
        self,
        config: ScriptxConfig | None = None,
        ffmpeg_path: str | None = None,
        ffprobe_path: str | None = None,
    ) -> None:
        """Initialize FFmpeg wrapper.

        Args:
            config: Optional settings (custom binaries, timeouts).
            ffmpeg_path: Explicit FFmpeg executable, overrides discovery.
            ffprobe_path: Explicit FFprobe executable, overrides discovery.

        Raises:
            DependencyError: If either executable cannot be found.
        """
        self._config = config or ScriptxConfig()
        self._ffmpeg_path = ffmpeg_path or get_ffmpeg_path(self._config)
        self._ffprobe_path = ffprobe_path or get_ffprobe_path(self._config)

        if self._ffprobe_path is None:
            raise DependencyError("FFprobe not found", tool="ffprobe")
        if self._ffmpeg_path is None:
            raise DependencyError("FFmpeg not found", tool="ffmpeg")

    @property
    def ffmpeg_path(self) -> str:
        return self._ffmpeg_path

    @property
    def ffprobe_path(self) -> str:
        return self._ffprobe_path

    def _run(
        self,
        tool: str,
        cmd: list[str],
        timeout: float | None,
        timeout_error: type[FileError] | type[CutError],
    ) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                timeout=timeout,
                creationflags=subprocess_flags(),
            )
        except FileNotFoundError as e:
            raise DependencyError(f"{tool} not found at {cmd[0]}", tool=tool) from e
        except subprocess.TimeoutExpired as e:
            raise timeout_error(f"{tool} timed out after {timeout} seconds") from e
        except OSError as e:
            raise DependencyError(f"Failed to run {tool}: {e}", tool=tool) from e

    def probe_chapters(self, video_path: str | Path) -> ChapterCatalog:
        """Read the chapter list of a video.

        Args:
            video_path: Path to a chapter-tagged video.

        Returns:
            ChapterCatalog in the file's chapter order.

        Raises:
            FileError: If the file is missing, ffprobe fails on it, or
                its output is not chapter JSON.
        """
        video_path = Path(video_path)

        if not video_path.exists():
            raise FileError(
                f"The file, {video_path}, was not found. Check path and try again.",
                path=str(video_path),
            )

        cmd = [
            self._ffprobe_path,
            "-v", "quiet",
            "-print_format", "json",
            "-show_chapters",
            "-i", str(video_path),
        ]
        logger.debug("Probing chapters", extra={"video": str(video_path)})

        result = self._run("ffprobe", cmd, self._config.probe_timeout, FileError)

        if result.returncode != 0:
            raise FileError(
                f"The file, {video_path}, could not be read by ffprobe "
                f"(exit code {result.returncode})",
                path=str(video_path),
            )

        catalog = ChapterCatalog.from_json(result.stdout, source=str(video_path))
        logger.info(f"Found {len(catalog)} chapters", extra={"video": str(video_path)})
        return catalog

    def build_cut_args(
        self,
        start_time: float,
        end_time: float,
        input_path: Path,
        output_path: Path,
    ) -> list[str]:
        """Build the ffmpeg command for a lossless cut."""
        return [
            self._ffmpeg_path,
            "-v", "quiet",
            "-y",
            "-i", str(input_path),
            "-ss", format_seconds(start_time),
            "-to", format_seconds(end_time),
            "-c", "copy",
            str(output_path),
        ]

    def cut(
        self,
        start_time: float,
        end_time: float,
        input_path: str | Path,
        output_path: str | Path,
    ) -> Path:
        """Cut the video between two timestamps using stream copy.

        Args:
            start_time: Start time in seconds.
            end_time: End time in seconds.
            input_path: Source video.
            output_path: Where to write the segment.

        Returns:
            Path to the written segment.

        Raises:
            CutError: If ffmpeg exits with a non-zero status. A partially
                written output file is left in place.
        """
        input_path = Path(input_path)
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        cmd = self.build_cut_args(start_time, end_time, input_path, output_path)
        logger.debug(
            "Cutting segment",
            extra={"start_time": start_time, "end_time": end_time, "output": str(output_path)},
        )

        result = self._run("ffmpeg", cmd, self._config.cut_timeout, CutError)

        if result.returncode != 0:
            raise CutError(
                f"ffmpeg's exit status was FAILURE ({result.returncode})",
                context={"output": str(output_path)},
            )

        return output_path


def create_ffmpeg_wrapper(config: ScriptxConfig | None = None) -> FFmpegWrapper:
    """Factory function to create an FFmpegWrapper instance."""
    return FFmpegWrapper(config)
