"""FFmpeg binary discovery for scriptx.

Finds the ffmpeg and ffprobe executables and verifies that both run
before any work starts. imageio-ffmpeg provides a bundled ffmpeg; ffprobe
has to come from a custom path or the system PATH.
"""

from __future__ import annotations

import platform
import shutil
import subprocess
from pathlib import Path
from typing import NamedTuple

import imageio_ffmpeg

from scriptx.config import ScriptxConfig
from scriptx.errors import DependencyError
from scriptx.logging import get_logger

logger = get_logger(__name__)


class ToolInfo(NamedTuple):
    """A verified external tool."""

    name: str
    path: str
    version: str


def subprocess_flags() -> int:
    """Creation flags that keep a console window from opening on Windows."""
    if platform.system() == "Windows":
        return subprocess.CREATE_NO_WINDOW
    return 0


def _get_ffmpeg_from_imageio() -> str | None:
    """Get FFmpeg path from the imageio-ffmpeg package.

    Returns:
        Path to FFmpeg executable, or None if no binary is bundled for
        this platform.
    """
    try:
        return imageio_ffmpeg.get_ffmpeg_exe()
    except RuntimeError:
        return None


def _get_ffprobe_from_imageio() -> str | None:
    """Look for ffprobe next to imageio-ffmpeg's ffmpeg.

    imageio-ffmpeg does not bundle ffprobe itself.
    """
    ffmpeg_path = _get_ffmpeg_from_imageio()
    if ffmpeg_path is None:
        return None

    name = "ffprobe.exe" if platform.system() == "Windows" else "ffprobe"
    ffprobe_path = Path(ffmpeg_path).parent / name
    if ffprobe_path.exists():
        return str(ffprobe_path)
    return None


def get_ffmpeg_path(config: ScriptxConfig | None = None) -> str | None:
    """Get the path to FFmpeg executable.

    Searches in the following order:
    1. Custom path from config
    2. System PATH, if ``prefer_system`` is set
    3. imageio-ffmpeg bundled binary
    4. System PATH

    Returns:
        Path to FFmpeg executable, or None if not found.
    """
    config = config or ScriptxConfig()

    if config.ffmpeg_path and Path(config.ffmpeg_path).exists():
        return config.ffmpeg_path

    if config.prefer_system:
        system_path = shutil.which("ffmpeg")
        if system_path:
            return system_path

    return _get_ffmpeg_from_imageio() or shutil.which("ffmpeg")


def get_ffprobe_path(config: ScriptxConfig | None = None) -> str | None:
    """Get the path to FFprobe executable.

    Searches the custom path from config, then the system PATH, then the
    directory of imageio-ffmpeg's binary.
    """
    config = config or ScriptxConfig()

    if config.ffprobe_path and Path(config.ffprobe_path).exists():
        return config.ffprobe_path

    return shutil.which("ffprobe") or _get_ffprobe_from_imageio()


def _parse_version(output: str) -> str:
    # e.g. "ffmpeg version 6.0-full_build-www.gyan.dev Copyright ..."
    first_line = output.split("\n")[0]
    if "version" in first_line:
        tail = first_line.split("version", 1)[1].split()
        if tail:
            return tail[0]
    return first_line.strip() or "unknown"


def check_tool(name: str, path: str | None) -> ToolInfo:
    """Verify that a tool runs by asking it for its version.

    Args:
        name: Tool name, for messages
        path: Executable path, or None if discovery failed

    Returns:
        ToolInfo for the working tool

    Raises:
        DependencyError: If the tool is missing or ``-version`` fails.
    """
    if path is None:
        raise DependencyError(f"{name} not found", tool=name)

    try:
        result = subprocess.run(
            [path, "-version"],
            capture_output=True,
            text=True,
            timeout=10,
            creationflags=subprocess_flags(),
        )
    except subprocess.TimeoutExpired as e:
        raise DependencyError(f"{name} at {path} timed out during verification", tool=name) from e
    except OSError as e:
        raise DependencyError(f"Failed to run {name} at {path}: {e}", tool=name) from e

    if result.returncode != 0:
        raise DependencyError(
            f"{name} at {path} returned error code {result.returncode}", tool=name
        )

    info = ToolInfo(name=name, path=path, version=_parse_version(result.stdout))
    logger.debug(f"{name} {info.version} available: {path}")
    return info


def check_dependencies(config: ScriptxConfig | None = None) -> dict[str, ToolInfo]:
    """Verify ffprobe and ffmpeg are both installed and runnable.

    Returns:
        Mapping of tool name to ToolInfo

    Raises:
        DependencyError: On the first missing or broken tool.
    """
    return {
        "ffprobe": check_tool("ffprobe", get_ffprobe_path(config)),
        "ffmpeg": check_tool("ffmpeg", get_ffmpeg_path(config)),
    }
