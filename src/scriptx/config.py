"""Configuration loading for scriptx.

Settings come from, lowest priority first:
1. Defaults on ScriptxConfig
2. ``~/.scriptx/config.json`` (or an explicit path)
3. Environment variables (``SCRIPTX_FFMPEG``, ``SCRIPTX_FFPROBE``,
   ``SCRIPTX_OUTPUT``), including those loaded from ``.env`` files
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from scriptx.errors import ConfigurationError

ENV_FFMPEG = "SCRIPTX_FFMPEG"
ENV_FFPROBE = "SCRIPTX_FFPROBE"
ENV_OUTPUT = "SCRIPTX_OUTPUT"


class ScriptxConfig(BaseModel):
    """User settings for scriptx."""

    default_output: str = Field(
        default="output.m4v",
        description="Output path used when --output is not given",
    )
    ffmpeg_path: str | None = Field(
        default=None,
        description="Custom path to FFmpeg executable",
    )
    ffprobe_path: str | None = Field(
        default=None,
        description="Custom path to FFprobe executable",
    )
    prefer_system: bool = Field(
        default=False,
        description="Prefer FFmpeg on PATH over the imageio-ffmpeg binary",
    )
    log_level: Literal["quiet", "normal", "verbose", "debug"] = Field(
        default="normal",
        description="Console verbosity when neither --verbose nor --debug is given",
    )
    # None waits for the external tool indefinitely
    probe_timeout: float | None = Field(default=None, gt=0)
    cut_timeout: float | None = Field(default=None, gt=0)


def get_config_dir() -> Path:
    """Get the per-user scriptx directory."""
    return Path.home() / ".scriptx"


def get_config_path() -> Path:
    return get_config_dir() / "config.json"


def load_env_files() -> None:
    """Load ``~/.scriptx/.env`` then a local ``.env``.

    Variables already set are never overwritten.
    """
    user_env = get_config_dir() / ".env"
    if user_env.exists():
        load_dotenv(user_env)
    load_dotenv()


def load_config(config_path: Path | None = None) -> ScriptxConfig:
    """Load configuration from JSON and the environment.

    Args:
        config_path: JSON file to read (defaults to ~/.scriptx/config.json).
            A missing file is not an error.

    Returns:
        ScriptxConfig with all sources applied

    Raises:
        ConfigurationError: If the file is not valid JSON or has bad values.
    """
    path = config_path or get_config_path()
    data: dict = {}

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}", context={"path": str(path)}
            ) from e

    env_overrides = {
        "ffmpeg_path": os.environ.get(ENV_FFMPEG),
        "ffprobe_path": os.environ.get(ENV_FFPROBE),
        "default_output": os.environ.get(ENV_OUTPUT),
    }
    data.update({k: v for k, v in env_overrides.items() if v})

    try:
        return ScriptxConfig(**data)
    except (TypeError, ValidationError) as e:
        raise ConfigurationError(
            f"Invalid configuration: {e}", context={"path": str(path)}
        ) from e
