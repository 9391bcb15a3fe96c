"""Tests for configuration loading."""

import json

import pytest

from scriptx.config import (
    ENV_FFMPEG,
    ENV_FFPROBE,
    ENV_OUTPUT,
    ScriptxConfig,
    get_config_path,
    load_config,
)
from scriptx.errors import ConfigurationError, ErrorCategory


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (ENV_FFMPEG, ENV_FFPROBE, ENV_OUTPUT):
        monkeypatch.delenv(name, raising=False)


class TestScriptxConfig:
    """Tests for ScriptxConfig defaults and validation."""

    def test_defaults(self):
        config = ScriptxConfig()

        assert config.default_output == "output.m4v"
        assert config.ffmpeg_path is None
        assert config.ffprobe_path is None
        assert config.prefer_system is False
        assert config.log_level == "normal"
        assert config.probe_timeout is None
        assert config.cut_timeout is None

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValueError):
            ScriptxConfig(cut_timeout=0)

    def test_unknown_log_level(self):
        with pytest.raises(ValueError):
            ScriptxConfig(log_level="loud")


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(tmp_path / "config.json")
        assert config == ScriptxConfig()

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps({"default_output": "verse.mp4", "ffprobe_path": "/opt/ffprobe", "cut_timeout": 60})
        )

        config = load_config(path)

        assert config.default_output == "verse.mp4"
        assert config.ffprobe_path == "/opt/ffprobe"
        assert config.cut_timeout == 60

    def test_log_level_from_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"log_level": "verbose"}))

        assert load_config(path).log_level == "verbose"

    def test_invalid_log_level(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"log_level": "LOUD"}))

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"ffmpeg_path": "/from/file"}))
        monkeypatch.setenv(ENV_FFMPEG, "/from/env")
        monkeypatch.setenv(ENV_OUTPUT, "env.m4v")

        config = load_config(path)

        assert config.ffmpeg_path == "/from/env"
        assert config.default_output == "env.m4v"

    def test_empty_environment_value_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv(ENV_FFPROBE, "")
        assert load_config(tmp_path / "config.json").ffprobe_path is None

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert exc_info.value.category == ErrorCategory.VALIDATION
        assert exc_info.value.context["path"] == str(path)

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"probe_timeout": "soon"}))

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_default_location(self, tmp_path, monkeypatch):
        monkeypatch.setattr("scriptx.config.Path.home", lambda: tmp_path)
        assert get_config_path() == tmp_path / ".scriptx" / "config.json"
