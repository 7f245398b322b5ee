"""Tests for configuration loading and precedence."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from vidfit.config.loader import (
    DEFAULT_CONFIG_FILE,
    get_config,
    get_default_config_path,
    load_config_file,
)
from vidfit.errors import ConfigError


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(
        """
[tools]
ffmpeg = "/opt/ffmpeg/bin/ffmpeg"

[encoding]
audio_bitrate_kbps = 96
downscale_to_720_below_kbps = 2500
preset = "slow"

[logging]
level = "info"
format = "json"
"""
    )
    return path


class TestDefaultConfigPath:
    """Tests for get_default_config_path."""

    def test_default_location(self) -> None:
        assert get_default_config_path(env={}) == DEFAULT_CONFIG_FILE

    def test_env_override(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        env = {"VIDFIT_CONFIG_PATH": str(path)}
        assert get_default_config_path(env=env) == path


class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_missing_file_returns_empty(self, tmp_path: Path) -> None:
        assert load_config_file(tmp_path / "nope.toml") == {}

    def test_parses_toml(self, config_file: Path) -> None:
        data = load_config_file(config_file)
        assert data["encoding"]["audio_bitrate_kbps"] == 96

    def test_invalid_toml_warns(self, tmp_path: Path, caplog) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("[encoding\npreset = ")

        with caplog.at_level(logging.WARNING):
            assert load_config_file(path) == {}
        assert "Failed to load config file" in caplog.text

    def test_invalid_toml_strict_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("not = [valid")

        with pytest.raises(ConfigError):
            load_config_file(path, strict=True)


class TestGetConfig:
    """Tests for get_config precedence."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        config = get_config(tmp_path / "missing.toml", env={})

        assert config.encoding.audio_bitrate_kbps == 128
        assert config.tools.ffmpeg is None
        assert config.logging.level == "warning"
        assert config.temp_directory is None

    def test_file_values(self, config_file: Path) -> None:
        config = get_config(config_file, env={})

        assert config.tools.ffmpeg == Path("/opt/ffmpeg/bin/ffmpeg")
        assert config.encoding.audio_bitrate_kbps == 96
        assert config.encoding.downscale_to_720_below_kbps == 2500
        assert config.encoding.preset == "slow"
        assert config.encoding.downscale_to_480_below_kbps == 1000
        assert config.logging.level == "info"
        assert config.logging.format == "json"

    def test_env_overrides_file(self, config_file: Path, tmp_path: Path) -> None:
        env = {
            "VIDFIT_AUDIO_BITRATE_KBPS": "64",
            "VIDFIT_H265_MIN_BITRATE_FACTOR": "0.5",
            "VIDFIT_PRESET": "fast",
            "VIDFIT_LOG_LEVEL": "debug",
            "VIDFIT_TEMP_DIR": str(tmp_path),
        }
        config = get_config(config_file, env=env)

        assert config.encoding.audio_bitrate_kbps == 64
        assert config.encoding.h265_min_bitrate_factor == 0.5
        assert config.encoding.preset == "fast"
        assert config.logging.level == "debug"
        assert config.temp_directory == tmp_path

    def test_env_enables_stderr_logging(self, tmp_path: Path) -> None:
        config = get_config(
            tmp_path / "missing.toml", env={"VIDFIT_LOG_STDERR": "1"}
        )
        assert config.logging.include_stderr is True

    def test_env_tool_path(self, tmp_path: Path) -> None:
        ffprobe = tmp_path / "ffprobe"
        ffprobe.write_text("")

        config = get_config(
            tmp_path / "missing.toml", env={"VIDFIT_FFPROBE_PATH": str(ffprobe)}
        )
        assert config.tools.ffprobe == ffprobe

    def test_config_path_from_env(self, config_file: Path) -> None:
        config = get_config(env={"VIDFIT_CONFIG_PATH": str(config_file)})
        assert config.encoding.audio_bitrate_kbps == 96

    def test_invalid_value_raises_config_error(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[encoding]\npreset = "warp"\n')

        with pytest.raises(ConfigError, match="preset"):
            get_config(path, env={})

    def test_unknown_keys_ignored_with_warning(self, tmp_path: Path, caplog) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[encoding]\ncrf = 23\n")

        with caplog.at_level(logging.WARNING):
            config = get_config(path, env={})

        assert config.encoding.preset == "medium"
        assert "Ignoring unknown config keys" in caplog.text

    def test_temp_directory_must_exist(self, tmp_path: Path, caplog) -> None:
        path = tmp_path / "config.toml"
        path.write_text(f'[paths]\ntemp_directory = "{tmp_path / "gone"}"\n')

        with caplog.at_level(logging.WARNING):
            config = get_config(path, env={})

        assert config.temp_directory is None
        assert "not a valid directory" in caplog.text
