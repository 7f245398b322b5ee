"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (VIDFIT_*)
3. Config file (~/.vidfit/config.toml)
4. Default values

Environment variables:
- VIDFIT_CONFIG_PATH: Path to config file (overrides default location)
- VIDFIT_FFMPEG_PATH: Path to ffmpeg executable
- VIDFIT_FFPROBE_PATH: Path to ffprobe executable
- VIDFIT_TEMP_DIR: Directory for pass-log artifacts
- VIDFIT_LOG_LEVEL / VIDFIT_LOG_FILE / VIDFIT_LOG_STDERR: Logging overrides
- VIDFIT_AUDIO_BITRATE_KBPS, VIDFIT_MIN_VIDEO_BITRATE_KBPS,
  VIDFIT_H265_MIN_BITRATE_FACTOR, VIDFIT_DOWNSCALE_TO_720_BELOW_KBPS,
  VIDFIT_DOWNSCALE_TO_480_BELOW_KBPS, VIDFIT_PRESET: Encoding heuristics

Example config.toml:

    [tools]
    ffmpeg = "/opt/ffmpeg/bin/ffmpeg"

    [encoding]
    audio_bitrate_kbps = 96
    downscale_to_720_below_kbps = 2500

    [logging]
    level = "info"
    file = "~/.vidfit/vidfit.log"
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import fields
from pathlib import Path
from typing import Any

from vidfit.config.env import EnvReader
from vidfit.config.models import (
    EncodingSettings,
    LoggingConfig,
    ToolPathsConfig,
    VidfitConfig,
)
from vidfit.errors import ConfigError

logger = logging.getLogger(__name__)

# Default config location
DEFAULT_CONFIG_DIR = Path.home() / ".vidfit"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

# Environment variable -> EncodingSettings field
_ENCODING_ENV_INT = {
    "VIDFIT_AUDIO_BITRATE_KBPS": "audio_bitrate_kbps",
    "VIDFIT_MIN_VIDEO_BITRATE_KBPS": "min_video_bitrate_kbps",
    "VIDFIT_DOWNSCALE_TO_720_BELOW_KBPS": "downscale_to_720_below_kbps",
    "VIDFIT_DOWNSCALE_TO_480_BELOW_KBPS": "downscale_to_480_below_kbps",
}


def get_default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Get the default config file path.

    Can be overridden by VIDFIT_CONFIG_PATH environment variable.
    """
    env_path = EnvReader(env).get_str("VIDFIT_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from TOML file.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise ConfigError on parse failures.
                If False (default), return empty dict on errors.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.

    Raises:
        ConfigError: If strict is True and the file cannot be parsed.
    """
    if path is None:
        path = get_default_config_path()

    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise ConfigError(f"Failed to load config file {path}: {e}") from e
        logger.warning("Failed to load config file %s: %s", path, e)
        return {}

    logger.debug("Loaded config from %s", path)
    return config


def _optional_path(value: Any) -> Path | None:
    if value in (None, ""):
        return None
    return Path(str(value)).expanduser()


def _known_keys(section: Mapping[str, Any], model: type) -> dict[str, Any]:
    """Keep only keys that map to fields of a dataclass model."""
    names = {f.name for f in fields(model)}
    unknown = sorted(set(section) - names)
    if unknown:
        logger.warning(
            "Ignoring unknown config keys for %s: %s",
            model.__name__,
            ", ".join(unknown),
        )
    return {k: v for k, v in section.items() if k in names}


def _build_tools(section: Mapping[str, Any], reader: EnvReader) -> ToolPathsConfig:
    return ToolPathsConfig(
        ffmpeg=reader.get_path("VIDFIT_FFMPEG_PATH")
        or _optional_path(section.get("ffmpeg")),
        ffprobe=reader.get_path("VIDFIT_FFPROBE_PATH")
        or _optional_path(section.get("ffprobe")),
    )


def _build_encoding(
    section: Mapping[str, Any], reader: EnvReader
) -> EncodingSettings:
    values = _known_keys(section, EncodingSettings)
    for var, name in _ENCODING_ENV_INT.items():
        env_value = reader.get_int(var)
        if env_value is not None:
            values[name] = env_value
    factor = reader.get_float("VIDFIT_H265_MIN_BITRATE_FACTOR")
    if factor is not None:
        values["h265_min_bitrate_factor"] = factor
    preset = reader.get_str("VIDFIT_PRESET")
    if preset:
        values["preset"] = preset
    return EncodingSettings(**values)


def _build_logging(section: Mapping[str, Any], reader: EnvReader) -> LoggingConfig:
    values = _known_keys(section, LoggingConfig)
    if "file" in values:
        values["file"] = _optional_path(values["file"])
    level = reader.get_str("VIDFIT_LOG_LEVEL")
    if level:
        values["level"] = level
    log_file = reader.get_path("VIDFIT_LOG_FILE", must_exist=False)
    if log_file is not None:
        values["file"] = log_file
    include_stderr = reader.get_bool("VIDFIT_LOG_STDERR")
    if include_stderr is not None:
        values["include_stderr"] = include_stderr
    return LoggingConfig(**values)


def get_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> VidfitConfig:
    """Build the effective configuration.

    Args:
        config_path: Explicit config file. None uses the default location.
        env: Environment mapping (None = os.environ).

    Returns:
        VidfitConfig with file values overridden by environment variables.

    Raises:
        ConfigError: If a configured value is invalid.
    """
    reader = EnvReader(env)
    path = config_path or get_default_config_path(env)
    file_config = load_config_file(path)

    try:
        tools = _build_tools(file_config.get("tools", {}), reader)
        encoding = _build_encoding(file_config.get("encoding", {}), reader)
        logging_config = _build_logging(file_config.get("logging", {}), reader)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    temp_directory = reader.get_path("VIDFIT_TEMP_DIR")
    if temp_directory is None:
        temp_directory = _optional_path(
            file_config.get("paths", {}).get("temp_directory")
        )
    if temp_directory is not None and not temp_directory.is_dir():
        logger.warning(
            "Temp directory '%s' is not a valid directory, "
            "falling back to output directory",
            temp_directory,
        )
        temp_directory = None

    return VidfitConfig(
        tools=tools,
        encoding=encoding,
        logging=logging_config,
        temp_directory=temp_directory,
    )
