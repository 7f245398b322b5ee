"""Configuration management for vidfit.

This module provides configuration loading with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (VIDFIT_*)
3. Config file (~/.vidfit/config.toml)
4. Default values (lowest priority)
"""

from vidfit.config.env import EnvReader
from vidfit.config.loader import (
    get_config,
    get_default_config_path,
    load_config_file,
)
from vidfit.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from vidfit.config.models import (
    DEFAULT_ENCODING_SETTINGS,
    EncodingSettings,
    LoggingConfig,
    ToolPathsConfig,
    VidfitConfig,
)

__all__ = [
    # Models
    "DEFAULT_ENCODING_SETTINGS",
    "EncodingSettings",
    "LoggingConfig",
    "ToolPathsConfig",
    "VidfitConfig",
    # Loader
    "get_config",
    "get_default_config_path",
    "load_config_file",
    # Helpers
    "EnvReader",
    "build_logging_config",
    "configure_logging_from_cli",
]
