"""Typed access to VIDFIT_* environment variables.

EnvReader accepts an explicit mapping so tests never have to touch
``os.environ``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


def _parse_bool(raw: str) -> bool:
    value = raw.strip().casefold()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(raw)


class EnvReader:
    """Read environment variables with type conversion.

    Example:
        reader = EnvReader(env={"VIDFIT_AUDIO_BITRATE_KBPS": "96"})
        reader.get_int("VIDFIT_AUDIO_BITRATE_KBPS", 128)  # 96
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def _convert(
        self,
        var: str,
        default: T | None,
        converter: Callable[[str], T],
        kind: str,
    ) -> T | None:
        raw = self._env.get(var)
        if raw is None:
            return default
        try:
            return converter(raw)
        except ValueError:
            logger.warning("Invalid %s value for %s: %s", kind, var, raw)
            return default

    def get_str(self, var: str, default: str | None = None) -> str | None:
        return self._env.get(var, default)

    def get_int(self, var: str, default: int | None = None) -> int | None:
        """Integer value; unparseable input logs a warning and yields default."""
        return self._convert(var, default, int, "integer")

    def get_float(self, var: str, default: float | None = None) -> float | None:
        """Float value; unparseable input logs a warning and yields default."""
        return self._convert(var, default, float, "float")

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Boolean value.

        "true", "1", "yes" and "on" (any case) are true, "false", "0", "no"
        and "off" are false; anything else logs a warning and yields default.
        """
        return self._convert(var, default, _parse_bool, "boolean")

    def get_path(
        self, var: str, must_exist: bool = True, default: Path | None = None
    ) -> Path | None:
        """User-expanded path value.

        Args:
            var: Environment variable name.
            must_exist: Reject (with a warning) paths that do not exist.
            default: Returned when unset or rejected.
        """
        path = self._convert(var, None, lambda raw: Path(raw).expanduser(), "path")
        if path is None:
            return default
        if must_exist and not path.exists():
            logger.warning(
                "Environment variable %s points to non-existent path: %s",
                var,
                path,
            )
            return default
        return path
