"""FFprobe-based implementation of the MetadataProbe protocol."""

from __future__ import annotations

import json
import subprocess  # nosec B404 - subprocess is required for ffprobe invocation
from pathlib import Path

from vidfit.errors import MetadataUnavailableError
from vidfit.introspector.parsers import parse_ffprobe_output
from vidfit.models import VideoMetadata
from vidfit.tools import find_tool, require_tool

# Corrupt files can make ffprobe hang
PROBE_TIMEOUT = 60


class FFprobeIntrospector:
    """Probe the first video stream of a file with ffprobe."""

    def __init__(self, ffprobe_path: Path | None = None) -> None:
        """Initialize the introspector.

        Args:
            ffprobe_path: Optional explicit path to ffprobe. Falls back to
                a PATH lookup.

        Raises:
            ToolNotAvailableError: If ffprobe cannot be found.
        """
        self._ffprobe_path = require_tool("ffprobe", ffprobe_path)

    @staticmethod
    def is_available(ffprobe_path: Path | None = None) -> bool:
        return find_tool("ffprobe", ffprobe_path) is not None

    def get_video_metadata(self, path: Path) -> VideoMetadata:
        """Extract planning metadata from a video file.

        Raises:
            MetadataUnavailableError: If the file cannot be probed.
        """
        if not path.exists():
            raise MetadataUnavailableError(f"File not found: {path}")

        try:
            data = self._run_ffprobe(path)
        except subprocess.TimeoutExpired as e:
            raise MetadataUnavailableError(
                f"ffprobe timed out for {path} after {e.timeout}s"
            ) from e
        except subprocess.CalledProcessError as e:
            raise MetadataUnavailableError(
                f"ffprobe failed for {path}: {(e.stderr or str(e)).strip()}"
            ) from e
        except json.JSONDecodeError as e:
            raise MetadataUnavailableError(
                f"Invalid ffprobe output for {path}: {e}"
            ) from e

        return parse_ffprobe_output(path, data)

    def _run_ffprobe(self, path: Path) -> dict:
        result = subprocess.run(  # nosec B603 - ffprobe path is resolved
            [
                str(self._ffprobe_path),
                "-v",
                "error",
                "-select_streams",
                "v:0",
                "-print_format",
                "json",
                "-show_streams",
                "-show_format",
                str(path),
            ],
            capture_output=True,
            text=True,
            errors="replace",
            check=True,
            timeout=PROBE_TIMEOUT,
        )
        return json.loads(result.stdout)
