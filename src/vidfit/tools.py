"""External tool lookup.

vidfit shells out to ffmpeg and ffprobe. A configured path wins over the
PATH lookup; a configured path that is not a file is reported and ignored.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from vidfit.config.models import ToolPathsConfig
from vidfit.errors import ToolNotAvailableError

logger = logging.getLogger(__name__)

REQUIRED_TOOLS = ("ffmpeg", "ffprobe")

INSTALL_HINTS = {
    "ffmpeg": (
        "Install FFmpeg from your package manager (for example "
        "'apt install ffmpeg' or 'brew install ffmpeg') or set "
        "VIDFIT_FFMPEG_PATH."
    ),
    "ffprobe": (
        "ffprobe ships with FFmpeg. Install FFmpeg or set VIDFIT_FFPROBE_PATH."
    ),
}


def find_tool(name: str, configured_path: Path | None = None) -> Path | None:
    """Find a tool executable.

    Args:
        name: Tool name (e.g., "ffmpeg").
        configured_path: Optional configured path override.

    Returns:
        Path to tool executable, or None if not found.
    """
    if configured_path:
        if configured_path.is_file():
            return configured_path
        logger.warning(
            "Configured path for %s is not a file: %s", name, configured_path
        )

    which_result = shutil.which(name)
    if which_result:
        return Path(which_result)

    return None


def require_tool(name: str, configured_path: Path | None = None) -> Path:
    """Like find_tool, but raise ToolNotAvailableError when nothing is found."""
    path = find_tool(name, configured_path)
    if path is None:
        raise ToolNotAvailableError(name, INSTALL_HINTS.get(name, ""))
    logger.debug("Using %s at %s", name, path)
    return path


def check_tool_availability(
    tools: ToolPathsConfig | None = None,
) -> dict[str, Path | None]:
    """Resolve every required tool.

    Returns:
        Mapping of tool name to resolved path (None when missing).
    """
    tools = tools or ToolPathsConfig()
    return {name: find_tool(name, getattr(tools, name)) for name in REQUIRED_TOOLS}
