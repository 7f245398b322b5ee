"""Exceptions raised by the compression pipeline.

Every fatal condition derives from CompressionError so the CLI can map it to
an exit code. A size deviation after encoding is not an error; it is reported
through SizeVerdict instead.
"""

from __future__ import annotations


class CompressionError(Exception):
    """Base exception for compression failures.

    Raised when a compression run cannot continue because of invalid input,
    missing metadata, an unreachable size budget, or an encoder failure.
    """

    def __init__(self, message: str) -> None:
        """Initialize compression error.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)


class InvalidRequestError(CompressionError):
    """Raised when user-supplied options are malformed."""


class ConfigError(CompressionError):
    """Raised when the configuration file cannot be parsed in strict mode."""


class ToolNotAvailableError(CompressionError):
    """Raised when ffmpeg or ffprobe cannot be located."""

    def __init__(self, tool_name: str, hint: str = "") -> None:
        self.tool_name = tool_name
        message = f"Required tool not available: {tool_name}."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)


class MetadataUnavailableError(CompressionError):
    """Raised when the probe cannot produce every required metadata field."""


class InsufficientBitrateError(CompressionError):
    """Raised when the planned video bitrate is below the codec floor.

    The requested size is not reachable at acceptable quality for this
    duration and codec. The user has to raise the target size, shorten the
    source, or drop the audio track.
    """

    def __init__(
        self,
        video_kbps: int | None,
        minimum_kbps: float,
        codec: str,
    ) -> None:
        """Initialize insufficient bitrate error.

        Args:
            video_kbps: Computed video bitrate, or None if it could not be
                computed (e.g. non-positive duration).
            minimum_kbps: Effective minimum for the codec.
            codec: Codec name the minimum applies to.
        """
        self.video_kbps = video_kbps
        self.minimum_kbps = minimum_kbps
        self.codec = codec
        if video_kbps is None:
            message = (
                "Video bitrate could not be calculated "
                "(possibly due to zero duration or target size)."
            )
        else:
            message = (
                f"Calculated video bitrate ({video_kbps} kbps) is below the "
                f"effective minimum ({minimum_kbps:g} kbps) for codec {codec}. "
                "Increase the target size, shorten the video, or remove audio."
            )
        super().__init__(message)


class EncodeFailedError(CompressionError):
    """Raised when an encoder pass exits non-zero or is interrupted."""

    def __init__(
        self,
        pass_number: int,
        returncode: int | None,
        stderr_tail: tuple[str, ...] = (),
        interrupted: bool = False,
    ) -> None:
        """Initialize encode failure.

        Args:
            pass_number: Pass that failed (1 or 2).
            returncode: Encoder exit status, None if it never finished.
            stderr_tail: Last lines of encoder stderr for diagnostics.
            interrupted: True if the pass was cut short by a signal.
        """
        self.pass_number = pass_number
        self.returncode = returncode
        self.stderr_tail = stderr_tail
        self.interrupted = interrupted
        if interrupted:
            message = f"Encoding pass {pass_number} was interrupted"
        else:
            message = f"Encoding pass {pass_number} failed with exit code {returncode}"
        if stderr_tail:
            message = f"{message}: {''.join(stderr_tail).strip()}"
        super().__init__(message)
