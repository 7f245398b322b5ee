"""MetadataProbe interface for source video metadata."""

from pathlib import Path
from typing import Protocol

from vidfit.models import VideoMetadata


class MetadataProbe(Protocol):
    """Protocol for metadata probe implementations.

    A probe reports the properties of the first video stream that the
    planner needs: dimensions, duration, frame rate and pixel format.
    """

    def get_video_metadata(self, path: Path) -> VideoMetadata:
        """Probe a video file.

        Args:
            path: Path to the video file.

        Returns:
            VideoMetadata for the first video stream.

        Raises:
            MetadataUnavailableError: If any required field is missing.
        """
        ...
