"""Tests for FFprobeIntrospector."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from vidfit.errors import MetadataUnavailableError, ToolNotAvailableError
from vidfit.introspector.ffprobe import FFprobeIntrospector

FFPROBE = Path("/usr/bin/ffprobe")

PROBE_JSON = {
    "streams": [
        {
            "codec_type": "video",
            "width": 1280,
            "height": 720,
            "pix_fmt": "yuv420p",
            "r_frame_rate": "25/1",
        }
    ],
    "format": {"duration": "60.0"},
}


@pytest.fixture
def introspector() -> FFprobeIntrospector:
    with patch("vidfit.introspector.ffprobe.require_tool", return_value=FFPROBE):
        return FFprobeIntrospector()


@pytest.fixture
def video_file(tmp_path: Path) -> Path:
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\0")
    return path


class TestFFprobeIntrospector:
    """Tests for FFprobeIntrospector."""

    def test_requires_ffprobe(self) -> None:
        with patch("vidfit.tools.shutil.which", return_value=None):
            with pytest.raises(ToolNotAvailableError):
                FFprobeIntrospector()

    def test_is_available(self) -> None:
        with patch("vidfit.tools.shutil.which", return_value="/usr/bin/ffprobe"):
            assert FFprobeIntrospector.is_available()
        with patch("vidfit.tools.shutil.which", return_value=None):
            assert not FFprobeIntrospector.is_available()

    def test_get_video_metadata(
        self, introspector: FFprobeIntrospector, video_file: Path
    ) -> None:
        completed = MagicMock(stdout=json.dumps(PROBE_JSON))
        with patch(
            "vidfit.introspector.ffprobe.subprocess.run", return_value=completed
        ) as mock_run:
            metadata = introspector.get_video_metadata(video_file)

        assert metadata.height == 720
        assert metadata.frame_rate == "25/1"
        args = mock_run.call_args[0][0]
        assert args[0] == str(FFPROBE)
        assert args[-1] == str(video_file)
        assert "-show_format" in args
        assert args[args.index("-select_streams") + 1] == "v:0"
        assert mock_run.call_args.kwargs["timeout"] == 60

    def test_missing_file(
        self, introspector: FFprobeIntrospector, tmp_path: Path
    ) -> None:
        with pytest.raises(MetadataUnavailableError, match="File not found"):
            introspector.get_video_metadata(tmp_path / "missing.mp4")

    def test_ffprobe_failure(
        self, introspector: FFprobeIntrospector, video_file: Path
    ) -> None:
        error = subprocess.CalledProcessError(
            1, ["ffprobe"], stderr="Invalid data found when processing input\n"
        )
        with patch("vidfit.introspector.ffprobe.subprocess.run", side_effect=error):
            with pytest.raises(MetadataUnavailableError) as exc_info:
                introspector.get_video_metadata(video_file)

        assert "Invalid data found" in exc_info.value.message
        assert exc_info.value.__cause__ is error

    def test_timeout(
        self, introspector: FFprobeIntrospector, video_file: Path
    ) -> None:
        error = subprocess.TimeoutExpired(["ffprobe"], 60)
        with patch("vidfit.introspector.ffprobe.subprocess.run", side_effect=error):
            with pytest.raises(MetadataUnavailableError, match="timed out"):
                introspector.get_video_metadata(video_file)

    def test_invalid_json(
        self, introspector: FFprobeIntrospector, video_file: Path
    ) -> None:
        completed = MagicMock(stdout="{not json")
        with (
            patch(
                "vidfit.introspector.ffprobe.subprocess.run", return_value=completed
            ),
            pytest.raises(MetadataUnavailableError, match="Invalid ffprobe output"),
        ):
            introspector.get_video_metadata(video_file)
