"""Tests for FFmpegEncoder."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from vidfit.encoder.ffmpeg import STDERR_TAIL_LINES, FFmpegEncoder
from vidfit.errors import ToolNotAvailableError
from vidfit.models import Codec, EncodeJob

FFMPEG = Path("/usr/bin/ffmpeg")


@pytest.fixture
def mock_require_tool():
    """Mock require_tool to return a fake ffmpeg path for CI environments."""
    with patch("vidfit.encoder.ffmpeg.require_tool", return_value=FFMPEG):
        yield


@pytest.fixture
def job(tmp_path: Path) -> EncodeJob:
    return EncodeJob(
        pass_number=1,
        input_path=tmp_path / "in.mp4",
        codec=Codec.H264,
        video_kbps=710,
        frame_rate="30",
        passlog_prefix=tmp_path / "vidfit2pass_x",
    )


def _mock_process(stderr: str, returncode: int = 0) -> MagicMock:
    process = MagicMock()
    process.stderr = io.StringIO(stderr)
    process.wait.return_value = returncode
    return process


class TestFFmpegEncoderInit:
    """Tests for FFmpegEncoder construction."""

    def test_missing_ffmpeg_raises(self) -> None:
        with patch("vidfit.tools.shutil.which", return_value=None):
            with pytest.raises(ToolNotAvailableError) as exc_info:
                FFmpegEncoder()
        assert exc_info.value.tool_name == "ffmpeg"


@pytest.mark.usefixtures("mock_require_tool")
class TestFFmpegEncoderRun:
    """Tests for FFmpegEncoder.run."""

    def test_success(self, job: EncodeJob) -> None:
        process = _mock_process("Input #0, mov\nframe=  10 time=00:00:01.00\n")
        with patch(
            "vidfit.encoder.ffmpeg.subprocess.Popen", return_value=process
        ) as mock_popen:
            result = FFmpegEncoder().run(job)

        assert result.success
        assert result.returncode == 0
        cmd = mock_popen.call_args[0][0]
        assert cmd[0] == str(FFMPEG)
        assert "-pass" in cmd

    def test_failure_keeps_stderr_tail_without_progress(
        self, job: EncodeJob, caplog
    ) -> None:
        stderr = (
            "frame=  10 fps=5 time=00:00:01.00 bitrate=1k speed=1x\n"
            "Error while opening encoder\n"
            "Conversion failed!\n"
        )
        process = _mock_process(stderr, returncode=1)
        with (
            patch("vidfit.encoder.ffmpeg.subprocess.Popen", return_value=process),
            caplog.at_level(logging.ERROR),
        ):
            result = FFmpegEncoder().run(job)

        assert not result.success
        assert result.returncode == 1
        assert result.stderr_tail == (
            "Error while opening encoder\n",
            "Conversion failed!\n",
        )
        assert "Encoding pass 1 failed with exit code 1" in caplog.text

    def test_stderr_tail_is_bounded(self, job: EncodeJob) -> None:
        stderr = "".join(f"line {i}\n" for i in range(STDERR_TAIL_LINES + 5))
        process = _mock_process(stderr, returncode=1)
        with patch("vidfit.encoder.ffmpeg.subprocess.Popen", return_value=process):
            result = FFmpegEncoder().run(job)

        assert len(result.stderr_tail) == STDERR_TAIL_LINES
        assert result.stderr_tail[-1] == f"line {STDERR_TAIL_LINES + 4}\n"

    def test_progress_callback_receives_updates(self, job: EncodeJob) -> None:
        updates = []
        process = _mock_process(
            "frame=  10 time=00:00:01.00\nframe=  20 time=00:00:02.00\n"
        )
        with patch("vidfit.encoder.ffmpeg.subprocess.Popen", return_value=process):
            FFmpegEncoder(
                progress_callback=lambda j, p: updates.append((j.pass_number, p.frame))
            ).run(job)

        assert updates == [(1, 10), (1, 20)]

    def test_progress_callback_errors_do_not_stop_encode(
        self, job: EncodeJob, caplog
    ) -> None:
        def broken(job, progress):
            raise RuntimeError("display gone")

        process = _mock_process("frame=  10 time=00:00:01.00\n")
        with (
            patch("vidfit.encoder.ffmpeg.subprocess.Popen", return_value=process),
            caplog.at_level(logging.WARNING),
        ):
            result = FFmpegEncoder(progress_callback=broken).run(job)

        assert result.success
        assert "Progress callback error" in caplog.text

    def test_interrupt_kills_process(self, job: EncodeJob) -> None:
        process = _mock_process("")
        process.wait.side_effect = [KeyboardInterrupt(), -9]
        with patch("vidfit.encoder.ffmpeg.subprocess.Popen", return_value=process):
            with pytest.raises(KeyboardInterrupt):
                FFmpegEncoder().run(job)

        process.kill.assert_called_once()
