"""Shared test fixtures for vidfit."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from vidfit.config.models import VidfitConfig
from vidfit.encoder.interface import EncoderExit
from vidfit.models import (
    BYTES_PER_MB,
    Codec,
    CompressionRequest,
    EncodeJob,
    ResolutionMode,
    VideoMetadata,
)


@dataclass
class FakeEncoder:
    """Encoder double that records jobs instead of running FFmpeg.

    ``fail_pass`` makes that pass exit with ``returncode``. On a successful
    final pass a file of ``output_size_mb`` is written to the job's sink.
    ``pass_log_files`` mimics the x264 pass logs on pass 1 so cleanup can be
    asserted.
    """

    output_size_mb: float = 10.0
    fail_pass: int | None = None
    returncode: int = 1
    stderr_tail: tuple[str, ...] = ("Conversion failed!\n",)
    raise_on_pass: int | None = None
    raise_exc: BaseException | None = None
    write_partial_output: bool = False
    pass_log_files: bool = True
    jobs: list[EncodeJob] = field(default_factory=list)

    def run(self, job: EncodeJob) -> EncoderExit:
        self.jobs.append(job)
        if job.pass_number == 1 and self.pass_log_files:
            # x264 only renames its stats files after a clean pass
            stopped = 1 in (self.fail_pass, self.raise_on_pass)
            suffix = ".temp" if stopped else ""
            Path(f"{job.passlog_prefix}-0.log{suffix}").write_text("stats")
            Path(f"{job.passlog_prefix}-0.log.mbtree{suffix}").write_bytes(b"\0")
        if job.sink is not None and (
            self.write_partial_output or self.fail_pass != job.pass_number
        ):
            job.sink.write_bytes(b"\0" * int(self.output_size_mb * BYTES_PER_MB))
        if self.raise_on_pass == job.pass_number:
            raise self.raise_exc or KeyboardInterrupt()
        if self.fail_pass == job.pass_number:
            return EncoderExit(self.returncode, self.stderr_tail)
        return EncoderExit(0)


@pytest.fixture
def fake_encoder() -> FakeEncoder:
    return FakeEncoder()


@pytest.fixture
def make_fake_encoder():
    """Factory for FakeEncoder with overridable behavior."""
    return FakeEncoder


@pytest.fixture
def metadata_1080p() -> VideoMetadata:
    """A 100 second 1080p30 yuv420p source."""
    return VideoMetadata(
        width=1920,
        height=1080,
        duration_seconds=100.0,
        frame_rate="30",
        pixel_format="yuv420p",
    )


@pytest.fixture
def make_metadata():
    """Factory for VideoMetadata with overridable fields."""

    def _make(
        width: int = 1920,
        height: int = 1080,
        duration_seconds: float = 100.0,
        frame_rate: str = "30",
        pixel_format: str = "yuv420p",
    ) -> VideoMetadata:
        return VideoMetadata(
            width=width,
            height=height,
            duration_seconds=duration_seconds,
            frame_rate=frame_rate,
            pixel_format=pixel_format,
        )

    return _make


@pytest.fixture
def make_request(tmp_path: Path):
    """Factory for CompressionRequest objects pointing at a real file."""
    input_path = tmp_path / "holiday.mp4"
    input_path.write_bytes(b"not really a video")

    def _make(
        target_size_mb: float = 10.0,
        resolution: ResolutionMode | int = ResolutionMode.AUTO,
        remove_audio: bool = False,
        frame_rate: str | None = None,
        codec: Codec = Codec.H264,
    ) -> CompressionRequest:
        return CompressionRequest(
            input_path=input_path,
            target_size_mb=target_size_mb,
            resolution=resolution,
            remove_audio=remove_audio,
            frame_rate=frame_rate,
            codec=codec,
        )

    return _make


@pytest.fixture
def default_config() -> VidfitConfig:
    return VidfitConfig()
