"""Fixtures for CLI tests."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from vidfit.config.models import VidfitConfig


@pytest.fixture(autouse=True)
def _skip_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the CLI from replacing pytest's root log handlers."""
    monkeypatch.setattr("vidfit.cli._logging_configured", True)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_obj() -> dict:
    return {"config": VidfitConfig()}


@pytest.fixture
def input_video(tmp_path: Path) -> Path:
    path = tmp_path / "holiday.mp4"
    path.write_bytes(b"not really a video")
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def mock_probe(metadata_1080p):
    """Patch the compress command's introspector to return 1080p metadata."""
    with patch("vidfit.cli.compress.FFprobeIntrospector") as mock_cls:
        introspector = MagicMock()
        introspector.get_video_metadata.return_value = metadata_1080p
        mock_cls.return_value = introspector
        yield mock_cls


@pytest.fixture
def mock_ffmpeg():
    with patch(
        "vidfit.cli.compress.require_tool", return_value=Path("/usr/bin/ffmpeg")
    ) as mock_require:
        yield mock_require
