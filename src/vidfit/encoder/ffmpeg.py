"""FFmpeg-backed Encoder implementation."""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for ffmpeg invocation
from collections import deque
from pathlib import Path

from vidfit.config.models import DEFAULT_ENCODING_SETTINGS, EncodingSettings
from vidfit.encoder.command import build_ffmpeg_command
from vidfit.encoder.interface import EncoderExit, ProgressCallback
from vidfit.encoder.progress import is_progress_line, parse_stderr_progress
from vidfit.models import EncodeJob
from vidfit.tools import require_tool

logger = logging.getLogger(__name__)

# Stderr lines kept for error reporting
STDERR_TAIL_LINES = 20


class FFmpegEncoder:
    """Run a single FFmpeg pass and stream its stderr."""

    def __init__(
        self,
        ffmpeg_path: Path | None = None,
        settings: EncodingSettings = DEFAULT_ENCODING_SETTINGS,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        """Initialize the encoder.

        Args:
            ffmpeg_path: Optional explicit path to ffmpeg.
            settings: Preset and tune settings used to render commands.
            progress_callback: Called with each parsed progress update.

        Raises:
            ToolNotAvailableError: If ffmpeg cannot be found.
        """
        self._ffmpeg_path = require_tool("ffmpeg", ffmpeg_path)
        self._settings = settings
        self._progress_callback = progress_callback

    def build_command(self, job: EncodeJob) -> list[str]:
        return build_ffmpeg_command(job, self._ffmpeg_path, self._settings)

    def run(self, job: EncodeJob) -> EncoderExit:
        cmd = self.build_command(job)
        logger.info(
            "Starting encoding pass %d",
            job.pass_number,
            extra={"pass_number": job.pass_number, "input": str(job.input_path)},
        )

        stderr_tail: deque[str] = deque(maxlen=STDERR_TAIL_LINES)
        # text mode splits FFmpeg's carriage-return status lines too
        process = subprocess.Popen(  # nosec B603 - args built from validated job
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        )
        try:
            assert process.stderr is not None
            for line in process.stderr:
                if is_progress_line(line):
                    self._report_progress(job, line)
                elif line.strip():
                    stderr_tail.append(line)
            returncode = process.wait()
        except BaseException:
            # Interrupted: never leave FFmpeg running behind us
            process.kill()
            process.wait()
            raise
        finally:
            if process.stderr:
                process.stderr.close()

        if returncode != 0:
            logger.error(
                "Encoding pass %d failed with exit code %d",
                job.pass_number,
                returncode,
            )
        else:
            logger.info("Encoding pass %d complete", job.pass_number)
        return EncoderExit(returncode=returncode, stderr_tail=tuple(stderr_tail))

    def _report_progress(self, job: EncodeJob, line: str) -> None:
        if self._progress_callback is None:
            return
        progress = parse_stderr_progress(line)
        if progress is None:
            return
        try:
            self._progress_callback(job, progress)
        except Exception as e:
            logger.warning("Progress callback error: %s", e)
