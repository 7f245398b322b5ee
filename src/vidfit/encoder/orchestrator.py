"""Two-pass encode orchestration.

The orchestrator owns everything with side effects in a run: it reserves the
pass-log prefix, drives pass 1 then pass 2 through an injected Encoder, and
guarantees that pass logs (and a partial output after a failed final pass)
are removed on every exit path.
"""

from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

from vidfit.config.models import DEFAULT_ENCODING_SETTINGS, EncodingSettings
from vidfit.encoder.interface import Encoder
from vidfit.encoder.types import TwoPassContext
from vidfit.errors import EncodeFailedError
from vidfit.models import (
    AudioSpec,
    CompressionPlan,
    CompressionRequest,
    EncodeJob,
    EncodeResult,
    VideoMetadata,
)

logger = logging.getLogger(__name__)

ANALYSIS_PASS = 1
FINAL_PASS = 2

_TRAPPED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class EncodeInterrupted(Exception):
    """Raised from the signal handler while a two-pass encode is running."""

    def __init__(self, signum: int) -> None:
        self.signum = signum
        super().__init__(f"Interrupted by signal {signum}")


def _raise_interrupted(signum: int, frame: object) -> None:
    raise EncodeInterrupted(signum)


@contextmanager
def _trap_signals() -> Iterator[None]:
    """Turn SIGINT/SIGTERM into EncodeInterrupted for the enclosed block.

    Signal handlers can only be installed from the main thread; elsewhere
    the block runs with the existing handlers.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    old_handlers: dict[int, Callable | int | None] = {}
    for signum in _TRAPPED_SIGNALS:
        old_handlers[signum] = signal.signal(signum, _raise_interrupted)
    try:
        yield
    finally:
        for signum, handler in old_handlers.items():
            signal.signal(signum, handler)


def build_encode_job(
    pass_number: int,
    request: CompressionRequest,
    metadata: VideoMetadata,
    plan: CompressionPlan,
    passlog_prefix: Path,
    output_path: Path | None = None,
    settings: EncodingSettings = DEFAULT_ENCODING_SETTINGS,
) -> EncodeJob:
    """Build the job for one pass.

    Pass 1 never carries audio and writes to the null sink. Pass 2 adds AAC
    audio unless it was removed and writes ``output_path``. Every other
    field is identical between the two passes.
    """
    final = pass_number == FINAL_PASS
    audio = None
    if final and not request.remove_audio:
        audio = AudioSpec(bitrate_kbps=settings.audio_bitrate_kbps)
    return EncodeJob(
        pass_number=pass_number,
        input_path=request.input_path,
        codec=request.codec,
        video_kbps=plan.bitrate.video_kbps,
        frame_rate=plan.frame_rate,
        passlog_prefix=passlog_prefix,
        filter_chain=plan.filter_chain,
        full_range_input=metadata.is_full_range,
        audio=audio,
        sink=output_path if final else None,
    )


def _remove_partial_output(output_path: Path) -> None:
    try:
        output_path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove partial output %s: %s", output_path, e)
    else:
        logger.debug("Removed partial output %s", output_path)


class TwoPassOrchestrator:
    """Run the analysis pass and the final pass in order."""

    def __init__(
        self,
        encoder: Encoder,
        temp_directory: Path | None = None,
        settings: EncodingSettings = DEFAULT_ENCODING_SETTINGS,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            encoder: Runs each pass.
            temp_directory: Where pass logs go. None puts them next to the
                output file.
            settings: Encoding settings (audio bitrate).
        """
        self._encoder = encoder
        self._temp_directory = temp_directory
        self._settings = settings

    def run(
        self,
        request: CompressionRequest,
        metadata: VideoMetadata,
        plan: CompressionPlan,
        output_path: Path,
    ) -> EncodeResult:
        """Encode ``request`` into ``output_path`` with two passes.

        Raises:
            EncodeFailedError: If a pass fails or the run is interrupted.
                Pass 2 is never attempted after a pass 1 failure, and no
                partial output is left after a pass 2 failure.
        """
        directory = self._temp_directory or output_path.parent
        context = TwoPassContext.reserve(directory)
        try:
            with _trap_signals():
                for pass_number in (ANALYSIS_PASS, FINAL_PASS):
                    context.current_pass = pass_number
                    job = build_encode_job(
                        pass_number,
                        request,
                        metadata,
                        plan,
                        context.passlog_prefix,
                        output_path,
                        self._settings,
                    )
                    self._run_pass(job, output_path)
        except EncodeInterrupted as e:
            # Signal landed outside a pass, possibly after pass 2 finished
            if context.current_pass == FINAL_PASS:
                _remove_partial_output(output_path)
            raise EncodeFailedError(
                context.current_pass, None, interrupted=True
            ) from e
        finally:
            context.cleanup()

        if not output_path.exists():
            raise EncodeFailedError(
                FINAL_PASS, 0, ("Encoder exited cleanly but wrote no output",)
            )
        result = EncodeResult(
            output_path=output_path, size_bytes=output_path.stat().st_size
        )
        logger.info(
            "Two-pass encode complete: %s (%.2f MB)",
            output_path,
            result.size_mb,
        )
        return result

    def _run_pass(self, job: EncodeJob, output_path: Path) -> None:
        final = job.pass_number == FINAL_PASS
        try:
            exit_status = self._encoder.run(job)
        except (EncodeInterrupted, KeyboardInterrupt) as e:
            logger.warning("Encoding pass %d interrupted", job.pass_number)
            if final:
                _remove_partial_output(output_path)
            raise EncodeFailedError(job.pass_number, None, interrupted=True) from e

        if not exit_status.success:
            if final:
                _remove_partial_output(output_path)
            raise EncodeFailedError(
                job.pass_number, exit_status.returncode, exit_status.stderr_tail
            )
