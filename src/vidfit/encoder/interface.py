"""Encoder interface used by the two-pass orchestrator."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from vidfit.encoder.progress import FFmpegProgress
from vidfit.models import EncodeJob

ProgressCallback = Callable[[EncodeJob, FFmpegProgress], None]


@dataclass(frozen=True)
class EncoderExit:
    """Outcome of one encoder invocation."""

    returncode: int
    stderr_tail: tuple[str, ...] = ()

    @property
    def success(self) -> bool:
        return self.returncode == 0


class Encoder(Protocol):
    """Protocol for encoder implementations.

    An encoder runs a single pass synchronously. It reports failure through
    the exit status; it only raises when interrupted.
    """

    def run(self, job: EncodeJob) -> EncoderExit:
        """Run one encoding pass.

        Args:
            job: Fully specified pass.

        Returns:
            EncoderExit with the process exit status.
        """
        ...
