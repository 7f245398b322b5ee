"""Two-pass encoding state."""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

PASSLOG_PREFIX = "vidfit2pass_"

# x264 writes <prefix>-0.log(.mbtree); x265 is pointed at <prefix>.log(.cutree)
_FINAL_SUFFIXES = ("-0.log", "-0.log.mbtree", ".log", ".log.cutree")
# Stats are written to <name>.temp and renamed only when a pass succeeds
PASSLOG_SUFFIXES = _FINAL_SUFFIXES + tuple(f"{s}.temp" for s in _FINAL_SUFFIXES)


@dataclass
class TwoPassContext:
    """Pass-log ownership for one two-pass encode.

    Pass 1 analyzes the video and writes statistics next to
    ``passlog_prefix``; pass 2 reads them back.
    """

    passlog_prefix: Path
    """Path prefix for pass log files (FFmpeg adds suffixes)."""

    current_pass: int = 1

    @classmethod
    def reserve(cls, directory: Path | None = None) -> TwoPassContext:
        """Reserve a unique pass-log prefix.

        An empty file is created at the prefix itself so concurrent runs in
        the same directory cannot pick the same name. It is removed by
        cleanup() along with the logs.
        """
        with tempfile.NamedTemporaryFile(
            prefix=PASSLOG_PREFIX,
            delete=False,
            dir=directory,
        ) as tmp:
            prefix = Path(tmp.name)
        logger.debug("Reserved pass log prefix %s", prefix)
        return cls(passlog_prefix=prefix)

    def artifact_paths(self) -> list[Path]:
        base = str(self.passlog_prefix)
        return [self.passlog_prefix] + [Path(base + s) for s in PASSLOG_SUFFIXES]

    def cleanup(self) -> None:
        """Remove the reserved prefix file and every pass log."""
        for log_file in self.artifact_paths():
            if log_file.exists():
                try:
                    log_file.unlink()
                    logger.debug("Cleaned up pass log file: %s", log_file)
                except OSError as e:
                    logger.warning(
                        "Could not clean up pass log file %s: %s", log_file, e
                    )
