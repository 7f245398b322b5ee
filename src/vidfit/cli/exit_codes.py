"""Exit codes for vidfit commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (request, config, size budget)
    20-29: Target/file errors
    30-39: Tool/dependency errors
    40-49: Encoding errors
    50-59: Probe errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for vidfit CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2  # SIGINT/SIGTERM during an encode

    # Validation errors (10-19)
    INVALID_REQUEST = 10
    CONFIG_ERROR = 11
    INSUFFICIENT_BITRATE = 12

    # Target/file errors (20-29)
    TARGET_NOT_FOUND = 20

    # Tool/dependency errors (30-39)
    TOOL_NOT_AVAILABLE = 30

    # Encoding errors (40-49)
    ENCODE_FAILED = 40

    # Probe errors (50-59)
    METADATA_UNAVAILABLE = 50
