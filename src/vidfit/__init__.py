"""vidfit - fit a video into a target file size with two-pass FFmpeg encoding."""

__version__ = "0.1.0"
