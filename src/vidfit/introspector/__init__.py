"""Source video metadata probing."""

from vidfit.introspector.ffprobe import FFprobeIntrospector
from vidfit.introspector.interface import MetadataProbe
from vidfit.introspector.parsers import parse_ffprobe_output

__all__ = [
    "FFprobeIntrospector",
    "MetadataProbe",
    "parse_ffprobe_output",
]
