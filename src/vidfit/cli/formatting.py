"""Console formatting for the settings summary and results."""

from __future__ import annotations

import click

from vidfit.models import (
    CompressionPlan,
    CompressionRequest,
    SizeVerdict,
    VideoMetadata,
)

LABEL_WIDTH = 26


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes.

    Returns:
        Formatted string (e.g., "4.2 GB", "12.3 MB", "1.5 KB").
    """
    if size_bytes >= 1024**3:
        return f"{size_bytes / (1024**3):.1f} GB"
    elif size_bytes >= 1024**2:
        return f"{size_bytes / (1024**2):.1f} MB"
    elif size_bytes >= 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{size_bytes} B"


def describe_frame_rate_change(requested: str | None, original: str) -> str:
    """Note shown next to the target frame rate."""
    if requested is None:
        return "(using original)"
    if requested != original:
        return "(changed)"
    return "(matches original)"


def describe_resolution(
    request: CompressionRequest,
    metadata: VideoMetadata,
    plan: CompressionPlan,
) -> str:
    """Note shown next to the final resolution, or "" when untouched."""
    final_height = plan.resolution.final_height
    if final_height < metadata.height:
        return "(downscaled)"
    if not request.is_auto_resolution and final_height < request.resolution:
        return f"(original, not upscaled to {request.resolution}p)"
    if plan.filter_chain:
        return "(processed for format/range)"
    return ""


def _line(label: str, value: str, note: str = "") -> str:
    text = f"  {click.style(label + ':', fg='cyan'):<{LABEL_WIDTH}} {value}"
    if note:
        text = f"{text} {click.style(note, fg='yellow')}"
    return text


def format_settings_summary(
    request: CompressionRequest,
    metadata: VideoMetadata,
    plan: CompressionPlan,
    output_name: str,
) -> str:
    """Render the pre-encode summary block."""
    bitrate = plan.bitrate
    if request.remove_audio:
        audio = "Will be removed"
        video_note = "(no audio)"
    else:
        audio = f"Kept (bitrate: {bitrate.audio_kbps}k)"
        video_note = f"(audio: {bitrate.audio_kbps} kbps)"

    lines = [
        click.style("--- Settings Summary ---", bold=True),
        _line("Input File", f"{request.input_path} ({metadata.pixel_format})"),
        _line("Original Resolution", f"{metadata.width}x{metadata.height}"),
        _line("Original Frame Rate", metadata.frame_rate),
        _line("Duration", f"{metadata.duration_seconds:g} seconds"),
        "",
        _line("Target Size", f"{request.target_size_mb:g}MB"),
        _line(
            "Requested Resolution",
            "auto" if request.is_auto_resolution else f"{request.resolution}p",
        ),
        _line("Codec", request.codec.value),
        _line("Audio", audio),
        _line(
            "Target Frame Rate",
            f"{plan.frame_rate} fps",
            describe_frame_rate_change(request.frame_rate, metadata.frame_rate),
        ),
        "",
        _line("Total Bitrate", f"{bitrate.total_kbps} kbps"),
        _line("Video Bitrate", f"{bitrate.video_kbps} kbps", video_note),
        _line(
            "Final Resolution",
            f"{plan.resolution.final_height}p",
            describe_resolution(request, metadata, plan),
        ),
        _line("Output File", click.style(output_name, fg="green")),
    ]
    vf = plan.filter_chain.render()
    if vf:
        lines.append(_line("Video Filters", click.style(vf, fg="yellow")))
    lines.append(click.style("------------------------", bold=True))
    return "\n".join(lines)


def format_size_report(verdict: SizeVerdict) -> str:
    color = "green" if verdict.ok else "yellow"
    actual = click.style(f"{verdict.actual_mb:.2f} MB", fg=color)
    return (
        f"Final size: {actual} "
        f"(target {verdict.target_mb:g} MB, tolerance ±{verdict.tolerance_mb} MB)"
    )
