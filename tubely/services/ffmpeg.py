"""
ffprobe / ffmpeg wrappers used by the video upload.
Probe the first video stream to pick an orientation bucket, and remux to a fast-start MP4
(moov atom before media data) without re-encoding.
"""
import json
import logging
import subprocess
from pathlib import Path
from tubely.config import Settings
from tubely.errors import MediaToolError

logger = logging.getLogger(__name__)

LANDSCAPE = "landscape"
PORTRAIT = "portrait"
OTHER = "other"

LANDSCAPE_MIN_RATIO = 1.4
PORTRAIT_MAX_RATIO = 0.8

PROCESSED_SUFFIX = ".processed.mp4"


def run_media_tool(
    cmd: list[str],
    timeout: float | None = None,
    action: str | None = None,
) -> subprocess.CompletedProcess:
    """
    Run an external tool, capturing stdout/stderr. Raises MediaToolError unless it exits 0.
    The error reads "<action> failed: <stderr>"; action defaults to the tool name.
    """
    tool = Path(cmd[0]).name
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except subprocess.TimeoutExpired:
        raise MediaToolError(f"{tool} timed out after {timeout}s")
    except FileNotFoundError:
        raise MediaToolError(f"{tool} not found; install FFmpeg")
    if result.returncode != 0:
        logger.error("%s exited with %s: %s", tool, result.returncode, result.stderr)
        raise MediaToolError(f"{action or tool} failed: {result.stderr}")
    return result


def classify_aspect_ratio(width: int, height: int) -> str:
    ratio = width / height
    if ratio > LANDSCAPE_MIN_RATIO:
        return LANDSCAPE
    if ratio < PORTRAIT_MAX_RATIO:
        return PORTRAIT
    return OTHER


def get_video_aspect_ratio(file_path: Path, settings: Settings) -> str:
    """Return 'landscape', 'portrait' or 'other' for the first video stream of file_path."""
    cmd = [
        settings.ffprobe_path,
        "-v", "error",
        "-select_streams", "v:0",
        "-show_entries", "stream=width,height",
        "-of", "json",
        str(file_path),
    ]
    result = run_media_tool(cmd, timeout=settings.media_tool_timeout_seconds, action="ffprobe")

    try:
        stream = json.loads(result.stdout)["streams"][0]
        width = int(stream["width"])
        height = int(stream["height"])
    except (ValueError, KeyError, IndexError, TypeError):
        raise MediaToolError("Could not determine video dimensions")
    if width <= 0 or height <= 0:
        raise MediaToolError("Could not determine video dimensions")

    orientation = classify_aspect_ratio(width, height)
    logger.info("Probed %s: %sx%s (%s)", file_path, width, height, orientation)
    return orientation


def process_video_for_fast_start(file_path: Path, settings: Settings) -> Path:
    """Remux file_path to <file_path>.processed.mp4 with the index up front. Returns the new path."""
    processed_path = Path(f"{file_path}{PROCESSED_SUFFIX}")
    cmd = [
        settings.ffmpeg_path,
        "-y",
        "-i", str(file_path),
        "-movflags", "faststart",
        "-map_metadata", "0",
        "-codec", "copy",
        "-f", "mp4",
        str(processed_path),
    ]
    run_media_tool(cmd, timeout=settings.media_tool_timeout_seconds, action="ffmpeg processing")
    logger.info("Fast-start copy written to %s", processed_path)
    return processed_path
