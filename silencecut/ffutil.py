"""FFmpeg/ffprobe subprocess helpers."""

import logging
import shutil
import subprocess
from pathlib import Path

from silencecut.diagnostics import ParseError, parse_mean_volume, parse_silence_ranges
from silencecut.models import TimeRange

logger = logging.getLogger(__name__)

TRANSIENT_ERROR_MARKER = "Too many packets buffered for output stream"


class FFmpegNotFoundError(RuntimeError):
    pass


class ExternalToolError(RuntimeError):
    """Raised when ffmpeg or ffprobe exits with a non-zero status."""

    def __init__(self, cmd: list[str], returncode: int, stderr: str = "") -> None:
        tail = stderr.strip().splitlines()[-1] if stderr.strip() else "no output"
        super().__init__(f"{cmd[0]} failed (rc={returncode}): {tail}")
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr

    @property
    def is_transient(self) -> bool:
        """True for the muxer buffering failure that batch runs skip over."""
        return TRANSIENT_ERROR_MARKER in self.stderr


def check_ffmpeg() -> None:
    """Raise FFmpegNotFoundError if ffmpeg/ffprobe are not on PATH."""
    for cmd in ("ffmpeg", "ffprobe"):
        if shutil.which(cmd) is None:
            raise FFmpegNotFoundError(f"{cmd} not found on PATH")


def _run(cmd: list[str]) -> subprocess.CompletedProcess:
    logger.debug("Running: %s", " ".join(cmd))
    result = subprocess.run(cmd, capture_output=True, text=True)
    if result.returncode != 0:
        raise ExternalToolError(cmd, result.returncode, result.stderr or "")
    return result


def probe_duration(input_path: Path) -> float:
    """Return the container duration in seconds as reported by ffprobe."""
    cmd = [
        "ffprobe",
        "-v", "error",
        "-show_entries", "format=duration",
        "-of", "default=noprint_wrappers=1:nokey=1",
        str(input_path),
    ]
    out = _run(cmd).stdout.strip()
    try:
        return float(out)
    except ValueError:
        raise ParseError(f"ffprobe returned a non-numeric duration for {input_path}", out) from None


def is_media_file(path: Path) -> bool:
    """Best-effort check: does ffprobe accept this path as media?"""
    cmd = ["ffprobe", "-v", "error", "-i", str(path)]
    try:
        _run(cmd)
    except ExternalToolError:
        return False
    return True


def detect_mean_volume(input_path: Path) -> float:
    """Run FFmpeg volumedetect over the whole file and return the mean volume in dB."""
    cmd = [
        "ffmpeg",
        "-i", str(input_path),
        "-af", "volumedetect",
        "-f", "null", "-",
    ]
    return parse_mean_volume(_run(cmd).stderr)


def detect_silence(
    input_path: Path,
    threshold_db: float,
    min_duration: float,
    duration: float | None = None,
) -> list[TimeRange]:
    """Run FFmpeg silencedetect and return silent time ranges.

    *duration* closes trailing silence that extends to EOF (an unpaired
    ``silence_start``).  When not supplied, that trailing silence is dropped.
    """
    cmd = [
        "ffmpeg",
        "-i", str(input_path),
        "-af", f"silencedetect=n={threshold_db}dB:d={min_duration}",
        "-f", "null", "-",
    ]
    return parse_silence_ranges(_run(cmd).stderr, duration=duration)


def extract_segment(input_path: Path, time_range: TimeRange, output_path: Path) -> Path:
    """Re-encode one time range of the input into a standalone file."""
    cmd = [
        "ffmpeg", "-y",
        "-ss", str(time_range.start),
        "-t", str(time_range.duration),
        "-i", str(input_path),
        str(output_path),
    ]
    _run(cmd)
    return output_path


def _quote_concat_path(path: Path) -> str:
    # concat demuxer quoting: close the quote, emit an escaped quote, reopen
    return "'" + str(path).replace("'", "'\\''") + "'"


def write_concat_list(paths: list[Path], list_path: Path) -> Path:
    """Write a concat demuxer listing file, one ``file '...'`` line per path."""
    lines = [f"file {_quote_concat_path(p.resolve())}" for p in paths]
    list_path.parent.mkdir(parents=True, exist_ok=True)
    list_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return list_path


def concat_files(list_path: Path, output_path: Path) -> None:
    """Join the files named in a concat listing without re-encoding."""
    cmd = [
        "ffmpeg", "-y",
        "-f", "concat",
        "-safe", "0",
        "-i", str(list_path),
        "-c", "copy",
        str(output_path),
    ]
    _run(cmd)
