"""Parsers for ffmpeg's volumedetect/silencedetect diagnostic output."""

import re

from silencecut.models import TimeRange

MEAN_VOLUME_RE = re.compile(
    r"^\[Parsed_volumedetect_\d[^\]]*\]\s*mean_volume\s*:\s*(-?\d+(?:\.\d+)?)\s*dB\s*$",
    re.MULTILINE,
)
SILENCE_MARKER_RE = re.compile(
    r"^\[silencedetect[^\]]*\]\s*silence_(start|end)\s*:\s*(-?\d+(?:\.\d+)?)",
    re.MULTILINE,
)


class ParseError(ValueError):
    """Raised when diagnostic text does not have the expected shape."""

    def __init__(self, message: str, text: str = "") -> None:
        super().__init__(message)
        self.text = text


def parse_mean_volume(stderr: str) -> float:
    """Return the mean volume (dB) reported by the volumedetect filter."""
    match = MEAN_VOLUME_RE.search(stderr)
    if match is None:
        raise ParseError("No mean_volume line in volumedetect output", stderr)
    return float(match.group(1))


def parse_silence_ranges(stderr: str, duration: float | None = None) -> list[TimeRange]:
    """Pair silencedetect start/end markers into TimeRanges, in output order.

    Markers must strictly alternate start, end, start, end... A trailing
    ``silence_start`` with no ``silence_end`` (silence runs to EOF) is dropped,
    unless ``duration`` is given, in which case it is closed at ``duration``.
    """
    ranges: list[TimeRange] = []
    open_start: float | None = None

    for match in SILENCE_MARKER_RE.finditer(stderr):
        kind, stamp = match.group(1), float(match.group(2))
        if kind == "start":
            if open_start is not None:
                raise ParseError(
                    f"Unexpected silence_start at {stamp} (previous start {open_start} not closed)",
                    stderr,
                )
            # ffmpeg reports slightly negative starts for silence at stream head
            open_start = max(stamp, 0.0)
        else:
            if open_start is None:
                raise ParseError(f"Unexpected silence_end at {stamp} with no start", stderr)
            ranges.append(TimeRange(start=open_start, end=stamp))
            open_start = None

    if open_start is not None and duration is not None and duration > open_start:
        ranges.append(TimeRange(start=open_start, end=duration))

    return ranges
