"""Shared data types used across silencecut."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class TimeRange:
    """A start/end time pair in seconds."""

    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass
class MediaInfo:
    """What we know about one source file while it is being processed."""

    path: Path
    duration: float
    mean_volume: float


@dataclass
class MediaAnalysis:
    """Silence analysis of one file: detected silences and the ranges to keep."""

    media: MediaInfo
    threshold_db: float
    silences: list[TimeRange] = field(default_factory=list)
    keep_ranges: list[TimeRange] = field(default_factory=list)

    @property
    def kept_duration(self) -> float:
        return sum(r.duration for r in self.keep_ranges)
