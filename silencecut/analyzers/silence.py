"""Silence detection analyzer and keep-range planner."""

import logging
from pathlib import Path
from typing import Callable

from silencecut import ffutil
from silencecut.manifest import SilenceCutConfig
from silencecut.models import MediaAnalysis, MediaInfo, TimeRange

logger = logging.getLogger(__name__)


def plan_keep_ranges(
    silences: list[TimeRange],
    duration: float,
    config: SilenceCutConfig,
) -> list[TimeRange]:
    """Return the ranges between silences worth keeping, padded at inner cuts.

    Gaps no longer than ``min_keep_duration`` are dropped. Each kept range gets
    ``padding / 2`` of the neighbouring silence on every side that borders a
    cut; the start of the first range and the end of the last are left alone.
    """
    unpadded: list[TimeRange] = []
    cursor = 0.0
    for silence in silences:
        if silence.start - cursor > config.min_keep_duration:
            unpadded.append(TimeRange(start=cursor, end=silence.start))
        cursor = silence.end
    if duration - cursor > config.min_keep_duration:
        unpadded.append(TimeRange(start=cursor, end=duration))

    half = config.padding / 2
    last = len(unpadded) - 1
    keep: list[TimeRange] = []
    for i, r in enumerate(unpadded):
        start = r.start if i == 0 else r.start - half
        end = r.end if i == last else r.end + half
        if keep and start < keep[-1].end:
            start = keep[-1].end
        start, end = max(start, 0.0), min(end, duration)
        # Swallowed by the previous range's padding
        if end <= start:
            continue
        keep.append(TimeRange(start=start, end=end))
    return keep


def analyze_silence(
    input_path: Path,
    config: SilenceCutConfig,
    on_progress: Callable[[str, float], None] | None = None,
) -> MediaAnalysis:
    """Probe, measure volume, detect silence and plan keep ranges for one file."""

    def _progress(stage: str, frac: float) -> None:
        if on_progress:
            on_progress(stage, frac)

    _progress("Probing duration", 0.0)
    duration = ffutil.probe_duration(input_path)

    _progress("Measuring mean volume", 0.1)
    mean_volume = ffutil.detect_mean_volume(input_path)

    if config.threshold_db is not None:
        threshold_db = config.threshold_db
    else:
        threshold_db = mean_volume - config.threshold_offset_db
    logger.debug(
        "%s: duration=%.3fs mean_volume=%.1fdB threshold=%.1fdB",
        input_path, duration, mean_volume, threshold_db,
    )

    _progress("Scanning audio for silence", 0.5)
    silences = ffutil.detect_silence(
        input_path,
        threshold_db=threshold_db,
        min_duration=config.detection_min_duration,
        duration=duration if config.close_trailing_silence else None,
    )

    keep_ranges = plan_keep_ranges(silences, duration, config)
    _progress("Analysis complete", 1.0)

    return MediaAnalysis(
        media=MediaInfo(path=input_path, duration=duration, mean_volume=mean_volume),
        threshold_db=threshold_db,
        silences=silences,
        keep_ranges=keep_ranges,
    )
