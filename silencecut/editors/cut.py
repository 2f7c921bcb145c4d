"""Silence-cut editor — extracts keep ranges into chunks and joins them."""

import logging
import shutil
from pathlib import Path
from typing import Callable

from silencecut import ffutil
from silencecut.models import TimeRange

logger = logging.getLogger(__name__)

CONCAT_LIST_NAME = "filelist.txt"


def chunk_dir_for(output_path: Path) -> Path:
    return output_path.with_name(output_path.name + ".tmp")


def chunk_name(time_range: TimeRange, suffix: str) -> str:
    """Deterministic chunk filename, so a rerun rewrites the same chunk."""
    return f"{time_range.start:.3f}-{time_range.end:.3f}{suffix}"


def apply_cuts(
    input_path: Path,
    keep_ranges: list[TimeRange],
    output_path: Path,
    on_progress: Callable[[float], None] | None = None,
) -> Path:
    """Extract each keep range and concatenate the chunks into output_path.

    The chunk directory is removed only after a successful concat; if any
    ffmpeg call fails the chunks are left on disk.
    """
    if not keep_ranges:
        raise ValueError("No keep ranges; entire video would be removed")

    chunk_dir = chunk_dir_for(output_path)
    chunk_dir.mkdir(parents=True, exist_ok=True)

    chunks: list[Path] = []
    for i, time_range in enumerate(keep_ranges):
        chunk_path = chunk_dir / chunk_name(time_range, output_path.suffix)
        logger.debug("Extracting %.3f-%.3f -> %s", time_range.start, time_range.end, chunk_path)
        ffutil.extract_segment(input_path, time_range, chunk_path)
        chunks.append(chunk_path)
        if on_progress:
            on_progress((i + 1) / (len(keep_ranges) + 1))

    list_path = ffutil.write_concat_list(chunks, chunk_dir / CONCAT_LIST_NAME)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    ffutil.concat_files(list_path, output_path)

    shutil.rmtree(chunk_dir)
    if on_progress:
        on_progress(1.0)
    return output_path
