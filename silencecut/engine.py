"""Orchestrator — runs silence removal over a single file or a directory."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from silencecut import ffutil
from silencecut.analyzers.silence import analyze_silence
from silencecut.editors.cut import apply_cuts
from silencecut.manifest import Manifest, SilenceCutConfig, default_output_dir
from silencecut.models import TimeRange

logger = logging.getLogger(__name__)


@dataclass
class EngineResult:
    input_path: Path
    output_path: Path | None = None
    segments_removed: int = 0
    duration_original: float = 0.0
    duration_final: float = 0.0
    keep_ranges: list[TimeRange] = field(default_factory=list)

    @property
    def written(self) -> bool:
        return self.output_path is not None


@dataclass
class DirectoryResult:
    output_dir: Path
    processed: list[EngineResult] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    failed: list[Path] = field(default_factory=list)
    ignored: list[Path] = field(default_factory=list)

    def merge(self, other: "DirectoryResult") -> None:
        self.processed.extend(other.processed)
        self.skipped.extend(other.skipped)
        self.failed.extend(other.failed)
        self.ignored.extend(other.ignored)


def _process_file(
    manifest: Manifest,
    on_progress: Callable[[str, float], None] | None = None,
) -> EngineResult:
    def _progress(stage: str, frac: float) -> None:
        if on_progress:
            on_progress(stage, frac)

    def _sub_progress(base: float, span: float):
        """Map a sub-step's [0,1] onto [base, base+span] of the whole file."""
        def cb(stage: str, frac: float) -> None:
            _progress(stage, base + frac * span)
        return cb

    analysis = analyze_silence(
        manifest.input,
        manifest.silence_cut,
        on_progress=_sub_progress(0.0, 0.4),
    )
    result = EngineResult(
        input_path=manifest.input,
        segments_removed=len(analysis.silences),
        duration_original=analysis.media.duration,
        keep_ranges=analysis.keep_ranges,
    )

    if not analysis.keep_ranges:
        logger.info("%s: nothing left after removing silence, no output written", manifest.input)
        _progress("Nothing to keep", 1.0)
        return result

    stage = f"Encoding {len(analysis.keep_ranges)} segments"
    _progress(stage, 0.4)
    apply_cuts(
        manifest.input,
        analysis.keep_ranges,
        manifest.output,
        on_progress=lambda frac: _progress(stage, 0.4 + frac * 0.55),
    )

    _progress("Verifying result", 0.95)
    result.output_path = manifest.output
    result.duration_final = ffutil.probe_duration(manifest.output)
    _progress("Done", 1.0)
    return result


def process(
    manifest: Manifest,
    on_progress: Callable[[str, float], None] | None = None,
) -> EngineResult:
    """Remove silence from one file.

    Args:
        manifest: Input/output paths and silence thresholds.
        on_progress: Optional callback(stage_name, fraction_complete).

    When no range survives planning, no output file is written and the
    result's ``output_path`` is None.
    """
    ffutil.check_ffmpeg()
    return _process_file(manifest, on_progress=on_progress)


def _process_tree(
    input_dir: Path,
    output_dir: Path,
    config: SilenceCutConfig,
    recursive: bool,
    skip_dir: Path,
    on_progress: Callable[[str, float], None] | None,
) -> DirectoryResult:
    result = DirectoryResult(output_dir=output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    for entry in sorted(input_dir.iterdir()):
        target = output_dir / entry.name

        if entry.is_dir():
            if recursive and entry.resolve() != skip_dir:
                result.merge(
                    _process_tree(entry, target, config, recursive, skip_dir, on_progress)
                )
            continue

        if ffutil.is_media_file(target):
            logger.info("Skipping %s: %s already exists", entry, target)
            result.skipped.append(entry)
            continue

        if not ffutil.is_media_file(entry):
            logger.debug("Ignoring non-media entry %s", entry)
            result.ignored.append(entry)
            continue

        logger.info("Processing %s", entry)
        manifest = Manifest(input=entry, output=target, silence_cut=config)
        try:
            result.processed.append(_process_file(manifest, on_progress=on_progress))
        except ffutil.ExternalToolError as err:
            if not err.is_transient:
                raise
            logger.warning("Ignoring unrecoverable ffmpeg error for %s: %s", entry, err)
            result.failed.append(entry)

    return result


def process_directory(
    input_dir: Path,
    output_dir: Path | None = None,
    config: SilenceCutConfig | None = None,
    recursive: bool = False,
    on_progress: Callable[[str, float], None] | None = None,
) -> DirectoryResult:
    """Remove silence from every media file in input_dir.

    Outputs mirror input names under output_dir (default: sibling
    ``<name>.silenceremoved``). Entries whose output already probes as media
    are skipped. Only ffmpeg's "too many packets buffered" failure is tolerated
    per file; any other error aborts the run.
    """
    ffutil.check_ffmpeg()
    input_dir = Path(input_dir)
    if not input_dir.is_dir():
        raise NotADirectoryError(f"Not a directory: {input_dir}")
    output_dir = Path(output_dir) if output_dir else default_output_dir(input_dir)
    return _process_tree(
        input_dir,
        output_dir,
        config or SilenceCutConfig(),
        recursive,
        output_dir.resolve(),
        on_progress,
    )
