"""Thin CLI entry point — builds a Manifest/config and calls the engine."""

import argparse
import logging
import sys
from pathlib import Path

from silencecut import ffutil
from silencecut.diagnostics import ParseError
from silencecut.engine import process, process_directory
from silencecut.manifest import (
    Manifest,
    SilenceCutConfig,
    default_output_path,
    load_config,
    load_manifest,
)

logger = logging.getLogger("silencecut")

MODES = ("file", "dir")


def _tuning_parser() -> argparse.ArgumentParser:
    defaults = SilenceCutConfig()
    p = argparse.ArgumentParser(add_help=False)
    p.add_argument("--config", type=Path, help="JSON file with silence_cut options")
    p.add_argument("--min-keep", type=float, help=f"Shortest non-silent span to keep (default {defaults.min_keep_duration}s)")
    p.add_argument("--min-silence", type=float, help=f"Shortest silence to cut (default {defaults.min_silence_duration}s)")
    p.add_argument("--padding", type=float, help=f"Silence left around each cut, split across both sides (default {defaults.padding}s)")
    p.add_argument("--threshold", type=float, help="Absolute silence threshold in dB (default: file mean volume)")
    p.add_argument("--threshold-offset", type=float, help="dB below the mean volume that counts as silence (default 0)")
    p.add_argument("--close-trailing-silence", action="store_true", default=None,
                   help="Cut silence that runs to the end of the file")
    p.add_argument("--verbose", "-v", action="store_true", help="Log every ffmpeg invocation")
    return p


def build_parser() -> argparse.ArgumentParser:
    tuning = _tuning_parser()
    parser = argparse.ArgumentParser(
        prog="silencecut",
        description="Remove silent segments from videos with ffmpeg.",
    )
    sub = parser.add_subparsers(dest="mode")

    f = sub.add_parser("file", parents=[tuning], help="Process one video file")
    f.add_argument("input", nargs="?", type=Path, help="Input video file")
    f.add_argument("output", nargs="?", type=Path, help="Output path (default: <name>.silenceremoved<ext>)")
    f.add_argument("--manifest", "-m", type=Path, help="Path to a JSON manifest file")

    d = sub.add_parser("dir", parents=[tuning], help="Process every video in a directory")
    d.add_argument("input", type=Path, help="Input directory")
    d.add_argument("output", nargs="?", type=Path, help="Output directory (default: <dir>.silenceremoved)")
    d.add_argument("--recursive", "-r", action="store_true", help="Descend into subdirectories")

    return parser


def build_config(args: argparse.Namespace, base: SilenceCutConfig | None = None) -> SilenceCutConfig:
    if args.config:
        config = load_config(args.config)
    else:
        config = base or SilenceCutConfig()
    overrides = {
        "min_keep_duration": args.min_keep,
        "min_silence_duration": args.min_silence,
        "padding": args.padding,
        "threshold_db": args.threshold,
        "threshold_offset_db": args.threshold_offset,
        "close_trailing_silence": args.close_trailing_silence,
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(config, name, value)
    return config


def _normalize_argv(argv: list[str]) -> list[str]:
    """Unknown first tokens fall back to file mode with the full argument list."""
    if argv and argv[0] not in MODES and argv[0] not in ("-h", "--help"):
        logger.warning("Unknown mode %r, falling back to file mode", argv[0])
        return ["file", *argv]
    return argv


def on_progress(stage: str, frac: float) -> None:
    print(f"  [{frac:4.0%}] {stage}")


def _run_file(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    if args.manifest:
        m = load_manifest(args.manifest)
        m.silence_cut = build_config(args, base=m.silence_cut)
    elif args.input:
        m = Manifest(
            input=args.input,
            output=args.output or default_output_path(args.input),
            silence_cut=build_config(args),
        )
    else:
        parser.error("provide either an INPUT argument or --manifest")

    result = process(m, on_progress=on_progress)

    print()
    if not result.written:
        print(f"No non-silent content in {m.input}; nothing written.")
        return
    print(f"Done! Output: {result.output_path}")
    print(f"  Duration: {result.duration_original:.1f}s -> {result.duration_final:.1f}s")
    if result.segments_removed:
        print(f"  Silent segments removed: {result.segments_removed}")


def _run_dir(args: argparse.Namespace) -> None:
    result = process_directory(
        args.input,
        args.output,
        config=build_config(args),
        recursive=args.recursive,
        on_progress=on_progress if args.verbose else None,
    )

    print()
    print(f"Done! Output directory: {result.output_dir}")
    print(f"  Processed: {len(result.processed)}")
    if result.skipped:
        print(f"  Already done: {len(result.skipped)}")
    if result.failed:
        print(f"  Failed (ignored): {len(result.failed)}")
        for path in result.failed:
            print(f"    {path}")


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    argv = _normalize_argv(list(sys.argv[1:] if argv is None else argv))
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.mode is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        if args.mode == "dir":
            _run_dir(args)
        else:
            _run_file(args, parser)
    except (ffutil.FFmpegNotFoundError, ffutil.ExternalToolError, ParseError, ValueError, OSError) as err:
        print(f"Error: {err}", file=sys.stderr)
        sys.exit(1)
