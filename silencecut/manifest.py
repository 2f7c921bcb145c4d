"""JSON manifest schema — the contract between CLI and engine."""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path

OUTPUT_SUFFIX = ".silenceremoved"


@dataclass
class SilenceCutConfig:
    """Thresholds for silence detection and keep-range planning.

    ``threshold_db`` fixes the silencedetect noise floor; when left as None the
    floor is the file's mean volume minus ``threshold_offset_db``.
    """

    min_keep_duration: float = 1.0
    min_silence_duration: float = 0.2
    padding: float = 0.4
    threshold_db: float | None = None
    threshold_offset_db: float = 0.0
    close_trailing_silence: bool = False

    @property
    def detection_min_duration(self) -> float:
        # Detected silences must be long enough to give up padding and still be cut
        return self.min_silence_duration + self.padding


@dataclass
class Manifest:
    """One single-file job."""

    input: Path
    output: Path
    version: str = "1"
    silence_cut: SilenceCutConfig = field(default_factory=SilenceCutConfig)


def default_output_path(input_path: Path) -> Path:
    """``clip.mp4`` -> ``clip.silenceremoved.mp4`` next to the input."""
    return input_path.with_name(input_path.stem + OUTPUT_SUFFIX + input_path.suffix)


def default_output_dir(input_dir: Path) -> Path:
    """``videos/`` -> sibling ``videos.silenceremoved/``."""
    input_dir = Path(input_dir)
    if input_dir.name in ("", ".", ".."):
        input_dir = input_dir.resolve()
    return input_dir.with_name(input_dir.name + OUTPUT_SUFFIX)


def config_from_dict(data: dict) -> SilenceCutConfig:
    known = {f.name for f in fields(SilenceCutConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown silence_cut option(s): {', '.join(unknown)}")
    return SilenceCutConfig(**data)


def load_config(path: str | Path) -> SilenceCutConfig:
    """Load a SilenceCutConfig from a JSON file.

    Accepts either a bare options object or a manifest carrying ``silence_cut``.
    """
    data = json.loads(Path(path).read_text())
    if not isinstance(data, dict):
        raise ValueError("Config file must contain a JSON object")
    if "silence_cut" in data:
        data = data["silence_cut"]
    return config_from_dict(data)


def load_manifest(path: str | Path) -> Manifest:
    """Load and validate a manifest from a JSON file."""
    path = Path(path)
    data = json.loads(path.read_text())

    if not isinstance(data, dict):
        raise ValueError("Manifest must contain a JSON object")
    if "input" not in data:
        raise ValueError("Manifest must contain an 'input' field")

    input_path = Path(data["input"])
    output_path = Path(data["output"]) if data.get("output") else default_output_path(input_path)
    silence_cut = config_from_dict(data["silence_cut"]) if "silence_cut" in data else SilenceCutConfig()

    return Manifest(
        version=data.get("version", "1"),
        input=input_path,
        output=output_path,
        silence_cut=silence_cut,
    )
