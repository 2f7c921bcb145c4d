"""Tests for manifest/config loading and output naming."""

import json
from pathlib import Path

import pytest

from silencecut.manifest import (
    Manifest,
    SilenceCutConfig,
    default_output_dir,
    default_output_path,
    load_config,
    load_manifest,
)


class TestSilenceCutConfig:
    def test_defaults(self):
        cfg = SilenceCutConfig()
        assert cfg.min_keep_duration == 1.0
        assert cfg.min_silence_duration == 0.2
        assert cfg.padding == 0.4
        assert cfg.threshold_db is None
        assert cfg.threshold_offset_db == 0.0
        assert cfg.close_trailing_silence is False

    def test_detection_min_duration(self):
        assert SilenceCutConfig().detection_min_duration == pytest.approx(0.6)
        assert SilenceCutConfig(min_silence_duration=0.5, padding=0.0).detection_min_duration == 0.5


class TestOutputNaming:
    def test_file(self):
        assert default_output_path(Path("clips/talk.mp4")) == Path("clips/talk.silenceremoved.mp4")

    def test_file_without_extension(self):
        assert default_output_path(Path("talk")) == Path("talk.silenceremoved")

    def test_dir(self):
        assert default_output_dir(Path("media/videos")) == Path("media/videos.silenceremoved")

    def test_dir_trailing_dot(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert default_output_dir(Path(".")) == tmp_path.resolve().parent / (tmp_path.resolve().name + ".silenceremoved")


class TestManifest:
    def test_minimal(self):
        m = Manifest(input=Path("in.mp4"), output=Path("out.mp4"))
        assert m.version == "1"
        assert m.silence_cut == SilenceCutConfig()


class TestLoadManifest:
    def test_load_sample(self, sample_manifest_path: Path):
        m = load_manifest(sample_manifest_path)
        assert m.version == "1"
        assert m.input == Path("video.mp4")
        assert m.output == Path("video_cut.mp4")
        assert m.silence_cut.min_keep_duration == 1.5
        assert m.silence_cut.padding == 0.2
        assert m.silence_cut.min_silence_duration == 0.2

    def test_default_output(self, tmp_path: Path):
        path = tmp_path / "m.json"
        path.write_text(json.dumps({"input": "talk.mkv"}))
        assert load_manifest(path).output == Path("talk.silenceremoved.mkv")

    def test_load_invalid_json(self, tmp_path: Path):
        bad = tmp_path / "bad.json"
        bad.write_text("not json")
        with pytest.raises(json.JSONDecodeError):
            load_manifest(bad)

    def test_load_missing_fields(self, tmp_path: Path):
        incomplete = tmp_path / "incomplete.json"
        incomplete.write_text('{"version": "1"}')
        with pytest.raises(ValueError, match="must contain"):
            load_manifest(incomplete)

    def test_load_non_object(self, tmp_path: Path):
        path = tmp_path / "m.json"
        path.write_text(json.dumps(["input"]))
        with pytest.raises(ValueError, match="JSON object"):
            load_manifest(path)

    def test_unknown_option(self, tmp_path: Path):
        path = tmp_path / "m.json"
        path.write_text(json.dumps({"input": "a.mp4", "silence_cut": {"paddin": 0.1}}))
        with pytest.raises(ValueError, match="paddin"):
            load_manifest(path)


class TestLoadConfig:
    def test_bare_object(self, tmp_path: Path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"threshold_db": -35.0}))
        assert load_config(path).threshold_db == -35.0

    def test_from_manifest(self, sample_manifest_path: Path):
        assert load_config(sample_manifest_path).min_keep_duration == 1.5

    def test_not_an_object(self, tmp_path: Path):
        path = tmp_path / "c.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError, match="JSON object"):
            load_config(path)
