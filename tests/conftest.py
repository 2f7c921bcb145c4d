"""Shared test fixtures."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

VOLUMEDETECT_STDERR = """\
Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'video.mp4':
  Duration: 00:00:30.00, start: 0.000000, bitrate: 512 kb/s
[Parsed_volumedetect_0 @ 0x55d1c0a3c2c0] n_samples: 2646000
[Parsed_volumedetect_0 @ 0x55d1c0a3c2c0] mean_volume: -27.4 dB
[Parsed_volumedetect_0 @ 0x55d1c0a3c2c0] max_volume: -4.1 dB
[Parsed_volumedetect_0 @ 0x55d1c0a3c2c0] histogram_4db: 12
"""

SILENCEDETECT_STDERR = """\
Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'video.mp4':
[silencedetect @ 0x55d1c0a3c2c0] silence_start: 1.5
[silencedetect @ 0x55d1c0a3c2c0] silence_end: 3.2 | silence_duration: 1.7
[silencedetect @ 0x55d1c0a3c2c0] silence_start: 7
[silencedetect @ 0x55d1c0a3c2c0] silence_end: 9.5 | silence_duration: 2.5
size=N/A time=00:00:30.00 bitrate=N/A speed= 450x
"""


@pytest.fixture
def sample_manifest_path() -> Path:
    return FIXTURES_DIR / "sample_manifest.json"
