#!/usr/bin/env python3
"""Generate a synthetic test video for silencecut pipeline testing.

Produces a ~16-second clip alternating tone+color with silence+black:
  0-3s   440 Hz tone + blue
  3-6s   silence + black
  6-10s  880 Hz tone + red
  10-12s silence + black
  12-16s 660 Hz tone + green

With default settings silencecut should keep roughly 0-3.2, 5.8-10.2 and
11.8-16, about 11.8s in total.
"""

import subprocess
import sys
from pathlib import Path

# (kind, seconds, tone Hz or None, color)
LAYOUT = [
    ("tone", 3, 440, "blue"),
    ("gap", 3, None, "black"),
    ("tone", 4, 880, "red"),
    ("gap", 2, None, "black"),
    ("tone", 4, 660, "green"),
]


def build_filter_complex(layout=LAYOUT) -> str:
    audio, video, a_labels, v_labels = [], [], [], []
    for i, (kind, seconds, freq, color) in enumerate(layout):
        if kind == "tone":
            audio.append(f"sine=f={freq}:d={seconds}:sample_rate=44100[a{i}]")
        else:
            audio.append(f"anullsrc=r=44100:cl=mono,atrim=duration={seconds}[a{i}]")
        video.append(f"color=c={color}:s=320x240:d={seconds}:r=30[v{i}]")
        a_labels.append(f"[a{i}]")
        v_labels.append(f"[v{i}]")

    n = len(layout)
    audio.append(f"{''.join(a_labels)}concat=n={n}:v=0:a=1[aout]")
    video.append(f"{''.join(v_labels)}concat=n={n}:v=1:a=0[vout]")
    return ";".join(audio + video)


def generate_test_video(output: Path) -> Path:
    output.parent.mkdir(parents=True, exist_ok=True)
    cmd = [
        "ffmpeg", "-y",
        "-filter_complex", build_filter_complex(),
        "-map", "[vout]",
        "-map", "[aout]",
        "-c:v", "libx264",
        "-c:a", "aac",
        "-shortest",
        str(output),
    ]
    subprocess.run(cmd, check=True, capture_output=True)
    return output


if __name__ == "__main__":
    out = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("tests/fixtures/synthetic.mp4")
    generate_test_video(out)
    print(f"Generated: {out}")
