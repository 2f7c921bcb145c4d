"""Remove silent segments from videos with ffmpeg."""

__version__ = "0.1.0"
