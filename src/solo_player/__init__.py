"""Solo Player - a single-track-at-a-time terminal music player."""

__version__ = "0.1.0"
