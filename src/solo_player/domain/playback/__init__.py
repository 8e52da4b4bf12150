"""Playback domain - state machine, playlist and audio output.

This domain handles:
- Per-item play status transitions (waiting, playing, stopped)
- Time accounting from clock snapshots rather than device polling
- Playlist advance (auto-removal of finished tracks, explicit skip)
- MPV integration via JSON IPC as the audio sink
"""

from .errors import DecodeError, PlaybackError, ResourceError
from .loop import Command, CommandFailed, CommandKind, PlayerLoop
from .media import DecodedStream, open_and_probe
from .models import (
    Media,
    PlayerSnapshot,
    Playing,
    Playlist,
    PlaylistItem,
    PlayStatus,
    Stopped,
    Waiting,
)
from .player import MusicPlayer, format_time
from .sink import AudioSink, MpvSink, check_mpv_available

__all__ = [
    # Errors
    "PlaybackError",
    "ResourceError",
    "DecodeError",
    # Models
    "Media",
    "PlayStatus",
    "Waiting",
    "Playing",
    "Stopped",
    "PlaylistItem",
    "Playlist",
    "PlayerSnapshot",
    # Media
    "DecodedStream",
    "open_and_probe",
    # Sink
    "AudioSink",
    "MpvSink",
    "check_mpv_available",
    # Player
    "MusicPlayer",
    "format_time",
    # Loop
    "PlayerLoop",
    "Command",
    "CommandKind",
    "CommandFailed",
]
