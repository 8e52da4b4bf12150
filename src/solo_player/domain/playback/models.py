"""
Playback data models: per-item play status, playlist items and the playlist.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, NamedTuple, Optional, Union


@dataclass(frozen=True)
class Waiting:
    """Queued, never started."""


@dataclass(frozen=True)
class Playing:
    """Currently sounding.

    Elapsed time is ``now - started_at + already_played``. ``started_at`` is a
    monotonic clock reading in seconds.
    """

    started_at: float
    already_played: float = 0.0

    def elapsed(self, now: float) -> float:
        return now - self.started_at + self.already_played


@dataclass(frozen=True)
class Stopped:
    """Paused; no time accrues until playback continues."""

    already_played: float = 0.0


PlayStatus = Union[Waiting, Playing, Stopped]

WAITING = Waiting()


@dataclass
class PlaylistItem:
    """A queued track.

    ``current_pos`` is a display snapshot refreshed by ``MusicPlayer.tick``;
    ``status`` is authoritative.
    """

    name: str
    duration: float
    current_pos: float = 0.0
    status: PlayStatus = WAITING


@dataclass
class Playlist:
    """Ordered tracks; index 0 is the current item.

    Items are appended at the tail and only ever removed from the head
    (or all at once).
    """

    items: list[PlaylistItem] = field(default_factory=list)

    @property
    def head(self) -> Optional[PlaylistItem]:
        return self.items[0] if self.items else None

    def append(self, item: PlaylistItem) -> None:
        self.items.append(item)

    def pop_head(self) -> Optional[PlaylistItem]:
        """Remove and return the current item, or None when empty."""
        if not self.items:
            return None
        return self.items.pop(0)

    def clear(self) -> None:
        self.items.clear()

    def names(self) -> list[str]:
        return [item.name for item in self.items]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[PlaylistItem]:
        return iter(self.items)


@dataclass(frozen=True)
class Media:
    """Something to add to the playlist: a local path or a remote URL."""

    src: Union[str, Path]

    @property
    def is_remote(self) -> bool:
        return str(self.src).lower().startswith(("http://", "https://"))


class PlayerSnapshot(NamedTuple):
    """Immutable view of the player for display."""

    current_time: float = 0.0
    total_time: float = 0.0
    playlist: tuple[str, ...] = ()
    status: Optional[PlayStatus] = None
    initialized: bool = False
    is_playing: bool = False
    volume: float = 0.0
