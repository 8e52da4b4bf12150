"""
Playback state machine for Solo Player.

Progress is tracked from monotonic clock snapshots plus accumulated play time
instead of polling the output device for its position. Callers drive time
accounting by invoking ``tick()`` periodically (see ``PlayerLoop``).
"""

import time
from typing import Callable, Optional, Union

from loguru import logger

from .errors import PlaybackError, ResourceError
from .media import DecodedStream, open_and_probe
from .models import (
    Media,
    Playing,
    PlayerSnapshot,
    Playlist,
    PlaylistItem,
    Stopped,
    Waiting,
)
from .sink import AudioSink

Probe = Callable[[str], tuple[DecodedStream, float]]


class MusicPlayer:
    """Single-track-at-a-time player over one AudioSink.

    The head of ``playlist`` is the current item and the only one that ever
    leaves ``Waiting``. Transport operations never raise; they return whether
    the requested effect happened.
    """

    def __init__(
        self,
        sink: AudioSink,
        probe: Probe = open_and_probe,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.current_time = 0.0
        self.total_time = 0.0
        self.playlist = Playlist()
        self.initialized = False
        self._sink = sink
        self._probe = probe
        self._clock = clock

    def add_to_list(self, media: Union[Media, str], once: bool = False) -> bool:
        """Queue a track and start playback.

        Args:
            media: Media (or plain local path) to add
            once: Discard the current queue and play this track now

        Returns:
            True if the track was queued, False if it couldn't be opened or probed
        """
        if not isinstance(media, Media):
            media = Media(media)

        try:
            if media.is_remote:
                raise ResourceError(f"Remote sources are not supported: {media.src}")
            stream, duration = self._probe(str(media.src))
        except PlaybackError as e:
            logger.warning(f"Failed to add {media.src}: {e}")
            return False

        if not self.initialized:
            self.initialized = True
            self._start_polling()

        if once:
            self._sink.stop()
            self._sink = self._sink.replace()
            self.playlist.clear()
            logger.debug("Cleared playlist for immediate playback")

        self._sink.append(stream)
        self.playlist.append(PlaylistItem(name=stream.name, duration=duration))
        logger.info(
            f"Queued {stream.name} ({duration:.2f}s), playlist length={len(self.playlist)}"
        )

        # Reflect the new item right away instead of on the next periodic tick
        self.play()
        self.tick()
        return True

    def play(self) -> bool:
        """Start or continue the head item. Safe to call with an empty playlist."""
        self._sink.play()
        item = self.playlist.head
        if item is None:
            return True

        status = item.status
        if isinstance(status, Waiting):
            item.status = Playing(self._clock(), 0.0)
        elif isinstance(status, Stopped):
            item.status = Playing(self._clock(), status.already_played)
        logger.debug(f"play: {item.name} -> {item.status}")
        return True

    def pause(self) -> bool:
        self._sink.pause()
        item = self.playlist.head
        if item is not None and isinstance(item.status, Playing):
            played = min(item.status.elapsed(self._clock()), item.duration)
            item.status = Stopped(played)
            logger.debug(f"pause: {item.name} -> {item.status}")
        return True

    def resume(self) -> bool:
        """Continue a paused head item.

        Unlike ``play``, a ``Waiting`` head is left untouched: resume only
        continues something that was already started.
        """
        self._sink.play()
        item = self.playlist.head
        if item is not None and isinstance(item.status, Stopped):
            item.status = Playing(self._clock(), item.status.already_played)
            logger.debug(f"resume: {item.name} -> {item.status}")
        return True

    def stop(self) -> bool:
        """Halt the sink. Item statuses are left as they are."""
        self._sink.stop()
        return True

    def next(self) -> bool:
        """Drop the head item so the following one becomes current.

        The new head keeps its status; call ``play()`` to start it.

        Returns:
            False if there is nothing to skip to
        """
        if len(self.playlist) <= 1:
            return False

        self.stop()
        self._sink.skip()
        skipped = self.playlist.pop_head()
        self._reset_progress()
        logger.info(f"Skipped {skipped.name}, now at {self.playlist.head.name}")
        return True

    def get_progress(self) -> tuple[float, float]:
        """Return (current, total) seconds as of the last tick."""
        return self.current_time, self.total_time

    def is_playing(self) -> bool:
        return self.initialized and not self._sink.is_paused() and len(self.playlist) > 0

    def tick(self) -> None:
        """Reconcile the head item's status with elapsed time.

        Retires the head once its elapsed time reaches its duration, without
        starting the next item.
        """
        is_playing = self.is_playing()
        item = self.playlist.head

        if item is None:
            # Don't leave the sink running with nothing queued
            self.stop()
            return

        status = item.status
        if isinstance(status, Waiting):
            # The sink was started without going through play()
            if is_playing:
                item.status = Playing(self._clock(), 0.0)
        elif isinstance(status, Playing):
            elapsed = status.elapsed(self._clock())
            if elapsed >= item.duration:
                self.playlist.pop_head()
                self._reset_progress()
                logger.info(f"Finished {item.name}, {len(self.playlist)} remaining")
                if not self.playlist.items:
                    self.stop()
            else:
                item.current_pos = elapsed
                self.current_time = elapsed
                self.total_time = item.duration
        elif isinstance(status, Stopped):
            item.current_pos = status.already_played
            self.current_time = status.already_played
            self.total_time = item.duration

    def volume(self) -> float:
        return self._sink.volume()

    def set_volume(self, volume: float) -> bool:
        self._sink.set_volume(max(0.0, volume))
        return True

    def playing_song(self) -> Optional[PlaylistItem]:
        return self.playlist.head

    def snapshot(self) -> PlayerSnapshot:
        head = self.playlist.head
        return PlayerSnapshot(
            current_time=self.current_time,
            total_time=self.total_time,
            playlist=tuple(self.playlist.names()),
            status=head.status if head is not None else None,
            initialized=self.initialized,
            is_playing=self.is_playing(),
            volume=self.volume(),
        )

    def _reset_progress(self) -> None:
        self.current_time = 0.0
        self.total_time = 0.0

    def _start_polling(self) -> None:
        # Periodic ticking is owned by PlayerLoop, not by the player itself
        logger.debug("Player initialized; ticks are driven externally")


def format_time(seconds: float) -> str:
    """Format time in seconds to MM:SS format."""
    if seconds < 0:
        return "00:00"

    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes:02d}:{secs:02d}"
