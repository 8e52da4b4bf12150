"""Shared fixtures: a recording sink, a controllable clock and a fake probe."""

import threading
from typing import Optional

import pytest

from solo_player.domain.playback import (
    DecodedStream,
    DecodeError,
    MusicPlayer,
    ResourceError,
)


class FakeSink:
    """In-memory AudioSink that records every transport call."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.queue: list[DecodedStream] = []
        self.paused = False
        self.level = 1.0
        self.replaced = 0

    def append(self, stream: DecodedStream) -> None:
        self.calls.append("append")
        self.queue.append(stream)

    def play(self) -> None:
        self.calls.append("play")
        self.paused = False

    def pause(self) -> None:
        self.calls.append("pause")
        self.paused = True

    def stop(self) -> None:
        self.calls.append("stop")
        self.paused = True

    def skip(self) -> None:
        self.calls.append("skip")
        if self.queue:
            self.queue.pop(0)

    def is_paused(self) -> bool:
        return self.paused

    def volume(self) -> float:
        return self.level

    def set_volume(self, volume: float) -> None:
        self.level = volume

    def replace(self) -> "FakeSink":
        self.calls.append("replace")
        self.replaced += 1
        self.queue = []
        self.paused = False
        return self


class FakeClock:
    """Monotonic clock whose time only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProbe:
    """Maps paths to durations; unknown paths fail like a missing file."""

    def __init__(self, durations: Optional[dict[str, float]] = None) -> None:
        self.durations = durations or {}
        self.undecodable: set[str] = set()
        self.broken: set[str] = set()
        self.gates: dict[str, threading.Event] = {}
        self.entered = threading.Event()

    def __call__(self, path: str) -> tuple[DecodedStream, float]:
        if path in self.gates:
            self.entered.set()
            self.gates[path].wait(timeout=5)
        if path in self.broken:
            raise RuntimeError(f"probe crashed on {path}")
        if path in self.undecodable:
            raise DecodeError(f"Could not determine duration of {path}")
        if path not in self.durations:
            raise ResourceError(f"Cannot open {path}")
        return DecodedStream(path=path, name=path.rsplit("/", 1)[-1]), self.durations[path]


@pytest.fixture
def sink() -> FakeSink:
    return FakeSink()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def probe() -> FakeProbe:
    return FakeProbe(
        {
            "/music/a.mp3": 10.0,
            "/music/b.mp3": 20.0,
            "/music/c.mp3": 30.0,
        }
    )


@pytest.fixture
def player(sink: FakeSink, probe: FakeProbe, clock: FakeClock) -> MusicPlayer:
    return MusicPlayer(sink, probe=probe, clock=clock)
