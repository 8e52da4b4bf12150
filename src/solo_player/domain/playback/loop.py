"""
Single-owner playback loop.

One background thread owns the MusicPlayer. Other threads never touch it
directly: they put commands on a queue and (optionally) wait for the reply.
When no command arrives within ``tick_interval`` the owner ticks the player.
"""

import queue
import threading
import time
from enum import Enum
from typing import Any, NamedTuple, Optional

from loguru import logger

from .player import MusicPlayer


class CommandKind(Enum):
    ADD = "add"
    PLAY = "play"
    PAUSE = "pause"
    RESUME = "resume"
    STOP = "stop"
    NEXT = "next"
    TICK = "tick"
    VOLUME = "volume"
    SNAPSHOT = "snapshot"


class Command(NamedTuple):
    kind: CommandKind
    args: tuple = ()
    reply: Optional[queue.Queue] = None


class CommandFailed(Exception):
    """Raised to a waiting caller when its command raised in the owner thread."""


_SHUTDOWN = object()


class PlayerLoop:
    """Serializes all access to a MusicPlayer on one owner thread.

    Args:
        player: The player to own; callers must not use it directly afterwards
        tick_interval: Seconds between ticks while idle
    """

    def __init__(self, player: MusicPlayer, tick_interval: float = 0.25):
        self.player = player
        self.tick_interval = tick_interval
        self.commands: queue.Queue = queue.Queue()
        self.running = False
        self.thread: Optional[threading.Thread] = None
        # Guards running against submit() racing a shutdown
        self._lock = threading.Lock()

    def start(self) -> None:
        """Start the owner thread."""
        if self.running:
            return

        self.running = True
        self.thread = threading.Thread(target=self._run, name="player-loop", daemon=True)
        # Keep background chatter out of the console
        self.thread.silent_logging = True
        self.thread.start()
        logger.debug(f"Player loop started (tick_interval={self.tick_interval}s)")

    def stop(self) -> None:
        """Stop the owner thread after it finishes the command in progress."""
        if not self.running:
            return

        with self._lock:
            self.running = False
            self.commands.put(_SHUTDOWN)
        if self.thread and self.thread.is_alive():
            self.thread.join(timeout=2.0)

        # Fail anything the owner never got to
        while True:
            try:
                command = self.commands.get_nowait()
            except queue.Empty:
                break
            if command is not _SHUTDOWN and command.reply is not None:
                command.reply.put((False, "player loop stopped"))
        logger.debug("Player loop stopped")

    def submit(
        self,
        kind: CommandKind,
        *args: Any,
        wait: bool = True,
        timeout: float = 15.0,
    ) -> Any:
        """Queue a command for the owner thread.

        Args:
            kind: Command to run
            *args: Arguments forwarded to the player method
            wait: Block until the owner replies
            timeout: Seconds to wait for the reply

        Returns:
            The player method's return value, or None when ``wait`` is False

        Raises:
            CommandFailed: If the command raised in the owner thread, or the
                loop is not running or stopped before reaching it
            TimeoutError: If no reply arrived in time
        """
        reply: Optional[queue.Queue] = queue.Queue(maxsize=1) if wait else None
        with self._lock:
            if not self.running:
                raise CommandFailed(f"{kind.value} failed: player loop is not running")
            self.commands.put(Command(kind, args, reply))
        if reply is None:
            return None

        try:
            ok, value = reply.get(timeout=timeout)
        except queue.Empty:
            raise TimeoutError(f"No reply to {kind.value} within {timeout}s") from None

        if not ok:
            raise CommandFailed(f"{kind.value} failed: {value}")
        return value

    def add(self, path: str, once: bool = False) -> bool:
        return self.submit(CommandKind.ADD, path, once)

    def play(self) -> bool:
        return self.submit(CommandKind.PLAY)

    def pause(self) -> bool:
        return self.submit(CommandKind.PAUSE)

    def resume(self) -> bool:
        return self.submit(CommandKind.RESUME)

    def stop_playback(self) -> bool:
        return self.submit(CommandKind.STOP)

    def next(self) -> bool:
        return self.submit(CommandKind.NEXT)

    def set_volume(self, volume: float) -> bool:
        return self.submit(CommandKind.VOLUME, volume)

    def snapshot(self):
        return self.submit(CommandKind.SNAPSHOT)

    def execute(self, command: Command) -> Any:
        """Run one command against the player. Owner thread only."""
        player = self.player
        handlers = {
            CommandKind.ADD: player.add_to_list,
            CommandKind.PLAY: player.play,
            CommandKind.PAUSE: player.pause,
            CommandKind.RESUME: player.resume,
            CommandKind.STOP: player.stop,
            CommandKind.NEXT: player.next,
            CommandKind.TICK: player.tick,
            CommandKind.VOLUME: player.set_volume,
            CommandKind.SNAPSHOT: player.snapshot,
        }
        return handlers[command.kind](*command.args)

    def _run(self) -> None:
        next_tick = time.monotonic() + self.tick_interval

        while self.running:
            now = time.monotonic()
            if now >= next_tick:
                command = Command(CommandKind.TICK)
            else:
                try:
                    command = self.commands.get(timeout=next_tick - now)
                except queue.Empty:
                    continue

            if command is _SHUTDOWN:
                break

            try:
                result = (True, self.execute(command))
            except Exception as e:
                logger.exception(f"Player command failed: {command.kind.value}")
                result = (False, e)

            if command.reply is not None:
                command.reply.put(result)

            if command.kind is CommandKind.TICK:
                next_tick = time.monotonic() + self.tick_interval

        self.running = False
