"""
Audio output sinks.

``AudioSink`` is the transport surface the player drives. ``MpvSink`` implements
it on top of an mpv process controlled through its JSON IPC socket.
"""

import json
import os
import socket
import subprocess
import tempfile
import time
from pathlib import Path
from typing import Any, Optional, Protocol

from loguru import logger

from .media import DecodedStream


class AudioSink(Protocol):
    """Output device accepting decoded audio and transport commands."""

    def append(self, stream: DecodedStream) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def stop(self) -> None:
        """Halt output without advancing past the current entry."""
        ...

    def skip(self) -> None:
        """Drop the current entry so the next queued one becomes current."""
        ...

    def is_paused(self) -> bool: ...

    def volume(self) -> float: ...

    def set_volume(self, volume: float) -> None: ...

    def replace(self) -> "AudioSink":
        """Discard everything queued and return an empty sink."""
        ...


def check_mpv_available() -> bool:
    """Check if MPV is available on the system."""
    try:
        result = subprocess.run(
            ["mpv", "--version"], capture_output=True, text=True, timeout=5
        )
        return result.returncode == 0
    except (subprocess.SubprocessError, FileNotFoundError, OSError):
        return False


def _mpv_request(socket_path: Optional[str], command: list[Any]) -> Optional[dict]:
    """Send one JSON IPC command to MPV and return the decoded reply."""
    if not socket_path or not os.path.exists(socket_path):
        return None

    try:
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
            sock.settimeout(2.0)
            sock.connect(socket_path)

            command_json = json.dumps({"command": command}) + "\n"
            sock.send(command_json.encode("utf-8"))

            response = sock.recv(4096).decode("utf-8").strip()
    except (socket.error, OSError):
        return None

    # MPV may interleave event lines; the reply is the line carrying "error"
    for line in response.splitlines():
        try:
            data = json.loads(line)
        except json.JSONDecodeError:
            continue
        if "error" in data:
            return data
    return None


def send_mpv_command(socket_path: Optional[str], command: list[Any]) -> bool:
    """Send JSON IPC command to MPV."""
    reply = _mpv_request(socket_path, command)
    return reply is not None and reply.get("error") == "success"


def get_mpv_property(socket_path: Optional[str], property_name: str) -> Any:
    """Get a property value from MPV."""
    reply = _mpv_request(socket_path, ["get_property", property_name])
    if reply is not None and reply.get("error") == "success":
        return reply.get("data")
    return None


class MpvSink:
    """AudioSink backed by an idle mpv process.

    Appended streams become entries in mpv's internal playlist. Volume is
    exposed as 0.0-1.0 and mapped onto mpv's 0-100 scale.
    """

    def __init__(self, socket_path: str, process: Optional[subprocess.Popen] = None):
        self.socket_path = socket_path
        self.process = process
        self._paused = False
        self._volume = 1.0

    @classmethod
    def start(cls, socket_path: Optional[str] = None, volume: int = 50) -> "MpvSink":
        """Start MPV with JSON IPC and return a sink bound to it.

        Raises:
            RuntimeError: If mpv cannot be started or its socket never answers
        """
        if not socket_path:
            temp_dir = Path(tempfile.gettempdir())
            socket_path = str(temp_dir / f"solo-player-mpv-{os.getpid()}")

        logger.info(f"Starting MPV player with socket: {socket_path}")

        if os.path.exists(socket_path):
            logger.debug(f"Removing existing socket: {socket_path}")
            os.unlink(socket_path)

        cmd = [
            "mpv",
            "--idle=yes",
            "--no-video",
            "--no-terminal",
            f"--input-ipc-server={socket_path}",
            f"--volume={volume}",
            "--keep-open=no",
            "--load-scripts=no",
        ]

        try:
            process = subprocess.Popen(
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                stdin=subprocess.DEVNULL,
            )
        except (subprocess.SubprocessError, OSError) as e:
            raise RuntimeError(f"Failed to start MPV: {e}") from e

        timeout = 5.0
        start_time = time.time()
        while not os.path.exists(socket_path):
            if time.time() - start_time > timeout:
                process.kill()
                raise RuntimeError(f"MPV socket creation timeout after {timeout}s")
            time.sleep(0.1)

        if not send_mpv_command(socket_path, ["get_property", "idle-active"]):
            process.kill()
            raise RuntimeError("MPV socket connection test failed")

        logger.info("MPV started successfully")
        sink = cls(socket_path, process)
        sink._volume = max(0, min(100, volume)) / 100
        return sink

    def close(self) -> None:
        """Stop MPV process and cleanup."""
        if self.process:
            try:
                self.process.kill()
                self.process.wait(timeout=2.0)
            except (OSError, subprocess.TimeoutExpired):
                pass  # Process already terminated

        if self.socket_path and os.path.exists(self.socket_path):
            try:
                os.unlink(self.socket_path)
            except OSError:
                pass

    def _send(self, *command: Any) -> bool:
        success = send_mpv_command(self.socket_path, list(command))
        if not success:
            logger.warning(f"MPV command failed: {list(command)}")
        return success

    def append(self, stream: DecodedStream) -> None:
        self._send("loadfile", stream.path, "append-play")

    def play(self) -> None:
        if self._send("set_property", "pause", False):
            self._paused = False

    def pause(self) -> None:
        if self._send("set_property", "pause", True):
            self._paused = True

    def stop(self) -> None:
        """Pause and rewind the current entry, keeping the queue intact."""
        if get_mpv_property(self.socket_path, "idle-active") is True:
            # Nothing loaded; only the transport state needs settling
            if not self._paused:
                self.pause()
            return

        self.pause()
        self._send("seek", 0, "absolute")

    def skip(self) -> None:
        """Remove the current entry; MPV loads the next one under the same pause state."""
        self._send("playlist-remove", "current")

    def is_paused(self) -> bool:
        paused = get_mpv_property(self.socket_path, "pause")
        if paused is not None:
            self._paused = bool(paused)
        return self._paused

    def volume(self) -> float:
        volume = get_mpv_property(self.socket_path, "volume")
        if volume is not None:
            self._volume = float(volume) / 100
        return self._volume

    def set_volume(self, volume: float) -> None:
        if self._send("set_property", "volume", volume * 100):
            self._volume = volume

    def replace(self) -> "MpvSink":
        """Clear MPV's playlist and return this sink, now empty and unpaused."""
        self._send("stop")
        self.play()
        return self
