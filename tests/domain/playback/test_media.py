"""Tests for opening and probing local audio files."""

import wave
from pathlib import Path

import pytest

from solo_player.domain.playback import DecodeError, ResourceError, open_and_probe


def write_silence(path: Path, seconds: float, rate: int = 8000) -> Path:
    """Write a mono 16-bit WAV file of the given length."""
    with wave.open(str(path), "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(rate)
        wav.writeframes(b"\x00\x00" * int(rate * seconds))
    return path


class TestOpenAndProbe:
    """Tests for open_and_probe."""

    def test_probes_wav_duration(self, tmp_path: Path) -> None:
        """A valid WAV reports its length and a resolved path."""
        path = write_silence(tmp_path / "tone.wav", 2.0)

        stream, duration = open_and_probe(path)

        assert duration == pytest.approx(2.0, abs=0.01)
        assert stream.name == "tone.wav"
        assert stream.path == str(path.resolve())

    def test_accepts_string_path(self, tmp_path: Path) -> None:
        path = write_silence(tmp_path / "short.wav", 0.5)

        _, duration = open_and_probe(str(path))

        assert duration == pytest.approx(0.5, abs=0.01)

    def test_missing_file_is_resource_error(self, tmp_path: Path) -> None:
        with pytest.raises(ResourceError):
            open_and_probe(tmp_path / "nope.mp3")

    def test_directory_is_resource_error(self, tmp_path: Path) -> None:
        with pytest.raises(ResourceError):
            open_and_probe(tmp_path)

    def test_unknown_format_is_decode_error(self, tmp_path: Path) -> None:
        """Files Mutagen can't identify have no duration to probe."""
        path = tmp_path / "notes.txt"
        path.write_text("definitely not audio")

        with pytest.raises(DecodeError):
            open_and_probe(path)

    def test_empty_wav_is_decode_error(self, tmp_path: Path) -> None:
        """A WAV with no frames has no playable duration."""
        path = write_silence(tmp_path / "empty.wav", 0.0)

        with pytest.raises(DecodeError):
            open_and_probe(path)
