"""
Media probing: open a local audio file and read its total duration with Mutagen.
"""

from pathlib import Path
from typing import NamedTuple, Optional, Union

from loguru import logger
from mutagen import File as MutagenFile
from mutagen import MutagenError

from .errors import DecodeError, ResourceError


class DecodedStream(NamedTuple):
    """A local file that has been opened and identified as playable audio."""

    path: str
    name: str
    mime: Optional[str] = None


def open_and_probe(path: Union[str, Path]) -> tuple[DecodedStream, float]:
    """Open a local audio file and probe its duration.

    Args:
        path: Local filesystem path

    Returns:
        Tuple of (stream, duration in seconds)

    Raises:
        ResourceError: If the path is missing or unreadable
        DecodeError: If the format is unknown or has no usable duration
    """
    file_path = Path(path).expanduser()

    try:
        with open(file_path, "rb") as f:
            audio_file = MutagenFile(f)
    except OSError as e:
        raise ResourceError(f"Cannot open {file_path}: {e}") from e
    except MutagenError as e:
        raise DecodeError(f"Cannot decode {file_path}: {e}") from e

    if audio_file is None or audio_file.info is None:
        raise DecodeError(f"Unrecognized audio format: {file_path}")

    duration = getattr(audio_file.info, "length", None)
    if not duration or duration <= 0:
        raise DecodeError(f"Could not determine duration of {file_path}")

    mime = audio_file.mime[0] if audio_file.mime else None
    logger.debug(f"Probed {file_path}: duration={duration:.2f}s, mime={mime}")

    stream = DecodedStream(path=str(file_path.resolve()), name=file_path.name, mime=mime)
    return stream, float(duration)
