"""Errors raised while turning a media source into something playable."""


class PlaybackError(Exception):
    """Base class for failures preparing media for playback."""


class ResourceError(PlaybackError):
    """The media path could not be opened (missing, unreadable, or remote)."""


class DecodeError(PlaybackError):
    """The media duration could not be probed or the stream cannot be decoded."""
