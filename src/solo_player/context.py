"""Application context for explicit state passing.

Command handlers receive the AppContext and return it (possibly updated)
instead of reaching for module-level globals.
"""

from dataclasses import dataclass
from typing import Optional

from solo_player.core.config import Config
from solo_player.domain.playback.loop import PlayerLoop
from solo_player.domain.playback.sink import MpvSink


@dataclass
class AppContext:
    """Application context passed to all command handlers.

    Attributes:
        config: Application configuration
        loop: Owner loop serializing access to the player
        sink: MPV sink to close on exit (None when tests inject a fake)
    """

    config: Config
    loop: PlayerLoop
    sink: Optional[MpvSink] = None
