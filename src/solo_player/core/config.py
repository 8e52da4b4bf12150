"""
Configuration management for Solo Player
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class PlayerConfig:
    """Configuration for music player settings."""

    mpv_socket_path: Optional[str] = None
    volume: int = 50
    tick_interval: float = 0.25  # Seconds between background ticks


@dataclass
class UIConfig:
    """Configuration for user interface."""

    use_emoji: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/solo-player/solo-player.log)
    )
    console_output: bool = False  # Also output to stderr (for debugging)


@dataclass
class Config:
    """Main configuration object."""

    player: PlayerConfig = field(default_factory=PlayerConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "solo-player"
    return Path.home() / ".config" / "solo-player"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Current working directory
    2. XDG_CONFIG_HOME/solo-player (or ~/.config/solo-player)
    """
    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "solo-player"
    return Path.home() / ".local" / "share" / "solo-player"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Solo Player Configuration

[player]
# Path for mpv socket (auto-detected if not specified)
# mpv_socket_path = "/tmp/solo-player-mpv.sock"

# Default volume (0-100)
volume = 50

# Seconds between progress updates while playing
tick_interval = 0.25

[ui]
# Use emoji in UI (disable for ASCII-only)
use_emoji = true

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/solo-player/solo-player.log)
# log_file = "/path/to/custom/solo-player.log"

# Also output logs to stderr (useful for debugging)
console_output = false
""".strip()


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file or create default.

    Args:
        config_path: Explicit config file; defaults to get_config_path()

    Returns:
        Parsed Config, or defaults when the file is missing or invalid
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        # Create config directory and default file
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        print(f"Created default configuration at: {config_path}")
        return Config()

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        config = Config()

        if "player" in toml_data:
            player_data = toml_data["player"]
            config.player = PlayerConfig(
                mpv_socket_path=player_data.get("mpv_socket_path"),
                volume=max(0, min(100, player_data.get("volume", config.player.volume))),
                tick_interval=float(
                    player_data.get("tick_interval", config.player.tick_interval)
                ),
            )
            if config.player.tick_interval <= 0:
                raise ValueError(
                    f"tick_interval must be positive, got {config.player.tick_interval}"
                )

        if "ui" in toml_data:
            ui_data = toml_data["ui"]
            config.ui = UIConfig(
                use_emoji=ui_data.get("use_emoji", config.ui.use_emoji),
            )

        if "logging" in toml_data:
            logging_data = toml_data["logging"]
            log_file = logging_data.get("log_file")
            if log_file:
                log_file = str(Path(log_file).expanduser())
            config.logging = LoggingConfig(
                level=logging_data.get("level", config.logging.level).upper(),
                log_file=log_file,
                console_output=logging_data.get(
                    "console_output", config.logging.console_output
                ),
            )

        return config

    except Exception as e:
        print(f"Error loading configuration from {config_path}: {e}")
        print("Using default configuration.")
        return Config()

