"""Core infrastructure layer - no playback logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging and user-facing output (Loguru)
- Console management (Rich)
"""

# Configuration
from .config import (
    Config,
    LoggingConfig,
    PlayerConfig,
    UIConfig,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    create_default_config,
)

# Console
from .console import get_console, safe_print

# Output
from .output import get_log_file_path, log, setup_loguru

__all__ = [
    # Config
    "Config",
    "LoggingConfig",
    "PlayerConfig",
    "UIConfig",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "create_default_config",
    # Console
    "get_console",
    "safe_print",
    # Output
    "get_log_file_path",
    "log",
    "setup_loguru",
]
