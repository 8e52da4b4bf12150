"""
Unified output system using Loguru.
Writes user-facing messages to the log file and the Rich console.
"""

import sys
import threading
from pathlib import Path

from loguru import logger

from .config import get_data_dir
from .console import get_console

_LEVEL_STYLES = {
    "debug": "cyan",
    "info": "white",
    "warning": "yellow",
    "error": "red",
}


def get_log_file_path() -> Path:
    """Get the path to the log file."""
    return get_data_dir() / "solo-player.log"


def setup_loguru(
    log_file: Path | None = None,
    level: str = "INFO",
    console_output: bool = False,
) -> None:
    """
    Configure loguru for file logging with optional stderr output.

    Args:
        log_file: Path to log file (default: ~/.local/share/solo-player/solo-player.log)
        level: Minimum level for logging (DEBUG, INFO, WARNING, ERROR)
        console_output: Whether to also write log records to stderr
    """
    log_file = log_file if log_file else get_log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Remove default handler
    logger.remove()

    logger.add(
        log_file,
        rotation="10 MB",
        retention=5,  # Keep 5 backup files
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
        enqueue=False,  # Synchronous writes (thread-safe but blocking)
    )

    if console_output:
        logger.add(sys.stderr, level=level, format="{level}: {message}")

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to file AND prints to the console.

    Use this instead of print() for user-facing messages that should also be logged.
    Threads flagged with ``silent_logging`` only write to the log file.

    Args:
        message: User-facing message (can include emojis)
        level: Log level (debug, info, warning, error)
    """
    log_func = getattr(logger, level)
    log_func(message)

    if getattr(threading.current_thread(), "silent_logging", False):
        return

    get_console().print(message, style=_LEVEL_STYLES.get(level, "white"), markup=False)
