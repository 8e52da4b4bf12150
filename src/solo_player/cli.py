"""
Solo Player - Entry point and interactive loop
"""

import argparse
import shlex
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from solo_player import router
from solo_player.context import AppContext
from solo_player.core.config import load_config
from solo_player.core.console import safe_print
from solo_player.core.output import log, setup_loguru
from solo_player.domain.playback import (
    DecodeError,
    MpvSink,
    MusicPlayer,
    PlayerLoop,
    ResourceError,
    check_mpv_available,
    format_time,
    open_and_probe,
)


def run_probe(path: str) -> int:
    """Print the name and duration of an audio file.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        stream, duration = open_and_probe(path)
    except (ResourceError, DecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    safe_print(f"{stream.name}  {format_time(duration)}  {stream.mime or 'unknown'}")
    return 0


def interactive_mode(ctx: AppContext) -> None:
    """Read commands from stdin until quit or EOF."""
    safe_print("Solo Player - type 'help' for commands", style="bold")

    should_continue = True
    while should_continue:
        try:
            line = input("♪ > ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not line:
            continue

        try:
            parts = shlex.split(line)
        except ValueError as e:
            log(f"Invalid command: {e}", "error")
            continue

        command, args = parts[0].lower(), parts[1:]
        ctx, should_continue = router.handle_command(ctx, command, args)


def queue_files(loop: PlayerLoop, files: List[str], replace: bool = False) -> List[str]:
    """Add files to the player in order.

    Args:
        loop: Running player loop
        files: Paths to add
        replace: Play the first file now, discarding whatever was queued

    Returns:
        Paths that could not be added
    """
    failed = []
    for index, path in enumerate(files):
        if not loop.add(path, replace and index == 0):
            failed.append(path)
    return failed


def run_player(config_path: Optional[str], files: List[str], replace: bool = False) -> int:
    """Start MPV, the player loop, queue files and enter interactive mode."""
    config = load_config(Path(config_path) if config_path else None)
    setup_loguru(
        Path(config.logging.log_file) if config.logging.log_file else None,
        level=config.logging.level,
        console_output=config.logging.console_output,
    )

    if not check_mpv_available():
        log("Error: MPV is not installed or not available in PATH.", "error")
        return 1

    try:
        sink = MpvSink.start(config.player.mpv_socket_path, config.player.volume)
    except RuntimeError as e:
        log(f"Error: {e}", "error")
        return 1

    loop = PlayerLoop(MusicPlayer(sink), tick_interval=config.player.tick_interval)
    loop.start()
    ctx = AppContext(config=config, loop=loop, sink=sink)

    try:
        for path in queue_files(loop, files, replace):
            log(f"Could not open or decode: {path}", "error")
        interactive_mode(ctx)
    finally:
        loop.stop()
        sink.close()
        logger.info("Solo Player exited")

    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the solo-player command.

    ``solo-player probe FILE`` inspects a file; anything else starts the
    player with the given files queued.
    """
    if argv is None:
        argv = sys.argv[1:]

    if argv and argv[0] == 'probe':
        probe_parser = argparse.ArgumentParser(
            prog='solo-player probe',
            description="Show the duration of an audio file",
        )
        probe_parser.add_argument('file', help='Audio file to inspect')
        args = probe_parser.parse_args(argv[1:])
        sys.exit(run_probe(args.file))

    parser = argparse.ArgumentParser(
        prog='solo-player',
        description="Solo Player - play local audio files one track at a time",
        epilog="Use 'solo-player probe FILE' to show a file's duration.",
    )
    parser.add_argument('--config', help='Path to config.toml')
    parser.add_argument(
        '--replace',
        action='store_true',
        help='Play the first file now instead of appending it to the queue',
    )
    parser.add_argument('files', nargs='*', help='Audio files to queue')

    args = parser.parse_args(argv)
    sys.exit(run_player(args.config, args.files, args.replace))


if __name__ == "__main__":
    main()
