"""
Command routing for Solo Player.

Routes user commands to appropriate handler functions.
"""

from typing import List, Tuple

from solo_player.commands import playback
from solo_player.context import AppContext


def print_help() -> None:
    """Display help information for available commands."""
    help_text = """
Solo Player - one track at a time

Available commands:
  add <path>        Append a track to the playlist
  add --now <path>  Replace the playlist and play this track now
  play              Start or continue the current track
  pause             Pause current playback
  resume            Resume paused playback
  stop              Stop the output
  next              Skip to the next track
  volume [0-100]    Show or set the volume
  status            Show current track and progress
  list              Show the playlist
  help              Show this help message
  quit, exit        Exit the program
"""
    print(help_text.strip())


def handle_command(ctx: AppContext, command: str, args: List[str]) -> Tuple[AppContext, bool]:
    """
    Handle a single command with explicit state passing.

    Args:
        ctx: Application context
        command: Command name
        args: Command arguments

    Returns:
        (updated_context, should_continue) - Updated context and whether to continue
    """
    if command in ['quit', 'exit']:
        print("Goodbye!")
        return ctx, False

    elif command == 'help':
        print_help()
        return ctx, True

    elif command == 'add':
        return playback.handle_add_command(ctx, args)

    elif command == 'play':
        return playback.handle_play_command(ctx)

    elif command == 'pause':
        return playback.handle_pause_command(ctx)

    elif command == 'resume':
        return playback.handle_resume_command(ctx)

    elif command == 'stop':
        return playback.handle_stop_command(ctx)

    elif command in ['next', 'skip']:
        return playback.handle_next_command(ctx)

    elif command == 'volume':
        return playback.handle_volume_command(ctx, args)

    elif command == 'status':
        return playback.handle_status_command(ctx)

    elif command == 'list':
        return playback.handle_list_command(ctx)

    else:
        print(f"Unknown command: '{command}'. Type 'help' for available commands.")
        return ctx, True
