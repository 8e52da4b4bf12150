"""
Playback command handlers for Solo Player.
"""

from typing import List, Tuple

from solo_player.context import AppContext
from solo_player.core.output import log
from solo_player.domain.playback import Playing, Stopped, Waiting, format_time


def icon(ctx: AppContext, symbol: str) -> str:
    """Prefix for a message: the symbol and a space, or nothing in ASCII mode."""
    return f"{symbol} " if ctx.config.ui.use_emoji else ""


def handle_add_command(ctx: AppContext, args: List[str]) -> Tuple[AppContext, bool]:
    """Handle add command - queue a file, or play it now with --now.

    Args:
        ctx: Application context
        args: Command arguments

    Returns:
        (updated_context, should_continue)
    """
    once = "--now" in args
    paths = [arg for arg in args if arg != "--now"]

    if not paths:
        log("Usage: add [--now] <path>", "warning")
        return ctx, True

    path = " ".join(paths)
    if ctx.loop.add(path, once):
        log(f"{icon(ctx, '➕')}{'Playing' if once else 'Queued'}: {path}", "info")
    else:
        log(f"{icon(ctx, '❌')}Could not open or decode: {path}", "error")

    return ctx, True


def handle_play_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    """Handle play command - start or continue the current track."""
    ctx.loop.play()
    log(f"{icon(ctx, '▶')}Playing", "info")
    return ctx, True


def handle_pause_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    """Handle pause command."""
    snapshot = ctx.loop.snapshot()
    if not snapshot.playlist:
        log("No music is currently playing", "warning")
        return ctx, True

    ctx.loop.pause()
    log(f"{icon(ctx, '⏸')}Paused", "info")
    return ctx, True


def handle_resume_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    """Handle resume command.

    Only continues a paused track; a track that never started needs 'play'.
    """
    snapshot = ctx.loop.snapshot()
    if not isinstance(snapshot.status, Stopped):
        log("Nothing is paused (use 'play' to start a track)", "warning")
        return ctx, True

    ctx.loop.resume()
    log(f"{icon(ctx, '▶')}Resumed", "info")
    return ctx, True


def handle_stop_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    """Handle stop command."""
    ctx.loop.stop_playback()
    log(f"{icon(ctx, '⏹')}Stopped", "info")
    return ctx, True


def handle_next_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    """Handle next command - skip to the following track and start it."""
    if not ctx.loop.next():
        log("No next track in the playlist", "warning")
        return ctx, True

    ctx.loop.play()
    snapshot = ctx.loop.snapshot()
    log(f"{icon(ctx, '⏭')}Now playing: {snapshot.playlist[0]}", "info")
    return ctx, True


def handle_volume_command(ctx: AppContext, args: List[str]) -> Tuple[AppContext, bool]:
    """Handle volume command - show volume, or set it (0-100)."""
    if not args:
        snapshot = ctx.loop.snapshot()
        log(f"{icon(ctx, '🔊')}Volume: {round(snapshot.volume * 100)}%", "info")
        return ctx, True

    try:
        volume = int(args[0])
    except ValueError:
        log(f"Invalid volume: {args[0]} (expected 0-100)", "error")
        return ctx, True

    volume = max(0, min(100, volume))
    ctx.loop.set_volume(volume / 100)
    log(f"{icon(ctx, '🔊')}Volume: {volume}%", "info")
    return ctx, True


def describe_status(status) -> str:
    """Human-readable label for a PlayStatus (or None)."""
    if isinstance(status, Playing):
        return "Playing"
    if isinstance(status, Stopped):
        return "Paused"
    if isinstance(status, Waiting):
        return "Waiting"
    return "Idle"


def handle_status_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    """Handle status command - show current track and progress."""
    snapshot = ctx.loop.snapshot()

    log("Solo Player Status:", "info")
    log("─" * 40, "info")
    log(f"{icon(ctx, '♪')}Player: {describe_status(snapshot.status)}", "info")

    if not snapshot.playlist:
        log(f"{icon(ctx, '♫')}Track: None", "info")
        return ctx, True

    log(f"{icon(ctx, '♫')}Track: {snapshot.playlist[0]}", "info")
    if snapshot.total_time > 0:
        percent = snapshot.current_time / snapshot.total_time * 100
        progress_bar = "▓" * int(percent / 5) + "░" * (20 - int(percent / 5))
        log(
            f"{icon(ctx, '⏱')}Progress: [{progress_bar}] {format_time(snapshot.current_time)} / {format_time(snapshot.total_time)}",
            "info",
        )
    log(f"{icon(ctx, '🔊')}Volume: {round(snapshot.volume * 100)}%", "info")
    log(f"{icon(ctx, '📋')}Queue: {len(snapshot.playlist) - 1} more", "info")
    return ctx, True


def handle_list_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    """Handle list command - show the playlist, current track first."""
    snapshot = ctx.loop.snapshot()
    if not snapshot.playlist:
        log("Playlist is empty", "info")
        return ctx, True

    for position, name in enumerate(snapshot.playlist, start=1):
        current = "▶" if ctx.config.ui.use_emoji else ">"
        marker = current if position == 1 else " "
        log(f"{marker} {position}. {name}", "info")
    return ctx, True
