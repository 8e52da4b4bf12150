"""Tests for interactive command routing."""

from unittest.mock import MagicMock, patch

import pytest

from solo_player import router
from solo_player.context import AppContext
from solo_player.core.config import Config
from solo_player.domain.playback import PlayerSnapshot, Playing, Stopped, Waiting


@pytest.fixture
def ctx() -> AppContext:
    loop = MagicMock()
    loop.snapshot.return_value = PlayerSnapshot()
    return AppContext(config=Config(), loop=loop)


@pytest.fixture
def log():
    with patch("solo_player.commands.playback.log") as mock_log:
        yield mock_log


class TestHandleCommand:
    """Tests for router.handle_command."""

    @pytest.mark.parametrize("command", ["quit", "exit"])
    def test_quit_stops_loop(self, ctx, command) -> None:
        _, should_continue = router.handle_command(ctx, command, [])
        assert should_continue is False

    def test_unknown_command_continues(self, ctx) -> None:
        _, should_continue = router.handle_command(ctx, "dance", [])
        assert should_continue is True

    def test_add_appends(self, ctx, log) -> None:
        ctx.loop.add.return_value = True

        router.handle_command(ctx, "add", ["/music/a.mp3"])

        ctx.loop.add.assert_called_once_with("/music/a.mp3", False)
        assert log.call_args[0][1] == "info"

    def test_add_now_replaces(self, ctx, log) -> None:
        router.handle_command(ctx, "add", ["--now", "/music/a.mp3"])
        ctx.loop.add.assert_called_once_with("/music/a.mp3", True)

    def test_add_failure_reported(self, ctx, log) -> None:
        ctx.loop.add.return_value = False

        router.handle_command(ctx, "add", ["/music/missing.mp3"])

        assert log.call_args[0][1] == "error"

    def test_add_without_path(self, ctx, log) -> None:
        router.handle_command(ctx, "add", [])

        ctx.loop.add.assert_not_called()
        assert log.call_args[0][1] == "warning"

    @pytest.mark.parametrize("command", ["next", "skip"])
    def test_next_starts_following_track(self, ctx, log, command) -> None:
        ctx.loop.next.return_value = True
        ctx.loop.snapshot.return_value = PlayerSnapshot(playlist=("b.mp3",), status=Waiting())

        router.handle_command(ctx, command, [])

        ctx.loop.play.assert_called_once_with()
        assert "b.mp3" in log.call_args[0][0]

    def test_next_at_end_of_playlist(self, ctx, log) -> None:
        ctx.loop.next.return_value = False

        router.handle_command(ctx, "next", [])

        ctx.loop.play.assert_not_called()
        assert log.call_args[0][1] == "warning"

    def test_pause_with_empty_playlist(self, ctx, log) -> None:
        router.handle_command(ctx, "pause", [])
        ctx.loop.pause.assert_not_called()

    def test_pause(self, ctx, log) -> None:
        ctx.loop.snapshot.return_value = PlayerSnapshot(
            playlist=("a.mp3",), status=Playing(0.0, 0.0)
        )
        router.handle_command(ctx, "pause", [])
        ctx.loop.pause.assert_called_once_with()

    def test_resume_requires_paused_track(self, ctx, log) -> None:
        ctx.loop.snapshot.return_value = PlayerSnapshot(playlist=("a.mp3",), status=Waiting())

        router.handle_command(ctx, "resume", [])

        ctx.loop.resume.assert_not_called()

    def test_resume_paused_track(self, ctx, log) -> None:
        ctx.loop.snapshot.return_value = PlayerSnapshot(playlist=("a.mp3",), status=Stopped(3.0))

        router.handle_command(ctx, "resume", [])

        ctx.loop.resume.assert_called_once_with()

    def test_play_and_stop(self, ctx, log) -> None:
        router.handle_command(ctx, "play", [])
        router.handle_command(ctx, "stop", [])

        ctx.loop.play.assert_called_once_with()
        ctx.loop.stop_playback.assert_called_once_with()

    def test_volume_set_is_clamped(self, ctx, log) -> None:
        router.handle_command(ctx, "volume", ["150"])
        ctx.loop.set_volume.assert_called_once_with(1.0)

    def test_volume_invalid(self, ctx, log) -> None:
        router.handle_command(ctx, "volume", ["loud"])

        ctx.loop.set_volume.assert_not_called()
        assert log.call_args[0][1] == "error"

    def test_volume_show(self, ctx, log) -> None:
        ctx.loop.snapshot.return_value = PlayerSnapshot(volume=0.42)

        router.handle_command(ctx, "volume", [])

        assert "42%" in log.call_args[0][0]

    def test_status_shows_progress(self, ctx, log) -> None:
        ctx.loop.snapshot.return_value = PlayerSnapshot(
            current_time=30.0,
            total_time=120.0,
            playlist=("a.mp3", "b.mp3"),
            status=Playing(0.0, 0.0),
            volume=0.5,
        )

        router.handle_command(ctx, "status", [])

        messages = [c[0][0] for c in log.call_args_list]
        assert "♪ Player: Playing" in messages
        assert "♫ Track: a.mp3" in messages
        assert any("00:30 / 02:00" in message for message in messages)

    def test_list(self, ctx, log) -> None:
        ctx.loop.snapshot.return_value = PlayerSnapshot(playlist=("a.mp3", "b.mp3"))

        router.handle_command(ctx, "list", [])

        messages = [c[0][0] for c in log.call_args_list]
        assert messages == ["▶ 1. a.mp3", "  2. b.mp3"]


class TestAsciiOutput:
    """With use_emoji off, messages carry no symbol prefix."""

    @pytest.fixture
    def ascii_ctx(self, ctx: AppContext) -> AppContext:
        ctx.config.ui.use_emoji = False
        return ctx

    def test_pause_message(self, ascii_ctx, log) -> None:
        ascii_ctx.loop.snapshot.return_value = PlayerSnapshot(
            playlist=("a.mp3",), status=Playing(0.0, 0.0)
        )

        router.handle_command(ascii_ctx, "pause", [])

        assert log.call_args[0][0] == "Paused"

    def test_status_and_list(self, ascii_ctx, log) -> None:
        ascii_ctx.loop.snapshot.return_value = PlayerSnapshot(
            playlist=("a.mp3", "b.mp3"), status=Stopped(1.0), volume=0.5
        )

        router.handle_command(ascii_ctx, "status", [])
        router.handle_command(ascii_ctx, "list", [])

        messages = [c[0][0] for c in log.call_args_list]
        assert "Player: Paused" in messages
        assert "Track: a.mp3" in messages
        assert "Volume: 50%" in messages
        assert messages[-2:] == ["> 1. a.mp3", "  2. b.mp3"]

    def test_emoji_by_default(self, ctx, log) -> None:
        ctx.loop.snapshot.return_value = PlayerSnapshot(
            playlist=("a.mp3",), status=Playing(0.0, 0.0)
        )

        router.handle_command(ctx, "pause", [])

        assert log.call_args[0][0] == "⏸ Paused"
