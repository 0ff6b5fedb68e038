"""
Tests for configuration, the asyncio timer host and the console front end.
"""

import asyncio
import io

import pytest

import main
from logic import Cell, OutcomeKind
from session import (
    AsyncioTimerHost,
    ConfigError,
    GameMode,
    GameSession,
    ManualTimerHost,
    Screen,
    SessionConfig,
    SessionState,
)


ENV_VARS = (SessionConfig.ENV_THINKING_DELAY_MS, SessionConfig.ENV_LOG_LEVEL)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove TTT_* variables; anything load_dotenv sets is undone afterwards."""
    for name in ENV_VARS:
        monkeypatch.setenv(name, "unset")
        monkeypatch.delenv(name)
    return monkeypatch


# ==================== CONFIG ====================

def test_config_defaults():
    config = SessionConfig()
    assert config.thinking_delay_ms == SessionConfig.THINKING_DELAY_MS
    assert config.thinking_delay == pytest.approx(0.6)
    assert config.log_level == "INFO"
    assert SessionConfig.OPPONENT_SYMBOL.value == "O"
    assert SessionConfig.FIRST_PLAYER.value == "X"
    assert SessionState().active_player is SessionConfig.FIRST_PLAYER


def test_config_overrides():
    config = SessionConfig(thinking_delay_ms=0, log_level="debug")
    assert config.thinking_delay == 0
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("delay", [-1, "soon", "1.5"])
def test_config_rejects_bad_delay(delay):
    with pytest.raises(ConfigError):
        SessionConfig(thinking_delay_ms=delay)


def test_config_rejects_unknown_log_level():
    with pytest.raises(ConfigError):
        SessionConfig(log_level="chatty")


def test_config_from_environment(clean_env, tmp_path):
    clean_env.setenv(SessionConfig.ENV_THINKING_DELAY_MS, "250")
    config = SessionConfig.from_env(str(tmp_path / "missing.env"))
    assert config.thinking_delay_ms == 250
    assert config.log_level == "INFO"


def test_config_from_env_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("TTT_THINKING_DELAY_MS=125\nTTT_LOG_LEVEL=warning\n")

    config = SessionConfig.from_env(str(env_file))
    assert config.thinking_delay_ms == 125
    assert config.log_level == "WARNING"


def test_environment_wins_over_env_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("TTT_THINKING_DELAY_MS=125\n")
    clean_env.setenv(SessionConfig.ENV_THINKING_DELAY_MS, "40")

    assert SessionConfig.from_env(str(env_file)).thinking_delay_ms == 40


# ==================== ASYNCIO TIMERS ====================

def test_asyncio_host_runs_computer_move():
    async def scenario():
        session = GameSession(AsyncioTimerHost(asyncio.get_running_loop()), SessionConfig(thinking_delay_ms=10))
        session.select_mode(GameMode.HUMAN_VS_COMPUTER)
        session.apply_human_move(0)
        assert session.is_thinking
        await asyncio.sleep(0.2)
        return session

    session = asyncio.run(scenario())
    assert session.board[4] is Cell.O
    assert not session.is_thinking


def test_asyncio_host_cancel_on_restart():
    async def scenario():
        session = GameSession(AsyncioTimerHost(asyncio.get_running_loop()), SessionConfig(thinking_delay_ms=10))
        session.select_mode(GameMode.HUMAN_VS_COMPUTER)
        session.apply_human_move(0)
        session.restart()
        await asyncio.sleep(0.2)
        return session

    session = asyncio.run(scenario())
    assert Cell.O not in session.board
    assert Cell.X not in session.board
    assert not session.is_thinking


# ==================== CONSOLE ====================

@pytest.fixture
def console():
    host = ManualTimerHost()
    session = GameSession(host, SessionConfig(thinking_delay_ms=100))
    game = main.ConsoleGame(session, out=io.StringIO())
    return game, host


def test_console_mode_selection(console):
    game, _ = console
    assert "Mode" in game.prompt()

    assert game.handle_command("7") is True
    assert game.session.screen is Screen.START
    assert "choose 1 or 2" in game.out.getvalue()

    game.handle_command("2")
    assert game.session.mode is GameMode.HUMAN_VS_COMPUTER
    assert game.prompt() == "Player X, cell (1-9): "


def test_console_plays_against_computer(console):
    game, host = console
    game.handle_command("2")
    game.handle_command("1")

    assert game.session.board[0] is Cell.X
    game.show()
    assert "Computer is thinking..." in game.out.getvalue()

    host.run_all()
    assert game.session.board[4] is Cell.O


def test_console_hint_restart_back_and_quit(console):
    game, host = console
    game.handle_command("1")
    game.handle_command("5")
    game.handle_command("h")
    assert "Place O on cell 1" in game.out.getvalue()

    game.handle_command("r")
    assert game.session.board.count(Cell.EMPTY) == 9

    game.handle_command("b")
    assert game.session.screen is Screen.START

    assert game.handle_command("q") is False
    assert not game.is_running


def test_console_shows_result(console):
    game, _ = console
    game.handle_command("1")
    for cell in ("1", "4", "2", "5", "3"):
        game.handle_command(cell)

    assert game.session.outcome.kind is OutcomeKind.WIN
    game.show()
    assert "Player X wins!" in game.out.getvalue()
    assert "[X]" in game.out.getvalue()


def test_console_ignores_unknown_commands(console):
    game, _ = console
    game.handle_command("1")
    game.handle_command("what")
    assert "Commands:" in game.out.getvalue()
    game.handle_command("12")
    assert game.session.board.count(Cell.EMPTY) == 9


def test_main_reports_bad_config(clean_env, capsys):
    clean_env.setenv(SessionConfig.ENV_THINKING_DELAY_MS, "soon")
    assert main.main(["--no-ui"]) == 1
    assert "Thinking delay" in capsys.readouterr().err


def test_ui_main_reports_bad_config(clean_env, capsys):
    ui = pytest.importorskip("ui")
    assert ui.main(["--delay-ms", "-5"]) == 1
    assert capsys.readouterr().err.startswith("ERROR:")
