"""
Session configuration for TicTacToe.
Timing and player settings for a game session.

Values can be overridden from the environment or a .env file:
    TTT_THINKING_DELAY_MS=600
    TTT_LOG_LEVEL=INFO
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from logic.board import Player


class ConfigError(ValueError):
    """Raised when a configured value cannot be used."""


class SessionConfig:
    """
    Configuration class for a game session.
    Change these values to tune how the computer opponent feels.
    """

    # ==================== PLAYERS ====================
    # X always opens a fresh game
    FIRST_PLAYER = Player.X

    # The computer always plays O in Human vs Computer mode
    OPPONENT_SYMBOL = Player.O

    # ==================== TIMING ====================
    # How long the computer "thinks" before its move is placed (milliseconds)
    THINKING_DELAY_MS = 600

    # ==================== LOGGING ====================
    LOG_LEVEL = "INFO"

    # Environment variable names
    ENV_THINKING_DELAY_MS = "TTT_THINKING_DELAY_MS"
    ENV_LOG_LEVEL = "TTT_LOG_LEVEL"

    def __init__(
        self,
        thinking_delay_ms: Optional[int] = None,
        log_level: Optional[str] = None
    ):
        """
        Create a config, falling back to the class defaults.

        Raises:
            ConfigError: If a value is out of range.
        """
        delay = self.THINKING_DELAY_MS if thinking_delay_ms is None else thinking_delay_ms
        self.thinking_delay_ms = _parse_delay(delay)
        self.log_level = _parse_log_level(log_level or self.LOG_LEVEL)

    @property
    def thinking_delay(self) -> float:
        """Thinking delay in seconds."""
        return self.thinking_delay_ms / 1000

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "SessionConfig":
        """
        Build a config from environment variables.

        Args:
            env_file: Optional path to a .env file. By default python-dotenv
                searches for one from the working directory. Variables already
                set in the environment win over the file.
        """
        load_dotenv(dotenv_path=env_file)
        return cls(
            thinking_delay_ms=os.environ.get(cls.ENV_THINKING_DELAY_MS),
            log_level=os.environ.get(cls.ENV_LOG_LEVEL),
        )

    def __repr__(self) -> str:
        return (
            f"SessionConfig(thinking_delay_ms={self.thinking_delay_ms}, "
            f"log_level={self.log_level!r})"
        )


def _parse_delay(value) -> int:
    try:
        delay = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Thinking delay must be an integer (ms), got {value!r}") from None
    if delay < 0:
        raise ConfigError(f"Thinking delay must not be negative, got {delay}")
    return delay


def _parse_log_level(value: str) -> str:
    level = str(value).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Unknown log level: {value!r}")
    return level
