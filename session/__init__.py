"""
Session module for TicTacToe.
Handles game modes, screens, turn flow and the delayed computer move.
"""

from .config import ConfigError, SessionConfig
from .state import GameMode, Screen, SessionState
from .timers import AsyncioTimerHost, ManualTimerHost, TimerHost, TkTimerHost
from .move_scheduler import MoveScheduler, ScheduledMove, SchedulerClosed
from .game_session import GameSession
