"""
Session state for TicTacToe.

SessionState is an immutable snapshot of one session: the board, whose
turn it is, the game mode and the current screen. The functions in this
module are pure transitions; each returns a new state, or the same state
object when the request is ignored.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from logic.board import Board, Cell, Player, create_empty_board, place, validate_board
from logic.move_validator import MoveValidator, ValidationResult
from logic.win_checker import Outcome, evaluate_outcome

from .config import SessionConfig


class GameMode(Enum):
    """Who plays O."""
    HUMAN_VS_HUMAN = "hvh"
    HUMAN_VS_COMPUTER = "hvc"

    @property
    def label(self) -> str:
        return "Human vs Human" if self == GameMode.HUMAN_VS_HUMAN else "Human vs Computer"


class Screen(Enum):
    START = "start"
    PLAYING = "playing"


FIRST_PLAYER = SessionConfig.FIRST_PLAYER

_validator = MoveValidator()


@dataclass(frozen=True)
class SessionState:
    """
    The complete state of a game session.

    Tracks:
    - The 3x3 board (9 cells, row-major)
    - Active player
    - Game mode (None on the start screen)
    - Current screen

    The outcome is never stored; it is derived from the board on every read.
    """

    board: Board = field(default_factory=create_empty_board)
    active_player: Player = FIRST_PLAYER
    mode: Optional[GameMode] = None
    screen: Screen = Screen.START

    @property
    def outcome(self) -> Outcome:
        return evaluate_outcome(self.board)

    def is_opponent_turn(self, opponent: Player) -> bool:
        """
        True when the computer has to move: Human vs Computer, on the game
        screen, game not over, and the opponent symbol is active.
        """
        return (
            self.mode is GameMode.HUMAN_VS_COMPUTER
            and self.screen is Screen.PLAYING
            and self.active_player is opponent
            and not self.outcome.is_over
        )

    def to_dict(self) -> dict:
        """Plain-data form of the state (strings only)."""
        return {
            "board": "".join(cell.value or "." for cell in self.board),
            "active_player": self.active_player.value,
            "mode": self.mode.value if self.mode else None,
            "screen": self.screen.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionState":
        """
        Rebuild a state from to_dict() output.

        Raises:
            InvalidBoard: If the board string does not describe 9 cells.
            ValueError: If a player, mode or screen value is unknown.
        """
        board = validate_board([Cell.EMPTY if c == "." else Cell(c) for c in data["board"]])
        mode = data.get("mode")
        return cls(
            board=board,
            active_player=Player(data["active_player"]),
            mode=GameMode(mode) if mode else None,
            screen=Screen(data["screen"]),
        )


def start_state() -> SessionState:
    """The start screen: no mode, empty board."""
    return SessionState()


def select_mode(state: SessionState, mode: GameMode) -> SessionState:
    """
    Begin a fresh game in the given mode.

    Only allowed from the start screen; the mode of a running game is fixed.
    """
    if state.screen is not Screen.START:
        return state
    return SessionState(mode=GameMode(mode), screen=Screen.PLAYING)


def check_move(state: SessionState, index: int) -> ValidationResult:
    """Validate a move against the session (screen, rules and board)."""
    if state.screen is not Screen.PLAYING:
        return ValidationResult(False, "Not in a game")
    return _validator.validate_move(state.board, index)


def apply_move(state: SessionState, index: int) -> SessionState:
    """
    Place the active player's symbol at index and pass the turn.

    Invalid moves return the state unchanged.
    """
    if not check_move(state, index).is_valid:
        return state
    return replace(
        state,
        board=place(state.board, index, state.active_player),
        active_player=state.active_player.opposite(),
    )


def restart(state: SessionState) -> SessionState:
    """Fresh board in the same mode. Ignored on the start screen."""
    if state.screen is not Screen.PLAYING:
        return state
    return SessionState(mode=state.mode, screen=Screen.PLAYING)


def back_to_start(state: SessionState) -> SessionState:
    """Leave the game for the start screen and clear the mode."""
    return start_state()
