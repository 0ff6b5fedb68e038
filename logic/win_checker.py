"""
Win checker for TicTacToe.
Computes the outcome (win, draw or still playing) from a board snapshot.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from .board import Cell, Player, is_full, validate_board


WinLine = Tuple[int, int, int]

# All possible winning lines as cell indices. The order matters:
# the first matching line is reported, and the AI inspects lines in this order.
WIN_LINES: Tuple[WinLine, ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


class OutcomeKind(Enum):
    NONE = "none"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    """
    Result of evaluating a board.

    winner and line are only set when kind is WIN.
    """
    kind: OutcomeKind
    winner: Optional[Player] = None
    line: Optional[WinLine] = None

    @classmethod
    def none(cls) -> "Outcome":
        return cls(OutcomeKind.NONE)

    @classmethod
    def draw(cls) -> "Outcome":
        return cls(OutcomeKind.DRAW)

    @classmethod
    def win(cls, winner: Player, line: WinLine) -> "Outcome":
        return cls(OutcomeKind.WIN, winner, line)

    @property
    def is_over(self) -> bool:
        """True for a win or a draw."""
        return self.kind is not OutcomeKind.NONE

    def describe(self) -> str:
        if self.kind is OutcomeKind.WIN:
            return f"Player {self.winner.value} wins!"
        if self.kind is OutcomeKind.DRAW:
            return "It's a draw"
        return "Game in progress"


def _check_line(board: Sequence[Cell], line: WinLine) -> Optional[Player]:
    """
    Check if a single line has a winner.

    Returns:
        The winning Player if all 3 cells hold the same mark, None otherwise.
    """
    a, b, c = line
    if board[a] is Cell.EMPTY:
        return None  # Empty cell, no winner on this line
    if board[a] == board[b] == board[c]:
        return Player(board[a].value)
    return None


def get_winning_line(board: Sequence[Cell]) -> Optional[WinLine]:
    """
    Get the winning line if there is one.

    Raises:
        InvalidBoard: If the board does not have 9 cells.
    """
    board = validate_board(board)
    for line in WIN_LINES:
        if _check_line(board, line) is not None:
            return line
    return None


def check_winner(board: Sequence[Cell]) -> Optional[Player]:
    """Get the winning Player, or None if no winner yet."""
    line = get_winning_line(board)
    if line is None:
        return None
    return Player(board[line[0]].value)


def is_draw(board: Sequence[Cell]) -> bool:
    """A draw is a full board with no winner."""
    return check_winner(board) is None and is_full(board)


def evaluate_outcome(board: Sequence[Cell]) -> Outcome:
    """
    Evaluate a board.

    Scans WIN_LINES in order; the first uniform, non-empty line wins.
    A full board with no such line is a draw. Never mutates the board.

    Args:
        board: 9 cells, row-major.

    Returns:
        Outcome.win, Outcome.draw or Outcome.none.

    Raises:
        InvalidBoard: If the board does not have 9 cells.
    """
    board = validate_board(board)

    for line in WIN_LINES:
        winner = _check_line(board, line)
        if winner is not None:
            return Outcome.win(winner, line)

    if is_full(board):
        return Outcome.draw()

    return Outcome.none()
