"""
Move validator for TicTacToe.
Validates that a move follows the rules before it is placed.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .board import Cell, get_empty_cells, is_in_range
from .win_checker import evaluate_outcome


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. Index must address a cell (0-8)
    2. Can only place on empty cells
    3. Game must not be over
    """

    def validate_move(self, board: Sequence[Cell], index: int) -> ValidationResult:
        """
        Validate a move.

        Args:
            board: Current board.
            index: Cell to place on (0-8).

        Returns:
            ValidationResult with is_valid and error_message.
        """
        # Check if index is in valid range
        if not is_in_range(index):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid cell {index!r}. Must be 0-8."
            )

        # Check if game is over
        outcome = evaluate_outcome(board)
        if outcome.is_over:
            return ValidationResult(
                is_valid=False,
                error_message=f"Game is already over! ({outcome.describe()})"
            )

        # Check if cell is empty
        if board[index] is not Cell.EMPTY:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {board[index].value}"
            )

        return ValidationResult(is_valid=True)

    def get_valid_moves(self, board: Sequence[Cell]) -> List[int]:
        """
        Get all valid moves on the board.

        Returns:
            Empty cell indices, or an empty list once the game is over.
        """
        if evaluate_outcome(board).is_over:
            return []
        return get_empty_cells(board)
