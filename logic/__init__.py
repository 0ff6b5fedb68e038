"""
Logic module for TicTacToe.
Handles the board, rules, outcome evaluation and the computer opponent.
"""

from .board import (
    Board,
    Cell,
    InvalidBoard,
    Player,
    board_from_string,
    create_empty_board,
    format_board,
    get_empty_cells,
)
from .win_checker import WIN_LINES, Outcome, OutcomeKind, evaluate_outcome
from .move_validator import MoveValidator, ValidationResult
from .ai_player import AIPlayer, choose_move

__version__ = "1.0.0"
