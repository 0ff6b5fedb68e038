"""
AI player for TicTacToe.
Uses a fixed win / block / center / first-available heuristic.
"""

from typing import Optional, Sequence

from .board import (
    CENTER_INDEX,
    Cell,
    Player,
    first_empty_cell,
    index_to_row_col,
    validate_board,
)
from .win_checker import WIN_LINES


def find_completing_move(board: Sequence[Cell], player: Player) -> Optional[int]:
    """
    Find a cell that completes three in a row for player.

    Lines are inspected in WIN_LINES order (rows, columns, diagonals);
    the first line holding two of player's marks and one empty cell wins.

    Returns:
        The empty cell index of that line, or None.
    """
    mark = player.cell
    for line in WIN_LINES:
        cells = [board[i] for i in line]
        if cells.count(mark) == 2 and cells.count(Cell.EMPTY) == 1:
            return line[cells.index(Cell.EMPTY)]
    return None


class AIPlayer:
    """
    A deterministic computer opponent.

    Priority order, first applicable rule wins:
    1. Win if it can complete a line
    2. Block the human's completing cell
    3. Take the center
    4. Take the lowest-indexed empty cell
    """

    def __init__(self, player: Player = Player.O):
        """
        Initialize the AI player.

        Args:
            player: Which symbol the AI places (default: O)
        """
        self.player = player

    def get_best_move(self, board: Sequence[Cell]) -> Optional[int]:
        """
        Choose the AI's next move. Does not modify the board.

        Args:
            board: Current board (9 cells).

        Returns:
            Cell index (0-8), or None if the board is full.

        Raises:
            InvalidBoard: If the board does not have 9 cells.
        """
        board = validate_board(board)

        win = find_completing_move(board, self.player)
        if win is not None:
            return win

        block = find_completing_move(board, self.player.opposite())
        if block is not None:
            return block

        if board[CENTER_INDEX] is Cell.EMPTY:
            return CENTER_INDEX

        return first_empty_cell(board)

    def describe_move(self, board: Sequence[Cell]) -> str:
        """
        Get a human-readable move suggestion.

        Returns:
            A string describing the suggested move.
        """
        move = self.get_best_move(board)

        if move is None:
            return "No moves available!"

        row, col = index_to_row_col(move)
        return f"Place {self.player.value} on cell {move + 1} (row {row + 1}, column {col + 1})"


def choose_move(board: Sequence[Cell], player: Player) -> Optional[int]:
    """Pick the next move for player using the AIPlayer heuristic."""
    return AIPlayer(player).get_best_move(board)
