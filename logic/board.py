"""
Board model for TicTacToe.
A board is an immutable row-major tuple of 9 cells.
"""

from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple


BOARD_SIZE = 3
CELL_COUNT = BOARD_SIZE * BOARD_SIZE
CENTER_INDEX = 4


class InvalidBoard(ValueError):
    """Raised when a board does not hold exactly 9 cells."""


class Cell(Enum):
    """Contents of one square."""
    EMPTY = ""
    X = "X"
    O = "O"

    def __str__(self) -> str:
        return self.value or "."


class Player(Enum):
    """The two player symbols. X always moves first."""
    X = "X"
    O = "O"

    def opposite(self) -> "Player":
        """Get the opposite player."""
        return Player.O if self == Player.X else Player.X

    @property
    def cell(self) -> Cell:
        """The cell value this player places."""
        return Cell(self.value)


Board = Tuple[Cell, ...]


def create_empty_board() -> Board:
    """Create a fresh board with all 9 cells empty."""
    return (Cell.EMPTY,) * CELL_COUNT


def validate_board(board: Sequence[Cell]) -> Board:
    """
    Check the board shape and return it as a tuple.

    Args:
        board: Any sequence of cells.

    Returns:
        The board as an immutable tuple.

    Raises:
        InvalidBoard: If the length is not 9 or an entry is not a Cell.
    """
    if len(board) != CELL_COUNT:
        raise InvalidBoard(f"Board must have {CELL_COUNT} cells, got {len(board)}")

    for index, cell in enumerate(board):
        if not isinstance(cell, Cell):
            raise InvalidBoard(f"Cell {index} is not a Cell: {cell!r}")

    return tuple(board)


def board_from_string(text: str) -> Board:
    """
    Build a board from a compact string such as "XO./.X./..O".

    'X' and 'O' are marks; '.', '_' and space are empty cells;
    '|' and '/' are row separators and are skipped.
    """
    cells: List[Cell] = []
    for char in text:
        if char in "|/":
            continue
        if char in "._ ":
            cells.append(Cell.EMPTY)
        elif char.upper() in ("X", "O"):
            cells.append(Cell(char.upper()))
        else:
            raise InvalidBoard(f"Unknown cell character: {char!r}")
    return validate_board(cells)


def is_in_range(index: int) -> bool:
    """True if index addresses a cell on the board."""
    if isinstance(index, bool) or not isinstance(index, int):
        return False
    return 0 <= index < CELL_COUNT


def get_empty_cells(board: Sequence[Cell]) -> List[int]:
    """
    Get all empty cells on the board.

    Returns:
        Indices of empty cells in ascending order.
    """
    return [index for index, cell in enumerate(board) if cell is Cell.EMPTY]


def first_empty_cell(board: Sequence[Cell]) -> Optional[int]:
    """Lowest-indexed empty cell, or None when the board is full."""
    for index, cell in enumerate(board):
        if cell is Cell.EMPTY:
            return index
    return None


def is_full(board: Sequence[Cell]) -> bool:
    return all(cell is not Cell.EMPTY for cell in board)


def place(board: Sequence[Cell], index: int, player: Player) -> Board:
    """
    Return a new board with the player's symbol at index.
    The caller is responsible for checking that the cell is empty.
    """
    cells = list(validate_board(board))
    cells[index] = player.cell
    return tuple(cells)


def index_to_row_col(index: int) -> Tuple[int, int]:
    """Convert a cell index (0-8) to (row, col)."""
    return divmod(index, BOARD_SIZE)


def row_col_to_index(row: int, col: int) -> int:
    """Convert (row, col) to a cell index (0-8)."""
    return row * BOARD_SIZE + col


def format_board(board: Sequence[Cell], highlight: Iterable[int] = ()) -> str:
    """
    Render the board as text.

    Empty cells show their 1-based number so the console can ask
    for a cell by number. Cells in highlight are wrapped in brackets.
    """
    marked = set(highlight)
    lines = []
    for row in range(BOARD_SIZE):
        parts = []
        for col in range(BOARD_SIZE):
            index = row_col_to_index(row, col)
            cell = board[index]
            text = cell.value if cell is not Cell.EMPTY else str(index + 1)
            parts.append(f"[{text}]" if index in marked else f" {text} ")
        lines.append("|".join(parts))
        if row < BOARD_SIZE - 1:
            lines.append("---+---+---")
    return "\n".join(lines)
