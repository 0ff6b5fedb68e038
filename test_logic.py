"""
Tests for the logic module: board, win checker, validator and AI player.
"""

import itertools

import pytest

from logic import (
    AIPlayer,
    Cell,
    InvalidBoard,
    MoveValidator,
    OutcomeKind,
    Player,
    WIN_LINES,
    board_from_string,
    choose_move,
    create_empty_board,
    evaluate_outcome,
    format_board,
)
from logic.board import get_empty_cells, index_to_row_col, place
from logic.win_checker import check_winner, get_winning_line, is_draw


def B(text):
    return board_from_string(text)


# ==================== BOARD ====================

def test_empty_board_has_nine_empty_cells():
    board = create_empty_board()
    assert len(board) == 9
    assert all(cell is Cell.EMPTY for cell in board)


def test_board_from_string_and_helpers():
    board = B("X.O/.X./..O")
    assert board[0] is Cell.X
    assert board[2] is Cell.O
    assert get_empty_cells(board) == [1, 3, 5, 6, 7]
    assert index_to_row_col(5) == (1, 2)


def test_place_returns_new_board():
    board = create_empty_board()
    after = place(board, 4, Player.X)
    assert board[4] is Cell.EMPTY
    assert after[4] is Cell.X


def test_player_opposite_and_cell():
    assert Player.X.opposite() is Player.O
    assert Player.O.opposite() is Player.X
    assert Player.O.cell is Cell.O


def test_format_board_numbers_empty_cells_and_highlights_line():
    text = format_board(B("XXX/OO./..."), highlight=(0, 1, 2))
    assert "[X]" in text
    assert " 6 " in text


@pytest.mark.parametrize("length", [0, 8, 10])
def test_wrong_length_is_invalid(length):
    with pytest.raises(InvalidBoard):
        evaluate_outcome([Cell.EMPTY] * length)


def test_non_cell_entry_is_invalid():
    with pytest.raises(InvalidBoard):
        evaluate_outcome(["X"] + [Cell.EMPTY] * 8)


def test_bad_character_is_invalid():
    with pytest.raises(InvalidBoard):
        B("XO?/.../...")


# ==================== WIN CHECKER ====================

def test_win_lines_order():
    assert WIN_LINES[0] == (0, 1, 2)
    assert WIN_LINES[3] == (0, 3, 6)
    assert WIN_LINES[-1] == (2, 4, 6)
    assert len(WIN_LINES) == 8


@pytest.mark.parametrize("text, winner, line", [
    ("XXX/OO./...", Player.X, (0, 1, 2)),
    ("O.X/OX./O..", Player.O, (0, 3, 6)),
    ("X.O/.XO/..X", Player.X, (0, 4, 8)),
    ("X.O/XO./O..", Player.O, (2, 4, 6)),
])
def test_win_detection(text, winner, line):
    outcome = evaluate_outcome(B(text))
    assert outcome.kind is OutcomeKind.WIN
    assert outcome.winner is winner
    assert outcome.line == line
    assert check_winner(B(text)) is winner
    assert get_winning_line(B(text)) == line


def test_no_winner_on_open_board():
    outcome = evaluate_outcome(B("XO./.X./..O"))
    assert outcome.kind is OutcomeKind.NONE
    assert not outcome.is_over
    assert outcome.winner is None


def test_full_board_without_line_is_draw():
    board = B("XXO/OOX/XOX")
    outcome = evaluate_outcome(board)
    assert outcome.kind is OutcomeKind.DRAW
    assert is_draw(board)
    assert outcome.describe() == "It's a draw"


def test_full_board_with_line_is_win_not_draw():
    board = B("XXX/OOX/OXO")
    assert evaluate_outcome(board).kind is OutcomeKind.WIN
    assert not is_draw(board)


def test_first_line_in_order_is_reported():
    # Not reachable in play, but the result must still be deterministic
    outcome = evaluate_outcome(B("OOO/XXX/..."))
    assert outcome.winner is Player.O
    assert outcome.line == (0, 1, 2)


def test_evaluate_does_not_mutate_input():
    board = list(B("XO./.X./..O"))
    before = list(board)
    evaluate_outcome(board)
    assert board == before


def test_outcome_matches_lines_for_every_board():
    cells = (Cell.EMPTY, Cell.X, Cell.O)
    for board in itertools.product(cells, repeat=9):
        outcome = evaluate_outcome(board)
        uniform = [
            line for line in WIN_LINES
            if board[line[0]] is not Cell.EMPTY and board[line[0]] == board[line[1]] == board[line[2]]
        ]
        if uniform:
            assert outcome.kind is OutcomeKind.WIN
            assert outcome.line == uniform[0]
        elif Cell.EMPTY in board:
            assert outcome.kind is OutcomeKind.NONE
        else:
            assert outcome.kind is OutcomeKind.DRAW


# ==================== MOVE VALIDATOR ====================

def test_validator_accepts_empty_cell():
    result = MoveValidator().validate_move(create_empty_board(), 4)
    assert result.is_valid
    assert result.error_message is None


@pytest.mark.parametrize("text, index, message", [
    ("X../.../...", 0, "occupied"),
    ("XXX/OO./...", 8, "over"),
    (".../.../...", 9, "Invalid"),
    (".../.../...", -1, "Invalid"),
    (".../.../...", True, "Invalid"),
])
def test_validator_rejects(text, index, message):
    result = MoveValidator().validate_move(B(text), index)
    assert not result.is_valid
    assert message in result.error_message


def test_valid_moves_empty_after_game_over():
    validator = MoveValidator()
    assert validator.get_valid_moves(B("XXX/OO./...")) == []
    assert validator.get_valid_moves(B("XO./.../...")) == [2, 3, 4, 5, 6, 7, 8]


# ==================== AI PLAYER ====================

def test_empty_board_takes_center():
    assert choose_move(create_empty_board(), Player.O) == 4


def test_takes_win_before_block():
    # O can win at 2, X threatens 5
    assert choose_move(B("OO./XX./X.."), Player.O) == 2


def test_blocks_human_win():
    assert choose_move(B("XX./.O./..."), Player.O) == 2


def test_takes_center_without_threats():
    assert choose_move(B("X../.../..."), Player.O) == 4


def test_first_available_when_center_taken():
    assert choose_move(B("X../.O./..."), Player.O) == 1


def test_win_lines_inspected_in_order():
    # Row 0 completes at 2, column 0 at 6; rows come first
    assert choose_move(B("OO./O../XX."), Player.O) == 2


def test_block_picks_first_threat_in_line_order():
    # X threatens row 0 at 2 and column 0 at 6; rows come first
    assert choose_move(B("XX./XO./..."), Player.O) == 2


def _first_completing_cell(board, mark):
    for line in WIN_LINES:
        cells = [board[i] for i in line]
        if cells.count(mark) == 2 and cells.count(Cell.EMPTY) == 1:
            return line[cells.index(Cell.EMPTY)]
    return None


def test_choose_move_priority_for_every_board():
    cells = (Cell.EMPTY, Cell.X, Cell.O)
    for board in itertools.product(cells, repeat=9):
        expected = _first_completing_cell(board, Cell.O)
        if expected is None:
            expected = _first_completing_cell(board, Cell.X)
        if expected is None and board[4] is Cell.EMPTY:
            expected = 4
        if expected is None and Cell.EMPTY in board:
            expected = board.index(Cell.EMPTY)
        assert choose_move(board, Player.O) == expected, board


def test_last_cell_win():
    board = B("OXX/XOO/XX.")
    assert choose_move(board, Player.O) == 8


def test_full_board_has_no_move():
    assert choose_move(B("XXO/OOX/XOX"), Player.O) is None


def test_ai_plays_either_symbol():
    ai = AIPlayer(Player.X)
    assert ai.get_best_move(B("XX./OO./...")) == 2


def test_choose_move_does_not_mutate_board():
    board = list(B("XX./.O./..."))
    before = list(board)
    choose_move(board, Player.O)
    assert board == before


def test_choose_move_rejects_bad_board():
    with pytest.raises(InvalidBoard):
        choose_move([Cell.EMPTY] * 4, Player.O)


def test_describe_move():
    ai = AIPlayer(Player.O)
    assert ai.describe_move(create_empty_board()) == "Place O on cell 5 (row 2, column 2)"
    assert ai.describe_move(B("XXO/OOX/XOX")) == "No moves available!"
