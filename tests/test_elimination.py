import numpy as np
import pytest

from sudoku_propagation.board import Board, parse
from sudoku_propagation.constraints import Column, Row, all_groups, rows
from sudoku_propagation.elimination import (
    propagate,
    remove_singles,
    remove_subsets,
    verify_state,
)
from sudoku_propagation.exceptions import ConsistencyViolation


def _keep_only(cell, digits):
    cell.remove_candidates([d for d in range(1, 10) if d not in digits])


def test_naked_single():
    board = Board.empty()
    _keep_only(board[0, 0], [4])
    _keep_only(board[0, 1], [4, 6])

    assert remove_singles(board, [Row(0)]) == 8

    assert board[0, 1].candidates == (6,)
    for col in range(2, 9):
        assert not board[0, col].has_candidate(4)
    assert board[0, 0].candidates == (4,)
    # Other rows are untouched.
    assert board[1, 1].has_candidate(4)


def test_naked_single_uses_snapshot():
    board = Board.empty()
    _keep_only(board[0, 0], [4])
    _keep_only(board[0, 1], [4, 6])

    # Cell R1C2 only becomes resolved during the pass, so 6 stays elsewhere.
    remove_singles(board, [Row(0)])
    assert board[0, 5].has_candidate(6)
    assert remove_singles(board, [Row(0)]) == 7
    assert not board[0, 5].has_candidate(6)


def test_naked_pair():
    board = Board.empty()
    _keep_only(board[0, 0], [3, 7])
    _keep_only(board[0, 4], [7, 3])

    assert remove_subsets(board, [Row(0)]) == 14

    assert board[0, 0].candidates == (3, 7)
    assert board[0, 4].candidates == (3, 7)
    for col in [1, 2, 3, 5, 6, 7, 8]:
        assert board[0, col].candidates == (1, 2, 4, 5, 6, 8, 9)
    assert board[1, 0].has_candidate(3)


def test_naked_triple():
    board = Board.empty()
    for col in [0, 3, 6]:
        _keep_only(board[col, 2], [1, 5, 9])

    assert remove_subsets(board, [Column(2)]) == 18
    assert board[8, 2].candidates == (2, 3, 4, 6, 7, 8)


def test_subset_not_full_is_ignored():
    board = Board.empty()
    _keep_only(board[0, 0], [3, 7, 8])
    _keep_only(board[0, 1], [3, 7, 8])

    assert remove_subsets(board, [Row(0)]) == 0


def test_subset_does_not_touch_resolved_cells():
    board = Board.empty()
    _keep_only(board[0, 0], [3, 7])
    _keep_only(board[0, 1], [3, 7])
    _keep_only(board[0, 2], [3])

    remove_subsets(board, [Row(0)])
    assert board[0, 2].candidates == (3,)


def test_singles_pass_is_independent_of_group_order(wikipedia_board):
    forward = wikipedia_board.copy()
    backward = wikipedia_board.copy()

    remove_singles(forward, all_groups())
    remove_singles(backward, list(reversed(all_groups())))

    assert np.array_equal(forward.possibles, backward.possibles)


def test_verify_state_accepts_valid_board(wikipedia_board):
    verify_state(wikipedia_board)


def test_verify_state_missing_digit():
    board = Board.empty()
    for col in range(9):
        board[0, col].remove_candidate(9)

    with pytest.raises(ConsistencyViolation, match="row 1") as excinfo:
        verify_state(board)
    assert "options=[1, 2, 3, 4, 5, 6, 7, 8]" in str(excinfo.value)


def test_verify_state_checks_columns_and_boxes():
    board = Board.empty()
    for row in range(9):
        board[row, 4].remove_candidate(2)

    with pytest.raises(ConsistencyViolation, match="column 5"):
        verify_state(board)


def test_verify_state_empty_cell():
    board = Board.empty()
    board.possibles[40] = False

    with pytest.raises(ConsistencyViolation, match="no candidates"):
        verify_state(board)


def test_verify_state_duplicate_placement(solution_text):
    board = parse(solution_text.replace("534678912", "535678912"))
    with pytest.raises(ConsistencyViolation):
        verify_state(board, rows())


def test_duplicate_givens_abort(wikipedia_text):
    board = parse(wikipedia_text.replace("53xx7xxxx", "53xx7xx5x"))
    with pytest.raises(ConsistencyViolation):
        propagate(board)


def test_propagate_solves_diagonal(diagonal_board, solution_grid):
    result = propagate(diagonal_board)

    assert result.solved
    assert result.rounds == 2
    assert result.removed == 9 * 8
    for row, digits in enumerate(solution_grid):
        for col, digit in enumerate(digits):
            assert diagonal_board[row, col].resolved_value == digit


def test_propagate_is_sound(wikipedia_board, solution_grid):
    propagate(wikipedia_board)

    for row, digits in enumerate(solution_grid):
        for col, digit in enumerate(digits):
            assert wikipedia_board[row, col].has_candidate(digit)


def test_candidates_only_shrink(wikipedia_board):
    history = [wikipedia_board.possibles.copy()]

    def record(report, board):
        history.append(board.possibles.copy())

    propagate(wikipedia_board, on_pass=record)

    for before, after in zip(history, history[1:]):
        assert np.all(before >= after)
        assert np.all(after.any(axis=1))
        resolved = before.sum(axis=1) == 1
        assert np.array_equal(before[resolved], after[resolved])


def test_pass_reports(wikipedia_board):
    reports = []
    result = propagate(wikipedia_board, on_pass=lambda r, b: reports.append(r))

    assert len(reports) == result.rounds * 6
    assert [(r.family, r.rule) for r in reports[:6]] == [
        ("rows", "remove_subsets"),
        ("rows", "remove_singles"),
        ("columns", "remove_subsets"),
        ("columns", "remove_singles"),
        ("boxes", "remove_subsets"),
        ("boxes", "remove_singles"),
    ]
    assert sum(r.removed for r in reports) == result.removed
    assert all(r.removed == 0 for r in reports[-6:])


def test_fixed_point_is_stable(wikipedia_board):
    propagate(wikipedia_board)
    before = wikipedia_board.possibles.copy()

    result = propagate(wikipedia_board)

    assert result.rounds == 1
    assert result.removed == 0
    assert np.array_equal(before, wikipedia_board.possibles)


def test_termination_bound(wikipedia_board):
    initial = wikipedia_board.candidate_count()
    result = propagate(wikipedia_board)

    assert result.removed == initial - wikipedia_board.candidate_count()
    assert result.removed <= 81 * 8


def test_unconstrained_board_makes_no_progress():
    board = Board.empty()
    result = propagate(board)

    assert result.rounds == 1
    assert result.removed == 0
    assert not result.solved
