# tests/test_solver.py
import numpy as np
import pytest

import sudoku_lines.solver as solver_module
from sudoku_lines.domains import mask_to_digits
from sudoku_lines.fixpoint import Stalled, Unsolvable
from sudoku_lines.solver import (
    SearchStats,
    check_solution,
    find_given_conflicts,
    solve_board,
    solve_puzzle,
)


def test_check_solution(classic_solution, classic_puzzle):
    assert check_solution(classic_solution)
    assert not check_solution(classic_puzzle)
    swapped = classic_solution.copy()
    swapped[0, [0, 1]] = swapped[0, [1, 0]]
    assert not check_solution(swapped)


def test_solves_classic_puzzle(classic_puzzle, classic_solution):
    solution, message = solve_puzzle(classic_puzzle, parallel=False)
    np.testing.assert_array_equal(solution, classic_solution)
    assert message.startswith("Solved")


def test_solves_minimal_puzzle(minimal_puzzle, minimal_solution):
    solution, _ = solve_puzzle(minimal_puzzle)
    assert solution is not None
    assert check_solution(solution)
    np.testing.assert_array_equal(solution, minimal_solution)


def test_solution_keeps_givens(minimal_puzzle):
    solution, _ = solve_puzzle(minimal_puzzle, parallel=False)
    given = minimal_puzzle != 0
    np.testing.assert_array_equal(solution[given], minimal_puzzle[given])


def test_guess_takes_lowest_candidate(rectangle_puzzle, classic_solution):
    stats = SearchStats()
    solution = solve_board(rectangle_puzzle, stats)
    # (1,4) is tried with 6 first, which completes to the classic solution
    np.testing.assert_array_equal(solution, classic_solution)
    assert stats.guesses == 1
    assert stats.nodes == 2
    assert stats.max_depth == 1


def test_input_board_is_not_modified(rectangle_puzzle):
    before = rectangle_puzzle.copy()
    solve_puzzle(rectangle_puzzle, parallel=False)
    np.testing.assert_array_equal(rectangle_puzzle, before)


def test_duplicate_givens_report_failure(empty_board):
    board = empty_board
    board[0, 0] = 5
    board[0, 8] = 5
    solution, message = solve_puzzle(board)
    assert solution is None
    assert "Row 1 has duplicate given digit" in message
    assert "No solution exists" in message


def test_duplicate_givens_in_block_are_named(empty_board):
    board = empty_board
    board[3, 3] = 5
    board[4, 4] = 5
    assert find_given_conflicts(board) == ["3x3 block (2,2) has duplicate given digit"]


def test_impossible_puzzle_terminates(empty_board):
    board = empty_board
    board[0, :8] = [1, 2, 3, 4, 5, 6, 7, 8]
    board[4, 8] = 9
    assert find_given_conflicts(board) == []
    solution, message = solve_puzzle(board, parallel=False)
    assert solution is None
    assert message == "No solution exists for this puzzle"


def test_search_exhausts_candidates_in_order(monkeypatch, empty_board):
    tried = []

    def fake_drive(domains, executor=None, debug=False):
        if not fake_drive.root_done:
            fake_drive.root_done = True
            return Stalled(np.zeros((9, 9), dtype=int), (2, 5), [3, 7, 8], 1)
        tried.extend(mask_to_digits(int(domains[2, 5])))
        return Unsolvable("dead end", 1)

    fake_drive.root_done = False
    monkeypatch.setattr(solver_module, "drive", fake_drive)

    stats = SearchStats()
    assert solve_board(empty_board, stats) is None
    assert tried == [3, 7, 8]
    assert stats.guesses == 3
    assert stats.nodes == 4


def test_rejects_bad_board():
    with pytest.raises(ValueError):
        solve_puzzle(np.zeros((9, 8), dtype=int))


def test_search_moves_past_a_collapsing_guess(backtrack_puzzle):
    stats = SearchStats()
    solution = solve_board(backtrack_puzzle, stats)
    assert solution is not None
    assert check_solution(solution)
    given = backtrack_puzzle != 0
    np.testing.assert_array_equal(solution[given], backtrack_puzzle[given])
    # The first candidate fails, so at least a second one is tried
    assert stats.guesses >= 2


def test_solve_puzzle_backtracks_in_parallel_mode(backtrack_puzzle):
    solution, message = solve_puzzle(backtrack_puzzle)
    assert solution is not None
    assert check_solution(solution)
    assert message.startswith("Solved")
