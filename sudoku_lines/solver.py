"""
Depth-first search on top of the fixpoint loop.

Each node drives propagation to a fixpoint; when it stalls, the first
ambiguous cell (row-major) is tried with each candidate in ascending order
on a cloned board.
"""

from __future__ import annotations

from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

from .domains import BLOCK_SIZE, SUDOKU_SIZE, block_index, domain_grid_from_board
from .fixpoint import FAMILIES, Solved, Stalled, drive


@dataclass
class SearchStats:
    nodes: int = 0
    iterations: int = 0
    guesses: int = 0
    max_depth: int = 0


def check_solution(board: np.ndarray) -> bool:
    """True if every cell holds 1-9 and no row, column or block repeats a digit."""
    board = np.asarray(board)
    if board.shape != (SUDOKU_SIZE, SUDOKU_SIZE):
        return False
    if board.min() < 1 or board.max() > SUDOKU_SIZE:
        return False
    expected = set(range(1, SUDOKU_SIZE + 1))
    for i in range(SUDOKU_SIZE):
        if set(board[i, :].tolist()) != expected or set(board[:, i].tolist()) != expected:
            return False
    for br in range(0, SUDOKU_SIZE, BLOCK_SIZE):
        for bc in range(0, SUDOKU_SIZE, BLOCK_SIZE):
            if set(board[br:br + BLOCK_SIZE, bc:bc + BLOCK_SIZE].ravel().tolist()) != expected:
                return False
    return True


def find_given_conflicts(board: np.ndarray) -> List[str]:
    """Describe duplicate givens in rows, columns and blocks."""
    notes: List[str] = []
    for i in range(SUDOKU_SIZE):
        row_vals = [v for v in board[i, :] if v != 0]
        if len(row_vals) != len(set(row_vals)):
            notes.append(f"Row {i+1} has duplicate given digit")

        col_vals = [v for v in board[:, i] if v != 0]
        if len(col_vals) != len(set(col_vals)):
            notes.append(f"Column {i+1} has duplicate given digit")

    blocks: Dict[int, List[int]] = {}
    for r in range(SUDOKU_SIZE):
        for c in range(SUDOKU_SIZE):
            if board[r, c] != 0:
                blocks.setdefault(block_index(r, c), []).append(int(board[r, c]))
    for b, block_vals in sorted(blocks.items()):
        if len(block_vals) != len(set(block_vals)):
            br, bc = divmod(b, BLOCK_SIZE)
            notes.append(f"3x3 block ({br+1},{bc+1}) has duplicate given digit")

    return notes


def solve_board(board: np.ndarray, stats: SearchStats, executor: Optional[Executor] = None,
                debug: bool = False, depth: int = 0) -> Optional[np.ndarray]:
    """
    Solve one search node. Returns the solved board, or None if this node
    and all of its branches fail. The input board is not modified.
    """
    stats.nodes += 1
    stats.max_depth = max(stats.max_depth, depth)

    outcome = drive(domain_grid_from_board(board), executor=executor, debug=debug)
    stats.iterations += outcome.iterations

    if isinstance(outcome, Solved):
        return outcome.board
    if not isinstance(outcome, Stalled):
        if debug:
            print(f"      Depth {depth}: dead end ({outcome.reason})")
        return None

    r, c = outcome.cell
    for val in outcome.candidates:
        trial = outcome.board.copy()
        trial[r, c] = val
        stats.guesses += 1
        if debug:
            print(f"      Depth {depth}: guess ({r+1},{c+1}) = {val} from {outcome.candidates}")
        solution = solve_board(trial, stats, executor, debug, depth + 1)
        if solution is not None:
            return solution

    return None


def solve_puzzle(board: np.ndarray, parallel: bool = True, debug: bool = False
                 ) -> tuple[np.ndarray | None, str]:
    """
    Return a solved copy of the board, or (None, reason) if it has no solution.

    Raises:
        ValueError: if the board is not 9x9 or holds values outside 0..9
    """
    board = np.asarray(board, dtype=int)
    domain_grid_from_board(board)

    stats = SearchStats()
    if parallel:
        with ThreadPoolExecutor(max_workers=len(FAMILIES)) as executor:
            solution = solve_board(board, stats, executor, debug)
    else:
        solution = solve_board(board, stats, None, debug)

    if solution is None:
        conflicts = find_given_conflicts(board)
        reason = "No solution exists for this puzzle"
        if conflicts:
            reason = f"{'; '.join(conflicts)}. {reason}"
        return None, reason

    return solution, (f"Solved in {stats.iterations} iterations, "
                      f"{stats.nodes} search nodes, {stats.guesses} guesses")
