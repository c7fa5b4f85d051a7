"""
Constraint aggregation and the fixpoint loop.

One iteration refines every row, column and block of the same domain grid
snapshot with the line propagator and intersects the three results per cell.
The loop repeats until no cell is ambiguous, the number of ambiguous cells
stops falling, or a cell runs out of candidates.
"""

from __future__ import annotations

from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

import numpy as np

from .board_io import format_board
from .domains import (
    SUDOKU_SIZE,
    check_domains,
    count_candidates,
    from_blocks,
    mask_to_digits,
    resolved_digits,
    to_blocks,
)
from .propagation import UnsolvableLineError, propagate_line

FAMILIES = ("row", "column", "block")


@dataclass
class Solved:
    board: np.ndarray
    iterations: int = 0


@dataclass
class Stalled:
    """Propagation stopped making progress; `cell` is the first ambiguous cell."""

    board: np.ndarray
    cell: Tuple[int, int]
    candidates: List[int] = field(default_factory=list)
    iterations: int = 0


@dataclass
class Unsolvable:
    reason: str
    iterations: int = 0


Outcome = Union[Solved, Stalled, Unsolvable]


def refine_family(domains: np.ndarray, family: str) -> np.ndarray:
    """
    Run the line propagator over the 9 lines of one family.

    Returns a new 9x9 domain grid; the input is not modified.

    Raises:
        UnsolvableLineError: if a line leaves a cell without candidates
    """
    if family == "row":
        lines = domains
    elif family == "column":
        lines = domains.T
    elif family == "block":
        lines = to_blocks(domains)
    else:
        raise ValueError(f"Unknown line family: {family}")

    refined = np.empty((SUDOKU_SIZE, SUDOKU_SIZE), dtype=np.uint16)
    for i in range(SUDOKU_SIZE):
        try:
            refined[i] = propagate_line(lines[i].tolist())
        except UnsolvableLineError as exc:
            raise UnsolvableLineError(f"{family.capitalize()} {i + 1}: {exc}") from exc

    if family == "column":
        return refined.T.copy()
    if family == "block":
        return from_blocks(refined).copy()
    return refined


def aggregate(domains: np.ndarray, executor: Optional[Executor] = None) -> np.ndarray:
    """
    Refine rows, columns and blocks independently and AND the results.

    With an executor the three families run as three tasks over the same
    read-only snapshot and are joined before intersecting.
    """
    check_domains(domains)
    snapshot = domains.copy()
    snapshot.flags.writeable = False

    if executor is None:
        refined = [refine_family(snapshot, family) for family in FAMILIES]
    else:
        futures = [executor.submit(refine_family, snapshot, family) for family in FAMILIES]
        refined = [future.result() for future in futures]

    rows, cols, blocks = refined
    return rows & cols & blocks


def drive(domains: np.ndarray, executor: Optional[Executor] = None, debug: bool = False) -> Outcome:
    """
    Aggregate repeatedly until solved, stalled or contradictory.

    Args:
        domains: starting domain grid (not modified)
        executor: optional executor for the three-way fan-out
        debug: print the ambiguity count and board after every iteration

    Returns:
        Solved, Stalled or Unsolvable
    """
    board = resolved_digits(domains)
    previous_ambiguous = 0
    iteration = 0

    while True:
        iteration += 1
        try:
            domains = aggregate(domains, executor)
        except UnsolvableLineError as exc:
            if debug:
                print(f"      Iteration {iteration}: ✗ {exc}")
            return Unsolvable(str(exc), iteration)

        counts = count_candidates(domains)
        empty = np.argwhere(counts == 0)
        if empty.size:
            r, c = (int(v) for v in empty[0])
            if debug:
                print(f"      Iteration {iteration}: ✗ no candidates left at ({r+1},{c+1})")
            return Unsolvable(f"No candidates left at ({r+1},{c+1})", iteration)

        resolved = counts == 1
        board[resolved] = resolved_digits(domains)[resolved]
        ambiguous = int(np.count_nonzero(counts > 1))

        if debug:
            print(f"      Iteration {iteration}: {ambiguous} ambiguous cells")
            print(format_board(board))

        if ambiguous == 0:
            # Families were refined from the same snapshot, so two cells of one
            # line can collapse to the same digit in this iteration.
            try:
                aggregate(domains, executor)
            except UnsolvableLineError as exc:
                if debug:
                    print(f"      Iteration {iteration}: ✗ conflicting singletons ({exc})")
                return Unsolvable(f"Conflicting singletons: {exc}", iteration)
            return Solved(board, iteration)
        if ambiguous == previous_ambiguous:
            r, c = (int(v) for v in np.argwhere(counts > 1)[0])
            return Stalled(board, (r, c), mask_to_digits(int(domains[r, c])), iteration)
        previous_ambiguous = ambiguous
