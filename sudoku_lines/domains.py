"""
Candidate domains for the 9x9 grid.

Each cell's domain is a 9-bit mask: bit (d - 1) set means digit d is still
possible. A domain grid is a 9x9 numpy array of these masks.
"""

from __future__ import annotations

from typing import List, Tuple

import numpy as np

SUDOKU_SIZE = 9
BLOCK_SIZE = 3
ALL_DIGITS = (1 << SUDOKU_SIZE) - 1  # 0b1_1111_1111

DIGIT_BITS: Tuple[int, ...] = tuple(1 << d for d in range(SUDOKU_SIZE))

# Lookup tables indexed by mask
_POPCOUNT = np.array([bin(m).count("1") for m in range(ALL_DIGITS + 1)], dtype=np.int8)
_SINGLE_DIGIT = np.zeros(ALL_DIGITS + 1, dtype=np.int8)
for _d in range(1, SUDOKU_SIZE + 1):
    _SINGLE_DIGIT[1 << (_d - 1)] = _d


def digit_mask(digit: int) -> int:
    """Return the singleton mask for a digit, or the full mask for 0 (unknown)."""
    if digit == 0:
        return ALL_DIGITS
    if not 1 <= digit <= SUDOKU_SIZE:
        raise ValueError(f"Digit out of range: {digit}")
    return 1 << (digit - 1)


def mask_to_digits(mask: int) -> List[int]:
    """Digits contained in a mask, ascending."""
    return [d + 1 for d in range(SUDOKU_SIZE) if mask & (1 << d)]


def digits_to_mask(digits) -> int:
    mask = 0
    for d in digits:
        mask |= digit_mask(d) if d else 0
    return mask


def domain_grid_from_board(board: np.ndarray) -> np.ndarray:
    """
    Build the domain grid for a board (0 = unknown).

    Unknown cells get every digit, given cells a singleton.

    Raises:
        ValueError: if the board is not 9x9 or holds values outside 0..9
    """
    board = np.asarray(board)
    if board.shape != (SUDOKU_SIZE, SUDOKU_SIZE):
        raise ValueError(f"Board must be {SUDOKU_SIZE}x{SUDOKU_SIZE}, got shape {board.shape}")
    if board.min() < 0 or board.max() > SUDOKU_SIZE:
        raise ValueError("Board values must be between 0 and 9")

    domains = np.full((SUDOKU_SIZE, SUDOKU_SIZE), ALL_DIGITS, dtype=np.uint16)
    given = board > 0
    domains[given] = np.left_shift(1, board[given].astype(np.uint16) - 1)
    return domains


def check_domains(domains: np.ndarray) -> None:
    """Raise ValueError if a domain grid has the wrong shape or masks above ALL_DIGITS."""
    if domains.shape != (SUDOKU_SIZE, SUDOKU_SIZE):
        raise ValueError(f"Domain grid must be {SUDOKU_SIZE}x{SUDOKU_SIZE}, got shape {domains.shape}")
    if int(domains.max()) > ALL_DIGITS:
        raise ValueError("Domain claims more than 9 digits")


def count_candidates(domains: np.ndarray) -> np.ndarray:
    """Number of candidate digits per cell (9x9 ints)."""
    return _POPCOUNT[domains.astype(np.intp)]


def resolved_digits(domains: np.ndarray) -> np.ndarray:
    """Digit of every singleton cell, 0 elsewhere."""
    return _SINGLE_DIGIT[domains.astype(np.intp)].astype(int)


def to_blocks(grid: np.ndarray) -> np.ndarray:
    """
    Rearrange a 9x9 grid so that row b holds block b in row-major order.

    Block b covers rows 3*(b//3)..+2 and columns 3*(b%3)..+2. The
    rearrangement is its own inverse.
    """
    b = BLOCK_SIZE
    return grid.reshape(b, b, b, b).transpose(0, 2, 1, 3).reshape(SUDOKU_SIZE, SUDOKU_SIZE)


def from_blocks(blocks: np.ndarray) -> np.ndarray:
    return to_blocks(blocks)


def block_index(row: int, col: int) -> int:
    return (row // BLOCK_SIZE) * BLOCK_SIZE + col // BLOCK_SIZE
