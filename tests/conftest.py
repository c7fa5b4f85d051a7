# tests/conftest.py
import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to sys.path so "sudoku_lines" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def board_from_string(text: str) -> np.ndarray:
    """81 characters, row-major; '0' or '.' for unknown cells."""
    return np.array([int(ch) if ch.isdigit() else 0 for ch in text], dtype=int).reshape(9, 9)


# Classic 30-clue example puzzle and its completion
CLASSIC_PUZZLE = (
    "53..7...."
    "6..195..."
    ".98....6."
    "8...6...3"
    "4..8.3..1"
    "7...2...6"
    ".6....28."
    "...419..5"
    "....8..79"
)
CLASSIC_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)

# A 17-clue puzzle (minimal, unique completion)
MINIMAL_PUZZLE = (
    "000000010"
    "400000000"
    "020000000"
    "000050407"
    "008000300"
    "001090000"
    "300400200"
    "050100000"
    "000806000"
)
MINIMAL_SOLUTION = (
    "693784512"
    "487512936"
    "125963874"
    "932651487"
    "568247391"
    "741398625"
    "319475268"
    "856129743"
    "274836159"
)

# Cells (0,3)=6, (0,4)=7, (3,3)=7, (3,4)=6 of CLASSIC_SOLUTION form a
# rectangle whose digits can be swapped; blanking them leaves two completions.
RECTANGLE_CELLS = [(0, 3), (0, 4), (3, 3), (3, 4)]


@pytest.fixture
def classic_puzzle():
    return board_from_string(CLASSIC_PUZZLE)


@pytest.fixture
def classic_solution():
    return board_from_string(CLASSIC_SOLUTION)


@pytest.fixture
def minimal_puzzle():
    return board_from_string(MINIMAL_PUZZLE)


@pytest.fixture
def minimal_solution():
    return board_from_string(MINIMAL_SOLUTION)


@pytest.fixture
def rectangle_puzzle():
    board = board_from_string(CLASSIC_SOLUTION)
    for r, c in RECTANGLE_CELLS:
        board[r, c] = 0
    return board


@pytest.fixture
def empty_board():
    return np.zeros((9, 9), dtype=int)


# Propagation stalls on this puzzle and its first guess makes two cells of
# one row collapse to the same digit; the search has to move on.
BACKTRACK_PUZZLE = (
    "530000900"
    "600000048"
    "000300060"
    "000700000"
    "020853001"
    "700000006"
    "900530080"
    "087009635"
    "305086079"
)


@pytest.fixture
def backtrack_puzzle():
    return board_from_string(BACKTRACK_PUZZLE)
