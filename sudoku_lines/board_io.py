"""
Text input/output for puzzles.

Input is 9 lines of (at least) 9 characters: digits 1-9 are givens, any
other character is an unknown cell.
"""

from __future__ import annotations

from typing import Iterable, List, TextIO

import numpy as np

from .domains import SUDOKU_SIZE


class MalformedInputError(ValueError):
    """The puzzle text does not describe a 9x9 grid."""


def parse_puzzle(lines: Iterable[str]) -> np.ndarray:
    """
    Parse 9 text lines into a 9x9 board (0 = unknown).

    Characters past the ninth on a line are ignored.

    Raises:
        MalformedInputError: if there are fewer than 9 lines or a line is
            shorter than 9 characters
    """
    board = np.zeros((SUDOKU_SIZE, SUDOKU_SIZE), dtype=int)
    count = 0
    for r, line in enumerate(lines):
        if r == SUDOKU_SIZE:
            break
        text = line.rstrip("\r\n")
        if len(text) < SUDOKU_SIZE:
            raise MalformedInputError(
                f"Line {r+1}: expected {SUDOKU_SIZE} characters, got {len(text)}"
            )
        for c, ch in enumerate(text[:SUDOKU_SIZE]):
            board[r, c] = int(ch) if ch in "123456789" else 0
        count += 1

    if count < SUDOKU_SIZE:
        raise MalformedInputError(f"Expected {SUDOKU_SIZE} lines, got {count}")
    return board


def read_puzzle(stream: TextIO) -> np.ndarray:
    """Read a puzzle from an open text stream (file or stdin)."""
    lines: List[str] = []
    for line in stream:
        lines.append(line)
        if len(lines) == SUDOKU_SIZE:
            break
    return parse_puzzle(lines)


def format_solution(board: np.ndarray) -> str:
    """9 lines of 9 concatenated digits, no separators."""
    return "\n".join("".join(str(int(v)) for v in row) for row in board)


def format_board(board: np.ndarray) -> str:
    """Render the 9x9 board as a human-friendly string."""
    lines = []
    for r, row in enumerate(board):
        parts = []
        for c, val in enumerate(row):
            parts.append(str(val) if val != 0 else ".")
            if c in {2, 5}:
                parts.append("|")
        line = " ".join(parts)
        lines.append(line)
        if r in {2, 5}:
            lines.append("-" * len(line))
    return "\n".join(lines)
