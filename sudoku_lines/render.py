"""
Render a solved board as an image with OpenCV.

Given digits are drawn in black, solved digits in green.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import cv2
import numpy as np

from .domains import BLOCK_SIZE, SUDOKU_SIZE

GIVEN_COLOR = (0, 0, 0)
SOLVED_COLOR = (0, 160, 0)
LINE_COLOR = (80, 80, 80)


def render_board(solved: np.ndarray, original: Optional[np.ndarray] = None,
                 cell_size: int = 50) -> np.ndarray:
    """
    Draw the board on a white BGR canvas of (9 * cell_size) pixels square.

    Args:
        solved: 9x9 board to draw (0 cells are left blank)
        original: the puzzle's givens; cells non-zero here use GIVEN_COLOR
        cell_size: cell edge in pixels

    Returns:
        uint8 image of shape (9 * cell_size, 9 * cell_size, 3)
    """
    if original is None:
        original = solved
    size = SUDOKU_SIZE * cell_size
    canvas = np.full((size, size, 3), 255, dtype=np.uint8)
    font = cv2.FONT_HERSHEY_SIMPLEX
    font_scale = cell_size / 55.0
    thickness = max(1, cell_size // 25)

    for i in range(SUDOKU_SIZE + 1):
        width = 3 if i % BLOCK_SIZE == 0 else 1
        pos = min(i * cell_size, size - 1)
        cv2.line(canvas, (0, pos), (size - 1, pos), LINE_COLOR, width)
        cv2.line(canvas, (pos, 0), (pos, size - 1), LINE_COLOR, width)

    for r in range(SUDOKU_SIZE):
        for c in range(SUDOKU_SIZE):
            val = int(solved[r, c])
            if val == 0:
                continue
            color = GIVEN_COLOR if original[r, c] != 0 else SOLVED_COLOR
            text = str(val)
            text_size, _ = cv2.getTextSize(text, font, font_scale, thickness)
            x = c * cell_size + (cell_size - text_size[0]) // 2
            y = r * cell_size + (cell_size + text_size[1]) // 2
            cv2.putText(canvas, text, (x, y), font, font_scale, color, thickness, cv2.LINE_AA)

    return canvas


def save_rendered_board(path: str | Path, solved: np.ndarray, original: Optional[np.ndarray] = None,
                        cell_size: int = 50) -> None:
    """Render the board and write it to `path` (format from the file extension)."""
    image = render_board(solved, original, cell_size)
    if not cv2.imwrite(str(path), image):
        raise OSError(f"Could not write image to {path}")
