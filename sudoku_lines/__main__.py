"""
Entry point for running the sudoku_lines package.

Usage:
    python -m sudoku_lines --input path/to/puzzle.txt
"""

from .sudoku_solver import main

if __name__ == '__main__':
    main()
