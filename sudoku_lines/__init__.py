"""
Sudoku Solver - Line-consistency propagation

This package contains modules for:
- Candidate domains for the 9x9 grid
- Line propagation (subset reachability per row, column and block)
- Fixpoint aggregation and backtracking search
- Puzzle text I/O and solution rendering
"""

__version__ = "1.0.0"
__author__ = "Sudoku Lines Project Team"
