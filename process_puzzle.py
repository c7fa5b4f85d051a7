#!/usr/bin/env python3
"""
Convenience script to solve a Sudoku puzzle file.

This script provides a simple interface to the Sudoku Solver pipeline.

Usage:
    python process_puzzle.py --input puzzle.txt
    python process_puzzle.py --input puzzle.txt --render solved.png
"""

import sys
import os

# Add the project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sudoku_lines.sudoku_solver import main

if __name__ == '__main__':
    main()
