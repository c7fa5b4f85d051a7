"""
Sudoku Solver - Main Application Module
"""

import argparse
import os
import sys

import numpy as np

from .board_io import MalformedInputError, format_board, format_solution, read_puzzle
from .render import save_rendered_board
from .solver import check_solution, solve_puzzle


class SudokuSolver:
    """
    Main class for the Sudoku Solver application.

    Reads a puzzle, runs propagation and search, reports the result and
    optionally writes the solution as text and as an image.
    """

    def __init__(self, parallel=True, debug=False, quiet=False, cell_size=50):
        """
        Initialize the Sudoku Solver.

        Args:
            parallel (bool): Refine rows, columns and blocks in three worker threads
            debug (bool): Print every propagation iteration and search guess
            quiet (bool): Print only the solution lines
            cell_size (int): Cell size in pixels for rendered images (default: 50)
        """
        self.parallel = parallel
        self.debug = debug
        self.quiet = quiet
        self.cell_size = cell_size

    def _say(self, message=""):
        if not self.quiet:
            print(message)

    def solve(self, board):
        """
        Solve a parsed board.

        Returns:
            (solution or None, message)
        """
        board = np.asarray(board, dtype=int)
        self._say(f"\n[2/3] Solving ({'parallel' if self.parallel else 'sequential'} line refinement)...")
        self._say(f"      Givens: {np.count_nonzero(board)}")

        solution, message = solve_puzzle(board, parallel=self.parallel, debug=self.debug)
        if solution is None:
            self._say(f"      ✗ Could not solve: {message}")
            return None, message

        if not check_solution(solution):
            raise RuntimeError("Search returned an invalid grid")
        self._say(f"      ✓ {message}")
        return solution, message

    def process_puzzle(self, source, output_path=None, render_path=None):
        """
        Process one puzzle through the complete pipeline.

        Pipeline steps:
        1. Read the 9 puzzle lines
        2. Propagate and search
        3. Print and save the solution

        Args:
            source: Path to a puzzle file, or an open text stream
            output_path (str): Optional file to write the solution lines to
            render_path (str): Optional image file for the rendered solution

        Returns:
            dict: Results containing the puzzle, solution and message

        Raises:
            MalformedInputError: if the puzzle text is not a 9x9 grid
            OSError: if a file cannot be read or written
        """
        self._say(f"\n{'='*60}")
        self._say("[1/3] Reading puzzle...")
        if isinstance(source, (str, os.PathLike)):
            self._say(f"      Source: {os.path.basename(source)}")
            with open(source, encoding="utf-8") as f:
                board = read_puzzle(f)
        else:
            board = read_puzzle(source)

        self._say(format_board(board))

        solution, message = self.solve(board)

        self._say("\n[3/3] Writing results...")
        if solution is not None:
            self._say("")
            print(format_solution(solution))
            if output_path:
                with open(output_path, "w", encoding="utf-8") as f:
                    f.write(format_solution(solution) + "\n")
                self._say(f"      Solution saved to: {output_path}")
            if render_path:
                save_rendered_board(render_path, solution, board, self.cell_size)
                self._say(f"      Rendered grid saved to: {render_path}")
        else:
            print("No solution")

        self._say(f"{'='*60}\n")

        return {
            'puzzle': board,
            'solution': solution,
            'message': message,
        }


def main(argv=None):
    """
    Main entry point for the Sudoku Solver application.

    Handles command-line arguments and solves one puzzle.
    """
    parser = argparse.ArgumentParser(
        description='Sudoku Solver - line-consistency propagation with backtracking',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Solve a puzzle from a file:
    python -m sudoku_lines --input puzzle.txt

  Solve from stdin, printing only the solution:
    python -m sudoku_lines --quiet < puzzle.txt

  Save the solution as an image:
    python -m sudoku_lines --input puzzle.txt --render solved.png
        """
    )

    parser.add_argument('--input', '-i', default=None,
                        help='Path to a puzzle file: 9 lines of 9 characters (default: stdin)')
    parser.add_argument('--output', '-o', default=None,
                        help='Also write the solution lines to this file')
    parser.add_argument('--render', default=None,
                        help='Write an image of the solved grid (e.g. solved.png)')
    parser.add_argument('--cell-size', type=int, default=50,
                        help='Cell size in pixels for --render (default: 50)')
    parser.add_argument('--sequential', action='store_true',
                        help='Refine rows, columns and blocks in one thread')
    parser.add_argument('--debug', action='store_true',
                        help='Print every propagation iteration and search guess')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Print only the solution lines')

    args = parser.parse_args(argv)

    if args.input is not None and not os.path.exists(args.input):
        print(f"Error: Puzzle file not found: {args.input}")
        sys.exit(1)

    solver = SudokuSolver(
        parallel=not args.sequential,
        debug=args.debug,
        quiet=args.quiet,
        cell_size=args.cell_size,
    )

    try:
        result = solver.process_puzzle(args.input if args.input is not None else sys.stdin,
                                       output_path=args.output, render_path=args.render)
    except MalformedInputError as e:
        print(f"Error: Malformed puzzle: {e}")
        sys.exit(1)
    except OSError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if result['solution'] is None:
        sys.exit(1)


if __name__ == '__main__':
    main()
