"""
Trace the line propagator on a single line: print the forward and backward
reachability states and the refined domain of every position.

Each of the 9 arguments lists the digits allowed at that position; '.' or '0'
means any digit.

Usage:
  python scripts/trace_line.py 1 . . . . . . . 12
  python scripts/trace_line.py 1 . . . . . . . 12 --symmetric
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from sudoku_lines.domains import ALL_DIGITS, SUDOKU_SIZE, digits_to_mask, mask_to_digits  # noqa: E402
from sudoku_lines.propagation import UnsolvableLineError, describe_states, scan_line  # noqa: E402


def parse_domain(text: str) -> int:
    """'135' -> mask of {1, 3, 5}; '.' or '0' -> every digit."""
    digits = [int(ch) for ch in text if ch in "123456789"]
    return digits_to_mask(digits) if digits else ALL_DIGITS


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Trace the line propagator on one line.")
    parser.add_argument("domains", nargs=SUDOKU_SIZE, help="Allowed digits per position")
    parser.add_argument("--symmetric", action="store_true",
                        help="Step the backward states with the original domains")
    args = parser.parse_args(argv)

    line = [parse_domain(d) for d in args.domains]
    try:
        scan = scan_line(line, narrow_backward=not args.symmetric)
    except UnsolvableLineError as exc:
        print(f"Unsolvable line: {exc}")
        return 1

    for i in range(SUDOKU_SIZE + 1):
        print(f"--> {i}: {describe_states(scan.forward[i])}")
    print("-" * 40)
    for i in reversed(range(SUDOKU_SIZE + 1)):
        print(f"<-- {i}: {describe_states(scan.backward[i])}")
    print("-" * 40)
    for i, (before, after) in enumerate(zip(line, scan.domains)):
        print(f"pos {i + 1}: {mask_to_digits(before)} -> {mask_to_digits(after)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
