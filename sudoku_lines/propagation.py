"""
Line propagator: prune the candidates of one row, column or block.

A line is 9 domain masks. A digit survives at a position only if it takes
part in at least one way of filling all 9 positions with distinct digits
drawn from their domains.

Approach (subset reachability):
1) Forward pass over the original domains: the sets of digits ("used sets")
   that positions 0..i-1 can hold together.
2) Backward pass from the full set, right to left: at each position keep the
   digits that join a forward used set to a set the remaining positions can
   complete, then step the backward states with the refined domain just
   computed.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import FrozenSet, List, Sequence, Tuple

from .domains import ALL_DIGITS, DIGIT_BITS, SUDOKU_SIZE, mask_to_digits

UsedSets = FrozenSet[int]


class UnsolvableLineError(Exception):
    """A position in a line has no digit left."""


@dataclass(frozen=True)
class LineScan:
    """Result of scanning one line: refined domains plus the reachability states."""

    domains: Tuple[int, ...]
    forward: Tuple[UsedSets, ...]
    backward: Tuple[UsedSets, ...]


def _bits(mask: int) -> List[int]:
    return [bit for bit in DIGIT_BITS if mask & bit]


def forward_states(line: Sequence[int]) -> List[UsedSets]:
    """
    Used sets reachable before each position (10 entries, positions 0..9).

    Entry i holds every set of i distinct digits that positions 0..i-1 can
    take from their domains.
    """
    states: List[UsedSets] = [frozenset({0})]
    for mask in line:
        allowed = _bits(mask)
        states.append(frozenset(
            used | bit for used in states[-1] for bit in allowed if not used & bit
        ))
    return states


def _supported_digits(forward: UsedSets, backward: UsedSets, mask: int) -> int:
    """Digits of `mask` that link a forward used set to a backward one."""
    supported = 0
    for used in forward:
        for bit in DIGIT_BITS:
            if not mask & bit or used & bit or supported & bit:
                continue
            if used | bit in backward:
                supported |= bit
        if supported == mask:
            break
    return supported


def scan_line(line: Sequence[int], narrow_backward: bool = True) -> LineScan:
    """
    Refine the 9 domains of a line and keep the intermediate states.

    Args:
        line: 9 domain masks
        narrow_backward: step the backward states with the refined domains
            (default). False uses the original domains, which gives the same
            refined domains but wider backward states.

    Raises:
        UnsolvableLineError: if some position is left without a digit
    """
    line = tuple(int(m) for m in line)
    if len(line) != SUDOKU_SIZE:
        raise ValueError(f"A line has {SUDOKU_SIZE} cells, got {len(line)}")

    forward = forward_states(line)

    refined = [0] * SUDOKU_SIZE
    backward: List[UsedSets] = [frozenset()] * SUDOKU_SIZE + [frozenset({ALL_DIGITS})]
    for i in reversed(range(SUDOKU_SIZE)):
        refined[i] = _supported_digits(forward[i], backward[i + 1], line[i])
        if not refined[i]:
            raise UnsolvableLineError(f"no digit fits position {i + 1}")
        step = _bits(refined[i] if narrow_backward else line[i])
        backward[i] = frozenset(
            used & ~bit for used in backward[i + 1] for bit in step if used & bit
        )

    return LineScan(tuple(refined), tuple(forward), tuple(backward))


@lru_cache(maxsize=65536)
def _propagate_cached(line: Tuple[int, ...]) -> Tuple[int, ...]:
    return scan_line(line).domains


def propagate_line(line: Sequence[int]) -> Tuple[int, ...]:
    """Refined domains for one line. See scan_line."""
    return _propagate_cached(tuple(int(m) for m in line))


def describe_states(states: UsedSets) -> str:
    """Render a set of used sets compactly, e.g. '{12, 13, 23}'."""
    rendered = sorted("".join(str(d) for d in mask_to_digits(used)) or "-" for used in states)
    return "{" + ", ".join(rendered) + "}"
