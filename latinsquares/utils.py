"""Utility helpers for the Latin square toolbox.

This module provides reusable, low-level primitives that the generators,
counters and analysis pipeline depend upon. In particular, it includes a
row/column repetition counter used to diagnose squares that fail the Latin
Square Property, and the primality test behind the super-symmetric advisory.

Representation
--------------
Grids are encoded as a 2D list (or any nested sequence) where
``grid[row][col] = symbol``.
"""

from __future__ import annotations

from collections import Counter
from typing import Sequence


def row_col_conflicts(grid: Sequence[Sequence[int]]) -> int:
    """Count repeated symbol pairs across all rows and columns in O(N^2).

    Each row and each column contributes ``k * (k - 1) // 2`` for every symbol
    appearing ``k`` times in it. A Latin square scores zero.
    """
    n = len(grid)

    def _pairs(counter: Counter[int]) -> int:
        total = 0
        for count in counter.values():
            if count > 1:
                total += count * (count - 1) // 2
        return total

    total = 0
    for row in range(n):
        total += _pairs(Counter(grid[row][col] for col in range(n)))
    for col in range(n):
        total += _pairs(Counter(grid[row][col] for row in range(n)))
    return total


def is_latin_grid(grid: Sequence[Sequence[int]]) -> bool:
    """Return True if the grid is an order-N Latin square.

    Contract
    - Input: N rows of length N where grid[row][col] = symbol (0-based)
    - Valid if: all 0 <= symbol < N and no symbol repeats in a row or column
    - Implementation: shape and range check + row_col_conflicts(grid) == 0
    """
    n = len(grid)
    if n == 0:
        return False
    for row in grid:
        if len(row) != n:
            return False
        for symbol in row:
            if not isinstance(symbol, int):
                return False
            if symbol < 0 or symbol >= n:
                return False
    return row_col_conflicts(grid) == 0


def is_prime(p: int) -> bool:
    """Return True when ``p`` is prime (trial division by odd numbers)."""
    if p in (2, 3):
        return True
    if p < 2 or p % 2 == 0:
        return False
    divisor = 3
    while divisor * divisor <= p:
        if p % divisor == 0:
            return False
        divisor += 2
    return True
