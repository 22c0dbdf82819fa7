"""Square state shared by the generators, the lifter and the counters.

A :class:`Square` is an order-N array of integer symbols which may or may not
be a Latin square, depending on whether the Latin Square Property holds. The
available symbols are assumed to be ``0..N-1``.

Contract
--------
- Coordinates and symbols are trusted: callers guarantee
  ``0 <= row, col < order`` and ``0 <= symbol < order``. No range checks are
  performed on the hot paths used by the backtracking searches.
- Squares are mutable. The selection generator refills a single instance
  across emissions, so consumers that keep a square must take a ``copy()``.
"""

from __future__ import annotations

from typing import Iterator, List, Sequence, Tuple

import numpy as np


class Square:
    """Order-N grid of symbols with a Latin Square Property check.

    Parameters
    ----------
    order : int
        Square order N (N >= 1). All cells start at symbol 0.
    """

    __slots__ = ("order", "_cells")

    def __init__(self, order: int):
        self.order = order
        self._cells: List[List[int]] = [[0] * order for _ in range(order)]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Square":
        """Build a square from nested rows; the order is the number of rows."""
        square = cls(len(rows))
        for row_index, row in enumerate(rows):
            for col_index, symbol in enumerate(row):
                square._cells[row_index][col_index] = int(symbol)
        return square

    def set_cell(self, row: int, col: int, symbol: int) -> None:
        self._cells[row][col] = symbol

    def get_cell(self, row: int, col: int) -> int:
        return self._cells[row][col]

    def latin_property_holds(self) -> bool:
        """Return True if every row and every column is a permutation.

        Rows are scanned first, then columns; the first repeated symbol
        observed within a line returns False immediately.
        """
        cells = self._cells
        n = self.order
        for row in range(n):
            seen = set()
            for col in range(n):
                symbol = cells[row][col]
                if symbol in seen:
                    return False
                seen.add(symbol)
        for col in range(n):
            seen = set()
            for row in range(n):
                symbol = cells[row][col]
                if symbol in seen:
                    return False
                seen.add(symbol)
        return True

    def rows(self) -> Tuple[Tuple[int, ...], ...]:
        """Return an immutable snapshot of the grid (hashable)."""
        return tuple(tuple(row) for row in self._cells)

    def cells(self) -> Iterator[Tuple[int, int, int]]:
        """Iterate ``(row, col, symbol)`` triples in row-major order."""
        for row_index, row in enumerate(self._cells):
            for col_index, symbol in enumerate(row):
                yield row_index, col_index, symbol

    def copy(self) -> "Square":
        return Square.from_rows(self._cells)

    def rotate(self) -> None:
        """Rotate the square clockwise by 90 degrees in place."""
        n = self.order
        old = self._cells
        self._cells = [[old[n - col - 1][row] for col in range(n)] for row in range(n)]

    def sub_square(self, row: int, col: int) -> "Square":
        """Return the order-(N-1) square obtained by removing one row and one column."""
        kept = [
            [symbol for col_index, symbol in enumerate(line) if col_index != col]
            for row_index, line in enumerate(self._cells)
            if row_index != row
        ]
        return Square.from_rows(kept)

    def has_zero_main_diagonal(self) -> bool:
        return all(self._cells[i][i] == 0 for i in range(self.order))

    def to_array(self):
        """Return the grid as a 2D ``numpy`` integer array (used for plotting)."""
        return np.array(self._cells, dtype=int)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Square):
            return NotImplemented
        return self.order == other.order and self._cells == other._cells

    def __repr__(self) -> str:
        return f"Square(order={self.order}, rows={[list(r) for r in self._cells]})"
