"""Exhaustive transversal enumeration and transversal heat maps.

A transversal of an order-N square is a choice of N cells, one per row, one per
column and one per symbol. This module enumerates all of them with a plain
iterative backtracking search (rows assigned top to bottom, columns scanned
left to right) and derives:

- the transversal count,
- the list of transversals in discovery order (``transversal[row] = col``),
- the heat map, where ``heat_map[r][c]`` counts transversals through (r, c),
- the heat value: the common heat-map entry when all entries are equal,
  otherwise -1. When defined it equals ``count / N``.

The search does not require the Latin Square Property: any order-N grid with
symbols in ``0..N-1`` is accepted. Every row of the heat map sums to the
transversal count.

Complexity
----------
O(N!) in the worst case. This is an exact computation intended for the small
orders (typically N <= 10) studied with this toolbox.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from time import perf_counter
from typing import List, Sequence, Tuple

from .square import Square

Transversal = Tuple[int, ...]
HeatMap = List[List[int]]


def heat_value(heat_map: Sequence[Sequence[int]]) -> int:
    """Return the uniform heat value of a heat map, or -1 if it is not uniform."""
    if not heat_map or not heat_map[0]:
        return -1
    value = heat_map[0][0]
    for row in heat_map:
        for entry in row:
            if entry != value:
                return -1
    return value


@dataclass
class TransversalResult:
    """Outcome of one exhaustive transversal count."""

    order: int
    count: int = 0
    transversals: List[Transversal] = field(default_factory=list)
    heat_map: HeatMap = field(default_factory=list)
    nodes_explored: int = 0
    elapsed: float = 0.0

    @property
    def heat_value(self) -> int:
        return heat_value(self.heat_map)

    @property
    def is_uniform(self) -> bool:
        return self.heat_value >= 0

    def triples(self, square: Square) -> List[List[Tuple[int, int, int]]]:
        """Expand each transversal into ``(row, col, symbol)`` triples."""
        return [
            [(row, col, square.get_cell(row, col)) for row, col in enumerate(transversal)]
            for transversal in self.transversals
        ]


def count_transversals(square: Square) -> TransversalResult:
    """Enumerate every transversal of ``square``.

    Parameters
    ----------
    square : Square
        Any order-N grid with symbols in ``0..N-1`` (Latin or not).

    Returns
    -------
    TransversalResult
        Count, transversal list, heat map, explored nodes and wall time.

    Notes
    -----
    - Working state (``positions``, ``col_used``, ``sym_used``) is created per
      call and discarded afterwards; nothing is cached on the square.
    - ``nodes_explored`` counts every (row, column) candidate examined.
    """

    size = square.order
    cells = [[square.get_cell(r, c) for c in range(size)] for r in range(size)]
    result = TransversalResult(order=size, heat_map=[[0] * size for _ in range(size)])

    # Track the chosen column per row; -1 means the row is still unassigned.
    positions = [-1] * size
    col_used = [False] * size
    sym_used = [False] * size

    row = 0
    col = 0
    explored = 0
    start = perf_counter()

    while 0 <= row < size:
        placed = False
        while col < size and not placed:
            explored += 1
            symbol = cells[row][col]
            if not col_used[col] and not sym_used[symbol]:
                if row == size - 1:
                    # Completed a transversal; record it and keep scanning this row.
                    positions[row] = col
                    for r, c in enumerate(positions):
                        result.heat_map[r][c] += 1
                    result.transversals.append(tuple(positions))
                    result.count += 1
                    positions[row] = -1
                    col += 1
                else:
                    positions[row] = col
                    col_used[col] = True
                    sym_used[symbol] = True
                    placed = True
                    row += 1
                    col = 0
            else:
                col += 1

        if not placed:
            # Exhausted all columns in this row; undo the previous decision.
            row -= 1
            if row >= 0:
                previous_col = positions[row]
                positions[row] = -1
                col_used[previous_col] = False
                sym_used[cells[row][previous_col]] = False
                col = previous_col + 1

    result.nodes_explored = explored
    result.elapsed = perf_counter() - start
    return result
