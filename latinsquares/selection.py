"""Selection-based backtracking generator for Latin square data sets.

This module implements the cell-by-cell selection search that fills an
order-N square in row-major order and emits every completed Latin square (or
only the first ``dataset_size`` of them) to a consumer callback. Two entry
points are provided:

- generate_latin_squares(order, dataset_size=0, preload=False, consumer=None):
    the search itself, streaming squares to ``consumer``.
- collect_latin_squares(order, dataset_size=0, preload=False): convenience
    wrapper that returns snapshot copies of the emitted squares.

Both are non-recursive; ``generate_latin_squares`` returns a tuple:
        (generated: int, nodes_explored: int, elapsed_seconds: float)

Implementation overview
-----------------------
- State representation: a single :class:`~latinsquares.square.Square` is
    refilled in place and handed to the consumer by reference on every
    emission. Consumers that keep squares must ``copy()`` them.
- Constraint tracking: two boolean grids give O(1) availability checks:
    ``row_free[row][symbol]`` and ``col_free[col][symbol]``, where True means
    the symbol is still available in that row/column. A flag is cleared when a
    symbol is placed and restored as soon as the search backs out of the cell,
    never by a global reset.
- Search strategy: depth-first search implemented iteratively with an explicit
    stack of decision frames, one frame per filled cell.
- Preloading: while active, the candidate order of a new frame starts at
    ``(row + col) % order`` and wraps around, which reaches the cyclic square
    first. The heuristic switches off once the first square is emitted; frames
    already on the stack keep their cyclic order and every later frame uses the
    natural order ``0..N-1``, so exhaustive runs still enumerate each square
    exactly once.

Contract (public API)
---------------------
- Input: ``order >= 1`` and ``dataset_size >= 0`` (0 enumerates all squares).
  Both are validated by the configuration layer, not here.
- Consumer: called as ``consumer(square, sequence_number)`` with a 1-based
  sequence number, once per completed square.
- Nodes explored semantics: incremented every time the search attempts a
  candidate symbol for a cell (even if quickly rejected by current constraints).
- Termination: exhaustive mode is super-exponential in N; a positive
  ``dataset_size`` stops the search as soon as that many squares were emitted.
"""

from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import Callable, List, Optional, Tuple

from .square import Square

SquareConsumer = Callable[[Square, int], None]
SelectionResult = Tuple[int, int, float]


@dataclass
class _Frame:
    """Mutable stack frame capturing the state at a decision level (one cell)."""

    cell: int
    candidates: List[int]
    next_index: int = 0
    placed: Optional[int] = None


def _candidate_order(order: int, row: int, col: int, preload: bool) -> List[int]:
    """Return the symbol order tried at ``(row, col)``.

    Natural order ``0..N-1``; with preloading, start at the cyclic symbol
    ``(row + col) % N`` and continue cyclically through the remaining values.
    """
    if not preload:
        return list(range(order))
    start = (row + col) % order
    return [(start + offset) % order for offset in range(order)]


def generate_latin_squares(
    order: int,
    dataset_size: int = 0,
    preload: bool = False,
    consumer: Optional[SquareConsumer] = None,
) -> SelectionResult:
    """Generate Latin squares by iterative selection-based backtracking.

    Parameters
    ----------
    order : int
        Square order N (N >= 1).
    dataset_size : int, default 0
        Number of squares to emit; 0 means "enumerate all".
    preload : bool, default False
        Enable the cyclic preloading heuristic for the first square.
    consumer : callable | None
        Receives ``(square, sequence_number)`` for every completed square.

    Returns
    -------
    (generated, nodes_explored, elapsed_seconds)
        - generated: int, number of squares handed to the consumer.
        - nodes_explored: int, number of candidate symbols considered.
        - elapsed_seconds: float, total wall time.

    Determinism and ordering
    ------------------------
    - Cells are filled in row-major order starting at (0, 0).
    - Without preloading, symbols are tried 0..N-1, so squares are emitted in
      lexicographic order of their row-major cell sequence.
    - With preloading, the first square emitted is the cyclic square
      ``cell(i, j) = (i + j) % N``.
    """

    square = Square(order)
    row_free = [[True] * order for _ in range(order)]
    col_free = [[True] * order for _ in range(order)]
    last_cell = order * order - 1

    preload_active = preload
    complete = False
    generated = 0
    explored = 0
    start = perf_counter()

    stack: List[_Frame] = [_Frame(0, _candidate_order(order, 0, 0, preload_active))]

    while stack and not complete:
        frame = stack[-1]
        row, col = divmod(frame.cell, order)

        if frame.placed is not None:
            # Back out of the previous choice for this cell before trying the next.
            row_free[row][frame.placed] = True
            col_free[col][frame.placed] = True
            frame.placed = None

        placed = False
        while frame.next_index < len(frame.candidates):
            symbol = frame.candidates[frame.next_index]
            frame.next_index += 1
            explored += 1
            if row_free[row][symbol] and col_free[col][symbol]:
                row_free[row][symbol] = False
                col_free[col][symbol] = False
                square.set_cell(row, col, symbol)
                frame.placed = symbol
                placed = True
                break

        if not placed:
            # Exhausted all symbols for this cell; return to the previous cell.
            stack.pop()
            continue

        if frame.cell == last_cell:
            if square.latin_property_holds():
                preload_active = False
                generated += 1
                if consumer is not None:
                    consumer(square, generated)
                if dataset_size and generated == dataset_size:
                    complete = True
        else:
            next_row, next_col = divmod(frame.cell + 1, order)
            stack.append(_Frame(frame.cell + 1, _candidate_order(order, next_row, next_col, preload_active)))

    return generated, explored, perf_counter() - start


def collect_latin_squares(order: int, dataset_size: int = 0, preload: bool = False) -> List[Square]:
    """Run the selection search and return independent copies of every square."""
    squares: List[Square] = []
    generate_latin_squares(order, dataset_size, preload, lambda square, _index: squares.append(square.copy()))
    return squares
