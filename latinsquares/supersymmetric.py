"""Lifting-and-merging construction of super-symmetric Latin squares.

A prime power order-p^d super-symmetric Latin square is built from the order-p
cyclic square ``cell(i, j) = (i + j) % p`` by repeated block composition: the
order-m square is copied into each of the p x p blocks of an order-m*p square
and the block at ``(block_row, block_col)`` receives the uniform symbol offset
``m * ((block_row + block_col) % p)``. The offsets select distinct cosets of
``{0..m-1}`` along every block row and block column, so the Latin Square
Property is preserved without any search.

With ``d == 1`` the result is the cyclic square itself. Primality of ``p`` is
not required by the construction; callers may warn about it (see
``latinsquares.utils.is_prime``).
"""

from __future__ import annotations

from time import perf_counter
from typing import Callable, Optional, Tuple

from .square import Square


def cyclic_square(p: int) -> Square:
    """Return the order-p cyclic square ``cell(i, j) = (i + j) % p``."""
    square = Square(p)
    for i in range(p):
        for j in range(p):
            square.set_cell(i, j, (i + j) % p)
    return square


def merge_base_square(lifted: Square, block_row: int, block_col: int, base: Square, offset_scalar: int) -> None:
    """Copy ``base`` into one block of ``lifted`` with a uniform symbol offset.

    The block's top-left cell is ``(block_row * m, block_col * m)`` where ``m``
    is the base order, and ``m * offset_scalar`` is added to every symbol.
    """
    m = base.order
    offset = m * offset_scalar
    row_start = block_row * m
    col_start = block_col * m
    for i in range(m):
        for j in range(m):
            lifted.set_cell(row_start + i, col_start + j, base.get_cell(i, j) + offset)


def lift_square(base: Square, p: int) -> Square:
    """Lift an order-m square to the order-m*p square by block composition."""
    lifted = Square(base.order * p)
    for block_row in range(p):
        for block_col in range(p):
            merge_base_square(lifted, block_row, block_col, base, (block_row + block_col) % p)
    return lifted


def supersymmetric_square(p: int, d: int) -> Square:
    """Build the order-p^d square: cyclic when ``d == 1``, super-symmetric otherwise.

    Raises
    ------
    ValueError
        If ``p < 1`` or ``d < 1``.
    """
    if p < 1:
        raise ValueError(f"The prime base p must be a positive integer (got {p}).")
    if d < 1:
        raise ValueError(f"The power d must be a positive integer (got {d}).")
    square = cyclic_square(p)
    for _ in range(1, d):
        square = lift_square(square, p)
    return square


def generate_supersymmetric(
    p: int,
    d: int,
    consumer: Optional[Callable[[Square, int], None]] = None,
) -> Tuple[Square, float]:
    """Construct the order-p^d square and hand it to ``consumer`` as square #1.

    Returns ``(square, elapsed_seconds)``.
    """
    start = perf_counter()
    square = supersymmetric_square(p, d)
    elapsed = perf_counter() - start
    if consumer is not None:
        consumer(square, 1)
    return square, elapsed
