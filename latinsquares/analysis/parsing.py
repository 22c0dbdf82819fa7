"""Readers for squares stored in ordered-triple text format.

Each square row is one line of ``order`` triples ``(row,col,symbol)``; ``order``
consecutive row lines make a square. Blank lines between squares are ignored,
which makes the output of the generation jobs (without transversal details)
directly readable. A trailing, incomplete square ends the iteration silently.

Malformed content raises ``ValueError`` with a bracketed label describing the
problem; a missing file raises ``FileNotFoundError``.
"""
from __future__ import annotations

import os
import re
from typing import Iterable, Iterator, List, Union

from latinsquares.square import Square

_DELIMITERS = re.compile(r"[(),\s]+")


def _parse_row_line(line: str, order: int, source: str) -> List[int]:
    tokens = [token for token in _DELIMITERS.split(line) if token]
    try:
        values = [int(token) for token in tokens]
    except ValueError as exc:
        raise ValueError(
            f"[Invalid Ordered-Triple Format] The line value \"{line}\" in the Latin square input "
            f"\"{source}\" contains an invalid row, column, or symbol value! These must be integers "
            f"from 0 to {order - 1} for order-{order} Latin squares."
        ) from exc
    if len(values) != 3 * order or any(value < 0 or value >= order for value in values):
        raise ValueError(
            f"[Invalid Data Set Order] Each Latin square in the input \"{source}\" must have the "
            f"same order {order}! The ordered-triple values must each be integers from 0 to "
            f"{order - 1} for order-{order} Latin squares."
        )
    return values


def parse_squares(lines: Union[str, Iterable[str]], order: int, source: str = "<string>") -> Iterator[Square]:
    """Yield squares from text (or an iterable of lines) in ordered-triple format."""
    if isinstance(lines, str):
        lines = lines.splitlines()
    square = Square(order)
    rows_filled = 0
    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue
        values = _parse_row_line(line, order, source)
        for index in range(0, len(values), 3):
            square.set_cell(values[index], values[index + 1], values[index + 2])
        rows_filled += 1
        if rows_filled == order:
            yield square
            square = Square(order)
            rows_filled = 0


class SquareFileParser:
    """Iterate over the order-N squares stored in a file.

    Parameters
    ----------
    order : int
        Order shared by every square in the file.
    path : str | os.PathLike
        Input file in ordered-triple format.

    Raises
    ------
    FileNotFoundError
        When ``path`` does not exist or is not a regular file.
    ValueError
        When the file is empty (raised eagerly) or, during iteration, when a
        line is not a valid row of ``order`` triples.
    """

    def __init__(self, order: int, path):
        self.order = order
        self.path = os.fspath(path)
        if not os.path.isfile(self.path):
            raise FileNotFoundError(f"[File Not Found] Could not find the Latin square input file \"{self.path}\"!")
        if os.path.getsize(self.path) == 0:
            raise ValueError(f"[Empty File] The Latin square input file \"{self.path}\" is empty!")

    def __iter__(self) -> Iterator[Square]:
        with open(self.path, "r") as f:
            yield from parse_squares(f, self.order, self.path)
