"""Latin square generation and transversal analysis."""

from .selection import collect_latin_squares, generate_latin_squares
from .square import Square
from .supersymmetric import cyclic_square, generate_supersymmetric, lift_square, supersymmetric_square
from .transversals import TransversalResult, count_transversals, heat_value
from .utils import is_latin_grid, is_prime, row_col_conflicts

__all__ = [
    "Square",
    "generate_latin_squares",
    "collect_latin_squares",
    "cyclic_square",
    "lift_square",
    "supersymmetric_square",
    "generate_supersymmetric",
    "TransversalResult",
    "count_transversals",
    "heat_value",
    "is_latin_grid",
    "is_prime",
    "row_col_conflicts",
]
