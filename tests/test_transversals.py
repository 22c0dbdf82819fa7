"""Tests for exhaustive transversal counting and heat maps."""

from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from latinsquares.selection import collect_latin_squares
from latinsquares.square import Square
from latinsquares.supersymmetric import cyclic_square, supersymmetric_square
from latinsquares.transversals import count_transversals, heat_value


NON_UNIFORM_4 = [
    [0, 1, 2, 3],
    [0, 1, 2, 3],
    [0, 1, 2, 3],
    [3, 3, 3, 3],
]


class TransversalCountTests(unittest.TestCase):

    def test_cyclic_prime_orders(self):
        for p, expected in ((2, 0), (3, 3), (5, 15), (7, 133)):
            with self.subTest(p=p):
                self.assertEqual(count_transversals(cyclic_square(p)).count, expected)

    def test_supersymmetric_counts(self):
        for p, d, expected in ((2, 2, 8), (2, 3, 384), (3, 2, 2241)):
            with self.subTest(p=p, d=d):
                self.assertEqual(count_transversals(supersymmetric_square(p, d)).count, expected)

    def test_uniform_heat_values(self):
        cases = ((cyclic_square(5), 3), (cyclic_square(7), 19), (supersymmetric_square(2, 2), 2),
                 (supersymmetric_square(2, 3), 48), (supersymmetric_square(3, 2), 249))
        for square, expected in cases:
            with self.subTest(order=square.order):
                result = count_transversals(square)
                self.assertEqual(result.heat_value, expected)
                self.assertTrue(result.is_uniform)
                self.assertEqual(result.count, square.order * result.heat_value)

    def test_cyclic_three_transversal_list(self):
        result = count_transversals(cyclic_square(3))
        self.assertEqual(result.transversals, [(0, 1, 2), (1, 2, 0), (2, 0, 1)])
        self.assertEqual(
            result.triples(cyclic_square(3))[0],
            [(0, 0, 0), (1, 1, 2), (2, 2, 1)],
        )
        self.assertEqual(result.heat_map, [[1, 1, 1], [1, 1, 1], [1, 1, 1]])

    def test_cyclic_four_has_no_transversals(self):
        result = count_transversals(cyclic_square(4))
        self.assertEqual(result.count, 0)
        self.assertEqual(result.transversals, [])
        self.assertEqual(result.heat_value, 0)

    def test_non_latin_grid_is_accepted(self):
        result = count_transversals(Square.from_rows(NON_UNIFORM_4))
        self.assertEqual(result.count, 6)
        self.assertEqual(result.heat_map[:3], [[2, 2, 2, 0]] * 3)
        self.assertEqual(result.heat_map[3], [0, 0, 0, 6])
        self.assertEqual(result.heat_value, -1)
        self.assertFalse(result.is_uniform)

    def test_small_non_latin_grid(self):
        result = count_transversals(Square.from_rows([[0, 0], [0, 1]]))
        self.assertEqual(result.count, 1)
        self.assertEqual(result.heat_map, [[1, 0], [0, 1]])
        self.assertEqual(result.heat_value, -1)

    def test_every_heat_map_row_and_column_sums_to_count(self):
        for square in collect_latin_squares(4, dataset_size=40):
            result = count_transversals(square)
            for index in range(4):
                self.assertEqual(sum(result.heat_map[index]), result.count)
                self.assertEqual(sum(row[index] for row in result.heat_map), result.count)

    def test_order_four_distribution(self):
        counts = [count_transversals(square).count for square in collect_latin_squares(4)]
        self.assertEqual(counts.count(0), 432)
        self.assertEqual(counts.count(8), 144)

    def test_counting_does_not_modify_square(self):
        square = cyclic_square(5)
        before = square.rows()
        count_transversals(square)
        self.assertEqual(square.rows(), before)

    def test_nodes_explored_is_positive(self):
        self.assertGreater(count_transversals(cyclic_square(3)).nodes_explored, 0)


class HeatValueTests(unittest.TestCase):

    def test_uniform(self):
        self.assertEqual(heat_value([[4, 4], [4, 4]]), 4)

    def test_not_uniform(self):
        self.assertEqual(heat_value([[1, 0], [0, 1]]), -1)

    def test_empty(self):
        self.assertEqual(heat_value([]), -1)


if __name__ == "__main__":
    unittest.main()
