"""Tests for the ordered-triple square readers."""

from pathlib import Path
import os
import sys
import tempfile
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from latinsquares.analysis.parsing import SquareFileParser, parse_squares


TWO_SQUARES = (
    "(0,0,0)(0,1,1)(0,2,2)\n"
    "(1,0,1)(1,1,2)(1,2,0)\n"
    "(2,0,2)(2,1,0)(2,2,1)\n"
    "\n"
    "(0,0,0) (0,1,0) (0,2,0)\n"
    "(1,0,0) (1,1,0) (1,2,0)\n"
    "(2,0,0) (2,1,0) (2,2,0)\n"
)


class ParseSquaresTests(unittest.TestCase):

    def test_parses_consecutive_squares(self):
        squares = list(parse_squares(TWO_SQUARES, 3))
        self.assertEqual(len(squares), 2)
        self.assertEqual(squares[0].rows(), ((0, 1, 2), (1, 2, 0), (2, 0, 1)))
        self.assertTrue(squares[0].latin_property_holds())
        self.assertFalse(squares[1].latin_property_holds())

    def test_accepts_iterable_of_lines(self):
        squares = list(parse_squares(TWO_SQUARES.splitlines(), 3))
        self.assertEqual(len(squares), 2)

    def test_trailing_partial_square_is_dropped(self):
        text = TWO_SQUARES + "(0,0,1)(0,1,2)(0,2,0)\n"
        self.assertEqual(len(list(parse_squares(text, 3))), 2)

    def test_wrong_triple_count_is_rejected(self):
        with self.assertRaises(ValueError) as ctx:
            list(parse_squares("(0,0,0)(0,1,1)\n", 3))
        self.assertIn("[Invalid Data Set Order]", str(ctx.exception))

    def test_out_of_range_value_is_rejected(self):
        with self.assertRaises(ValueError) as ctx:
            list(parse_squares("(0,0,0)(0,1,1)(0,2,3)\n", 3))
        self.assertIn("[Invalid Data Set Order]", str(ctx.exception))

    def test_non_integer_value_is_rejected(self):
        with self.assertRaises(ValueError) as ctx:
            list(parse_squares("(0,0,a)(0,1,1)(0,2,2)\n", 3))
        self.assertIn("[Invalid Ordered-Triple Format]", str(ctx.exception))


class SquareFileParserTests(unittest.TestCase):

    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.tmpdir = self._tmpdir.name

    def tearDown(self):
        self._tmpdir.cleanup()

    def _write(self, name, text):
        path = os.path.join(self.tmpdir, name)
        with open(path, "w") as f:
            f.write(text)
        return path

    def test_reads_squares_from_file(self):
        path = self._write("squares.txt", TWO_SQUARES)
        squares = list(SquareFileParser(3, path))
        self.assertEqual(len(squares), 2)

    def test_parser_can_be_iterated_twice(self):
        parser = SquareFileParser(3, self._write("squares.txt", TWO_SQUARES))
        self.assertEqual(len(list(parser)), len(list(parser)))

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            SquareFileParser(3, os.path.join(self.tmpdir, "missing.txt"))

    def test_empty_file(self):
        path = self._write("empty.txt", "")
        with self.assertRaises(ValueError) as ctx:
            SquareFileParser(3, path)
        self.assertIn("[Empty File]", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
