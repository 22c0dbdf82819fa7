"""Tests for job configuration, dispatch and per-square output."""

from pathlib import Path
import os
import sys
import tempfile
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from latinsquares.analysis.jobconfig import JobConfig, JobType
from latinsquares.analysis.jobs import run_job
from latinsquares.analysis.reporting import format_square
from latinsquares.selection import collect_latin_squares
from latinsquares.square import Square


NON_UNIFORM_4 = (
    "(0,0,0)(0,1,1)(0,2,2)(0,3,3)\n"
    "(1,0,0)(1,1,1)(1,2,2)(1,3,3)\n"
    "(2,0,0)(2,1,1)(2,2,2)(2,3,3)\n"
    "(3,0,3)(3,1,3)(3,2,3)(3,3,3)\n"
)


class JobConfigTests(unittest.TestCase):

    def test_from_mode(self):
        self.assertIs(JobType.from_mode("dsp"), JobType.SELECTION_PRELOAD)
        self.assertIs(JobType.from_mode(" COUNT "), JobType.FILE_TRANSVERSAL_COUNT)
        with self.assertRaises(ValueError):
            JobType.from_mode("xyz")

    def test_list_implies_count(self):
        config = JobConfig(job_type=JobType.SELECTION, order=3, print_transversals=True)
        self.assertTrue(config.count_transversals)
        self.assertTrue(config.counting_enabled)

    def test_heat_map_enables_counting(self):
        self.assertTrue(JobConfig(job_type=JobType.SELECTION, order=3, print_heat_map=True).counting_enabled)
        self.assertFalse(JobConfig(job_type=JobType.SELECTION, order=3).counting_enabled)

    def test_file_jobs_counting(self):
        self.assertTrue(JobConfig(job_type=JobType.FILE_TRANSVERSAL_COUNT, order=3).counting_enabled)
        self.assertFalse(
            JobConfig(job_type=JobType.FILE_PROPERTY_CHECK, order=3, count_transversals=True).counting_enabled
        )

    def test_supersymmetric_order_is_derived(self):
        self.assertEqual(JobConfig(job_type=JobType.SUPERSYMMETRIC, prime_base=3, power=2).order, 9)

    def test_validation_errors(self):
        invalid = [
            JobConfig(job_type=JobType.SELECTION, order=0),
            JobConfig(job_type=JobType.SELECTION, order=3, dataset_size=-1),
            JobConfig(job_type=JobType.SUPERSYMMETRIC, prime_base=0, power=1),
            JobConfig(job_type=JobType.SUPERSYMMETRIC, prime_base=2, power=0),
            JobConfig(job_type=JobType.FILE_PROPERTY_CHECK, order=3),
        ]
        for config in invalid:
            with self.subTest(config=config):
                with self.assertRaises(ValueError):
                    config.validate()

    def test_non_prime_base_only_warns(self):
        config = JobConfig(job_type=JobType.SUPERSYMMETRIC, prime_base=4, power=2)
        config.validate()
        self.assertEqual(config.warnings(), ["[Warning] The value of p is not prime!"])
        self.assertEqual(JobConfig(job_type=JobType.SUPERSYMMETRIC, prime_base=5, power=1).warnings(), [])


class GenerationJobTests(unittest.TestCase):

    def test_selection_job_prints_counts(self):
        lines = []
        config = JobConfig(job_type=JobType.SELECTION, order=3, count_transversals=True)
        result = run_job(config, out=lines.append)
        self.assertEqual(result.squares_processed, 12)
        self.assertEqual(lines[0], "Latin Square #1: ")
        self.assertEqual(lines[1], "(0,0,0)(0,1,1)(0,2,2)\n(1,0,1)(1,1,2)(1,2,0)\n(2,0,2)(2,1,0)(2,2,1)\n")
        self.assertEqual(lines[2], "Latin Square #1 Transversal Count: 3\n")
        self.assertIn("Latin Square #12 Transversal Count: 3\n", lines)

    def test_selection_without_counting_prints_squares_only(self):
        lines = []
        result = run_job(JobConfig(job_type=JobType.SELECTION, order=2), out=lines.append)
        self.assertEqual(lines, ["(0,0,0)(0,1,1)\n(1,0,1)(1,1,0)\n", "(0,0,1)(0,1,0)\n(1,0,0)(1,1,1)\n"])
        self.assertEqual(result.statistics.squares_processed, 0)
        self.assertIsNone(result.records[0]["transversal_count"])

    def test_heat_map_and_list_output(self):
        lines = []
        config = JobConfig(
            job_type=JobType.SELECTION_PRELOAD,
            order=5,
            dataset_size=1,
            print_transversals=True,
            print_heat_map=True,
            human_readable=True,
        )
        result = run_job(config, out=lines.append)
        self.assertEqual(result.sample_transversals.count, 15)
        self.assertIn("Latin Square #1 Transversal Count: 15\n", lines)
        self.assertIn("Latin Square #1 Transversal Heat Map: ", lines)
        self.assertIn("3   3   3   3   3   \n" * 5, lines)
        listing = [line for line in lines if line.startswith("Latin Square #1 Transversal List")]
        self.assertEqual(len(listing[0].splitlines()), 16)
        self.assertTrue(any("Positive Uniform Heat Value Detected: 3" in line for line in lines))

    def test_quiet_suppresses_per_square_output(self):
        lines = []
        result = run_job(
            JobConfig(job_type=JobType.SELECTION, order=3, count_transversals=True, quiet=True),
            out=lines.append,
        )
        self.assertEqual(lines, [])
        self.assertEqual(result.statistics.buckets()[0].multiplicity, 12)

    def test_report_is_printed_last(self):
        lines = []
        run_job(
            JobConfig(job_type=JobType.SELECTION, order=2, count_transversals=True, quiet=True, print_report=True),
            out=lines.append,
        )
        self.assertEqual(len(lines), 1)
        self.assertIn("2 Latin Squares Have 0 Transversals", lines[0])

    def test_sample_square_is_a_snapshot(self):
        result = run_job(JobConfig(job_type=JobType.SELECTION, order=3, quiet=True), out=lambda _: None)
        self.assertEqual(result.sample_square.rows(), ((0, 1, 2), (1, 2, 0), (2, 0, 1)))
        self.assertGreater(result.nodes_explored, 0)


class SuperSymmetricJobTests(unittest.TestCase):

    def test_headings_and_warning(self):
        lines = []
        config = JobConfig(job_type=JobType.SUPERSYMMETRIC, prime_base=4, power=1, print_report=True, count_transversals=True)
        result = run_job(config, out=lines.append)
        self.assertEqual(lines[0], "[Warning] The value of p is not prime!")
        self.assertEqual(lines[1], "The cyclic Latin square of prime order-4 is: \n")
        self.assertEqual(result.statistics.minimum(), 0)

    def test_prime_power_heading(self):
        lines = []
        config = JobConfig(job_type=JobType.SUPERSYMMETRIC, prime_base=2, power=3, print_report=True, count_transversals=True)
        result = run_job(config, out=lines.append)
        self.assertEqual(lines[0], "The super-symmetric Latin square of prime power order-2^3 is: \n")
        self.assertEqual(result.order, 8)
        self.assertEqual(result.statistics.maximum(), 384)


class FileJobTests(unittest.TestCase):

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

    def test_count_job_on_non_latin_grid(self):
        lines = []
        path = self._write("grid.txt", NON_UNIFORM_4)
        config = JobConfig(job_type=JobType.FILE_TRANSVERSAL_COUNT, order=4, input_file=path, print_heat_map=True)
        result = run_job(config, out=lines.append)
        self.assertEqual(result.statistics.modes(), [6])
        self.assertFalse(result.records[0]["latin"])
        self.assertEqual(result.records[0]["heat_value"], -1)
        self.assertIn("Latin Square #1 Transversal Count: 6\n", lines)
        self.assertIn("(0,0,2)(0,1,2)(0,2,2)(0,3,0)\n", "".join(lines))
        self.assertFalse(any("Positive Uniform Heat Value" in line for line in lines))

    def test_count_job_reads_generated_output(self):
        text = "".join(format_square(square) + "\n" for square in collect_latin_squares(3))
        config = JobConfig(job_type=JobType.FILE_TRANSVERSAL_COUNT, order=3, input_file=self._write("o3.txt", text), quiet=True)
        result = run_job(config, out=lambda _: None)
        self.assertEqual(result.squares_processed, 12)
        self.assertEqual(result.statistics.median(), 3.0)

    def test_property_check_job(self):
        lines = []
        text = format_square(Square.from_rows([[0, 1], [1, 0]])) + format_square(Square(2))
        config = JobConfig(job_type=JobType.FILE_PROPERTY_CHECK, order=2, input_file=self._write("check.txt", text))
        result = run_job(config, out=lines.append)
        self.assertEqual(result.statistics.property_satisfied, 1)
        self.assertEqual(result.squares_processed, 2)
        self.assertEqual(result.records[1]["conflicts"], 4)
        self.assertIn("Square #1 encodes the Cayley table of a quasi-group!", lines)
        self.assertIn("Square #2 does NOT encode the Cayley table of a quasi-group", lines)

    def test_property_check_report(self):
        lines = []
        text = format_square(Square.from_rows([[0, 1], [1, 0]])) + format_square(Square(2))
        config = JobConfig(
            job_type=JobType.FILE_PROPERTY_CHECK,
            order=2,
            input_file=self._write("check.txt", text),
            quiet=True,
            print_report=True,
        )
        run_job(config, out=lines.append)
        self.assertIn("# Squares Satisfied: 1", lines[-1])
        self.assertIn("# Squares Not Satisfied: 1", lines[-1])

    def test_missing_input_file(self):
        config = JobConfig(job_type=JobType.FILE_TRANSVERSAL_COUNT, order=3, input_file=os.path.join(self.tmpdir, "nope.txt"))
        with self.assertRaises(FileNotFoundError):
            run_job(config, out=lambda _: None)

    def test_wrong_order_in_file(self):
        config = JobConfig(job_type=JobType.FILE_TRANSVERSAL_COUNT, order=3, input_file=self._write("g.txt", NON_UNIFORM_4))
        with self.assertRaises(ValueError):
            run_job(config, out=lambda _: None)


if __name__ == "__main__":
    unittest.main()
