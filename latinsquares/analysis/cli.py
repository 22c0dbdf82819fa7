"""Command-line interface for the Latin square toolbox.

This module wires together configuration loading, command-line overrides and
the execution of a single job (data set generation, super-symmetric
construction, or analysis of squares read from a file). I/O, argument parsing
and progress reporting live here so that the core modules stay easy to test
programmatically.
"""
from __future__ import annotations

import argparse
import os
import tempfile
from pathlib import Path
from typing import Optional

from . import settings
from .jobconfig import JobConfig, JobType
from .jobs import run_job
from .reporting import format_square, save_square_records_to_csv
from config_manager import ConfigManager
from latinsquares.selection import collect_latin_squares
from latinsquares.supersymmetric import cyclic_square, supersymmetric_square
from latinsquares.transversals import count_transversals


# ------------- Configuration ------------------------------------------------

def apply_configuration(config_path: str) -> ConfigManager:
    """Load ``config_path`` and copy its values into the ``settings`` module.

    Keys that are absent keep the module defaults. Returns the
    ``ConfigManager`` used.
    """
    config_mgr = ConfigManager(config_path)

    job_settings = config_mgr.get_job_settings()
    if job_settings:
        settings.JOB_MODE = str(job_settings.get("mode", settings.JOB_MODE))
        settings.ORDER = int(job_settings.get("order", settings.ORDER))
        settings.DATASET_SIZE = int(job_settings.get("dataset_size", settings.DATASET_SIZE))
        settings.PRIME_BASE = int(job_settings.get("prime_base", settings.PRIME_BASE))
        settings.POWER = int(job_settings.get("power", settings.POWER))
        settings.INPUT_FILE = job_settings.get("input_file", settings.INPUT_FILE)

    output_settings = config_mgr.get_output_settings()
    if output_settings:
        settings.COUNT_TRANSVERSALS = bool(output_settings.get("count_transversals", settings.COUNT_TRANSVERSALS))
        settings.PRINT_TRANSVERSALS = bool(output_settings.get("print_transversals", settings.PRINT_TRANSVERSALS))
        settings.PRINT_HEAT_MAP = bool(output_settings.get("print_heat_map", settings.PRINT_HEAT_MAP))
        settings.HUMAN_READABLE = bool(output_settings.get("human_readable", settings.HUMAN_READABLE))
        settings.PRINT_REPORT = bool(output_settings.get("print_report", settings.PRINT_REPORT))
        settings.QUIET = bool(output_settings.get("quiet", settings.QUIET))
        settings.EXPORT_CSV = bool(output_settings.get("export_csv", settings.EXPORT_CSV))
        settings.EXPORT_PLOTS = bool(output_settings.get("export_plots", settings.EXPORT_PLOTS))
        settings.OUT_DIR = output_settings.get("output_dir", settings.OUT_DIR)
        settings.RUN_TAG = output_settings.get("run_tag", settings.RUN_TAG)
        settings.DATE_IN_FILENAMES = bool(output_settings.get("date_in_filenames", settings.DATE_IN_FILENAMES))
        settings.PROGRESS_EVERY = int(output_settings.get("progress_every", settings.PROGRESS_EVERY))

    return config_mgr


def apply_arguments(args: argparse.Namespace) -> None:
    """Override ``settings`` with the flags given on the command line."""
    if args.mode is not None:
        settings.JOB_MODE = args.mode
    if args.order is not None:
        settings.ORDER = args.order
    if args.size is not None:
        settings.DATASET_SIZE = args.size
    if args.base is not None:
        settings.PRIME_BASE = args.base
    if args.power is not None:
        settings.POWER = args.power
    if args.input is not None:
        settings.INPUT_FILE = args.input
    if args.out_dir is not None:
        settings.OUT_DIR = args.out_dir

    # Boolean flags can only switch a configured option on.
    settings.COUNT_TRANSVERSALS = settings.COUNT_TRANSVERSALS or args.count
    settings.PRINT_TRANSVERSALS = settings.PRINT_TRANSVERSALS or args.list_transversals
    settings.PRINT_HEAT_MAP = settings.PRINT_HEAT_MAP or args.heat_map
    settings.HUMAN_READABLE = settings.HUMAN_READABLE or args.human_readable
    settings.PRINT_REPORT = settings.PRINT_REPORT or args.report
    settings.QUIET = settings.QUIET or args.quiet
    settings.EXPORT_CSV = settings.EXPORT_CSV or args.csv
    settings.EXPORT_PLOTS = settings.EXPORT_PLOTS or args.plots


# ------------- Quick regression -------------------------------------------

def run_quick_regression_tests() -> None:
    """Execute a fast, deterministic self-check of every job component.

    Verifies that:
    - The selection search enumerates the known number of squares for orders
      1 to 4 and that preloading emits the cyclic square first.
    - Transversal counts of the cyclic squares of order 2, 3, 5 and 7 and of
      the super-symmetric squares of order 4 and 8 match the known values.
    - A generation job exports a non-empty CSV in a temporary folder and the
      same squares can be read back by the property-check job.
    """
    print("Running quick regression tests across generation, lifting and counting...")

    for order, expected in ((1, 1), (2, 2), (3, 12), (4, 576)):
        squares = collect_latin_squares(order)
        if len(squares) != expected:
            raise AssertionError(f"Selection search produced {len(squares)} squares of order {order}, expected {expected}.")
        if not all(square.latin_property_holds() for square in squares):
            raise AssertionError(f"Selection search emitted a non-Latin square of order {order}.")
        print(f"  [Selection] order {order}: {expected} squares")

    first = collect_latin_squares(5, dataset_size=1, preload=True)[0]
    if first != cyclic_square(5):
        raise AssertionError("Preloaded search did not emit the cyclic square first.")
    print("  [Selection] preloading reaches the cyclic square first")

    for p, expected in ((2, 0), (3, 3), (5, 15), (7, 133)):
        result = count_transversals(cyclic_square(p))
        if result.count != expected:
            raise AssertionError(f"Cyclic square of order {p} has {result.count} transversals, expected {expected}.")
        print(f"  [Transversals] cyclic order {p}: count={result.count}, heat value={result.heat_value}")

    for p, d, expected in ((2, 2, 8), (2, 3, 384)):
        square = supersymmetric_square(p, d)
        if not square.latin_property_holds():
            raise AssertionError(f"Super-symmetric square {p}^{d} is not Latin.")
        result = count_transversals(square)
        if result.count != expected:
            raise AssertionError(f"Super-symmetric square {p}^{d} has {result.count} transversals, expected {expected}.")
        if result.count != square.order * result.heat_value:
            raise AssertionError(f"Super-symmetric square {p}^{d} does not have a uniform heat map.")
        print(f"  [Lifting] {p}^{d}: count={result.count}, heat value={result.heat_value}")

    def _silent(_: str) -> None:
        return None

    with tempfile.TemporaryDirectory() as tmpdir:
        config = JobConfig(job_type=JobType.SELECTION, order=3, count_transversals=True, quiet=True, out_dir=tmpdir)
        result = run_job(config, out=_silent)
        if result.squares_processed != 12 or result.statistics.modes() != [3]:
            raise AssertionError("Order-3 generation job returned unexpected statistics.")
        csv_path = Path(save_square_records_to_csv(result, tmpdir))
        if not csv_path.exists() or csv_path.stat().st_size == 0:
            raise AssertionError("Square records CSV was not generated successfully during quick tests.")

        squares_path = os.path.join(tmpdir, "order3.txt")
        with open(squares_path, "w") as f:
            for square in collect_latin_squares(3):
                f.write(format_square(square) + "\n")
        check = JobConfig(job_type=JobType.FILE_PROPERTY_CHECK, order=3, input_file=squares_path, quiet=True)
        checked = run_job(check, out=_silent)
        if checked.statistics.property_satisfied != 12:
            raise AssertionError("Property-check job did not accept the generated squares.")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser():
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Generate Latin squares and analyse their transversals.")
    parser.add_argument(
        "--mode",
        choices=[job.value for job in JobType],
        default=None,
        help="Job to run: ds (generate), dsp (generate with preloading), ss (super-symmetric), "
        "count (count transversals of squares in a file), check (check the Latin Square Property of squares in a file).",
    )
    parser.add_argument("-n", "--order", type=int, help="Latin square order for generation and file jobs.")
    parser.add_argument("-s", "--size", type=int, help="Number of squares to generate (0 = all squares).")
    parser.add_argument("-p", "--base", type=int, help="Prime base p of the super-symmetric order p^d.")
    parser.add_argument("-d", "--power", type=int, help="Power d of the super-symmetric order p^d.")
    parser.add_argument("-i", "--input", help="Input file of squares in ordered-triple format (count/check jobs).")
    parser.add_argument("-t", "--count", action="store_true", help="Count and print the transversals of each square.")
    parser.add_argument(
        "-T",
        "--list-transversals",
        action="store_true",
        help="Print the transversal list of each square (implies -t).",
    )
    parser.add_argument("-H", "--heat-map", action="store_true", help="Print the transversal heat map of each square.")
    parser.add_argument("-r", "--human-readable", action="store_true", help="Print squares as grids instead of ordered triples.")
    parser.add_argument("-j", "--report", action="store_true", help="Print the job summary report at the end.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress per-square output.")
    parser.add_argument("--csv", action="store_true", help="Export per-square records and transversal counts as CSV.")
    parser.add_argument("--plots", action="store_true", help="Export heat-map and count-distribution charts.")
    parser.add_argument("--out-dir", help="Directory for CSV and chart exports.")
    parser.add_argument("--config", default=None, help="Path to a JSON configuration file (flags override its values).")
    parser.add_argument("--quick-test", action="store_true", help="Run quick regression tests and exit.")
    return parser


def main(argv: Optional[list] = None) -> None:
    """CLI entry point: parse arguments, build the job and run it."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_regression_tests()
        return

    try:
        if args.config:
            apply_configuration(args.config)
        apply_arguments(args)
        config = JobConfig.from_settings()
        config.validate()
    except FileNotFoundError as exc:
        print(f"Configuration file not found: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc

    try:
        run_job(config)
    except KeyboardInterrupt:
        print("\nExecution interrupted by user.")
        raise SystemExit(130) from None
    except (FileNotFoundError, ValueError) as exc:
        print(f"Input error: {exc}")
        raise SystemExit(1) from exc
