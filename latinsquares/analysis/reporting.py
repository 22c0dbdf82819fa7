"""Text renderings, job summary reports and CSV exports.

Squares and heat maps are rendered either as ordered triples ``(row,col,value)``
(the format read back by ``latinsquares.analysis.parsing``) or in a
human-readable grid. The job summary report mirrors the configuration and the
transversal count statistics of a finished run; CSV helpers materialize the
per-square records and the transversal count buckets for spreadsheet use.
"""
from __future__ import annotations

import csv
import os
from typing import Callable, List, Optional, Sequence

from latinsquares.square import Square
from latinsquares.transversals import TransversalResult

from . import settings
from .jobconfig import JobConfig, JobType
from .stats import JobResult, compute_detailed_statistics

Output = Callable[[str], None]

_RULE = "*" * 64


# ------------- Square and heat-map renderings --------------------------------

def format_triples(grid: Sequence[Sequence[int]]) -> str:
    """Ordered-triple rendering: one line per row, ``(r,c,v)`` repeated."""
    lines = []
    for row, values in enumerate(grid):
        lines.append("".join(f"({row},{col},{value})" for col, value in enumerate(values)))
    return "\n".join(lines) + "\n"


def format_human_readable(grid: Sequence[Sequence[int]]) -> str:
    """Grid rendering padded for values below 100 (two spaces, three below 10)."""
    lines = []
    for values in grid:
        lines.append("".join(f"{value}  " + (" " if value < 10 else "") for value in values))
    return "\n".join(lines) + "\n"


def format_square(square: Square, human_readable: bool = False) -> str:
    rows = square.rows()
    return format_human_readable(rows) if human_readable else format_triples(rows)


def format_heat_map(result: TransversalResult, human_readable: bool = False) -> str:
    return format_human_readable(result.heat_map) if human_readable else format_triples(result.heat_map)


def format_transversals(result: TransversalResult, square: Square) -> str:
    """One line per transversal: ``(r,c,s)`` triples joined by commas."""
    lines = []
    for triples in result.triples(square):
        lines.append(",".join(f"({row},{col},{symbol})" for row, col, symbol in triples))
    return "\n".join(lines) + ("\n" if lines else "")


def format_transversal_formula(result: TransversalResult) -> str:
    """Relation between count, order and a positive uniform heat value ('' otherwise)."""
    value = result.heat_value
    if value <= 0:
        return ""
    return (
        f"[!] Positive Uniform Heat Value Detected: {value}\n"
        f"[!] We Have The Transversal Formula: (Transversal Count) = (Order) x (Uniform Heat Value) = "
        f"{result.count} = {result.order} x {value}"
    )


def print_square_details(
    square: Square,
    index: int,
    config: JobConfig,
    transversals: Optional[TransversalResult],
    out: Output = print,
) -> None:
    """Print one square and the transversal details requested by ``config``."""
    if transversals is not None:
        out(f"Latin Square #{index}: ")
    out(format_square(square, config.human_readable))
    if transversals is None:
        return
    if config.count_transversals or config.job_type is JobType.FILE_TRANSVERSAL_COUNT:
        out(f"Latin Square #{index} Transversal Count: {transversals.count}\n")
    if config.print_transversals:
        out(f"Latin Square #{index} Transversal List: \n" + format_transversals(transversals, square))
    if config.print_heat_map:
        out(f"Latin Square #{index} Transversal Heat Map: ")
        out(format_heat_map(transversals, config.human_readable))
        formula = format_transversal_formula(transversals)
        if formula:
            out(formula + "\n")


def print_property_check(square: Square, index: int, holds: bool, human_readable: bool, out: Output = print) -> None:
    out(f"Square #{index}: ")
    out(format_square(square, human_readable))
    if holds:
        out(f"Square #{index} encodes the Cayley table of a quasi-group!")
    else:
        out(f"Square #{index} does NOT encode the Cayley table of a quasi-group")
    out("")


# ------------- Job summary report --------------------------------------------

def _on_off(flag: bool) -> str:
    return "On" if flag else "Off"


def format_job_report(config: JobConfig, result: JobResult) -> str:
    """Render the job summary report for a finished run."""
    lines: List[str] = [
        _RULE,
        "*" * 21 + " LATIN SQUARE TOOLBOX " + "*" * 21,
        _RULE,
        "*" * 22 + " Job Summary Report " + "*" * 22,
        _RULE,
        "",
        "[Configuration]",
        f"                      Job Type: {config.job_type.title}",
        f"            Latin Square Order: {result.order}",
        f"     # Latin Squares Processed: {result.squares_processed}",
    ]
    if config.job_type is JobType.SUPERSYMMETRIC:
        lines.append(f"      Prime Base ^ Power (p^d): {config.prime_base}^{config.power}")
    lines.append(f"Ordered-Triple Format Printing: {_on_off(not config.human_readable)}")

    if config.job_type is JobType.FILE_PROPERTY_CHECK:
        satisfied = result.statistics.property_satisfied
        lines += [
            "",
            "[Latin Square Property Verification Results]",
            f"           # Squares Satisfied: {satisfied}",
            f"       # Squares Not Satisfied: {result.squares_processed - satisfied}",
            "",
            _RULE,
        ]
        return "\n".join(lines)

    lines += [
        "",
        f"          Transversal Counting: {_on_off(config.counting_enabled)}",
        f"    Transversal Count Printing: {_on_off(config.count_transversals)}",
        f"     Transversal List Printing: {_on_off(config.print_transversals)}",
        f" Transversal Heat Map Printing: {_on_off(config.print_heat_map)}",
        "",
    ]

    job_stats = result.statistics
    if config.counting_enabled and job_stats.squares_processed > 0:
        modes = ",".join(str(mode) for mode in job_stats.modes())
        lines += [
            "[Transversal Count Statistics]",
            f"                       Minimum: {job_stats.minimum()}",
            f"                       Maximum: {job_stats.maximum()}",
            f"                          Mean: {job_stats.mean()}",
            f"                        Median: {job_stats.median()}",
            f"                       Mode(s): {modes}",
            "",
            "   Specific Transversal Counts: ",
        ]
        lines += [f"             {bucket}" for bucket in job_stats.buckets()]
        lines.append("")

        timing = compute_detailed_statistics(result.counting_times(), "counting_time")
        lines += [
            "[Search Effort]",
            f"        Generation Nodes Explored: {result.nodes_explored}",
            f"     Mean Counting Time [s/square]: {timing['mean']:.6f}",
            f"      Max Counting Time [s/square]: {timing['max']:.6f}",
            "",
        ]
    lines.append(_RULE)
    return "\n".join(lines)


# ------------- CSV exports ---------------------------------------------------

def _build_suffix() -> str:
    """Build an optional filename suffix from the run tag and datestamp settings."""
    parts: List[str] = []
    run_tag = getattr(settings, "RUN_TAG", None)
    if run_tag:
        parts.append(str(run_tag))
    if getattr(settings, "DATE_IN_FILENAMES", False):
        run_id = getattr(settings, "RUN_ID", None)
        if run_id:
            parts.append(str(run_id))
    return ("_" + "_".join(parts)) if parts else ""


def save_square_records_to_csv(result: JobResult, out_dir: str) -> str:
    """Write one row per processed square and return the file path.

    Columns: index, order, latin, conflicts, transversal_count, heat_value,
    nodes_explored, time_seconds (empty when transversals were not counted).
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"squares_{result.mode}_n{result.order}{_build_suffix()}.csv")
    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "index",
            "order",
            "latin",
            "conflicts",
            "transversal_count",
            "heat_value",
            "nodes_explored",
            "time_seconds",
        ])
        for record in result.records:
            writer.writerow([
                record["index"],
                record["order"],
                int(record["latin"]),
                record["conflicts"],
                "" if record.get("transversal_count") is None else record["transversal_count"],
                "" if record.get("heat_value") is None else record["heat_value"],
                record.get("nodes", ""),
                record.get("time", ""),
            ])
    print(f"CSV saved: {filename}")
    return filename


def save_transversal_counts_to_csv(result: JobResult, out_dir: str) -> str:
    """Write the transversal count buckets (count, squares) in ascending order."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"transversal_counts_{result.mode}_n{result.order}{_build_suffix()}.csv")
    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["transversal_count", "squares"])
        for bucket in result.statistics.buckets():
            writer.writerow([bucket.count, bucket.multiplicity])
    print(f"CSV saved: {filename}")
    return filename
