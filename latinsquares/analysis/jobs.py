"""Job runners: generation, super-symmetric construction and file analysis.

Each run executes exactly one job selected by :class:`JobType`. The runner
builds the matching producer (selection search, lifter or file parser), feeds
every produced square to a per-square processor and returns a
:class:`~latinsquares.analysis.stats.JobResult` suitable for the summary
report, CSV export and plotting.

Per-square processing
---------------------
- Transversals are counted when the configuration asks for counts, lists or
  heat maps (always for the file transversal-count job); counts are submitted
  to the job's :class:`JobStatistics`.
- Property-check jobs test the Latin Square Property and record the number of
  repeated row/column pairs.
- Text output goes through the ``out`` callable (``print`` by default) and is
  suppressed per square when ``quiet`` is set.
"""
from __future__ import annotations

from typing import Callable, Dict, Optional, cast

from latinsquares.selection import generate_latin_squares
from latinsquares.square import Square
from latinsquares.supersymmetric import generate_supersymmetric
from latinsquares.transversals import TransversalResult, count_transversals
from latinsquares.utils import row_col_conflicts

from . import settings
from .jobconfig import JobConfig, JobType
from .parsing import SquareFileParser
from .reporting import (
    Output,
    format_job_report,
    print_property_check,
    print_square_details,
    save_square_records_to_csv,
    save_transversal_counts_to_csv,
)
from .stats import JobResult, ProgressPrinter, SquareRecord


class _SquareProcessor:
    """Consumer handed to the producers; called once per square."""

    def __init__(self, config: JobConfig, result: JobResult, out: Output, progress: Optional[ProgressPrinter] = None):
        self.config = config
        self.result = result
        self.out = out
        self.progress = progress

    def __call__(self, square: Square, index: int) -> None:
        config = self.config
        record: SquareRecord = {
            "index": index,
            "order": square.order,
            "transversal_count": None,
            "heat_value": None,
        }

        if config.job_type is JobType.FILE_PROPERTY_CHECK:
            holds = square.latin_property_holds()
            record["latin"] = holds
            record["conflicts"] = row_col_conflicts(square.rows())
            if holds:
                self.result.statistics.increment_property_satisfied()
            if not config.quiet:
                print_property_check(square, index, holds, config.human_readable, self.out)
            self._finish(square, record, None)
            return

        transversals: Optional[TransversalResult] = None
        if config.counting_enabled:
            transversals = count_transversals(square)
            self.result.statistics.submit(transversals.count)
            record["transversal_count"] = transversals.count
            record["heat_value"] = transversals.heat_value
            record["nodes"] = transversals.nodes_explored
            record["time"] = transversals.elapsed

        # Generated squares are Latin by construction; parsed squares are checked.
        if config.job_type is JobType.FILE_TRANSVERSAL_COUNT:
            record["latin"] = square.latin_property_holds()
            record["conflicts"] = row_col_conflicts(square.rows())
        else:
            record["latin"] = True
            record["conflicts"] = 0

        if not config.quiet:
            print_square_details(square, index, config, transversals, self.out)
        self._finish(square, record, transversals)

    def _finish(self, square: Square, record: SquareRecord, transversals: Optional[TransversalResult]) -> None:
        if self.result.sample_square is None:
            self.result.sample_square = square.copy()
            self.result.sample_transversals = transversals
        self.result.records.append(record)
        if self.progress is not None:
            self.progress.update(record["index"])


def _run_selection(config: JobConfig, processor: _SquareProcessor, out: Output) -> None:
    _, nodes, elapsed = generate_latin_squares(
        config.order,
        dataset_size=config.dataset_size,
        preload=config.is_preloading,
        consumer=processor,
    )
    processor.result.nodes_explored = nodes
    processor.result.elapsed = elapsed


def _run_supersymmetric(config: JobConfig, processor: _SquareProcessor, out: Output) -> None:
    for warning in config.warnings():
        out(warning)
    if config.print_report:
        if config.power > 1:
            out(f"The super-symmetric Latin square of prime power order-{config.prime_base}^{config.power} is: \n")
        else:
            out(f"The cyclic Latin square of prime order-{config.prime_base} is: \n")
    _, elapsed = generate_supersymmetric(config.prime_base, config.power, consumer=processor)
    processor.result.elapsed = elapsed


def _run_from_file(config: JobConfig, processor: _SquareProcessor, out: Output) -> None:
    parser = SquareFileParser(config.order, cast(str, config.input_file))
    for index, square in enumerate(parser, start=1):
        processor(square, index)


_RUNNERS: Dict[JobType, Callable[[JobConfig, _SquareProcessor, Output], None]] = {
    JobType.SELECTION: _run_selection,
    JobType.SELECTION_PRELOAD: _run_selection,
    JobType.SUPERSYMMETRIC: _run_supersymmetric,
    JobType.FILE_TRANSVERSAL_COUNT: _run_from_file,
    JobType.FILE_PROPERTY_CHECK: _run_from_file,
}


def run_job(config: JobConfig, out: Output = print) -> JobResult:
    """Validate ``config``, run its job and return the aggregated result.

    The summary report is printed through ``out`` when requested; CSV files
    and charts are written to ``config.out_dir`` when enabled.

    Raises
    ------
    ValueError
        For invalid configurations or malformed input files.
    FileNotFoundError
        When the input file of a file-based job does not exist.
    """
    config.validate()
    result = JobResult(mode=config.job_type.value, order=config.order)

    progress = None
    if config.quiet and config.job_type in (JobType.SELECTION, JobType.SELECTION_PRELOAD) and config.dataset_size:
        progress = ProgressPrinter(config.dataset_size, "Generation", every=settings.PROGRESS_EVERY)

    processor = _SquareProcessor(config, result, out, progress)
    _RUNNERS[config.job_type](config, processor, out)

    if config.print_report:
        out(format_job_report(config, result))
    if config.export_csv:
        save_square_records_to_csv(result, config.out_dir)
        if config.counting_enabled:
            save_transversal_counts_to_csv(result, config.out_dir)
    if config.export_plots:
        from .plots import plot_and_save

        plot_and_save(result, config.out_dir)
    return result
