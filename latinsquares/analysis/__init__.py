"""
Analysis and orchestration package for Latin square jobs.

This package contains:
- settings: global knobs and output naming policy
- stats: typed records, transversal count statistics and progress printing
- jobconfig: job selection and validated job configuration
- parsing: readers for squares stored in ordered-triple format
- jobs: runners for generation, super-symmetric and file jobs
- reporting: text renderings, job summary report and CSV exports
- plots: heat-map and count-distribution charts
- cli: argument parser and entry point
"""

from . import settings as settings  # re-export for convenience
from .jobconfig import JobConfig, JobType
from .stats import (
    JobResult,
    JobStatistics,
    ProgressPrinter,
    SquareRecord,
    StatsSummary,
    TransversalCountBucket,
    TransversalStatsSummary,
    compute_detailed_statistics,
)

__all__ = [
    # types
    "StatsSummary",
    "TransversalStatsSummary",
    "SquareRecord",
    "TransversalCountBucket",
    "JobResult",
    "JobType",
    "JobConfig",
    # utils
    "JobStatistics",
    "compute_detailed_statistics",
    "ProgressPrinter",
    # settings module
    "settings",
]
