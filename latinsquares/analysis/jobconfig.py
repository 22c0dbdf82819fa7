"""Job selection and validated job configuration.

A run executes exactly one job. The job kind is a tagged :class:`JobType`
whose value is the short mode label accepted on the command line; the runner
dispatches on it once (see ``latinsquares.analysis.jobs.run_job``).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from latinsquares.utils import is_prime

from . import settings


class JobType(Enum):
    SELECTION = "ds"
    SELECTION_PRELOAD = "dsp"
    SUPERSYMMETRIC = "ss"
    FILE_TRANSVERSAL_COUNT = "count"
    FILE_PROPERTY_CHECK = "check"

    @property
    def title(self) -> str:
        return _TITLES[self]

    @classmethod
    def from_mode(cls, mode: str) -> "JobType":
        """Map a mode label (e.g. ``"dsp"``) to its job type."""
        try:
            return cls(mode.strip().lower())
        except ValueError as exc:
            allowed = ", ".join(member.value for member in cls)
            raise ValueError(f"Invalid generation mode '{mode}'. Allowed: {allowed}") from exc


_TITLES = {
    JobType.SELECTION: "Data Set Generation",
    JobType.SELECTION_PRELOAD: "Data Set Generation (Preloading)",
    JobType.SUPERSYMMETRIC: "Super-Symmetric Generation",
    JobType.FILE_TRANSVERSAL_COUNT: "Transversal Counting",
    JobType.FILE_PROPERTY_CHECK: "Latin Square Property Checking",
}

FILE_JOBS = (JobType.FILE_TRANSVERSAL_COUNT, JobType.FILE_PROPERTY_CHECK)


@dataclass
class JobConfig:
    """User-selected job and output options.

    For super-symmetric jobs ``order`` is derived as ``prime_base ** power``.
    Requesting the transversal list (``print_transversals``) implies counting.
    """

    job_type: JobType
    order: int = 0
    dataset_size: int = 0
    prime_base: int = 0
    power: int = 0
    input_file: Optional[str] = None
    count_transversals: bool = False
    print_transversals: bool = False
    print_heat_map: bool = False
    human_readable: bool = False
    print_report: bool = False
    quiet: bool = False
    export_csv: bool = False
    export_plots: bool = False
    out_dir: str = settings.OUT_DIR

    def __post_init__(self) -> None:
        if self.print_transversals:
            self.count_transversals = True
        if self.job_type is JobType.SUPERSYMMETRIC and self.prime_base >= 1 and self.power >= 1:
            self.order = self.prime_base ** self.power

    @property
    def counting_enabled(self) -> bool:
        """True when transversals are enumerated for every processed square."""
        if self.job_type is JobType.FILE_TRANSVERSAL_COUNT:
            return True
        if self.job_type is JobType.FILE_PROPERTY_CHECK:
            return False
        return self.count_transversals or self.print_transversals or self.print_heat_map

    @property
    def is_preloading(self) -> bool:
        return self.job_type is JobType.SELECTION_PRELOAD

    def validate(self) -> None:
        """Reject configurations the core algorithms must never see.

        Raises
        ------
        ValueError
            With a message naming the offending value.
        """
        if self.job_type is JobType.SUPERSYMMETRIC:
            if self.prime_base < 1:
                raise ValueError("The value of p must be a positive prime integer!")
            if self.power < 1:
                raise ValueError("The value of d must be a positive integer!")
            return
        if self.order < 1:
            raise ValueError("The value of n must be a positive integer!")
        if self.job_type in FILE_JOBS:
            if not self.input_file:
                raise ValueError(f"An input file is required for the '{self.job_type.value}' job.")
        elif self.dataset_size < 0:
            raise ValueError("The value of s must be a non-negative integer!")

    def warnings(self) -> List[str]:
        """Non-blocking advisories (currently: a non-prime super-symmetric base)."""
        if self.job_type is JobType.SUPERSYMMETRIC and self.prime_base >= 1 and not is_prime(self.prime_base):
            return ["[Warning] The value of p is not prime!"]
        return []

    @classmethod
    def from_settings(cls) -> "JobConfig":
        """Build a configuration from the current values in ``settings``."""
        return cls(
            job_type=JobType.from_mode(settings.JOB_MODE),
            order=settings.ORDER,
            dataset_size=settings.DATASET_SIZE,
            prime_base=settings.PRIME_BASE,
            power=settings.POWER,
            input_file=settings.INPUT_FILE,
            count_transversals=settings.COUNT_TRANSVERSALS,
            print_transversals=settings.PRINT_TRANSVERSALS,
            print_heat_map=settings.PRINT_HEAT_MAP,
            human_readable=settings.HUMAN_READABLE,
            print_report=settings.PRINT_REPORT,
            quiet=settings.QUIET,
            export_csv=settings.EXPORT_CSV,
            export_plots=settings.EXPORT_PLOTS,
            out_dir=settings.OUT_DIR,
        )
