"""Typed result shapes and statistics helpers for the analysis pipeline.

Defines ``TypedDict`` structures for job outputs, the online
:class:`JobStatistics` aggregator that summarizes transversal counts across a
batch of squares, and small utilities shared by the job runners.
"""
from __future__ import annotations

import statistics
from dataclasses import dataclass, field
from typing import List, Optional, TypedDict

from latinsquares.square import Square
from latinsquares.transversals import TransversalResult


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class TransversalStatsSummary(TypedDict):
    squares: int
    min: Optional[int]
    max: Optional[int]
    mean: Optional[float]
    median: Optional[float]
    modes: List[int]


class SquareRecord(TypedDict, total=False):
    index: int
    order: int
    latin: bool
    conflicts: int
    transversal_count: Optional[int]
    heat_value: Optional[int]
    nodes: int
    time: float


@dataclass
class TransversalCountBucket:
    """Number of squares (``multiplicity``) observed with a given transversal count."""

    count: int
    multiplicity: int = 1

    def __str__(self) -> str:
        return f"{self.multiplicity} Latin Squares Have {self.count} Transversals"


class JobStatistics:
    """Online aggregator of per-square transversal counts.

    Counts are bucketed by value as they are submitted. Buckets are kept in
    submission order and sorted ascending only when a query needs them and a
    new distinct value has arrived since the last sort.

    The property-satisfied counter used by property-checking jobs is
    independent of the buckets.
    """

    def __init__(self) -> None:
        self._buckets: List[TransversalCountBucket] = []
        self._sorted = True
        self.property_satisfied = 0

    def submit(self, count: int) -> None:
        """Record one square's transversal count (linear scan over distinct values)."""
        for bucket in self._buckets:
            if bucket.count == count:
                bucket.multiplicity += 1
                return
        self._buckets.append(TransversalCountBucket(count))
        self._sorted = False

    def increment_property_satisfied(self) -> None:
        self.property_satisfied += 1

    @property
    def squares_processed(self) -> int:
        """Total number of submitted counts (sum of multiplicities)."""
        return sum(bucket.multiplicity for bucket in self._buckets)

    def _ensure_sorted(self) -> None:
        if not self._sorted:
            self._buckets.sort(key=lambda bucket: bucket.count)
            self._sorted = True

    def buckets(self) -> List[TransversalCountBucket]:
        """Return the buckets in ascending count order."""
        self._ensure_sorted()
        return list(self._buckets)

    def minimum(self) -> Optional[int]:
        if not self._buckets:
            return None
        self._ensure_sorted()
        return self._buckets[0].count

    def maximum(self) -> Optional[int]:
        if not self._buckets:
            return None
        self._ensure_sorted()
        return self._buckets[-1].count

    def mean(self) -> Optional[float]:
        if not self._buckets:
            return None
        total = sum(bucket.count * bucket.multiplicity for bucket in self._buckets)
        return total / self.squares_processed

    def median(self) -> Optional[float]:
        """Median of the individual observations implied by the buckets.

        Odd length: the middle observation. Even length: the floating-point
        average of the two middle observations.
        """
        if not self._buckets:
            return None
        self._ensure_sorted()
        observations: List[int] = []
        for bucket in self._buckets:
            observations.extend([bucket.count] * bucket.multiplicity)
        n = len(observations)
        middle = n // 2
        if n % 2 == 1:
            return float(observations[middle])
        return (observations[middle - 1] + observations[middle]) / 2.0

    def modes(self) -> List[int]:
        """All counts sharing the maximum multiplicity, in ascending order."""
        if not self._buckets:
            return []
        self._ensure_sorted()
        top = max(bucket.multiplicity for bucket in self._buckets)
        return [bucket.count for bucket in self._buckets if bucket.multiplicity == top]

    def summary(self) -> TransversalStatsSummary:
        return {
            "squares": self.squares_processed,
            "min": self.minimum(),
            "max": self.maximum(),
            "mean": self.mean(),
            "median": self.median(),
            "modes": self.modes(),
        }


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps/items expected. Values <= 0 are coerced to 1 to
        avoid division by zero when reporting percentages.
    label : str
        Short label printed in front of the progress counters.
    every : int, default 1
        Only print every ``every``-th update (the final one is always printed).
    """

    def __init__(self, total: int, label: str, every: int = 1):
        self.total = max(1, total)
        self.label = label
        self.every = max(1, every)

    def update(self, index: int, detail: str = "") -> None:
        """Print a single-line progress update to stdout.

        The percentage is computed as ``index / total * 100``; values of
        ``index`` greater than ``total`` print above 100%.
        """
        if index % self.every and index != self.total:
            return
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: List[float], label: str = "") -> StatsSummary:
    """Compute summary statistics for a numeric sequence.

    Parameters
    ----------
    values : List[float]
        Numeric values to summarize (e.g. per-square counting times).
    label : str, optional
        Carried for debugging contexts; not used in calculations.

    Returns
    -------
    StatsSummary
        count, mean, median, std (population), min, max, q25, q75 and range.
        When ``values`` is empty all numeric fields are ``None`` and ``count``
        is 0 to keep CSV generation consistent.
    """
    if not values:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
            "range": None,
        }

    sorted_vals = sorted(values)
    n = len(values)

    mean_val = statistics.mean(values)
    median_val = statistics.median(values)
    min_val = min(values)
    max_val = max(values)
    range_val = max_val - min_val
    std_val = statistics.pstdev(values) if n > 1 else 0

    q25 = sorted_vals[n // 4] if n >= 4 else min_val
    q75 = sorted_vals[3 * n // 4] if n >= 4 else max_val

    return {
        "count": n,
        "mean": mean_val,
        "median": median_val,
        "std": std_val,
        "min": min_val,
        "max": max_val,
        "q25": q25,
        "q75": q75,
        "range": range_val,
    }


@dataclass
class JobResult:
    """Everything a finished job hands to reporting, CSV export and plotting.

    ``sample_square`` and ``sample_transversals`` keep a copy of the first
    processed square and its transversal analysis (when counting) so that
    charts can be drawn after the run.
    """

    mode: str
    order: int
    statistics: JobStatistics = field(default_factory=JobStatistics)
    records: List[SquareRecord] = field(default_factory=list)
    nodes_explored: int = 0
    elapsed: float = 0.0
    sample_square: Optional[Square] = None
    sample_transversals: Optional[TransversalResult] = None

    @property
    def squares_processed(self) -> int:
        return len(self.records)

    def counting_times(self) -> List[float]:
        return [record["time"] for record in self.records if record.get("transversal_count") is not None]
