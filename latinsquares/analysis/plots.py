"""Visualization utilities for job outputs.

Overview
--------
This module renders PNG charts from a finished :class:`JobResult`. It is
designed to degrade gracefully: if the plotting stack (matplotlib/numpy,
optionally seaborn) is unavailable, public functions emit a short message and
return without raising so that the job itself still completes.

Chart map
---------
- heat_map_n{N}.png: Transversal heat map of the first processed square
    - What: how many transversals pass through each cell.
    - Annotated with the transversal count and the heat value (-1 when the map
      is not uniform).
- transversal_counts_n{N}.png: Distribution of transversal counts (bar)
    - What: number of squares per observed transversal count across the job.
    - Mean and median drawn as vertical lines.

Filenames carry the run tag and datestamp suffix configured in
``latinsquares.analysis.settings``.
"""
from __future__ import annotations

import os
from typing import Any, Optional, cast

from . import settings

try:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt  # type: ignore
    import numpy as np  # type: ignore
    _PLOTS_AVAILABLE = True
except Exception:
    plt = cast(Any, None)  # type: ignore
    np = cast(Any, None)  # type: ignore
    _PLOTS_AVAILABLE = False

try:
    import seaborn as sns  # type: ignore
except Exception:
    sns = None  # type: ignore

from latinsquares.transversals import TransversalResult

from .stats import JobResult


def _date_suffix() -> str:
    """Return the run-tag/datestamp suffix configured in settings (or empty)."""
    parts = []
    run_tag = getattr(settings, "RUN_TAG", None)
    if run_tag:
        parts.append(str(run_tag))
    if getattr(settings, "DATE_IN_FILENAMES", False):
        run_id = getattr(settings, "RUN_ID", None)
        if run_id:
            parts.append(str(run_id))
    return ("_" + "_".join(parts)) if parts else ""


def plot_heat_map(transversals: TransversalResult, out_dir: str, title: Optional[str] = None) -> Optional[str]:
    """Draw a transversal heat map and return the written file path.

    Uses ``seaborn.heatmap`` when seaborn is installed and falls back to
    ``matplotlib.pyplot.imshow`` otherwise. Returns ``None`` when plotting is
    unavailable.
    """
    if not _PLOTS_AVAILABLE:
        print("Plotting skipped: matplotlib not installed.")
        return None
    os.makedirs(out_dir, exist_ok=True)

    data = np.array(transversals.heat_map, dtype=int)
    n = transversals.order
    annotate = n <= 12

    plt.figure(figsize=(8, 7))
    if sns is not None:
        sns.heatmap(data, annot=annotate, fmt="d", cmap="rocket_r", square=True, cbar=True, linewidths=0.5)
    else:
        plt.imshow(data, cmap="viridis")
        plt.colorbar()
        if annotate:
            for (r, c), value in np.ndenumerate(data):
                plt.text(c, r, str(value), ha="center", va="center", fontsize=9, color="white")
    plt.xlabel("Column", fontsize=12)
    plt.ylabel("Row", fontsize=12)
    heading = title or f"Transversal Heat Map (order {n})"
    plt.title(
        f"{heading}\n(count = {transversals.count}, heat value = {transversals.heat_value})",
        fontsize=14,
    )

    fname = os.path.join(out_dir, f"heat_map_n{n}{_date_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=300)
    plt.close()
    print(f"Saved heat-map chart: {fname}")
    return fname


def plot_transversal_count_distribution(result: JobResult, out_dir: str) -> Optional[str]:
    """Bar chart of squares per transversal count; ``None`` if nothing to plot."""
    if not _PLOTS_AVAILABLE:
        print("Plotting skipped: matplotlib not installed.")
        return None
    buckets = result.statistics.buckets()
    if not buckets:
        return None
    os.makedirs(out_dir, exist_ok=True)

    counts = np.array([bucket.count for bucket in buckets])
    squares = np.array([bucket.multiplicity for bucket in buckets])
    mean_count = cast(float, result.statistics.mean())
    median_count = cast(float, result.statistics.median())

    plt.figure(figsize=(12, 6))
    width = max(0.8, float(np.ptp(counts)) / 60.0) if len(counts) > 1 else 0.8
    plt.bar(counts, squares, width=width, alpha=0.7, color="steelblue", edgecolor="black")
    plt.axvline(mean_count, color="red", linestyle="--", label=f"Mean: {mean_count:.2f}")
    plt.axvline(median_count, color="green", linestyle=":", label=f"Median: {median_count:.1f}")
    plt.xlabel("Transversal count", fontsize=12)
    plt.ylabel("Number of squares", fontsize=12)
    plt.title(
        f"Transversal Count Distribution (order {result.order}, {result.squares_processed} squares)",
        fontsize=14,
    )
    plt.grid(True, alpha=0.3)
    plt.legend()

    fname = os.path.join(out_dir, f"transversal_counts_n{result.order}{_date_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=300)
    plt.close()
    print(f"Saved transversal-count chart: {fname}")
    return fname


def plot_and_save(result: JobResult, out_dir: str) -> None:
    """Generate every chart available for ``result`` into ``out_dir``."""
    if not _PLOTS_AVAILABLE:
        print("Plotting skipped: matplotlib not installed.")
        return
    if result.sample_transversals is not None:
        plot_heat_map(result.sample_transversals, out_dir)
    plot_transversal_count_distribution(result, out_dir)
