"""Global settings for the Latin square job pipeline.

This module centralizes the defaults used by the command-line interface when a
flag is not given. Values can be overridden at runtime via the configuration
loader in `latinsquares.analysis.cli.apply_configuration`.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

# Job selection: 'ds' (selection), 'dsp' (selection with preloading),
# 'ss' (super-symmetric), 'count' (count transversals of squares read from a
# file), 'check' (check the Latin Square Property of squares read from a file)
JOB_MODE: str = "ds"

# Square order for data set generation and file parsing
ORDER: int = 3

# Number of squares to generate (0 = all squares of the given order)
DATASET_SIZE: int = 0

# Super-symmetric construction: order = PRIME_BASE ** POWER
PRIME_BASE: int = 2
POWER: int = 1

# Input file with squares in ordered-triple format (file-based jobs only)
INPUT_FILE: Optional[str] = None

# Per-square output toggles
COUNT_TRANSVERSALS: bool = False
PRINT_TRANSVERSALS: bool = False
PRINT_HEAT_MAP: bool = False
HUMAN_READABLE: bool = False
PRINT_REPORT: bool = False
QUIET: bool = False

# Artifact exports
EXPORT_CSV: bool = False
EXPORT_PLOTS: bool = False

# Output directory for CSV and charts
OUT_DIR: str = "results_latin_squares"

# Print a progress line every PROGRESS_EVERY processed squares (file jobs)
PROGRESS_EVERY: int = 1000

# Output naming policy --------------------------------------------------------

# When True, exported artifacts include a datestamp suffix (e.g., _20251113-142530)
# applied consistently across all artifacts produced within the same run.
DATE_IN_FILENAMES: bool = True

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run labeling to avoid overwriting outputs
RUN_TAG: Optional[str] = None
