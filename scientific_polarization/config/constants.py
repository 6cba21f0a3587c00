"""Centralized domain constants for polarization simulations.

All model thresholds and parameter bounds that appear across multiple modules
are defined here. Consuming modules should import from this module rather than
defining their own inline literals.
"""

from __future__ import annotations

DEFAULT_DIM = 10
"""Default grid side length used by the CLI."""

DEFAULT_MAX_STEPS = 50
"""Default upper bound on simulation steps used by the CLI."""

DEFAULT_DEGREE_CAP = 9
"""Default neighborhood size is ``min(dim**2, DEFAULT_DEGREE_CAP)``."""

DEFAULT_P = 0.7
"""Default success rate of the better option B."""

DEFAULT_N = 10
"""Default number of trials per experiment."""

DEFAULT_M = 1.5
"""Default trust-decay multiplier."""

DEFAULT_GRANULARITY = 20
"""Default quantization resolution of the update table."""

P_MIN = 0.501
"""Smallest admissible success rate of option B."""

P_MAX = 0.8
"""Largest admissible success rate of option B."""

N_MIN = 1
"""Smallest admissible trial count per experiment."""

N_MAX = 100
"""Largest admissible trial count per experiment."""

M_MIN = 1.0
"""Smallest admissible trust-decay multiplier."""

M_MAX = 3.0
"""Largest admissible trust-decay multiplier."""

OPTION_A_SUCCESS_RATE = 0.5
"""Known success rate of option A; also the hypothesis boundary for option B."""

PRIOR_HYPOTHESIS_WEIGHT = 0.9
"""Fixed prior weight used in the trusted-evidence Bayes step of the update rule."""

EXPERIMENT_THRESHOLD = 0.5
"""Agents with credence at or above this value run experiments."""

CORRECT_THRESHOLD = 0.5
"""Agents with credence strictly above this value hold the correct belief."""

CONSENSUS_THRESHOLD = 0.99
"""Credence above which an agent is considered settled on option B."""

DISBELIEF_FLOOR = 0.01
"""Lower clamp of the settled-disbelief threshold ``1 - 1/m``."""

ENTROPY_LEVELS = 256
"""Number of intensity levels used when histogramming credences for entropy."""

FLUSH_THRESHOLD = 8_192
"""Flush credence log rows to Parquet once this in-memory row count is reached."""

NO_EVIDENCE = -1
"""Evidence sentinel for cells that did not experiment this step."""

ROUNDOFF_TOLERANCE = 1e-12
"""Largest excursion outside [0, 1] tolerated (and clipped) in precomputed tables."""
