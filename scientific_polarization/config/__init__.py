"""Configuration layer: constants and typed config dataclasses."""

from scientific_polarization.config.constants import (
    CONSENSUS_THRESHOLD,
    DEFAULT_DEGREE_CAP,
    DEFAULT_GRANULARITY,
    DEFAULT_M,
    DEFAULT_N,
    DEFAULT_P,
    DISBELIEF_FLOOR,
    ENTROPY_LEVELS,
    EXPERIMENT_THRESHOLD,
    FLUSH_THRESHOLD,
    NO_EVIDENCE,
    PRIOR_HYPOTHESIS_WEIGHT,
)
from scientific_polarization.config.types import (
    EngineStatus,
    Outcome,
    OutputMode,
    SimulationConfig,
    SimulationResult,
)

__all__ = [
    "CONSENSUS_THRESHOLD",
    "DEFAULT_DEGREE_CAP",
    "DEFAULT_GRANULARITY",
    "DEFAULT_M",
    "DEFAULT_N",
    "DEFAULT_P",
    "DISBELIEF_FLOOR",
    "ENTROPY_LEVELS",
    "EXPERIMENT_THRESHOLD",
    "EngineStatus",
    "FLUSH_THRESHOLD",
    "NO_EVIDENCE",
    "Outcome",
    "OutputMode",
    "PRIOR_HYPOTHESIS_WEIGHT",
    "SimulationConfig",
    "SimulationResult",
]
