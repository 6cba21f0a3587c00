"""Belief polarization in a networked community of scientists.

Agents on a toroidal grid hold a credence that an uncertain option B beats a
known option A, experiment when they favour B, and update on their
neighbors' evidence with Jeffrey conditionalization discounted by how far
those neighbors' beliefs are from their own.
"""

from scientific_polarization.config.types import (
    EngineStatus,
    Outcome,
    OutputMode,
    SimulationConfig,
    SimulationResult,
)
from scientific_polarization.domain.cache import TableCache
from scientific_polarization.errors import (
    ConfigurationError,
    InvalidOutputMode,
    NumericDomainError,
    PolarizationError,
)
from scientific_polarization.simulation.engine import EngineState, SimulationEngine, run
from scientific_polarization.simulation.results import StoredValues

__all__ = [
    "ConfigurationError",
    "EngineState",
    "EngineStatus",
    "InvalidOutputMode",
    "NumericDomainError",
    "Outcome",
    "OutputMode",
    "PolarizationError",
    "SimulationConfig",
    "SimulationEngine",
    "SimulationResult",
    "StoredValues",
    "TableCache",
    "run",
]
