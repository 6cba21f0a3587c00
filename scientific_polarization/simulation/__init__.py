"""Simulation engine: step-wise state machine, result assembly, and persistence."""

from scientific_polarization.simulation.engine import (
    AbortSignal,
    EngineState,
    SimulationEngine,
    deterministic_run_id,
    run,
)
from scientific_polarization.simulation.results import (
    StoredValues,
    assemble,
    classify_outcome,
    parse_output_mode,
)
from scientific_polarization.simulation.step import draw_evidence, update_credences

__all__ = [
    "AbortSignal",
    "EngineState",
    "SimulationEngine",
    "StoredValues",
    "assemble",
    "classify_outcome",
    "deterministic_run_id",
    "draw_evidence",
    "parse_output_mode",
    "run",
    "update_credences",
]
