"""Configuration dataclasses and enums for polarization simulations.

Every frozen dataclass validates itself in ``__post_init__`` so a bad
parameter fails before any table is computed or any step is run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from scientific_polarization.config.constants import (
    DEFAULT_DEGREE_CAP,
    DEFAULT_GRANULARITY,
    DEFAULT_M,
    DEFAULT_N,
    DEFAULT_P,
    M_MAX,
    M_MIN,
    N_MAX,
    N_MIN,
    P_MAX,
    P_MIN,
)
from scientific_polarization.errors import ConfigurationError

__all__ = [
    "EngineStatus",
    "OutputMode",
    "Outcome",
    "SimulationConfig",
    "SimulationResult",
]

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class OutputMode(str, Enum):
    """Result representation returned by a single-shot run."""

    CORRECT = "correct"
    MAP = "map"
    ENTROPY = "entropy"
    POLARIZED = "polarized"
    STORED_VALUES = "storedValues"


class EngineStatus(str, Enum):
    """Simulation engine state machine."""

    RUNNING = "running"
    STABLE_CONVERGED = "stable_converged"
    MAX_STEPS_REACHED = "max_steps_reached"
    USER_ABORTED = "user_aborted"

    @property
    def is_terminal(self) -> bool:
        return self is not EngineStatus.RUNNING


class Outcome(str, Enum):
    """Community end state judged from the final proportion correct."""

    CORRECT_CONSENSUS = "correct_consensus"
    INCORRECT_CONSENSUS = "incorrect_consensus"
    POLARIZED = "polarized"


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


def _require_int(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return int(value)


def _require_float(value: object, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise ConfigurationError(f"{name} must be a real number, got {value!r}")
    result = float(value)
    if result != result:
        raise ConfigurationError(f"{name} must not be NaN")
    return result


@dataclass(frozen=True)
class SimulationConfig:
    """Parameters of one polarization run.

    ``degree`` defaults to ``min(dim**2, 9)``. ``initial_grid`` is copied,
    validated and stored read-only; when absent the engine draws a uniform
    random grid from its generator.
    """

    dim: int
    max_steps: int
    degree: int | None = None
    p: float = DEFAULT_P
    n: int = DEFAULT_N
    m: float = DEFAULT_M
    granularity: int = DEFAULT_GRANULARITY
    initial_grid: np.ndarray | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        dim = _require_int(self.dim, "dim")
        if dim < 1:
            raise ConfigurationError("dim must be >= 1")
        max_steps = _require_int(self.max_steps, "max_steps")
        if max_steps < 1:
            raise ConfigurationError("max_steps must be >= 1")

        degree = min(dim * dim, DEFAULT_DEGREE_CAP) if self.degree is None else self.degree
        degree = _require_int(degree, "degree")
        if not 1 <= degree <= dim * dim:
            raise ConfigurationError(f"degree must be in [1, {dim * dim}], got {degree}")

        p = _require_float(self.p, "p")
        if not P_MIN <= p <= P_MAX:
            raise ConfigurationError(f"p must be in [{P_MIN}, {P_MAX}], got {p}")
        n = _require_int(self.n, "n")
        if not N_MIN <= n <= N_MAX:
            raise ConfigurationError(f"n must be in [{N_MIN}, {N_MAX}], got {n}")
        m = _require_float(self.m, "m")
        if not M_MIN <= m <= M_MAX:
            raise ConfigurationError(f"m must be in [{M_MIN}, {M_MAX}], got {m}")
        granularity = _require_int(self.granularity, "granularity")
        if granularity < 1:
            raise ConfigurationError("granularity must be >= 1")

        object.__setattr__(self, "dim", dim)
        object.__setattr__(self, "max_steps", max_steps)
        object.__setattr__(self, "degree", degree)
        object.__setattr__(self, "p", p)
        object.__setattr__(self, "n", n)
        object.__setattr__(self, "m", m)
        object.__setattr__(self, "granularity", granularity)
        if self.initial_grid is not None:
            object.__setattr__(self, "initial_grid", _validated_grid(self.initial_grid, dim))

    @property
    def n_cells(self) -> int:
        return self.dim * self.dim

    def to_metadata(self) -> dict[str, object]:
        """Flat parameter dictionary for run payloads."""
        return {
            "dim": self.dim,
            "max_steps": self.max_steps,
            "degree": self.degree,
            "p": self.p,
            "n": self.n,
            "m": self.m,
            "granularity": self.granularity,
            "initial_grid_supplied": self.initial_grid is not None,
        }


def _validated_grid(raw: object, dim: int) -> np.ndarray:
    """Return a read-only float64 copy of ``raw`` after shape/range checks."""
    try:
        grid = np.array(raw, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError("initial_grid must be a numeric dim x dim array") from exc
    if grid.shape != (dim, dim):
        raise ConfigurationError(f"initial_grid must have shape ({dim}, {dim}), got {grid.shape}")
    if not np.all(np.isfinite(grid)):
        raise ConfigurationError("initial_grid must contain only finite credences")
    if grid.min() < 0.0 or grid.max() > 1.0:
        raise ConfigurationError("initial_grid credences must lie in [0, 1]")
    grid.flags.writeable = False
    return grid


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SimulationResult:
    """Summary of one completed (or aborted) run."""

    run_id: str
    status: EngineStatus
    steps_executed: int
    proportion_correct: float
    polarized: bool
    outcome: Outcome
    final_entropy: float | None
