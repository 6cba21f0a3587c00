"""Credence-grid predicates shared by the engine and the result assembler."""

from __future__ import annotations

import numpy as np

from scientific_polarization.config.constants import (
    CONSENSUS_THRESHOLD,
    CORRECT_THRESHOLD,
    DISBELIEF_FLOOR,
    EXPERIMENT_THRESHOLD,
)


def random_grid(dim: int, rng: np.random.Generator) -> np.ndarray:
    """Draw a ``dim x dim`` grid of uniform credences."""
    return rng.random((dim, dim))


def disbelief_threshold(m: float) -> float:
    """Credence at or below which a doubter no longer trusts settled believers."""
    return min(EXPERIMENT_THRESHOLD, max(DISBELIEF_FLOOR, 1.0 - 1.0 / m))


def experimenters(grid: np.ndarray) -> np.ndarray:
    """Boolean mask of agents that run an experiment this step."""
    return grid >= EXPERIMENT_THRESHOLD


def is_stable(grid: np.ndarray, m: float) -> bool:
    """Return True when every belief sits in an absorbing region.

    A grid is stable when each cell is either above the consensus threshold or
    at/below the disbelief threshold, or when nobody is left experimenting.
    """
    if not np.any(experimenters(grid)):
        return True
    settled = (grid > CONSENSUS_THRESHOLD) | (grid <= disbelief_threshold(m))
    return bool(np.all(settled))


def proportion_correct(grid: np.ndarray) -> float:
    """Fraction of agents whose credence favours option B."""
    return float(np.count_nonzero(grid > CORRECT_THRESHOLD)) / grid.size


def is_polarized(grid: np.ndarray) -> bool:
    """All agents below 0.5, or all agents above the consensus threshold."""
    return bool(np.all(grid < CORRECT_THRESHOLD) or np.all(grid > CONSENSUS_THRESHOLD))
