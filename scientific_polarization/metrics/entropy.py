"""Shannon entropy of the credence distribution."""

from __future__ import annotations

import numpy as np

from scientific_polarization.config.constants import ENTROPY_LEVELS


def histogram_entropy(counts: np.ndarray) -> float:
    """Shannon entropy (base 2) of a histogram of non-negative counts."""
    counts = np.asarray(counts, dtype=np.float64)
    total = counts.sum()
    if total <= 0:
        return 0.0
    probs = counts[counts > 0] / total
    return float(np.sum(probs * np.log2(1.0 / probs)))


def credence_levels(grid: np.ndarray, levels: int = ENTROPY_LEVELS) -> np.ndarray:
    """Map credences in [0, 1] onto ``levels`` integer intensity levels."""
    if levels < 2:
        raise ValueError("levels must be >= 2")
    top = levels - 1
    scaled = np.floor(np.clip(np.asarray(grid, dtype=np.float64), 0.0, 1.0) * top + 0.5)
    return scaled.astype(np.int64).ravel()


def credence_entropy(grid: np.ndarray, levels: int = ENTROPY_LEVELS) -> float:
    """Entropy of the grid's credence histogram over ``levels`` bins.

    Credences are quantized like an 8-bit grey-level image by default, so a
    uniform grid has entropy 0 and the maximum is ``log2(levels)``.
    """
    return histogram_entropy(np.bincount(credence_levels(grid, levels), minlength=levels))
