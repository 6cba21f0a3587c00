"""Metrics computed over credence grids."""

from scientific_polarization.metrics.entropy import (
    credence_entropy,
    credence_levels,
    histogram_entropy,
)

__all__ = ["credence_entropy", "credence_levels", "histogram_entropy"]
