"""Domain layer: neighborhoods, evidence model, update table, and grid predicates."""

from scientific_polarization.domain.cache import TableCache
from scientific_polarization.domain.evidence import ProbabilityTables, compute_probability_tables
from scientific_polarization.domain.grid import (
    disbelief_threshold,
    is_polarized,
    is_stable,
    proportion_correct,
    random_grid,
)
from scientific_polarization.domain.neighborhood import (
    block_cells,
    block_margin,
    build_neighborhoods,
)
from scientific_polarization.domain.update_table import (
    UpdateTable,
    compute_update_table,
    quantize,
)

__all__ = [
    "ProbabilityTables",
    "TableCache",
    "UpdateTable",
    "block_cells",
    "block_margin",
    "build_neighborhoods",
    "compute_probability_tables",
    "compute_update_table",
    "disbelief_threshold",
    "is_polarized",
    "is_stable",
    "proportion_correct",
    "quantize",
    "random_grid",
]
