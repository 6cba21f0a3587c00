"""Fixed-size neighborhoods on a square toroidal grid.

Each cell's neighborhood is the square block immediately surrounding it (self
included), topped up with cells sampled from the next-larger block ring when
``degree`` is not covered by the block. Cells are addressed by row-major linear
index ``row * dim + col``.
"""

from __future__ import annotations

import math

import numpy as np

from scientific_polarization.errors import ConfigurationError


def block_margin(degree: int) -> int:
    """Half-width of the inner block for a given neighborhood size."""
    return max(0, math.floor(math.ceil(math.sqrt(degree)) / 2 - 1))


def block_cells(cell: int, margin: int, dim: int) -> list[int]:
    """Return distinct cells of the square block of half-width `margin` around `cell`.

    Wrapped duplicates, which appear when the block side exceeds `dim`, are
    kept at their first occurrence. The center cell comes first.
    """
    row, col = divmod(cell, dim)
    seen: set[int] = {cell}
    cells: list[int] = [cell]
    for dr in range(-margin, margin + 1):
        for dc in range(-margin, margin + 1):
            neighbor = ((row + dr) % dim) * dim + (col + dc) % dim
            if neighbor not in seen:
                seen.add(neighbor)
                cells.append(neighbor)
    return cells


def cell_neighborhood(cell: int, dim: int, degree: int, rng: np.random.Generator) -> list[int]:
    """Build the ordered neighborhood of a single cell."""
    margin = block_margin(degree)
    inner = block_cells(cell, margin, dim)
    if len(inner) >= degree:
        return inner[:degree]

    inner_set = set(inner)
    ring = sorted(c for c in block_cells(cell, margin + 1, dim) if c not in inner_set)
    excess = degree - len(inner)
    if excess > len(ring):
        raise ConfigurationError(
            f"degree {degree} cannot be satisfied on a {dim}x{dim} grid"
        )
    picks = rng.choice(len(ring), size=excess, replace=False)
    return inner + [ring[int(i)] for i in picks]


def build_neighborhoods(dim: int, degree: int, rng: np.random.Generator) -> np.ndarray:
    """Return a read-only ``(dim**2, degree)`` table of neighbor indices.

    Row ``i`` lists the neighborhood of cell ``i``; the first entry is always
    ``i`` itself.
    """
    if dim < 1:
        raise ConfigurationError("dim must be >= 1")
    n_cells = dim * dim
    if not 1 <= degree <= n_cells:
        raise ConfigurationError(f"degree must be in [1, {n_cells}], got {degree}")

    table = np.empty((n_cells, degree), dtype=np.int64)
    for cell in range(n_cells):
        table[cell] = cell_neighborhood(cell, dim, degree, rng)
    table.flags.writeable = False
    return table
