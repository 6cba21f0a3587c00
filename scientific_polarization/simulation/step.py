"""Per-step evidence draws and the synchronous credence update pass.

Both functions operate on flat (row-major) credence vectors. The update reads
only the frozen ``before`` vector and writes a fresh array, so every cell sees
the previous step's beliefs regardless of evaluation order.
"""

from __future__ import annotations

import numpy as np

from scientific_polarization.config.constants import NO_EVIDENCE
from scientific_polarization.domain.grid import experimenters
from scientific_polarization.domain.update_table import UpdateTable, quantize


def draw_evidence(credences: np.ndarray, n: int, p: float, rng: np.random.Generator) -> np.ndarray:
    """Draw Binomial(n, p) success counts for every agent that experiments.

    Agents below the experiment threshold get :data:`NO_EVIDENCE`.
    """
    evidence = np.full(credences.shape, NO_EVIDENCE, dtype=np.int64)
    mask = experimenters(credences)
    count = int(np.count_nonzero(mask))
    if count:
        evidence[mask] = rng.binomial(n, p, size=count)
    return evidence


def update_credences(
    before: np.ndarray,
    evidence: np.ndarray,
    neighborhoods: np.ndarray,
    table: UpdateTable,
) -> np.ndarray:
    """Average looked-up posteriors over each cell's neighbors that produced evidence.

    Cells whose neighborhood produced no evidence keep their credence.
    """
    neighbor_evidence = evidence[neighborhoods]
    qualifying = neighbor_evidence != NO_EVIDENCE
    counts = np.count_nonzero(qualifying, axis=1)

    own_index = quantize(before, table.granularity)
    neighbor_index = own_index[neighborhoods]
    safe_evidence = np.where(qualifying, neighbor_evidence, 0)
    posteriors = table.values[own_index[:, None], neighbor_index, safe_evidence]
    totals = np.where(qualifying, posteriors, 0.0).sum(axis=1)

    after = before.copy()
    updated = counts > 0
    after[updated] = totals[updated] / counts[updated]
    return after
