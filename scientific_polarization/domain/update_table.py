"""Trust-discounted Jeffrey-conditionalization lookup table.

For every quantized own credence ``c1 = i/G``, neighbor credence ``c2 = j/G`` and
evidence count ``e`` the table holds the credence an agent adopts after seeing
the neighbor's evidence:

    d         = |c1 - c2|
    P_iE      = Binom.pmf(e; n, c1)
    P_fE      = max(1 - d * m * (1 - P_iE), 0)
    P_iHE     = P(E|H) * 0.9 / P(E)
    P_iHNotE  = P(~E|H) * c1 / (1 - P(E))
    posterior = P_iHE * P_fE + P_iHNotE * (1 - P_fE)

The trusted-evidence Bayes step uses the fixed prior weight 0.9 rather than
``c1``; simulation outcomes depend on it.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy import stats

from scientific_polarization.config.constants import (
    PRIOR_HYPOTHESIS_WEIGHT,
    ROUNDOFF_TOLERANCE,
)
from scientific_polarization.domain.evidence import ProbabilityTables
from scientific_polarization.errors import ConfigurationError, NumericDomainError


@dataclass(frozen=True)
class UpdateTable:
    """Read-only ``(G + 1, G + 1, n + 1)`` posterior table."""

    m: float
    n: int
    granularity: int
    values: np.ndarray

    def lookup(
        self, own: np.ndarray, neighbor: np.ndarray, evidence: np.ndarray
    ) -> np.ndarray:
        """Vectorized lookup for raw credences and evidence counts."""
        return self.values[
            quantize(own, self.granularity), quantize(neighbor, self.granularity), evidence
        ]


def quantize(credences: np.ndarray | float, granularity: int) -> np.ndarray:
    """Snap credences to table indices, rounding halves away from zero."""
    scaled = np.floor(np.asarray(credences, dtype=np.float64) * granularity + 0.5)
    return np.minimum(scaled, granularity).astype(np.int64)


def compute_update_table(
    m: float, n: int, granularity: int, tables: ProbabilityTables
) -> UpdateTable:
    """Precompute posteriors for every quantized credence pair and evidence count."""
    if granularity < 1:
        raise ConfigurationError("granularity must be >= 1")
    if tables.n != n:
        raise ConfigurationError(f"probability tables were built for n={tables.n}, not n={n}")

    p_e = tables.p_e
    not_p_e = 1.0 - p_e
    if np.any(p_e == 0.0):
        raise NumericDomainError(f"P(E) is zero for some evidence count (n={n})")
    if np.any(not_p_e == 0.0):
        raise NumericDomainError(f"1 - P(E) is zero for some evidence count (n={n})")

    levels = np.arange(granularity + 1, dtype=np.float64) / granularity
    evidence = np.arange(n + 1)

    # axes: own credence (i), neighbor credence (j), evidence (e)
    own = levels[:, None, None]
    distance = np.abs(levels[:, None] - levels[None, :])[:, :, None]
    p_ie = stats.binom.pmf(evidence[None, :], n, levels[:, None])[:, None, :]
    p_fe = np.maximum(1.0 - distance * m * (1.0 - p_ie), 0.0)
    p_f_not_e = 1.0 - p_fe

    p_ihe = (tables.p_e_given_h * PRIOR_HYPOTHESIS_WEIGHT / p_e)[None, None, :]
    p_ih_not_e = tables.p_e_given_not_h[None, None, :] * own / not_p_e[None, None, :]

    values = p_ihe * p_fe + p_ih_not_e * p_f_not_e
    if not np.all(np.isfinite(values)):
        raise NumericDomainError(f"update table contains non-finite entries (m={m}, n={n})")
    if values.min() < -ROUNDOFF_TOLERANCE or values.max() > 1.0 + ROUNDOFF_TOLERANCE:
        raise NumericDomainError(f"update table leaves [0, 1] (m={m}, n={n})")
    values = np.clip(values, 0.0, 1.0)
    values.flags.writeable = False
    return UpdateTable(m=m, n=n, granularity=granularity, values=values)
