"""Probability of each evidence count under a uniform prior on option B's success rate.

For ``n`` trials the evidence is the success count ``e`` in ``[0, n]``. Three
vectors are tabulated once per ``n``:

- ``p_e[e]``: marginal likelihood, the binomial pmf integrated over ``x ~ U(0, 1)``
- ``p_e_given_h[e]``: pmf mass over ``x in [0.5, 1]`` (option B really is better)
- ``p_e_given_not_h[e]``: ``1 - pmf`` integrated over ``x in [0.5, 1]``
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
from scipy import integrate, stats

from scientific_polarization.config.constants import (
    N_MAX,
    N_MIN,
    OPTION_A_SUCCESS_RATE,
    ROUNDOFF_TOLERANCE,
)
from scientific_polarization.errors import ConfigurationError, NumericDomainError


@dataclass(frozen=True)
class ProbabilityTables:
    """Read-only evidence probability vectors for a fixed trial count."""

    n: int
    p_e: np.ndarray
    p_e_given_h: np.ndarray
    p_e_given_not_h: np.ndarray


def _integrate(func: Callable[[float], float], lower: float, upper: float) -> float:
    value, _ = integrate.quad(func, lower, upper)
    return float(value)


def compute_probability_tables(n: int) -> ProbabilityTables:
    """Integrate the binomial likelihood of every evidence count for `n` trials.

    Raises :exc:`NumericDomainError` if any entry is non-finite, leaves
    ``[0, 1]``, or would make the update rule divide by zero.
    """
    if not N_MIN <= n <= N_MAX:
        raise ConfigurationError(f"n must be in [{N_MIN}, {N_MAX}], got {n}")

    size = n + 1
    p_e = np.empty(size, dtype=np.float64)
    p_e_given_h = np.empty(size, dtype=np.float64)
    p_e_given_not_h = np.empty(size, dtype=np.float64)
    boundary = OPTION_A_SUCCESS_RATE
    for e in range(size):
        p_e[e] = _integrate(lambda x, e=e: stats.binom.pmf(e, n, x), 0.0, 1.0)
        p_e_given_h[e] = _integrate(lambda x, e=e: stats.binom.pmf(e, n, x), boundary, 1.0)
        p_e_given_not_h[e] = _integrate(
            lambda x, e=e: 1.0 - stats.binom.pmf(e, n, x), boundary, 1.0
        )

    for name, values in (
        ("p_e", p_e),
        ("p_e_given_h", p_e_given_h),
        ("p_e_given_not_h", p_e_given_not_h),
    ):
        if not np.all(np.isfinite(values)):
            raise NumericDomainError(f"{name} contains non-finite probability mass for n={n}")
        if values.min() < -ROUNDOFF_TOLERANCE or values.max() > 1.0 + ROUNDOFF_TOLERANCE:
            raise NumericDomainError(f"{name} leaves [0, 1] for n={n}")
        np.clip(values, 0.0, 1.0, out=values)
    if np.any(p_e <= 0.0) or np.any(p_e >= 1.0):
        raise NumericDomainError(f"marginal evidence probability is degenerate for n={n}")

    for values in (p_e, p_e_given_h, p_e_given_not_h):
        values.flags.writeable = False
    return ProbabilityTables(
        n=n, p_e=p_e, p_e_given_h=p_e_given_h, p_e_given_not_h=p_e_given_not_h
    )
