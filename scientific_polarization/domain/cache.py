"""Explicit cache for probability and update tables keyed by their parameters.

A :class:`TableCache` is owned by the caller (or injected into the engine) so
repeated runs with identical parameters share one computation, while runs with
different parameters can never read each other's tables.
"""

from __future__ import annotations

import logging
import threading

from scientific_polarization.domain.evidence import ProbabilityTables, compute_probability_tables
from scientific_polarization.domain.update_table import UpdateTable, compute_update_table

logger = logging.getLogger(__name__)

UpdateKey = tuple[float, int, int]


class TableCache:
    """Compute-once store for :class:`ProbabilityTables` and :class:`UpdateTable`.

    Each parameter tuple is computed at most once; computation happens under a
    lock and the stored arrays are read-only, so concurrent readers are safe.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._probability: dict[int, ProbabilityTables] = {}
        self._update: dict[UpdateKey, UpdateTable] = {}

    def probability_tables(self, n: int) -> ProbabilityTables:
        """Return evidence probabilities for `n` trials, computing them on first use."""
        with self._lock:
            return self._probability_tables_locked(n)

    def update_table(self, m: float, n: int, granularity: int) -> UpdateTable:
        """Return the posterior table for ``(m, n, granularity)``."""
        key: UpdateKey = (float(m), int(n), int(granularity))
        with self._lock:
            cached = self._update.get(key)
            if cached is not None:
                logger.debug("update table cache hit m=%s n=%s granularity=%s", *key)
                return cached
            tables = self._probability_tables_locked(key[1])
            logger.info("computing update table m=%s n=%s granularity=%s", *key)
            table = compute_update_table(key[0], key[1], key[2], tables)
            self._update[key] = table
            return table

    def clear(self) -> None:
        """Drop every cached table."""
        with self._lock:
            self._probability.clear()
            self._update.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._probability) + len(self._update)

    def _probability_tables_locked(self, n: int) -> ProbabilityTables:
        cached = self._probability.get(n)
        if cached is not None:
            logger.debug("probability table cache hit n=%s", n)
            return cached
        logger.info("computing probability tables n=%s", n)
        tables = compute_probability_tables(n)
        self._probability[n] = tables
        return tables
