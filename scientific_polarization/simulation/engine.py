"""Core simulation engine: step-wise state machine and single-shot run."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass

import numpy as np

from scientific_polarization.config.constants import (
    DEFAULT_GRANULARITY,
    DEFAULT_M,
    DEFAULT_N,
    DEFAULT_P,
)
from scientific_polarization.config.types import (
    EngineStatus,
    OutputMode,
    SimulationConfig,
    SimulationResult,
)
from scientific_polarization.domain.cache import TableCache
from scientific_polarization.domain.evidence import ProbabilityTables
from scientific_polarization.domain.grid import (
    is_polarized,
    is_stable,
    proportion_correct,
    random_grid,
)
from scientific_polarization.domain.neighborhood import build_neighborhoods
from scientific_polarization.domain.update_table import UpdateTable
from scientific_polarization.errors import ConfigurationError
from scientific_polarization.metrics.entropy import credence_entropy
from scientific_polarization.simulation.results import (
    ResultValue,
    StoredValues,
    assemble,
    classify_outcome,
)
from scientific_polarization.simulation.step import draw_evidence, update_credences

logger = logging.getLogger(__name__)

AbortSignal = Callable[[], bool]
"""Cooperative cancellation hook polled once before every step."""


@dataclass(frozen=True)
class EngineState:
    """Snapshot returned by :meth:`SimulationEngine.advance`."""

    step: int
    grid: np.ndarray
    evidence: np.ndarray | None
    status: EngineStatus


def deterministic_run_id(config: SimulationConfig, seed: int | None) -> str:
    """Build a reproducible run ID from the parameters and seed."""
    seed_part = "none" if seed is None else str(seed)
    return (
        f"dim{config.dim}_deg{config.degree}_p{config.p:g}_n{config.n}"
        f"_m{config.m:g}_g{config.granularity}_s{seed_part}"
    )


class SimulationEngine:
    """Advance a credence grid one synchronous step at a time.

    The engine starts in :attr:`EngineStatus.RUNNING` and moves to exactly one
    terminal status: ``STABLE_CONVERGED``, ``MAX_STEPS_REACHED`` or
    ``USER_ABORTED``. Once terminal, :meth:`advance` returns the current state
    without doing any work.
    """

    def __init__(
        self,
        config: SimulationConfig,
        initial_grid: np.ndarray,
        neighborhoods: np.ndarray,
        probability_tables: ProbabilityTables,
        update_table: UpdateTable,
        rng: np.random.Generator,
        abort_signal: AbortSignal | None = None,
    ) -> None:
        if initial_grid.shape != (config.dim, config.dim):
            raise ConfigurationError("initial_grid shape does not match config.dim")
        if neighborhoods.shape != (config.n_cells, config.degree):
            raise ConfigurationError("neighborhoods shape does not match config")
        if (update_table.m, update_table.n, update_table.granularity) != (
            config.m,
            config.n,
            config.granularity,
        ):
            raise ConfigurationError("update_table parameters do not match config")
        self.config = config
        self.neighborhoods = neighborhoods
        self.probability_tables = probability_tables
        self.update_table = update_table
        self._rng = rng
        self._abort_signal = abort_signal
        self._abort_requested = False
        self._credences = np.array(initial_grid, dtype=np.float64).ravel()
        self._credences.flags.writeable = False
        self._evidence: np.ndarray | None = None
        self._entropy: list[float] = []
        self._step = 0
        self._status = EngineStatus.RUNNING

    @classmethod
    def from_config(
        cls,
        config: SimulationConfig,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        cache: TableCache | None = None,
        abort_signal: AbortSignal | None = None,
    ) -> SimulationEngine:
        """Build an engine, drawing the initial grid and neighborhoods from `rng`.

        Pass either an explicit generator or a seed; a fresh cache is created
        when none is supplied.
        """
        if rng is not None and seed is not None:
            raise ValueError("pass either rng or seed, not both")
        generator = rng if rng is not None else np.random.default_rng(seed)
        table_cache = cache if cache is not None else TableCache()

        probability_tables = table_cache.probability_tables(config.n)
        update_table = table_cache.update_table(config.m, config.n, config.granularity)
        initial_grid = (
            config.initial_grid
            if config.initial_grid is not None
            else random_grid(config.dim, generator)
        )
        neighborhoods = build_neighborhoods(config.dim, config.degree, generator)
        return cls(
            config=config,
            initial_grid=initial_grid,
            neighborhoods=neighborhoods,
            probability_tables=probability_tables,
            update_table=update_table,
            rng=generator,
            abort_signal=abort_signal,
        )

    # -- read-only views ---------------------------------------------------

    @property
    def status(self) -> EngineStatus:
        return self._status

    @property
    def steps_executed(self) -> int:
        return self._step

    @property
    def grid(self) -> np.ndarray:
        """Copy of the current credence grid, shaped ``(dim, dim)``."""
        return self._credences.reshape(self.config.dim, self.config.dim).copy()

    @property
    def entropy_trace(self) -> list[float]:
        return list(self._entropy)

    @property
    def stored_values(self) -> StoredValues:
        return StoredValues(
            p_e=self.probability_tables.p_e,
            p_e_given_h=self.probability_tables.p_e_given_h,
            p_e_given_not_h=self.probability_tables.p_e_given_not_h,
            update_values=self.update_table.values,
        )

    def state(self) -> EngineState:
        evidence = None
        if self._evidence is not None:
            evidence = self._evidence.reshape(self.config.dim, self.config.dim).copy()
        return EngineState(step=self._step, grid=self.grid, evidence=evidence, status=self._status)

    # -- control -----------------------------------------------------------

    def abort(self) -> None:
        """Request a cooperative stop before the next step."""
        self._abort_requested = True

    def advance(self) -> EngineState:
        """Run one step and return the resulting state and status."""
        if self._status.is_terminal:
            return self.state()
        if self._abort_requested or (self._abort_signal is not None and self._abort_signal()):
            self._finish(EngineStatus.USER_ABORTED)
            return self.state()

        before = self._credences
        evidence = draw_evidence(before, self.config.n, self.config.p, self._rng)
        after = update_credences(before, evidence, self.neighborhoods, self.update_table)
        after.flags.writeable = False
        self._credences = after
        self._evidence = evidence
        self._step += 1
        self._entropy.append(
            credence_entropy(after.reshape(self.config.dim, self.config.dim))
        )
        logger.debug(
            "step=%d experimenters=%d entropy=%.4f",
            self._step,
            int(np.count_nonzero(evidence >= 0)),
            self._entropy[-1],
        )

        if is_stable(after, self.config.m):
            self._finish(EngineStatus.STABLE_CONVERGED)
        elif self._step >= self.config.max_steps:
            self._finish(EngineStatus.MAX_STEPS_REACHED)
        return self.state()

    def iter_steps(self) -> Iterator[EngineState]:
        """Yield the state after every step until the engine is terminal."""
        while not self._status.is_terminal:
            yield self.advance()

    def run_to_completion(self) -> EngineState:
        """Advance until a terminal status is reached."""
        while not self._status.is_terminal:
            self.advance()
        return self.state()

    # -- results -----------------------------------------------------------

    def result(self, output_mode: OutputMode | str) -> ResultValue:
        """Assemble the requested output from the current state."""
        return assemble(self.grid, self._entropy, output_mode, self.stored_values)

    def summary(self, run_id: str) -> SimulationResult:
        grid = self.grid
        correct = proportion_correct(grid)
        return SimulationResult(
            run_id=run_id,
            status=self._status,
            steps_executed=self._step,
            proportion_correct=correct,
            polarized=is_polarized(grid),
            outcome=classify_outcome(correct),
            final_entropy=self._entropy[-1] if self._entropy else None,
        )

    def _finish(self, status: EngineStatus) -> None:
        self._status = status
        logger.info("simulation %s after %d steps", status.value, self._step)


def run(
    dim: int,
    max_steps: int,
    degree: int | None = None,
    p: float = DEFAULT_P,
    n: int = DEFAULT_N,
    m: float = DEFAULT_M,
    granularity: int = DEFAULT_GRANULARITY,
    initial_grid: np.ndarray | None = None,
    output_mode: OutputMode | str = OutputMode.CORRECT,
    *,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
    cache: TableCache | None = None,
    abort_signal: AbortSignal | None = None,
) -> ResultValue:
    """Simulate one community to completion and return the requested output.

    Parameters are validated before any table is computed. An unknown
    `output_mode` raises :exc:`InvalidOutputMode` only after the run finished.
    """
    config = SimulationConfig(
        dim=dim,
        max_steps=max_steps,
        degree=degree,
        p=p,
        n=n,
        m=m,
        granularity=granularity,
        initial_grid=initial_grid,
    )
    engine = SimulationEngine.from_config(
        config, rng=rng, seed=seed, cache=cache, abort_signal=abort_signal
    )
    engine.run_to_completion()
    return engine.result(output_mode)
