"""Result assembly: derive the requested output representation from engine state."""

from __future__ import annotations

from typing import NamedTuple, Sequence

import numpy as np

from scientific_polarization.config.types import OutputMode, Outcome
from scientific_polarization.domain.grid import is_polarized, proportion_correct
from scientific_polarization.errors import ConfigurationError, InvalidOutputMode


class StoredValues(NamedTuple):
    """Cached tables backing a run, in the order the ``storedValues`` mode returns them."""

    p_e: np.ndarray
    p_e_given_h: np.ndarray
    p_e_given_not_h: np.ndarray
    update_values: np.ndarray


ResultValue = float | bool | np.ndarray | StoredValues


def parse_output_mode(raw_mode: OutputMode | str) -> OutputMode:
    """Parse an output mode name into :class:`OutputMode`."""
    if isinstance(raw_mode, OutputMode):
        return raw_mode
    try:
        return OutputMode(raw_mode)
    except ValueError as exc:
        raise InvalidOutputMode(raw_mode) from exc


def assemble(
    final_grid: np.ndarray,
    entropy_trace: Sequence[float],
    output_mode: OutputMode | str,
    stored_values: StoredValues | None = None,
) -> ResultValue:
    """Return the representation of a finished run selected by `output_mode`.

    - ``correct``: fraction of agents with credence > 0.5
    - ``map``: copy of the final grid
    - ``entropy``: entropy trace, one value per executed step
    - ``polarized``: all agents < 0.5, or all agents > 0.99
    - ``storedValues``: the probability and update tables used by the run;
      `stored_values` must be supplied for this mode
    """
    mode = parse_output_mode(output_mode)
    grid = np.asarray(final_grid, dtype=np.float64)
    if mode is OutputMode.CORRECT:
        return proportion_correct(grid)
    if mode is OutputMode.MAP:
        return grid.copy()
    if mode is OutputMode.ENTROPY:
        return np.array(entropy_trace, dtype=np.float64)
    if mode is OutputMode.POLARIZED:
        return is_polarized(grid)
    if stored_values is None:
        raise ConfigurationError("stored_values is required for the storedValues output mode")
    return stored_values


def classify_outcome(correct: float) -> Outcome:
    """Classify the community end state from its final proportion correct."""
    if correct >= 1.0:
        return Outcome.CORRECT_CONSENSUS
    if correct <= 0.0:
        return Outcome.INCORRECT_CONSENSUS
    return Outcome.POLARIZED
