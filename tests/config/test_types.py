"""Tests for SimulationConfig validation and enums."""

from __future__ import annotations

import numpy as np
import pytest

from scientific_polarization.config.types import (
    EngineStatus,
    OutputMode,
    SimulationConfig,
)
from scientific_polarization.errors import ConfigurationError


class TestSimulationConfigDefaults:
    def test_degree_defaults_to_nine_on_large_grid(self) -> None:
        assert SimulationConfig(dim=5, max_steps=10).degree == 9

    def test_degree_defaults_to_whole_grid_on_small_grid(self) -> None:
        assert SimulationConfig(dim=2, max_steps=10).degree == 4

    def test_model_defaults(self) -> None:
        config = SimulationConfig(dim=3, max_steps=1)
        assert (config.p, config.n, config.m, config.granularity) == (0.7, 10, 1.5, 20)
        assert config.initial_grid is None
        assert config.n_cells == 9

    def test_metadata_is_flat(self) -> None:
        metadata = SimulationConfig(dim=3, max_steps=4).to_metadata()
        assert metadata["degree"] == 9
        assert metadata["initial_grid_supplied"] is False


class TestSimulationConfigValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"dim": 0},
            {"max_steps": 0},
            {"degree": 0},
            {"degree": 10},
            {"p": 0.5},
            {"p": 0.81},
            {"n": 0},
            {"n": 101},
            {"m": 0.99},
            {"m": 3.01},
            {"granularity": 0},
            {"p": float("nan")},
        ],
    )
    def test_out_of_range_values_raise(self, kwargs: dict[str, object]) -> None:
        params: dict[str, object] = {"dim": 3, "max_steps": 5}
        params.update(kwargs)
        with pytest.raises(ConfigurationError):
            SimulationConfig(**params)  # type: ignore[arg-type]

    def test_configuration_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            SimulationConfig(dim=3, max_steps=5, degree=100)

    def test_bool_is_not_an_integer(self) -> None:
        with pytest.raises(ConfigurationError, match="dim"):
            SimulationConfig(dim=True, max_steps=5)

    def test_boundary_values_accepted(self) -> None:
        config = SimulationConfig(dim=2, max_steps=1, degree=4, p=0.501, n=100, m=3.0)
        assert config.degree == 4

    def test_numpy_integers_accepted(self) -> None:
        config = SimulationConfig(dim=np.int64(3), max_steps=np.int32(2))
        assert isinstance(config.dim, int)


class TestInitialGrid:
    def test_wrong_shape_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="shape"):
            SimulationConfig(dim=3, max_steps=5, initial_grid=np.zeros((2, 2)))

    def test_out_of_range_credence_raises(self) -> None:
        grid = np.full((2, 2), 0.5)
        grid[0, 0] = 1.2
        with pytest.raises(ConfigurationError, match=r"\[0, 1\]"):
            SimulationConfig(dim=2, max_steps=5, initial_grid=grid)

    def test_non_finite_credence_raises(self) -> None:
        grid = np.full((2, 2), 0.5)
        grid[1, 1] = np.nan
        with pytest.raises(ConfigurationError):
            SimulationConfig(dim=2, max_steps=5, initial_grid=grid)

    def test_grid_is_copied_and_read_only(self) -> None:
        grid = np.full((2, 2), 0.3)
        config = SimulationConfig(dim=2, max_steps=5, initial_grid=grid)
        grid[0, 0] = 0.9
        assert config.initial_grid is not None
        assert config.initial_grid[0, 0] == 0.3
        with pytest.raises(ValueError):
            config.initial_grid[0, 0] = 0.1

    def test_nested_lists_accepted(self) -> None:
        config = SimulationConfig(dim=2, max_steps=1, initial_grid=[[0.1, 0.2], [0.3, 0.4]])
        assert config.initial_grid is not None
        assert config.initial_grid.dtype == np.float64


def test_output_mode_values_match_public_names() -> None:
    assert {mode.value for mode in OutputMode} == {
        "correct",
        "map",
        "entropy",
        "polarized",
        "storedValues",
    }


def test_only_running_is_non_terminal() -> None:
    assert not EngineStatus.RUNNING.is_terminal
    assert all(s.is_terminal for s in EngineStatus if s is not EngineStatus.RUNNING)
