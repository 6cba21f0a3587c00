"""CLI entrypoint for a single polarization run.

This module owns CLI argument parsing only. All domain logic lives in the
extracted modules:

- ``scientific_polarization.config``                  – configuration dataclasses
- ``scientific_polarization.simulation.engine``       – ``SimulationEngine`` and ``run``
- ``scientific_polarization.simulation.persistence``  – Parquet/JSON artifacts
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

import numpy as np

from scientific_polarization.config.constants import (
    DEFAULT_DIM,
    DEFAULT_GRANULARITY,
    DEFAULT_M,
    DEFAULT_MAX_STEPS,
    DEFAULT_N,
    DEFAULT_P,
)
from scientific_polarization.config.types import OutputMode, SimulationConfig
from scientific_polarization.errors import PolarizationError
from scientific_polarization.simulation.engine import SimulationEngine, deterministic_run_id
from scientific_polarization.simulation.persistence import run_with_artifacts
from scientific_polarization.simulation.results import parse_output_mode

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# ---------------------------------------------------------------------------
# Config-value coercion
# ---------------------------------------------------------------------------


_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


def _as_flag(raw: object, key: str) -> bool:
    """Accept a JSON boolean or one of the usual on/off words."""
    if isinstance(raw, bool):
        return raw
    word = raw.strip().lower() if isinstance(raw, str) else None
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"{key}: expected a boolean, got {raw!r}")


def _parse_number(raw: object, key: str, kind: type[int] | type[float]) -> int | float:
    """Parse `raw` as `kind`, rejecting booleans and any lossy conversion."""
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise ValueError(f"{key}: expected {kind.__name__}, got {raw!r}")
    try:
        value = kind(raw)
    except (OverflowError, ValueError) as exc:
        raise ValueError(f"{key}: expected {kind.__name__}, got {raw!r}") from exc
    if isinstance(raw, float) and value != raw:
        raise ValueError(f"{key}: expected {kind.__name__}, got {raw!r}")
    return value


def _as_text(raw: object, key: str) -> str:
    if isinstance(raw, bool) or not isinstance(raw, (str, Path, int, float)):
        raise ValueError(f"{key}: expected a string, got {raw!r}")
    return str(raw)


def _as_int(raw: object, key: str) -> int:
    return int(_parse_number(raw, key, int))


def _as_float(raw: object, key: str) -> float:
    return float(_parse_number(raw, key, float))


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_optional_int(
    cli_val: int | None, key: str, file_cfg: dict[str, object]
) -> int | None:
    """CLI > file resolution for integers without a built-in default."""
    raw = _get_val(cli_val, key, file_cfg, None)
    return None if raw is None else _as_int(raw, key)


def _load_initial_grid(path: Path) -> np.ndarray:
    """Load an initial credence grid from a JSON nested list or a ``.npy`` file."""
    if path.suffix == ".npy":
        return np.load(path)
    return np.array(json.loads(path.read_text()), dtype=np.float64)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Simulate scientific polarization on a grid")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--dim", type=int, default=None)
    parser.add_argument("--max-steps", type=int, default=None)
    parser.add_argument("--degree", type=int, default=None)
    parser.add_argument("--p", type=float, default=None, help="success rate of option B")
    parser.add_argument("--n", type=int, default=None, help="trials per experiment")
    parser.add_argument("--m", type=float, default=None, help="trust-decay multiplier")
    parser.add_argument("--granularity", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--initial-grid",
        type=Path,
        default=None,
        help="JSON nested list or .npy file with a dim x dim credence grid",
    )
    parser.add_argument(
        "--output",
        type=str,
        choices=[mode.value for mode in OutputMode],
        default=None,
    )
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument(
        "--log-credences",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Write the per-cell credence log (requires --out-dir)",
    )
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None)
    return parser


def _jsonable(value: object) -> object:
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, tuple):
        return [_jsonable(item) for item in value]
    if isinstance(value, (np.floating, np.integer, np.bool_)):
        return value.item()
    return value


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for a single simulation run.

    Supports ``--config path/to/config.json`` for reproducibility. CLI
    arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        if not isinstance(file_cfg, dict):
            parser.error(f"Config file must contain a JSON object: {args.config}")

    try:
        log_level = _as_text(
            _get_val(args.log_level, "log_level", file_cfg, "WARNING"), "log_level"
        ).upper()
        dim = _as_int(_get_val(args.dim, "dim", file_cfg, DEFAULT_DIM), "dim")
        max_steps = _as_int(
            _get_val(args.max_steps, "max_steps", file_cfg, DEFAULT_MAX_STEPS), "max_steps"
        )
        degree = _get_optional_int(args.degree, "degree", file_cfg)
        p = _as_float(_get_val(args.p, "p", file_cfg, DEFAULT_P), "p")
        n = _as_int(_get_val(args.n, "n", file_cfg, DEFAULT_N), "n")
        m = _as_float(_get_val(args.m, "m", file_cfg, DEFAULT_M), "m")
        granularity = _as_int(
            _get_val(args.granularity, "granularity", file_cfg, DEFAULT_GRANULARITY),
            "granularity",
        )
        seed = _get_optional_int(args.seed, "seed", file_cfg)
        output = parse_output_mode(
            _as_text(_get_val(args.output, "output", file_cfg, "correct"), "output")
        )
        out_dir_raw = _get_val(args.out_dir, "out_dir", file_cfg, None)
        log_credences = _as_flag(
            _get_val(args.log_credences, "log_credences", file_cfg, False), "log_credences"
        )
        grid_raw = _get_val(args.initial_grid, "initial_grid", file_cfg, None)
    except (ValueError, PolarizationError) as exc:
        parser.error(str(exc))

    if log_level not in LOG_LEVELS:
        parser.error(f"log-level must be one of {', '.join(LOG_LEVELS)}")
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if log_credences and out_dir_raw is None:
        parser.error("--log-credences requires --out-dir")

    try:
        initial_grid = None
        if isinstance(grid_raw, (str, Path)):
            initial_grid = _load_initial_grid(Path(grid_raw))
        elif grid_raw is not None:
            initial_grid = np.array(grid_raw, dtype=np.float64)
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
        engine = SimulationEngine.from_config(config, seed=seed)
    except (OSError, ValueError, PolarizationError) as exc:
        parser.error(str(exc))

    run_id = deterministic_run_id(config, seed)
    if out_dir_raw is not None:
        result = run_with_artifacts(
            engine,
            out_dir=Path(_as_text(out_dir_raw, "out_dir")),
            run_id=run_id,
            seed=seed,
            log_credences=log_credences,
        )
    else:
        engine.run_to_completion()
        result = engine.summary(run_id)

    summary = {
        "run_id": result.run_id,
        "status": result.status.value,
        "steps_executed": result.steps_executed,
        "proportion_correct": result.proportion_correct,
        "polarized": result.polarized,
        "outcome": result.outcome.value,
        "output_mode": output.value,
        "result": _jsonable(engine.result(output)),
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
