"""Path construction helpers for simulation output directories."""

from __future__ import annotations

from pathlib import Path


def runs_dir(out_dir: Path) -> Path:
    """Return path to the run-payload subdirectory within an output directory."""
    return out_dir / "runs"


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def step_metrics_path(out_dir: Path) -> Path:
    """Return path to the per-step metrics Parquet file."""
    return logs_dir(out_dir) / "step_metrics.parquet"


def credence_log_path(out_dir: Path) -> Path:
    """Return path to the per-cell credence log Parquet file."""
    return logs_dir(out_dir) / "credence_log.parquet"


def run_payload_path(out_dir: Path, run_id: str) -> Path:
    """Return path to the JSON payload of one run."""
    return runs_dir(out_dir) / f"{run_id}.json"
