"""Parquet/JSON persistence for a single simulation run.

The core engine never touches the filesystem; :func:`run_with_artifacts`
drives an engine and streams its per-step state to disk for the CLI.
"""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pyarrow as pa
import pyarrow.parquet as pq

from scientific_polarization.config.constants import FLUSH_THRESHOLD, NO_EVIDENCE
from scientific_polarization.config.types import EngineStatus, SimulationResult
from scientific_polarization.domain.grid import proportion_correct
from scientific_polarization.io.paths import (
    credence_log_path,
    logs_dir,
    run_payload_path,
    runs_dir,
    step_metrics_path,
)
from scientific_polarization.io.schemas import (
    CREDENCE_LOG_SCHEMA,
    RUN_PAYLOAD_SCHEMA_VERSION,
    STEP_METRICS_SCHEMA,
)
from scientific_polarization.simulation.engine import EngineState, SimulationEngine


def flush_credence_columns(
    credence_columns: dict[str, list[int | str | float | None]],
    credence_log: Path,
    credence_writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated credence rows to Parquet and clear in-memory buffers."""
    if not credence_columns["run_id"]:
        return credence_writer
    table = pa.Table.from_pydict(credence_columns, schema=CREDENCE_LOG_SCHEMA)
    if credence_writer is None:
        credence_writer = pq.ParquetWriter(credence_log, CREDENCE_LOG_SCHEMA)
    credence_writer.write_table(table)
    for values in credence_columns.values():
        values.clear()
    return credence_writer


def append_credence_rows(
    credence_columns: dict[str, list[int | str | float | None]],
    run_id: str,
    state: EngineState,
) -> None:
    """Append one row per cell of `state` to the column buffers."""
    dim = state.grid.shape[0]
    credences = state.grid.ravel()
    evidence = state.evidence.ravel() if state.evidence is not None else None
    for cell, credence in enumerate(credences):
        row, col = divmod(cell, dim)
        value = None if evidence is None else int(evidence[cell])
        credence_columns["run_id"].append(run_id)
        credence_columns["step"].append(state.step)
        credence_columns["cell"].append(cell)
        credence_columns["row"].append(row)
        credence_columns["col"].append(col)
        credence_columns["credence"].append(float(credence))
        credence_columns["evidence"].append(None if value == NO_EVIDENCE else value)


def run_with_artifacts(
    engine: SimulationEngine,
    out_dir: Path,
    run_id: str,
    seed: int | None = None,
    log_credences: bool = False,
) -> SimulationResult:
    """Run `engine` to completion, persisting step metrics and a run payload.

    Step 0 of the credence log holds the initial grid.
    """
    out_dir = Path(out_dir)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    runs_dir(out_dir).mkdir(parents=True, exist_ok=True)

    step_columns: dict[str, list[int | str | float]] = {
        name: [] for name in STEP_METRICS_SCHEMA.names
    }
    credence_columns: dict[str, list[int | str | float | None]] = {
        name: [] for name in CREDENCE_LOG_SCHEMA.names
    }
    credence_writer: pq.ParquetWriter | None = None
    credence_log = credence_log_path(out_dir)

    try:
        if log_credences:
            append_credence_rows(credence_columns, run_id, engine.state())
        for state in engine.iter_steps():
            if state.status is EngineStatus.USER_ABORTED:
                break
            step_columns["run_id"].append(run_id)
            step_columns["step"].append(state.step)
            step_columns["entropy"].append(engine.entropy_trace[-1])
            step_columns["proportion_correct"].append(proportion_correct(state.grid))
            step_columns["n_experimenters"].append(
                int(np.count_nonzero(state.evidence != NO_EVIDENCE))
            )
            step_columns["status"].append(state.status.value)
            if log_credences:
                append_credence_rows(credence_columns, run_id, state)
            if len(credence_columns["run_id"]) >= FLUSH_THRESHOLD:
                credence_writer = flush_credence_columns(
                    credence_columns, credence_log, credence_writer
                )
        credence_writer = flush_credence_columns(credence_columns, credence_log, credence_writer)
    finally:
        if credence_writer is not None:
            credence_writer.close()

    pq.write_table(
        pa.Table.from_pydict(step_columns, schema=STEP_METRICS_SCHEMA),
        step_metrics_path(out_dir),
    )

    result = engine.summary(run_id)
    payload = {
        "run_id": run_id,
        "parameters": engine.config.to_metadata(),
        "seed": seed,
        "status": result.status.value,
        "steps_executed": result.steps_executed,
        "proportion_correct": result.proportion_correct,
        "polarized": result.polarized,
        "outcome": result.outcome.value,
        "final_entropy": result.final_entropy,
        "entropy_trace": engine.entropy_trace,
        "schema_version": RUN_PAYLOAD_SCHEMA_VERSION,
    }
    run_payload_path(out_dir, run_id).write_text(
        json.dumps(payload, ensure_ascii=False, indent=2)
    )
    return result
