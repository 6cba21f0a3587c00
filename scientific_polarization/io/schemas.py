"""Parquet schema definitions for simulation artifacts.

All Arrow schemas used for persisting per-step metrics and per-cell credence
logs are centralised here so writers and readers work against the same column
contracts.
"""

from __future__ import annotations

import pyarrow as pa

RUN_PAYLOAD_SCHEMA_VERSION = 1

STEP_METRICS_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("step", pa.int64()),
        ("entropy", pa.float64()),
        ("proportion_correct", pa.float64()),
        ("n_experimenters", pa.int64()),
        ("status", pa.string()),
    ]
)

CREDENCE_LOG_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("step", pa.int64()),
        ("cell", pa.int64()),
        ("row", pa.int64()),
        ("col", pa.int64()),
        ("credence", pa.float64()),
        ("evidence", pa.int64()),
    ]
)
