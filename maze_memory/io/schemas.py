"""Parquet schema definitions for simulation run logs.

Every module that writes or reads trajectory logs works against the
column contract defined here.
"""

from __future__ import annotations

import pyarrow as pa

RUN_PAYLOAD_SCHEMA_VERSION = 1

TRAJECTORY_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("tick", pa.int64()),
        ("x", pa.int64()),
        ("y", pa.int64()),
        ("direction", pa.string()),
        ("moved", pa.bool_()),
        ("blocked", pa.bool_()),
        ("reached_goal", pa.bool_()),
        ("predicted_cell", pa.int64()),
    ]
)
"""One row per tick: the agent's cell after moving, before any goal reset."""
