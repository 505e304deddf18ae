"""Centralized domain constants for maze simulations.

Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

GRID_WIDTH = 20
"""Default maze width in cells."""

GRID_HEIGHT = 20
"""Default maze height in cells."""

NUM_STEPS = 1_000
"""Default number of simulation ticks per run."""

CELL_SIZE = 15
"""Default on-screen cell size in pixels (render surfaces only)."""

TICK_DELAY_CHOICES_MS: tuple[int, ...] = (200, 100, 30, 10, 1)
"""Selectable delays between ticks, in milliseconds."""

DEFAULT_TICK_DELAY_MS = 30
"""Delay used when none is selected."""

LEARNING_RATE = 0.01
"""Default associative weight correction per mismatched feature."""

WEIGHT_ZERO_TOLERANCE = 1e-12
"""Weights whose magnitude falls below this are treated as zero and removed."""

FLUSH_THRESHOLD = 8_192
"""Flush trajectory rows to Parquet once this in-memory row count is reached."""

VISIT_SATURATION_BASE = 240
"""Red/blue channel value of a cell visited once is base - step."""

VISIT_SATURATION_STEP = 16
"""Per-visit decrease of the red/blue channel in visit shading."""
