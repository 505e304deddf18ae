"""Configuration layer: constants and typed config dataclasses."""

from maze_memory.config.constants import (
    CELL_SIZE,
    DEFAULT_TICK_DELAY_MS,
    FLUSH_THRESHOLD,
    GRID_HEIGHT,
    GRID_WIDTH,
    LEARNING_RATE,
    NUM_STEPS,
    TICK_DELAY_CHOICES_MS,
)
from maze_memory.config.types import (
    AgentConfig,
    AgentVariant,
    MazeConfig,
    RewardPolicy,
    SimulationConfig,
    SimulationResult,
)

__all__ = [
    "AgentConfig",
    "AgentVariant",
    "CELL_SIZE",
    "DEFAULT_TICK_DELAY_MS",
    "FLUSH_THRESHOLD",
    "GRID_HEIGHT",
    "GRID_WIDTH",
    "LEARNING_RATE",
    "MazeConfig",
    "NUM_STEPS",
    "RewardPolicy",
    "SimulationConfig",
    "SimulationResult",
    "TICK_DELAY_CHOICES_MS",
]
