"""Domain layer: grid model, maze generation, memory stores, and agents."""

from maze_memory.domain.agents import (
    Agent,
    Goal,
    PredictorAgent,
    RecencyAgent,
    RewardAgent,
    StepOutcome,
    random_position,
)
from maze_memory.domain.grid import (
    DIRECTION_ORDER,
    NORTH_WALL,
    WEST_WALL,
    Direction,
    Position,
    WallGrid,
    WallSegment,
)
from maze_memory.domain.maze import DisjointSet, generate_maze
from maze_memory.domain.memory import (
    ActionMemory,
    CellMemory,
    MemoryNode,
    RecencyMemory,
    best_action_direction,
    best_recency_direction,
    best_reward_direction,
    node_better,
    propagate_distance_reward,
    propagate_path_reward,
)
from maze_memory.domain.predictor import (
    Feature,
    FeatureKind,
    WeightTable,
    input_key,
    outcome_key,
)

__all__ = [
    "ActionMemory",
    "Agent",
    "CellMemory",
    "DIRECTION_ORDER",
    "Direction",
    "DisjointSet",
    "Feature",
    "FeatureKind",
    "Goal",
    "MemoryNode",
    "NORTH_WALL",
    "Position",
    "PredictorAgent",
    "RecencyAgent",
    "RecencyMemory",
    "RewardAgent",
    "StepOutcome",
    "WEST_WALL",
    "WallGrid",
    "WallSegment",
    "WeightTable",
    "best_action_direction",
    "best_recency_direction",
    "best_reward_direction",
    "generate_maze",
    "input_key",
    "node_better",
    "outcome_key",
    "propagate_distance_reward",
    "propagate_path_reward",
    "random_position",
]
