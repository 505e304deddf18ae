"""Configuration dataclasses for maze simulations.

All frozen dataclasses that parameterise a single simulation run live here.
Each validates its own fields in ``__post_init__`` and raises ``ValueError``
on precondition violations.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from maze_memory.config.constants import (
    DEFAULT_TICK_DELAY_MS,
    GRID_HEIGHT,
    GRID_WIDTH,
    LEARNING_RATE,
    NUM_STEPS,
    TICK_DELAY_CHOICES_MS,
)

__all__ = [
    "AgentConfig",
    "AgentVariant",
    "MazeConfig",
    "RewardPolicy",
    "SimulationConfig",
    "SimulationResult",
]


class AgentVariant(Enum):
    """Memory heuristic driving the agent."""

    RECENCY = "recency"
    REWARD = "reward"
    PREDICTOR = "predictor"

    @property
    def has_goal(self) -> bool:
        return self is not AgentVariant.RECENCY


class RewardPolicy(Enum):
    """How the reward agent backpropagates a goal arrival."""

    PATH = "path"
    DISTANCE = "distance"


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SimulationResult:
    """Summary of one simulation run."""

    run_id: str
    variant: str
    steps: int
    goal_arrivals: int
    cells_visited: int
    coverage: float
    mean_episode_steps: float | None
    mean_optimal_steps: float | None
    prediction_accuracy: float | None
    weight_count: int | None


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MazeConfig:
    """Maze dimensions and generation seed."""

    grid_width: int = GRID_WIDTH
    grid_height: int = GRID_HEIGHT
    maze_seed: int = 0

    def __post_init__(self) -> None:
        if self.grid_width < 1:
            raise ValueError("grid_width must be >= 1")
        if self.grid_height < 1:
            raise ValueError("grid_height must be >= 1")


@dataclass(frozen=True)
class AgentConfig:
    """Agent heuristic selection and learning knobs."""

    variant: AgentVariant = AgentVariant.RECENCY
    reward_policy: RewardPolicy = RewardPolicy.PATH
    learning_rate: float = LEARNING_RATE
    sim_seed: int = 0

    def __post_init__(self) -> None:
        if not self.learning_rate > 0.0:
            raise ValueError("learning_rate must be > 0")


@dataclass(frozen=True)
class SimulationConfig:
    """Complete parameter set for one simulation run."""

    grid_width: int = GRID_WIDTH
    grid_height: int = GRID_HEIGHT
    maze_seed: int = 0
    variant: AgentVariant = AgentVariant.RECENCY
    reward_policy: RewardPolicy = RewardPolicy.PATH
    learning_rate: float = LEARNING_RATE
    sim_seed: int = 0
    steps: int = NUM_STEPS
    tick_delay_ms: int = DEFAULT_TICK_DELAY_MS

    def __post_init__(self) -> None:
        MazeConfig(
            grid_width=self.grid_width,
            grid_height=self.grid_height,
            maze_seed=self.maze_seed,
        )
        AgentConfig(
            variant=self.variant,
            reward_policy=self.reward_policy,
            learning_rate=self.learning_rate,
            sim_seed=self.sim_seed,
        )
        if self.steps < 0:
            raise ValueError("steps must be >= 0")
        if self.tick_delay_ms not in TICK_DELAY_CHOICES_MS:
            choices = ", ".join(str(ms) for ms in TICK_DELAY_CHOICES_MS)
            raise ValueError(f"tick_delay_ms must be one of {choices}")
        if self.variant.has_goal and self.grid_width * self.grid_height < 2:
            raise ValueError(f"{self.variant.value} agent needs a grid with at least 2 cells")

    @classmethod
    def from_components(
        cls,
        maze: MazeConfig | None = None,
        agent: AgentConfig | None = None,
        steps: int = NUM_STEPS,
        tick_delay_ms: int = DEFAULT_TICK_DELAY_MS,
    ) -> SimulationConfig:
        """Compose SimulationConfig from reusable sub-config components."""
        maze = maze or MazeConfig()
        agent = agent or AgentConfig()
        return cls(
            grid_width=maze.grid_width,
            grid_height=maze.grid_height,
            maze_seed=maze.maze_seed,
            variant=agent.variant,
            reward_policy=agent.reward_policy,
            learning_rate=agent.learning_rate,
            sim_seed=agent.sim_seed,
            steps=steps,
            tick_delay_ms=tick_delay_ms,
        )

    def to_components(self) -> tuple[MazeConfig, AgentConfig]:
        """Decompose SimulationConfig into reusable sub-config components."""
        return (
            MazeConfig(
                grid_width=self.grid_width,
                grid_height=self.grid_height,
                maze_seed=self.maze_seed,
            ),
            AgentConfig(
                variant=self.variant,
                reward_policy=self.reward_policy,
                learning_rate=self.learning_rate,
                sim_seed=self.sim_seed,
            ),
        )
