"""Maze agents: per-tick direction choice, movement, and memory updates.

Each agent advances one grid step per call to ``step`` and returns a
``StepOutcome`` describing what changed, which is all a render surface
needs to redraw.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from random import Random

from maze_memory.config.constants import LEARNING_RATE
from maze_memory.config.types import RewardPolicy
from maze_memory.domain.grid import Direction, Position, WallGrid
from maze_memory.domain.memory import (
    ActionMemory,
    CellMemory,
    RecencyMemory,
    best_action_direction,
    best_recency_direction,
    best_reward_direction,
    propagate_distance_reward,
    propagate_path_reward,
)
from maze_memory.domain.predictor import FeatureKey, WeightTable, input_key, outcome_key


@dataclass(frozen=True)
class Goal:
    """Fixed target cell."""

    x: int
    y: int

    @property
    def position(self) -> Position:
        return self.x, self.y


@dataclass(frozen=True)
class StepOutcome:
    """Everything that changed during one tick."""

    tick: int
    previous: Position
    position: Position
    direction: Direction | None
    moved: bool
    blocked: bool = False
    reached_goal: bool = False
    reset_to: Position | None = None
    predicted: FeatureKey = frozenset()
    actual: FeatureKey = frozenset()


def random_position(
    width: int, height: int, rng: Random, exclude: Position | None = None
) -> Position:
    """Uniformly random cell, redrawn while it equals *exclude*."""
    if exclude is not None and width * height < 2:
        raise ValueError("cannot place a position distinct from exclude on a 1-cell grid")
    while True:
        position = (rng.randrange(width), rng.randrange(height))
        if position != exclude:
            return position


# ---------------------------------------------------------------------------
# Variant 1: recency explorer
# ---------------------------------------------------------------------------


@dataclass
class RecencyAgent:
    """Moves to the least recently visited open neighbour."""

    x: int
    y: int
    memory: RecencyMemory

    @classmethod
    def create(cls, grid: WallGrid, start: Position, tick: int = 0) -> RecencyAgent:
        agent = cls(x=start[0], y=start[1], memory=RecencyMemory.for_grid(grid))
        agent.memory.visit(grid.cell_index(*start), tick)
        return agent

    @property
    def position(self) -> Position:
        return self.x, self.y

    @property
    def counts(self) -> list[int]:
        return self.memory.counts

    def step(self, grid: WallGrid, tick: int) -> StepOutcome:
        previous = self.position
        direction = best_recency_direction(grid, previous, self.memory)
        if direction is not None:
            self.x, self.y = grid.neighbor(previous, direction)
        self.memory.visit(grid.cell_index(self.x, self.y), tick)
        return StepOutcome(
            tick=tick,
            previous=previous,
            position=self.position,
            direction=direction,
            moved=direction is not None,
        )


# ---------------------------------------------------------------------------
# Variant 2: reward-distance agent
# ---------------------------------------------------------------------------


@dataclass
class RewardAgent:
    """Prefers neighbours closer to the goal, learned from past arrivals."""

    x: int
    y: int
    counts: list[int]
    memory: CellMemory = field(default_factory=CellMemory)
    path: list[Position] = field(default_factory=list)

    @classmethod
    def create(cls, grid: WallGrid, start: Position, tick: int = 0) -> RewardAgent:
        agent = cls(x=start[0], y=start[1], counts=[0] * grid.cell_count, path=[start])
        agent.memory.node(start).last_visited = tick
        agent.counts[grid.cell_index(*start)] = 1
        return agent

    @property
    def position(self) -> Position:
        return self.x, self.y

    def step(
        self,
        grid: WallGrid,
        goal: Goal,
        tick: int,
        rng: Random,
        policy: RewardPolicy = RewardPolicy.PATH,
    ) -> StepOutcome:
        previous = self.position
        direction = best_reward_direction(grid, previous, self.memory)
        if direction is not None:
            self.x, self.y = grid.neighbor(previous, direction)
        self.path.append(self.position)
        self.memory.node(self.position).last_visited = tick
        self.counts[grid.cell_index(self.x, self.y)] += 1

        if self.position != goal.position:
            return StepOutcome(
                tick=tick,
                previous=previous,
                position=self.position,
                direction=direction,
                moved=direction is not None,
            )

        self.propagate_reward(grid, goal, tick, policy)
        arrived_at = self.position
        reset_to = self.reset(grid, goal, rng)
        return StepOutcome(
            tick=tick,
            previous=previous,
            position=arrived_at,
            direction=direction,
            moved=direction is not None,
            reached_goal=True,
            reset_to=reset_to,
        )

    def propagate_reward(
        self, grid: WallGrid, goal: Goal, tick: int, policy: RewardPolicy
    ) -> None:
        if policy is RewardPolicy.PATH:
            propagate_path_reward(self.memory, self.path)
        else:
            propagate_distance_reward(grid, self.memory, goal.position, stamp=tick)

    def reset(self, grid: WallGrid, goal: Goal, rng: Random) -> Position:
        """Jump to a random cell other than the goal and restart the path."""
        start = random_position(grid.width, grid.height, rng, exclude=goal.position)
        self.x, self.y = start
        self.path = [start]
        return start


# ---------------------------------------------------------------------------
# Variant 3: associative predictor agent
# ---------------------------------------------------------------------------


@dataclass
class PredictorAgent:
    """Explores by (cell, direction) recency while learning to predict moves.

    The weight table only observes: movement is decided by the action
    memory alone.
    """

    x: int
    y: int
    counts: list[int]
    weights: WeightTable
    memory: ActionMemory = field(default_factory=ActionMemory)

    @classmethod
    def create(
        cls,
        grid: WallGrid,
        start: Position,
        learning_rate: float = LEARNING_RATE,
    ) -> PredictorAgent:
        agent = cls(
            x=start[0],
            y=start[1],
            counts=[0] * grid.cell_count,
            weights=WeightTable(learning_rate=learning_rate),
        )
        agent.counts[grid.cell_index(*start)] = 1
        return agent

    @property
    def position(self) -> Position:
        return self.x, self.y

    def step(self, grid: WallGrid, goal: Goal, tick: int, rng: Random) -> StepOutcome:
        previous = self.position
        direction = best_action_direction(previous, self.memory)
        key = input_key(grid.cell_index(*previous), direction)
        predicted = self.weights.predict(key)

        blocked = grid.is_blocked(self.x, self.y, direction)
        if not blocked:
            self.x, self.y = grid.neighbor(previous, direction)

        # The attempt is remembered even when a wall stopped it.
        self.memory.node(previous, direction).last_visited = tick
        cell = grid.cell_index(self.x, self.y)
        self.counts[cell] += 1

        actual = outcome_key(cell, blocked)
        self.weights.update(key, predicted, actual)

        reached_goal = self.position == goal.position
        arrived_at = self.position
        reset_to = self.reset(grid, goal, rng) if reached_goal else None
        return StepOutcome(
            tick=tick,
            previous=previous,
            position=arrived_at,
            direction=direction,
            moved=not blocked,
            blocked=blocked,
            reached_goal=reached_goal,
            reset_to=reset_to,
            predicted=predicted,
            actual=actual,
        )

    def reset(self, grid: WallGrid, goal: Goal, rng: Random) -> Position:
        start = random_position(grid.width, grid.height, rng, exclude=goal.position)
        self.x, self.y = start
        return start


Agent = RecencyAgent | RewardAgent | PredictorAgent
