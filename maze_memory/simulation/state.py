"""Explicit simulation state and the per-tick step function."""

from __future__ import annotations

from dataclasses import dataclass
from random import Random

from maze_memory.config.types import AgentVariant, RewardPolicy, SimulationConfig
from maze_memory.domain.agents import (
    Agent,
    Goal,
    PredictorAgent,
    RecencyAgent,
    RewardAgent,
    StepOutcome,
    random_position,
)
from maze_memory.domain.grid import Position, WallGrid
from maze_memory.domain.maze import generate_maze


@dataclass
class SimulationState:
    """Everything one running simulation owns."""

    config: SimulationConfig
    grid: WallGrid
    agent: Agent
    goal: Goal | None
    rng: Random
    reward_policy: RewardPolicy
    tick: int = 0

    @property
    def counts(self) -> list[int]:
        return self.agent.counts


def create_simulation(
    config: SimulationConfig,
    start: Position | None = None,
    goal: Position | None = None,
) -> SimulationState:
    """Carve the maze from ``maze_seed`` and place goal and agent from ``sim_seed``.

    Explicit *start* / *goal* positions override random placement.
    """
    grid = generate_maze(config.grid_width, config.grid_height, Random(config.maze_seed))
    rng = Random(config.sim_seed)

    target: Goal | None = None
    if goal is not None and not config.variant.has_goal:
        raise ValueError(f"{config.variant.value} agent takes no goal")
    if config.variant.has_goal:
        if goal is None:
            goal = random_position(grid.width, grid.height, rng, exclude=start)
        if not grid.contains(*goal):
            raise ValueError(f"goal {goal} outside {grid.width}x{grid.height} grid")
        target = Goal(*goal)

    exclude = target.position if target is not None else None
    if start is None:
        start = random_position(grid.width, grid.height, rng, exclude=exclude)
    if not grid.contains(*start):
        raise ValueError(f"start {start} outside {grid.width}x{grid.height} grid")
    if start == exclude:
        raise ValueError("start must differ from goal")

    agent: Agent
    if config.variant is AgentVariant.RECENCY:
        agent = RecencyAgent.create(grid, start)
    elif config.variant is AgentVariant.REWARD:
        agent = RewardAgent.create(grid, start)
    else:
        agent = PredictorAgent.create(grid, start, learning_rate=config.learning_rate)

    return SimulationState(
        config=config,
        grid=grid,
        agent=agent,
        goal=target,
        rng=rng,
        reward_policy=config.reward_policy,
    )


def step(state: SimulationState) -> StepOutcome:
    """Advance the clock and the agent by exactly one tick."""
    agent = state.agent
    if isinstance(agent, RecencyAgent):
        state.tick += 1
        return agent.step(state.grid, state.tick)
    if state.goal is None:
        raise ValueError(f"{state.config.variant.value} agent requires a goal")
    state.tick += 1
    if isinstance(agent, RewardAgent):
        return agent.step(state.grid, state.goal, state.tick, state.rng, state.reward_policy)
    return agent.step(state.grid, state.goal, state.tick, state.rng)
