"""Tick loop glue between a simulation, a render surface, and a scheduler.

The core never touches pixels or timers. A ``RenderSurface`` receives draw
calls in logical cell coordinates and a ``Scheduler`` re-invokes the tick
callback after a delay. Pausing just means not scheduling the next tick;
each tick runs to completion before control returns.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from maze_memory.config.constants import TICK_DELAY_CHOICES_MS
from maze_memory.config.types import RewardPolicy
from maze_memory.domain.agents import PredictorAgent, StepOutcome
from maze_memory.domain.grid import Direction, Position, WallSegment
from maze_memory.domain.predictor import predicted_cell
from maze_memory.simulation.state import SimulationState, step

logger = logging.getLogger(__name__)


class RenderSurface(Protocol):
    def clear_cell(self, position: Position, visits: int) -> None: ...

    def draw_wall_segment(self, segment: WallSegment) -> None: ...

    def draw_agent_marker(self, position: Position) -> None: ...

    def draw_goal_marker(self, position: Position) -> None: ...

    def thicken_wall(self, position: Position, direction: Direction) -> None: ...

    def draw_prediction_marker(self, position: Position) -> None: ...


class Scheduler(Protocol):
    def schedule_next(self, callback: Callable[[], None], delay_ms: int) -> None: ...

    def cancel(self) -> None: ...


class ManualScheduler:
    """Headless scheduler: holds at most one pending callback until fired."""

    def __init__(self) -> None:
        self.pending: Callable[[], None] | None = None
        self.last_delay_ms: int | None = None

    def schedule_next(self, callback: Callable[[], None], delay_ms: int) -> None:
        self.pending = callback
        self.last_delay_ms = delay_ms

    def cancel(self) -> None:
        self.pending = None

    def fire(self) -> bool:
        """Run the pending callback; return False if nothing was scheduled."""
        callback, self.pending = self.pending, None
        if callback is None:
            return False
        callback()
        return True

    def run(self, n_ticks: int) -> int:
        """Fire up to *n_ticks* callbacks; return how many ran."""
        fired = 0
        while fired < n_ticks and self.fire():
            fired += 1
        return fired


def _validate_delay(delay_ms: int) -> int:
    if delay_ms not in TICK_DELAY_CHOICES_MS:
        choices = ", ".join(str(ms) for ms in TICK_DELAY_CHOICES_MS)
        raise ValueError(f"delay must be one of {choices} ms")
    return delay_ms


class TickDriver:
    """Owns the tick loop for one simulation."""

    def __init__(
        self,
        state: SimulationState,
        scheduler: Scheduler,
        surface: RenderSurface | None = None,
        delay_ms: int | None = None,
    ) -> None:
        self.state = state
        self.scheduler = scheduler
        self.surface = surface
        self.delay_ms = _validate_delay(
            state.config.tick_delay_ms if delay_ms is None else delay_ms
        )
        self.running = False

    def set_delay(self, delay_ms: int) -> None:
        """Takes effect from the next scheduled tick."""
        self.delay_ms = _validate_delay(delay_ms)

    def set_reward_policy(self, policy: RewardPolicy) -> None:
        """Read by the reward agent at the start of every tick."""
        self.state.reward_policy = policy

    def render_initial(self) -> None:
        surface = self.surface
        if surface is None:
            return
        for segment in self.state.grid.wall_segments():
            surface.draw_wall_segment(segment)
        if self.state.goal is not None:
            surface.draw_goal_marker(self.state.goal.position)
        surface.draw_agent_marker(self.state.agent.position)

    def start(self) -> None:
        """Run the first tick immediately; later ticks follow on the scheduler."""
        if self.running:
            return
        logger.debug("Starting tick loop at tick %d", self.state.tick)
        self.running = True
        self.tick()

    def pause(self) -> None:
        if not self.running:
            return
        logger.debug("Pausing tick loop at tick %d", self.state.tick)
        self.running = False
        self.scheduler.cancel()

    def tick(self) -> StepOutcome:
        outcome = step(self.state)
        self._render(outcome)
        if self.running:
            self.scheduler.schedule_next(self.tick, self.delay_ms)
        return outcome

    def _render(self, outcome: StepOutcome) -> None:
        surface = self.surface
        if surface is None:
            return
        grid = self.state.grid
        counts = self.state.counts

        def visits(position: Position) -> int:
            return counts[grid.cell_index(*position)]

        surface.clear_cell(outcome.previous, visits(outcome.previous))
        if outcome.blocked and outcome.direction is not None:
            surface.thicken_wall(outcome.previous, outcome.direction)
        if outcome.reached_goal and self.state.goal is not None:
            surface.clear_cell(outcome.position, visits(outcome.position))
            surface.draw_goal_marker(self.state.goal.position)
        if isinstance(self.state.agent, PredictorAgent):
            cell = predicted_cell(outcome.predicted)
            if cell is not None:
                surface.draw_prediction_marker(grid.cell_position(cell))
        surface.draw_agent_marker(self.state.agent.position)
