"""Simulation layer: explicit state, tick driver, and seeded run engine."""

from maze_memory.simulation.driver import (
    ManualScheduler,
    RenderSurface,
    Scheduler,
    TickDriver,
)
from maze_memory.simulation.engine import (
    deterministic_run_id,
    run_batch_simulation,
    run_simulation,
)
from maze_memory.simulation.state import SimulationState, create_simulation, step

__all__ = [
    "ManualScheduler",
    "RenderSurface",
    "Scheduler",
    "SimulationState",
    "TickDriver",
    "create_simulation",
    "deterministic_run_id",
    "run_batch_simulation",
    "run_simulation",
    "step",
]
