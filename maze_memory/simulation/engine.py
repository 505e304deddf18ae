"""Seeded simulation runs with summary statistics and Parquet run logs."""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Callable
from pathlib import Path

import networkx as nx
import pyarrow.parquet as pq

from maze_memory.config.constants import FLUSH_THRESHOLD
from maze_memory.config.types import SimulationConfig, SimulationResult
from maze_memory.domain.agents import PredictorAgent, StepOutcome
from maze_memory.domain.predictor import predicted_cell
from maze_memory.io.paths import logs_dir, run_payload_path, runs_dir, trajectory_log_path
from maze_memory.io.schemas import RUN_PAYLOAD_SCHEMA_VERSION
from maze_memory.simulation.persistence import flush_trajectory_columns
from maze_memory.simulation.state import SimulationState, create_simulation, step

logger = logging.getLogger(__name__)


def deterministic_run_id(config: SimulationConfig) -> str:
    """Build reproducible run ID stable across runs for identical seeds."""
    return f"{config.variant.value}_ms{config.maze_seed}_ss{config.sim_seed}"


def _mean(values: list[int]) -> float | None:
    return sum(values) / len(values) if values else None


def run_simulation(
    config: SimulationConfig,
    run_id: str | None = None,
    on_outcome: Callable[[StepOutcome], None] | None = None,
    state: SimulationState | None = None,
) -> SimulationResult:
    """Run ``config.steps`` ticks and summarise the agent's behaviour.

    Episode lengths are measured from each (re)start to the next goal
    arrival and compared with the shortest path through the maze.
    """
    run_id = run_id or deterministic_run_id(config)
    state = state or create_simulation(config)
    graph = state.grid.to_graph() if state.goal is not None else None

    episode_start = state.agent.position
    episode_steps = 0
    episode_lengths: list[int] = []
    optimal_lengths: list[int] = []
    predictions = 0
    correct_predictions = 0

    for _ in range(config.steps):
        outcome = step(state)
        episode_steps += 1
        if on_outcome is not None:
            on_outcome(outcome)

        if isinstance(state.agent, PredictorAgent):
            predictions += 1
            if predicted_cell(outcome.predicted) == predicted_cell(outcome.actual):
                correct_predictions += 1

        if outcome.reached_goal and graph is not None and state.goal is not None:
            optimal = nx.shortest_path_length(graph, episode_start, state.goal.position)
            episode_lengths.append(episode_steps)
            optimal_lengths.append(optimal)
            logger.debug(
                "%s reached goal at tick %d in %d steps (optimal %d)",
                run_id,
                outcome.tick,
                episode_steps,
                optimal,
            )
            if outcome.reset_to is not None:
                episode_start = outcome.reset_to
            episode_steps = 0

    cells_visited = sum(1 for count in state.counts if count > 0)
    agent = state.agent
    accuracy: float | None = None
    if isinstance(agent, PredictorAgent) and predictions:
        accuracy = correct_predictions / predictions
    result = SimulationResult(
        run_id=run_id,
        variant=config.variant.value,
        steps=config.steps,
        goal_arrivals=len(episode_lengths),
        cells_visited=cells_visited,
        coverage=cells_visited / state.grid.cell_count,
        mean_episode_steps=_mean(episode_lengths),
        mean_optimal_steps=_mean(optimal_lengths),
        prediction_accuracy=accuracy,
        weight_count=len(agent.weights) if isinstance(agent, PredictorAgent) else None,
    )
    logger.info(
        "%s finished: %d ticks, %d goal arrivals, coverage %.2f",
        run_id,
        result.steps,
        result.goal_arrivals,
        result.coverage,
    )
    return result


def run_batch_simulation(
    n_runs: int,
    out_dir: Path,
    config: SimulationConfig | None = None,
    base_maze_seed: int = 0,
    base_sim_seed: int = 0,
) -> list[SimulationResult]:
    """Run seeded simulations and write trajectory Parquet plus per-run JSON.

    Run ``i`` uses ``maze_seed = base_maze_seed + i`` and
    ``sim_seed = base_sim_seed + i``; every other knob comes from *config*.
    """
    if n_runs < 1:
        raise ValueError("n_runs must be >= 1")
    base_config = config or SimulationConfig()

    out_dir = Path(out_dir)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    runs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    log_path = trajectory_log_path(out_dir)

    writer: pq.ParquetWriter | None = None
    results: list[SimulationResult] = []
    columns: dict[str, list[object]] = {
        "run_id": [],
        "tick": [],
        "x": [],
        "y": [],
        "direction": [],
        "moved": [],
        "blocked": [],
        "reached_goal": [],
        "predicted_cell": [],
    }

    try:
        for i in range(n_runs):
            run_config = dataclasses.replace(
                base_config,
                maze_seed=base_maze_seed + i,
                sim_seed=base_sim_seed + i,
            )
            run_id = deterministic_run_id(run_config)

            def record(outcome: StepOutcome, run_id: str = run_id) -> None:
                nonlocal writer
                columns["run_id"].append(run_id)
                columns["tick"].append(outcome.tick)
                columns["x"].append(outcome.position[0])
                columns["y"].append(outcome.position[1])
                columns["direction"].append(
                    outcome.direction.name if outcome.direction is not None else None
                )
                columns["moved"].append(outcome.moved)
                columns["blocked"].append(outcome.blocked)
                columns["reached_goal"].append(outcome.reached_goal)
                columns["predicted_cell"].append(predicted_cell(outcome.predicted))
                if len(columns["run_id"]) >= FLUSH_THRESHOLD:
                    writer = flush_trajectory_columns(columns, log_path, writer)

            result = run_simulation(run_config, run_id=run_id, on_outcome=record)
            writer = flush_trajectory_columns(columns, log_path, writer)

            payload = {
                "run_id": run_id,
                "summary": dataclasses.asdict(result),
                "metadata": {
                    "grid_width": run_config.grid_width,
                    "grid_height": run_config.grid_height,
                    "maze_seed": run_config.maze_seed,
                    "sim_seed": run_config.sim_seed,
                    "variant": run_config.variant.value,
                    "reward_policy": run_config.reward_policy.value,
                    "learning_rate": run_config.learning_rate,
                    "steps": run_config.steps,
                    "schema_version": RUN_PAYLOAD_SCHEMA_VERSION,
                },
            }
            run_payload_path(out_dir, run_id).write_text(
                json.dumps(payload, ensure_ascii=False, indent=2)
            )
            results.append(result)
    finally:
        if writer is not None:
            writer.close()

    return results
