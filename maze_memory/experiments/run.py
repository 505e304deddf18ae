"""CLI entrypoint for headless maze simulation runs.

Usage::

    maze-run --variant reward --reward-policy distance --n-runs 5 --out-dir data

Supports ``--config path/to/config.json``; CLI arguments override
config-file values, which override built-in defaults.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from pathlib import Path

from maze_memory.config.constants import (
    DEFAULT_TICK_DELAY_MS,
    GRID_HEIGHT,
    GRID_WIDTH,
    LEARNING_RATE,
    NUM_STEPS,
)
from maze_memory.config.types import AgentVariant, RewardPolicy, SimulationConfig
from maze_memory.simulation.engine import run_batch_simulation, run_simulation

logger = logging.getLogger(__name__)


def parse_variant(raw_variant: str) -> AgentVariant:
    """Parse agent variant from CLI/config."""
    try:
        return AgentVariant(raw_variant)
    except ValueError as exc:
        valid = ", ".join(variant.value for variant in AgentVariant)
        raise ValueError(f"variant must be one of {valid}") from exc


def parse_reward_policy(raw_policy: str) -> RewardPolicy:
    """Parse reward propagation policy from CLI/config."""
    try:
        return RewardPolicy(raw_policy)
    except ValueError as exc:
        valid = ", ".join(policy.value for policy in RewardPolicy)
        raise ValueError(f"reward-policy must be one of {valid}") from exc


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        try:
            return int(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be an integer value, got {raw!r}") from exc
    raise ValueError(f"{key} must be an integer value")


def _coerce_float(raw: object, key: str) -> float:
    """Coerce raw value to float; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a float value")
    if isinstance(raw, (int, float, str)):
        try:
            return float(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be a float value, got {raw!r}") from exc
    raise ValueError(f"{key} must be a float value")


def _coerce_str(raw: object, key: str) -> str:
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a string-coercible value")
    if isinstance(raw, (str, Path, int, float)):
        return str(raw)
    raise ValueError(f"{key} must be a string-coercible value")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    return _coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_float(
    cli_val: float | None, key: str, file_cfg: dict[str, object], default: float
) -> float:
    return _coerce_float(_get_val(cli_val, key, file_cfg, default), key)


def _get_str(cli_val: str | None, key: str, file_cfg: dict[str, object], default: str) -> str:
    return _coerce_str(_get_val(cli_val, key, file_cfg, default), key)


def add_simulation_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the flags that map onto ``SimulationConfig`` fields."""
    parser.add_argument(
        "--variant",
        type=str,
        choices=[variant.value for variant in AgentVariant],
        default=None,
    )
    parser.add_argument(
        "--reward-policy",
        type=str,
        choices=[policy.value for policy in RewardPolicy],
        default=None,
    )
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--steps", type=int, default=None)
    parser.add_argument("--maze-seed", type=int, default=None)
    parser.add_argument("--sim-seed", type=int, default=None)
    parser.add_argument("--learning-rate", type=float, default=None)
    parser.add_argument("--delay", type=int, default=None, help="Tick delay in milliseconds")


def config_from_args(
    args: argparse.Namespace, file_cfg: dict[str, object] | None = None
) -> SimulationConfig:
    """Resolve a ``SimulationConfig`` from parsed flags and optional file values."""
    file_cfg = file_cfg or {}
    return SimulationConfig(
        grid_width=_get_int(args.width, "grid_width", file_cfg, GRID_WIDTH),
        grid_height=_get_int(args.height, "grid_height", file_cfg, GRID_HEIGHT),
        maze_seed=_get_int(args.maze_seed, "maze_seed", file_cfg, 0),
        variant=parse_variant(
            _get_str(args.variant, "variant", file_cfg, AgentVariant.RECENCY.value)
        ),
        reward_policy=parse_reward_policy(
            _get_str(args.reward_policy, "reward_policy", file_cfg, RewardPolicy.PATH.value)
        ),
        learning_rate=_get_float(args.learning_rate, "learning_rate", file_cfg, LEARNING_RATE),
        sim_seed=_get_int(args.sim_seed, "sim_seed", file_cfg, 0),
        steps=_get_int(args.steps, "steps", file_cfg, NUM_STEPS),
        tick_delay_ms=_get_int(args.delay, "tick_delay_ms", file_cfg, DEFAULT_TICK_DELAY_MS),
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run headless maze memory simulations")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    add_simulation_arguments(parser)
    parser.add_argument("--n-runs", type=int, default=None)
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Write trajectory Parquet and per-run JSON here; omit for summary only",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
    )
    return parser


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for simulation runs."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")

    try:
        config = config_from_args(args, file_cfg)
        n_runs = _get_int(args.n_runs, "n_runs", file_cfg, 1)
    except ValueError as exc:
        parser.error(str(exc))
    if n_runs < 1:
        parser.error("n-runs must be >= 1")

    out_dir_raw = _get_val(args.out_dir, "out_dir", file_cfg, None)
    if out_dir_raw is not None:
        out_dir = Path(_coerce_str(out_dir_raw, "out_dir"))
        results = run_batch_simulation(
            n_runs=n_runs,
            out_dir=out_dir,
            config=config,
            base_maze_seed=config.maze_seed,
            base_sim_seed=config.sim_seed,
        )
        logger.info("Wrote %d runs to %s", len(results), out_dir)
    else:
        results = [
            run_simulation(
                dataclasses.replace(
                    config,
                    maze_seed=config.maze_seed + i,
                    sim_seed=config.sim_seed + i,
                )
            )
            for i in range(n_runs)
        ]

    summary = {
        "variant": config.variant.value,
        "reward_policy": config.reward_policy.value,
        "grid": f"{config.grid_width}x{config.grid_height}",
        "steps": config.steps,
        "total_runs": len(results),
        "goal_arrivals": sum(r.goal_arrivals for r in results),
        "mean_coverage": sum(r.coverage for r in results) / len(results),
        "runs": [dataclasses.asdict(r) for r in results],
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
