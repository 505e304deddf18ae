from __future__ import annotations

import argparse
from pathlib import Path

from maze_memory.experiments.run import add_simulation_arguments, config_from_args
from maze_memory.io.paths import resolve_within_base
from maze_memory.simulation.state import create_simulation
from maze_memory.viz.render import (
    advance,
    render_maze_snapshot,
    render_run_animation,
    render_visit_heatmap,
    watch_simulation,
)
from maze_memory.viz.theme import REGISTERED_THEMES, get_theme


def _build_snapshot_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("snapshot", help="Render the maze after --steps ticks")
    p.set_defaults(func=_handle_snapshot)
    add_simulation_arguments(p)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--base-dir", type=Path, default=Path("."))


def _build_heatmap_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("heatmap", help="Render per-cell visit counts after --steps ticks")
    p.set_defaults(func=_handle_heatmap)
    add_simulation_arguments(p)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--base-dir", type=Path, default=Path("."))


def _build_animate_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("animate", help="Render a GIF of the first --frames ticks")
    p.set_defaults(func=_handle_animate)
    add_simulation_arguments(p)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--frames", type=int, default=100)
    p.add_argument("--fps", type=int, default=10)
    p.add_argument("--base-dir", type=Path, default=Path("."))


def _build_watch_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("watch", help="Open a live window driven by canvas timers")
    p.set_defaults(func=_handle_watch)
    add_simulation_arguments(p)


def _handle_snapshot(args: argparse.Namespace) -> None:
    output = resolve_within_base(args.output, args.base_dir)
    state = create_simulation(config_from_args(args))
    advance(state, state.config.steps)
    render_maze_snapshot(state, output, theme=get_theme(args.theme))


def _handle_heatmap(args: argparse.Namespace) -> None:
    output = resolve_within_base(args.output, args.base_dir)
    state = create_simulation(config_from_args(args))
    advance(state, state.config.steps)
    render_visit_heatmap(state, output, theme=get_theme(args.theme))


def _handle_animate(args: argparse.Namespace) -> None:
    output = resolve_within_base(args.output, args.base_dir)
    render_run_animation(
        config_from_args(args),
        output,
        frames=args.frames,
        fps=args.fps,
        theme=get_theme(args.theme),
    )


def _handle_watch(args: argparse.Namespace) -> None:
    watch_simulation(config_from_args(args), theme=get_theme(args.theme))


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint with subcommands."""
    parser = argparse.ArgumentParser(description="Visualization tools for maze simulations")
    parser.add_argument(
        "--theme",
        type=str,
        choices=sorted(REGISTERED_THEMES),
        default="default",
        help="Theme preset name",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    _build_snapshot_parser(sub)
    _build_heatmap_parser(sub)
    _build_animate_parser(sub)
    _build_watch_parser(sub)
    args = parser.parse_args(argv)

    try:
        args.func(args)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
