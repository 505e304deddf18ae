"""Tests for viz/cli.py: argument parsing and subcommand dispatch."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from maze_memory.config.types import AgentVariant  # noqa: E402
from maze_memory.viz.cli import main  # noqa: E402
from maze_memory.viz.theme import DARK_THEME  # noqa: E402


def test_main_no_subcommand_exits() -> None:
    with pytest.raises(SystemExit):
        main([])


def test_snapshot_writes_image(tmp_path: Path) -> None:
    main(
        [
            "snapshot",
            "--width",
            "4",
            "--height",
            "4",
            "--steps",
            "10",
            "--output",
            "maze.png",
            "--base-dir",
            str(tmp_path),
        ]
    )
    assert (tmp_path / "maze.png").exists()


def test_heatmap_dispatches_with_theme(tmp_path: Path) -> None:
    with patch("maze_memory.viz.cli.render_visit_heatmap") as mock_render:
        main(
            [
                "--theme",
                "dark",
                "heatmap",
                "--variant",
                "reward",
                "--width",
                "3",
                "--height",
                "3",
                "--steps",
                "5",
                "--output",
                "heat.png",
                "--base-dir",
                str(tmp_path),
            ]
        )
    mock_render.assert_called_once()
    state, output = mock_render.call_args.args
    assert state.tick == 5
    assert state.config.variant is AgentVariant.REWARD
    assert output == (tmp_path / "heat.png").resolve()
    assert mock_render.call_args.kwargs["theme"] is DARK_THEME


def test_animate_dispatches(tmp_path: Path) -> None:
    with patch("maze_memory.viz.cli.render_run_animation") as mock_render:
        main(
            [
                "animate",
                "--variant",
                "predictor",
                "--frames",
                "7",
                "--fps",
                "3",
                "--output",
                "run.gif",
                "--base-dir",
                str(tmp_path),
            ]
        )
    config, output = mock_render.call_args.args
    assert config.variant is AgentVariant.PREDICTOR
    assert output == (tmp_path / "run.gif").resolve()
    assert mock_render.call_args.kwargs["frames"] == 7
    assert mock_render.call_args.kwargs["fps"] == 3


def test_watch_dispatches() -> None:
    with patch("maze_memory.viz.cli.watch_simulation") as mock_watch:
        main(["watch", "--width", "5", "--height", "6", "--delay", "10"])
    config = mock_watch.call_args.args[0]
    assert (config.grid_width, config.grid_height, config.tick_delay_ms) == (5, 6, 10)


def test_output_outside_base_dir_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main(
            [
                "snapshot",
                "--output",
                "../escape.png",
                "--base-dir",
                str(tmp_path),
            ]
        )


def test_invalid_delay_is_rejected() -> None:
    with patch("maze_memory.viz.cli.watch_simulation") as mock_watch:
        with pytest.raises(SystemExit):
            main(["watch", "--delay", "50"])
    mock_watch.assert_not_called()
