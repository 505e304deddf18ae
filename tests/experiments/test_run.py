"""Tests for the maze-run CLI entrypoint."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from maze_memory.config.types import AgentVariant, RewardPolicy
from maze_memory.experiments.run import main, parse_reward_policy, parse_variant


class TestParsers:
    def test_parse_variant(self) -> None:
        assert parse_variant("predictor") is AgentVariant.PREDICTOR
        with pytest.raises(ValueError, match="variant must be one of"):
            parse_variant("greedy")

    def test_parse_reward_policy(self) -> None:
        assert parse_reward_policy("distance") is RewardPolicy.DISTANCE
        with pytest.raises(ValueError, match="reward-policy must be one of"):
            parse_reward_policy("shortest")


class TestMain:
    def test_prints_summary(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["--width", "4", "--height", "4", "--steps", "30", "--n-runs", "2"])
        summary = json.loads(capsys.readouterr().out)
        assert summary["variant"] == "recency"
        assert summary["grid"] == "4x4"
        assert summary["total_runs"] == 2
        assert summary["mean_coverage"] == 1.0
        assert [r["run_id"] for r in summary["runs"]] == ["recency_ms0_ss0", "recency_ms1_ss1"]

    def test_out_dir_writes_logs(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(
            [
                "--variant",
                "reward",
                "--reward-policy",
                "distance",
                "--width",
                "5",
                "--height",
                "5",
                "--steps",
                "200",
                "--out-dir",
                str(tmp_path),
            ]
        )
        summary = json.loads(capsys.readouterr().out)
        assert summary["reward_policy"] == "distance"
        assert summary["goal_arrivals"] >= 1
        assert (tmp_path / "logs" / "trajectory.parquet").exists()
        assert len(list((tmp_path / "runs").glob("*.json"))) == 1

    def test_config_file_with_cli_override(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps(
                {
                    "variant": "predictor",
                    "grid_width": 3,
                    "grid_height": 3,
                    "steps": 10,
                    "sim_seed": 4,
                }
            )
        )
        main(["--config", str(config_path), "--steps", "20"])
        summary = json.loads(capsys.readouterr().out)
        assert summary["variant"] == "predictor"
        assert summary["steps"] == 20
        assert summary["runs"][0]["run_id"] == "predictor_ms0_ss4"
        assert summary["runs"][0]["weight_count"] > 0

    def test_missing_config_file_exits(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit):
            main(["--config", str(tmp_path / "missing.json")])

    def test_invalid_config_value_exits(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"steps": 2.5}))
        with pytest.raises(SystemExit):
            main(["--config", str(config_path)])

    def test_zero_runs_exits(self) -> None:
        with pytest.raises(SystemExit):
            main(["--n-runs", "0"])
