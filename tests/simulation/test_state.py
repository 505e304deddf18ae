"""Tests for simulation state construction and stepping."""

from __future__ import annotations

import pytest

from maze_memory.config.types import AgentVariant, RewardPolicy, SimulationConfig
from maze_memory.domain.agents import PredictorAgent, RecencyAgent, RewardAgent
from maze_memory.simulation.state import create_simulation, step


class TestCreateSimulation:
    def test_recency_has_no_goal(self) -> None:
        state = create_simulation(SimulationConfig(grid_width=5, grid_height=5))
        assert state.goal is None
        assert isinstance(state.agent, RecencyAgent)
        assert sum(state.counts) == 1
        assert state.tick == 0

    @pytest.mark.parametrize(
        "variant,agent_type",
        [(AgentVariant.REWARD, RewardAgent), (AgentVariant.PREDICTOR, PredictorAgent)],
    )
    def test_goal_variants_place_distinct_goal(
        self, variant: AgentVariant, agent_type: type
    ) -> None:
        for seed in range(20):
            config = SimulationConfig(grid_width=2, grid_height=1, variant=variant, sim_seed=seed)
            state = create_simulation(config)
            assert isinstance(state.agent, agent_type)
            assert state.goal is not None
            assert state.agent.position != state.goal.position

    def test_explicit_positions(self) -> None:
        config = SimulationConfig(grid_width=4, grid_height=4, variant=AgentVariant.REWARD)
        state = create_simulation(config, start=(0, 0), goal=(3, 3))
        assert state.agent.position == (0, 0)
        assert state.goal is not None and state.goal.position == (3, 3)

    def test_explicit_start_excluded_from_random_goal(self) -> None:
        for seed in range(20):
            config = SimulationConfig(
                grid_width=2, grid_height=1, variant=AgentVariant.REWARD, sim_seed=seed
            )
            state = create_simulation(config, start=(1, 0))
            assert state.goal is not None and state.goal.position == (0, 0)

    def test_start_equal_to_goal_raises(self) -> None:
        config = SimulationConfig(grid_width=4, grid_height=4, variant=AgentVariant.REWARD)
        with pytest.raises(ValueError, match="differ"):
            create_simulation(config, start=(1, 1), goal=(1, 1))

    @pytest.mark.parametrize("start,goal", [((4, 0), (1, 1)), ((0, 0), (0, 9))])
    def test_out_of_grid_positions_raise(
        self, start: tuple[int, int], goal: tuple[int, int]
    ) -> None:
        config = SimulationConfig(grid_width=4, grid_height=4, variant=AgentVariant.PREDICTOR)
        with pytest.raises(ValueError, match="outside"):
            create_simulation(config, start=start, goal=goal)

    def test_seeds_reproduce_layout(self) -> None:
        config = SimulationConfig(
            grid_width=6, grid_height=6, variant=AgentVariant.REWARD, maze_seed=4, sim_seed=8
        )
        a = create_simulation(config)
        b = create_simulation(config)
        assert a.grid.flags == b.grid.flags
        assert a.agent.position == b.agent.position
        assert a.goal == b.goal

    def test_reward_policy_taken_from_config(self) -> None:
        config = SimulationConfig(variant=AgentVariant.REWARD, reward_policy=RewardPolicy.DISTANCE)
        assert create_simulation(config).reward_policy is RewardPolicy.DISTANCE

    def test_recency_rejects_explicit_goal(self) -> None:
        config = SimulationConfig(grid_width=3, grid_height=3)
        with pytest.raises(ValueError, match="recency agent takes no goal"):
            create_simulation(config, start=(0, 0), goal=(1, 1))


class TestStep:
    def test_advances_clock(self) -> None:
        state = create_simulation(SimulationConfig(grid_width=3, grid_height=3))
        outcomes = [step(state) for _ in range(5)]
        assert state.tick == 5
        assert [o.tick for o in outcomes] == [1, 2, 3, 4, 5]

    def test_single_cell_recency_stays_put(self) -> None:
        state = create_simulation(SimulationConfig(grid_width=1, grid_height=1))
        outcome = step(state)
        assert not outcome.moved
        assert state.agent.position == (0, 0)

    def test_distance_policy_credits_visited_cells(self) -> None:
        config = SimulationConfig(grid_width=3, grid_height=1, variant=AgentVariant.REWARD)
        state = create_simulation(config, start=(0, 0), goal=(2, 0))
        state.reward_policy = RewardPolicy.DISTANCE
        step(state)
        outcome = step(state)
        assert outcome.reached_goal
        assert isinstance(state.agent, RewardAgent)
        assert state.agent.memory.node((1, 0)).reward_distance == 1
        assert state.agent.memory.node((0, 0)).reward_distance == 2

    @pytest.mark.parametrize("variant", [AgentVariant.REWARD, AgentVariant.PREDICTOR])
    def test_goal_variant_without_goal_raises(self, variant: AgentVariant) -> None:
        state = create_simulation(SimulationConfig(grid_width=3, grid_height=3, variant=variant))
        state.goal = None
        with pytest.raises(ValueError, match="requires a goal"):
            step(state)
        assert state.tick == 0
