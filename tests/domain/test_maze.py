"""Tests for maze_memory.domain.maze generation."""

from __future__ import annotations

from random import Random

import networkx as nx
import pytest

from maze_memory.domain.grid import Direction
from maze_memory.domain.maze import DisjointSet, generate_maze


class TestDisjointSet:
    def test_union_merges_and_returns_root(self) -> None:
        sets = DisjointSet(4)
        root = sets.union(0, 1)
        assert sets.find(0) == sets.find(1) == root
        assert sets.find(2) != root

    def test_union_of_same_set_is_noop(self) -> None:
        sets = DisjointSet(3)
        root = sets.union(0, 1)
        assert sets.union(1, 0) == root


class TestGenerateMaze:
    @pytest.mark.parametrize("width,height", [(5, 5), (1, 7), (7, 1), (2, 3), (12, 9)])
    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_passages_form_spanning_tree(self, width: int, height: int, seed: int) -> None:
        grid = generate_maze(width, height, Random(seed))
        assert len(grid.passages()) == width * height - 1
        assert nx.is_tree(grid.to_graph())

    def test_outer_boundary_stays_closed(self) -> None:
        grid = generate_maze(6, 4, Random(5))
        for x in range(6):
            assert grid.is_blocked(x, 0, Direction.UP)
            assert grid.is_blocked(x, 3, Direction.DOWN)
        for y in range(4):
            assert grid.is_blocked(0, y, Direction.LEFT)
            assert grid.is_blocked(5, y, Direction.RIGHT)

    @pytest.mark.parametrize("seed", [0, 3])
    def test_corridor_flags(self, seed: int) -> None:
        assert generate_maze(4, 1, Random(seed)).flags == [3, 2, 2, 2, 1, 2, 2, 2, 2, 0]

    @pytest.mark.parametrize("seed", [0, 3])
    def test_column_flags(self, seed: int) -> None:
        assert generate_maze(1, 4, Random(seed)).flags == [3, 1, 1, 1, 1, 1, 1, 1, 2, 0]

    def test_large_maze_is_spanning_tree(self) -> None:
        grid = generate_maze(60, 60, Random(7))
        assert len(grid.passages()) == 60 * 60 - 1
        assert nx.is_tree(grid.to_graph())

    def test_single_cell(self) -> None:
        grid = generate_maze(1, 1, Random(0))
        assert grid.passages() == []
        assert grid.open_directions(0, 0) == []

    def test_same_seed_same_maze(self) -> None:
        assert generate_maze(8, 8, Random(11)).flags == generate_maze(8, 8, Random(11)).flags

    def test_different_seeds_differ(self) -> None:
        assert generate_maze(8, 8, Random(0)).flags != generate_maze(8, 8, Random(1)).flags

    @pytest.mark.parametrize("width,height", [(0, 3), (3, 0)])
    def test_rejects_empty_dimensions(self, width: int, height: int) -> None:
        with pytest.raises(ValueError, match="dimensions"):
            generate_maze(width, height, Random(0))
