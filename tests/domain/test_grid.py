"""Tests for maze_memory.domain.grid wall storage and queries."""

from __future__ import annotations

import pytest

from maze_memory.domain.grid import (
    DIRECTION_ORDER,
    NORTH_WALL,
    WEST_WALL,
    Direction,
    WallGrid,
    WallSegment,
)


class TestFullyWalled:
    def test_every_cell_is_enclosed(self) -> None:
        grid = WallGrid.fully_walled(3, 2)
        for y in range(2):
            for x in range(3):
                assert all(grid.is_blocked(x, y, d) for d in DIRECTION_ORDER)

    def test_sentinel_vertices(self) -> None:
        grid = WallGrid.fully_walled(3, 2)
        assert len(grid.flags) == 4 * 3
        assert grid.flags[grid.vertex_index(3, 2)] == 0
        assert grid.flags[grid.vertex_index(3, 0)] == WEST_WALL
        assert grid.flags[grid.vertex_index(0, 2)] == NORTH_WALL
        assert grid.flags[grid.vertex_index(1, 1)] == WEST_WALL | NORTH_WALL

    def test_segment_count(self) -> None:
        grid = WallGrid.fully_walled(3, 2)
        segments = grid.wall_segments()
        assert sum(1 for s in segments if s.orientation == "vertical") == 4 * 2
        assert sum(1 for s in segments if s.orientation == "horizontal") == 3 * 3
        assert WallSegment(3, 1, "vertical") in segments

    @pytest.mark.parametrize("width,height", [(0, 1), (1, 0)])
    def test_rejects_empty_grid(self, width: int, height: int) -> None:
        with pytest.raises(ValueError):
            WallGrid.fully_walled(width, height)


class TestWalls:
    def test_neighbouring_cells_share_one_flag(self) -> None:
        grid = WallGrid.fully_walled(2, 2)
        grid.clear_wall(*grid.wall_location(0, 0, Direction.RIGHT))
        assert not grid.is_blocked(0, 0, Direction.RIGHT)
        assert not grid.is_blocked(1, 0, Direction.LEFT)
        assert grid.is_blocked(0, 0, Direction.DOWN)

    def test_vertical_passage(self) -> None:
        grid = WallGrid.fully_walled(2, 2)
        grid.clear_wall(*grid.wall_location(1, 1, Direction.UP))
        assert not grid.is_blocked(1, 0, Direction.DOWN)
        assert grid.open_directions(1, 1) == [Direction.UP]

    def test_passages_and_graph(self) -> None:
        grid = WallGrid.fully_walled(2, 2)
        assert grid.passages() == []
        grid.clear_wall(*grid.wall_location(0, 0, Direction.DOWN))
        assert grid.passages() == [((0, 0), (0, 1))]
        graph = grid.to_graph()
        assert graph.number_of_nodes() == 4
        assert graph.has_edge((0, 1), (0, 0))

    def test_cell_index_round_trip(self) -> None:
        grid = WallGrid.fully_walled(4, 3)
        for index in range(grid.cell_count):
            assert grid.cell_index(*grid.cell_position(index)) == index

    @pytest.mark.parametrize("x,y", [(-1, 0), (4, 0), (0, 3)])
    def test_out_of_range_cell_raises(self, x: int, y: int) -> None:
        grid = WallGrid.fully_walled(4, 3)
        with pytest.raises(ValueError, match="outside"):
            grid.cell_index(x, y)

    def test_neighbor_offsets(self) -> None:
        grid = WallGrid.fully_walled(3, 3)
        assert grid.neighbor((1, 1), Direction.UP) == (1, 0)
        assert grid.neighbor((1, 1), Direction.LEFT) == (0, 1)
        assert grid.neighbor((1, 1), Direction.DOWN) == (1, 2)
        assert grid.neighbor((1, 1), Direction.RIGHT) == (2, 1)
