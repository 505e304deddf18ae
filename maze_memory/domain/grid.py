"""Rectangular cell grid with per-vertex wall flags.

Walls are stored once per grid vertex in a flat array with stride
``width + 1``: ``WEST_WALL`` marks the edge west of cell ``(x, y)`` and
``NORTH_WALL`` the edge north of it. A cell's east and south walls are the
west/north flags of its neighbours, so no edge is stored twice. The extra
row and column are sentinels that close the outer boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, NamedTuple

import networkx as nx

WEST_WALL = 1 << 0
"""Wall separating horizontally adjacent cells (west edge of a vertex)."""

NORTH_WALL = 1 << 1
"""Wall separating vertically adjacent cells (north edge of a vertex)."""

Position = tuple[int, int]


class Direction(Enum):
    """Grid move, valued by its (dx, dy) offset. Screen coordinates: y grows down."""

    UP = (0, -1)
    LEFT = (-1, 0)
    DOWN = (0, 1)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


DIRECTION_ORDER: tuple[Direction, ...] = (
    Direction.UP,
    Direction.LEFT,
    Direction.DOWN,
    Direction.RIGHT,
)
"""Evaluation order; earlier directions win preference ties."""


class WallSegment(NamedTuple):
    """One drawable wall edge in logical vertex coordinates.

    A vertical segment runs from vertex ``(x, y)`` to ``(x, y + 1)``; a
    horizontal one from ``(x, y)`` to ``(x + 1, y)``.
    """

    x: int
    y: int
    orientation: Literal["vertical", "horizontal"]


@dataclass
class WallGrid:
    """Cell grid plus wall flags. Mutated only while a maze is carved."""

    width: int
    height: int
    flags: list[int]

    @classmethod
    def fully_walled(cls, width: int, height: int) -> WallGrid:
        """Return a grid where every cell is enclosed by four walls."""
        if width < 1 or height < 1:
            raise ValueError(f"grid dimensions must be >= 1x1, got {width}x{height}")
        flags: list[int] = []
        for y in range(height + 1):
            for x in range(width + 1):
                west = 0 if y == height else WEST_WALL
                north = 0 if x == width else NORTH_WALL
                flags.append(west | north)
        return cls(width=width, height=height, flags=flags)

    @property
    def stride(self) -> int:
        return self.width + 1

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_index(self, x: int, y: int) -> int:
        """Flat index of cell ``(x, y)`` in row-major order."""
        self._require_cell(x, y)
        return y * self.width + x

    def cell_position(self, index: int) -> Position:
        if not 0 <= index < self.cell_count:
            raise ValueError(f"cell index {index} out of range")
        return index % self.width, index // self.width

    def vertex_index(self, x: int, y: int) -> int:
        """Flat index of vertex ``(x, y)`` in the wall-flag array."""
        if not (0 <= x <= self.width and 0 <= y <= self.height):
            raise ValueError(f"vertex ({x}, {y}) outside {self.width}x{self.height} grid")
        return y * self.stride + x

    def wall_location(self, x: int, y: int, direction: Direction) -> tuple[int, int]:
        """Return ``(vertex_index, flag)`` of the wall on *direction* side of a cell."""
        self._require_cell(x, y)
        if direction is Direction.UP:
            return self.vertex_index(x, y), NORTH_WALL
        if direction is Direction.LEFT:
            return self.vertex_index(x, y), WEST_WALL
        if direction is Direction.DOWN:
            return self.vertex_index(x, y + 1), NORTH_WALL
        return self.vertex_index(x + 1, y), WEST_WALL

    def is_blocked(self, x: int, y: int, direction: Direction) -> bool:
        vertex, flag = self.wall_location(x, y, direction)
        return bool(self.flags[vertex] & flag)

    def clear_wall(self, vertex: int, flag: int) -> None:
        self.flags[vertex] &= ~flag

    def open_directions(self, x: int, y: int) -> list[Direction]:
        return [d for d in DIRECTION_ORDER if not self.is_blocked(x, y, d)]

    def neighbor(self, position: Position, direction: Direction) -> Position:
        """Cell reached by stepping from *position* in *direction* (no wall check)."""
        return position[0] + direction.dx, position[1] + direction.dy

    def passages(self) -> list[tuple[Position, Position]]:
        """Every open edge between two cells, listed once (east and south sides)."""
        edges: list[tuple[Position, Position]] = []
        for y in range(self.height):
            for x in range(self.width):
                if x + 1 < self.width and not self.is_blocked(x, y, Direction.RIGHT):
                    edges.append(((x, y), (x + 1, y)))
                if y + 1 < self.height and not self.is_blocked(x, y, Direction.DOWN):
                    edges.append(((x, y), (x, y + 1)))
        return edges

    def to_graph(self) -> nx.Graph:
        """Return the passage graph: one node per cell, one edge per open passage."""
        g = nx.Graph()
        g.add_nodes_from((x, y) for y in range(self.height) for x in range(self.width))
        g.add_edges_from(self.passages())
        return g

    def wall_segments(self) -> list[WallSegment]:
        """All standing walls, including the outer boundary."""
        segments: list[WallSegment] = []
        for y in range(self.height + 1):
            for x in range(self.width + 1):
                flags = self.flags[y * self.stride + x]
                if flags & WEST_WALL:
                    segments.append(WallSegment(x, y, "vertical"))
                if flags & NORTH_WALL:
                    segments.append(WallSegment(x, y, "horizontal"))
        return segments

    def _require_cell(self, x: int, y: int) -> None:
        if not self.contains(x, y):
            raise ValueError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
