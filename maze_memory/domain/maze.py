"""Randomized Kruskal-style maze carving over a cell grid.

Every cell starts as its own section. Each round picks a uniformly random
live section, then a uniformly random edge leaving it, knocks that wall
down and merges the two sections. After ``width * height - 1`` merges one
section remains and the open passages form a spanning tree: exactly one
simple path joins any two cells.
"""

from __future__ import annotations

from dataclasses import dataclass
from random import Random

from maze_memory.domain.grid import NORTH_WALL, WEST_WALL, WallGrid


class DisjointSet:
    """Index-based union-find with path compression and union by rank."""

    def __init__(self, size: int) -> None:
        self.parent = list(range(size))
        self.rank = [0] * size

    def find(self, item: int) -> int:
        root = item
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[item] != root:
            self.parent[item], item = root, self.parent[item]
        return root

    def union(self, a: int, b: int) -> int:
        """Merge the sets holding *a* and *b*; return the surviving root."""
        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return root_a
        if self.rank[root_a] < self.rank[root_b]:
            root_a, root_b = root_b, root_a
        self.parent[root_b] = root_a
        if self.rank[root_a] == self.rank[root_b]:
            self.rank[root_a] += 1
        return root_a


@dataclass(frozen=True)
class _Adjacency:
    """Wall between two neighbouring cells, by cell index."""

    cell_a: int
    cell_b: int
    vertex: int
    flag: int


def _initial_adjacencies(grid: WallGrid) -> dict[int, list[_Adjacency]]:
    """One edge per grid neighbour for every cell (left, right, up, down)."""
    w, h = grid.width, grid.height
    adjacency: dict[int, list[_Adjacency]] = {}
    for y in range(h):
        for x in range(w):
            cell = y * w + x
            edges: list[_Adjacency] = []
            if x != 0:
                edges.append(_Adjacency(cell, cell - 1, grid.vertex_index(x, y), WEST_WALL))
            if x != w - 1:
                edges.append(_Adjacency(cell, cell + 1, grid.vertex_index(x + 1, y), WEST_WALL))
            if y != 0:
                edges.append(_Adjacency(cell, cell - w, grid.vertex_index(x, y), NORTH_WALL))
            if y != h - 1:
                edges.append(_Adjacency(cell, cell + w, grid.vertex_index(x, y + 1), NORTH_WALL))
            adjacency[cell] = edges
    return adjacency


def generate_maze(width: int, height: int, rng: Random) -> WallGrid:
    """Carve a perfect maze into a fully walled ``width`` x ``height`` grid."""
    if width < 1 or height < 1:
        raise ValueError(f"maze dimensions must be >= 1x1, got {width}x{height}")

    grid = WallGrid.fully_walled(width, height)
    sections = DisjointSet(grid.cell_count)
    # Keyed by section root; lists only hold edges leaving the section, and
    # each edge's cell_a lies inside it.
    adjacency = _initial_adjacencies(grid)
    live = list(range(grid.cell_count))
    live_index = {cell: cell for cell in live}

    while len(live) > 1:
        root = live[rng.randrange(len(live))]
        edges = adjacency[root]
        edge = edges[rng.randrange(len(edges))]
        other = sections.find(edge.cell_b)

        grid.clear_wall(edge.vertex, edge.flag)

        survivor = sections.union(root, other)
        absorbed = other if survivor == root else root
        # Only edges between root and other became internal.
        merged = adjacency.pop(root) + adjacency.pop(other)
        adjacency[survivor] = [e for e in merged if sections.find(e.cell_b) != survivor]

        slot = live_index.pop(absorbed)
        last = live.pop()
        if last != absorbed:
            live[slot] = last
            live_index[last] = slot

    return grid
