"""Agent memory stores, direction comparators, and reward backpropagation.

Three stores back the three agent heuristics:

- ``RecencyMemory``: one last-visited tick and one visit count per cell.
- ``CellMemory``: lazily created ``MemoryNode`` per cell (reward agent).
- ``ActionMemory``: lazily created ``MemoryNode`` per (cell, direction)
  pair (predictor agent).

A ``last_visited`` of ``None`` means "never" and ranks as the oldest visit.
"""

from __future__ import annotations

import math
from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from maze_memory.domain.grid import DIRECTION_ORDER, Direction, Position, WallGrid

_NEVER = -1


@dataclass
class MemoryNode:
    """What the agent remembers about one state (cell or cell-direction pair)."""

    last_visited: int | None = None
    reward_distance: float = math.inf
    reward_update_visit: int | None = None

    @property
    def visited(self) -> bool:
        return self.last_visited is not None


def _preference_key(node: MemoryNode) -> tuple[float, int]:
    """Smaller is better: nearer reward first, then the visit longest ago."""
    recency = _NEVER if node.last_visited is None else node.last_visited
    return node.reward_distance, recency


def node_better(first: MemoryNode | None, second: MemoryNode | None) -> bool:
    """Return True if *first* is at least as good a choice as *second*.

    ``None`` stands for a blocked option: it never wins and always loses.
    """
    if first is None:
        return False
    if second is None:
        return True
    return _preference_key(first) <= _preference_key(second)


def choose_best(options: Iterable[tuple[Direction, MemoryNode | None]]) -> Direction | None:
    """Pick the best option; earlier options win ties. None if all are blocked."""
    best_direction: Direction | None = None
    best_node: MemoryNode | None = None
    for direction, node in options:
        if node is None:
            continue
        if not node_better(best_node, node):
            best_direction, best_node = direction, node
    return best_direction


# ---------------------------------------------------------------------------
# Variant 1: recency exploration
# ---------------------------------------------------------------------------


@dataclass
class RecencyMemory:
    """Per-cell last-visited tick and visit count, indexed by flat cell index."""

    last_visited: list[int | None]
    counts: list[int]

    @classmethod
    def for_grid(cls, grid: WallGrid) -> RecencyMemory:
        return cls(last_visited=[None] * grid.cell_count, counts=[0] * grid.cell_count)

    def visit(self, cell: int, tick: int) -> None:
        self.last_visited[cell] = tick
        self.counts[cell] += 1


def best_recency_direction(
    grid: WallGrid, position: Position, memory: RecencyMemory
) -> Direction | None:
    """Direction of the least recently seen open neighbour.

    Never-visited neighbours are preferred over any visited one; walled
    directions are never chosen. Returns None only if every side is walled.
    """
    x, y = position
    best_direction: Direction | None = None
    best_value = math.inf
    for direction in DIRECTION_ORDER:
        if grid.is_blocked(x, y, direction):
            continue
        nx_, ny_ = grid.neighbor(position, direction)
        seen = memory.last_visited[grid.cell_index(nx_, ny_)]
        value = _NEVER if seen is None else seen
        if value < best_value:
            best_direction, best_value = direction, value
    return best_direction


# ---------------------------------------------------------------------------
# Variants 2 and 3: node memories
# ---------------------------------------------------------------------------


@dataclass
class CellMemory:
    """Lazily populated per-cell memory nodes."""

    nodes: dict[Position, MemoryNode] = field(default_factory=dict)

    def get(self, position: Position) -> MemoryNode | None:
        return self.nodes.get(position)

    def node(self, position: Position) -> MemoryNode:
        """Return the node for *position*, creating it on first use."""
        found = self.nodes.get(position)
        if found is None:
            found = self.nodes[position] = MemoryNode()
        return found


@dataclass
class ActionMemory:
    """Lazily populated memory nodes keyed by (cell, direction)."""

    nodes: dict[tuple[Position, Direction], MemoryNode] = field(default_factory=dict)

    def get(self, position: Position, direction: Direction) -> MemoryNode | None:
        return self.nodes.get((position, direction))

    def node(self, position: Position, direction: Direction) -> MemoryNode:
        key = (position, direction)
        found = self.nodes.get(key)
        if found is None:
            found = self.nodes[key] = MemoryNode()
        return found


def best_reward_direction(
    grid: WallGrid, position: Position, memory: CellMemory
) -> Direction | None:
    """Best open neighbour by reward distance, then by oldest visit."""
    x, y = position
    options: list[tuple[Direction, MemoryNode | None]] = []
    for direction in DIRECTION_ORDER:
        if grid.is_blocked(x, y, direction):
            options.append((direction, None))
            continue
        neighbor = grid.neighbor(position, direction)
        options.append((direction, memory.get(neighbor) or MemoryNode()))
    return choose_best(options)


def best_action_direction(position: Position, memory: ActionMemory) -> Direction:
    """Best (cell, direction) node; walls are not consulted.

    Untried actions rank as never visited, so the agent keeps probing walls
    it has not bumped into yet.
    """
    best_direction = DIRECTION_ORDER[0]
    best_node = memory.get(position, best_direction) or MemoryNode()
    for direction in DIRECTION_ORDER[1:]:
        node = memory.get(position, direction) or MemoryNode()
        if not node_better(best_node, node):
            best_direction, best_node = direction, node
    return best_direction


def propagate_path_reward(memory: CellMemory, path: Sequence[Position]) -> None:
    """Credit each cell on *path* with its remaining step count to the end."""
    last = len(path) - 1
    for index in range(last, -1, -1):
        node = memory.node(path[index])
        node.reward_distance = min(node.reward_distance, last - index)


def propagate_distance_reward(
    grid: WallGrid, memory: CellMemory, goal: Position, stamp: int
) -> int:
    """Breadth-first flood of goal distances through discovered passages.

    Only unwalled edges into already-visited cells are followed. Each node
    is expanded at most once per *stamp*. Returns the number of nodes
    reached.
    """
    start = memory.node(goal)
    start.reward_update_visit = stamp
    start.reward_distance = min(start.reward_distance, 0)
    queue: deque[tuple[Position, int]] = deque([(goal, 0)])
    reached = 0
    while queue:
        position, distance = queue.popleft()
        reached += 1
        x, y = position
        for direction in DIRECTION_ORDER:
            if grid.is_blocked(x, y, direction):
                continue
            neighbor = grid.neighbor(position, direction)
            node = memory.get(neighbor)
            if node is None or not node.visited or node.reward_update_visit == stamp:
                continue
            node.reward_update_visit = stamp
            node.reward_distance = min(node.reward_distance, distance + 1)
            queue.append((neighbor, distance + 1))
    return reached
