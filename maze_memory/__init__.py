"""Random perfect mazes explored by agents with simple memory heuristics."""

__version__ = "0.1.0"
