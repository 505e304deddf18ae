"""Matplotlib-based rendering for maze simulations.

``MatplotlibSurface`` is the render surface the tick driver draws on. It
works in logical cell units: cell ``(x, y)`` spans ``[x, x + 1]`` by
``[y, y + 1]`` with y growing downward.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib import animation
from matplotlib.axes import Axes
from matplotlib.backend_bases import TimerBase
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Circle, Rectangle

from maze_memory.config.constants import CELL_SIZE
from maze_memory.config.types import SimulationConfig
from maze_memory.domain.grid import Direction, Position, WallGrid, WallSegment
from maze_memory.simulation.driver import ManualScheduler, TickDriver
from maze_memory.simulation.state import SimulationState, create_simulation, step
from maze_memory.viz.theme import DEFAULT_THEME, Theme

CELL_INCHES = CELL_SIZE / 50
"""Default figure size per maze cell, in inches."""

THICK_WALL_WIDTH = 0.2
"""Thickened-wall strip depth in cell units."""

_CELL_INSET = 0.04

_Z_CELL, _Z_WALL, _Z_GOAL, _Z_PREDICTION, _Z_AGENT = 1, 2, 3, 4, 5


class MatplotlibSurface:
    """Render surface backed by one matplotlib Axes."""

    def __init__(
        self, ax: Axes, grid_width: int, grid_height: int, theme: Theme = DEFAULT_THEME
    ) -> None:
        self.ax = ax
        self.theme = theme
        self._cells: dict[Position, Rectangle] = {}
        self._agent: Circle | None = None
        self._prediction: Rectangle | None = None
        self._goal: tuple[Line2D, Line2D] | None = None
        ax.set_xlim(-0.05, grid_width + 0.05)
        ax.set_ylim(grid_height + 0.05, -0.05)
        ax.set_aspect("equal")
        ax.set_xticks([])
        ax.set_yticks([])
        ax.set_facecolor(theme.background_color)
        for spine in ax.spines.values():
            spine.set_visible(False)

    def clear_cell(self, position: Position, visits: int) -> None:
        color = self.theme.visit_color(visits)
        patch = self._cells.get(position)
        if patch is None:
            x, y = position
            patch = Rectangle(
                (x + _CELL_INSET, y + _CELL_INSET),
                1 - 2 * _CELL_INSET,
                1 - 2 * _CELL_INSET,
                facecolor=color,
                edgecolor="none",
                zorder=_Z_CELL,
            )
            self.ax.add_patch(patch)
            self._cells[position] = patch
        else:
            patch.set_facecolor(color)

    def draw_wall_segment(self, segment: WallSegment) -> None:
        x, y = segment.x, segment.y
        if segment.orientation == "vertical":
            xs, ys = [x, x], [y, y + 1]
        else:
            xs, ys = [x, x + 1], [y, y]
        self.ax.plot(
            xs,
            ys,
            color=self.theme.wall_color,
            linewidth=self.theme.wall_linewidth,
            solid_capstyle="projecting",
            zorder=_Z_WALL,
        )

    def draw_agent_marker(self, position: Position) -> None:
        center = (position[0] + 0.5, position[1] + 0.5)
        if self._agent is None:
            self._agent = Circle(center, 0.25, color=self.theme.agent_color, zorder=_Z_AGENT)
            self.ax.add_patch(self._agent)
        else:
            self._agent.set_center(center)

    def draw_goal_marker(self, position: Position) -> None:
        x, y = position
        upright = ([x + 0.5, x + 0.5], [y + 0.25, y + 0.75])
        crossbar = ([x + 0.25, x + 0.75], [y + 0.5, y + 0.5])
        if self._goal is None:
            color = self.theme.goal_color
            (first,) = self.ax.plot(*upright, color=color, zorder=_Z_GOAL)
            (second,) = self.ax.plot(*crossbar, color=color, zorder=_Z_GOAL)
            self._goal = (first, second)
        else:
            self._goal[0].set_data(*upright)
            self._goal[1].set_data(*crossbar)

    def thicken_wall(self, position: Position, direction: Direction) -> None:
        x, y = position
        depth = THICK_WALL_WIDTH
        if direction is Direction.UP:
            origin, width, height = (x, y), 1.0, depth
        elif direction is Direction.LEFT:
            origin, width, height = (x, y), depth, 1.0
        elif direction is Direction.RIGHT:
            origin, width, height = (x + 1 - depth, y), depth, 1.0
        else:
            origin, width, height = (x, y + 1 - depth), 1.0, depth
        self.ax.add_patch(
            Rectangle(
                origin,
                width,
                height,
                facecolor=self.theme.thick_wall_color,
                edgecolor="none",
                zorder=_Z_WALL,
            )
        )

    def draw_prediction_marker(self, position: Position) -> None:
        origin = (position[0] + 0.15, position[1] + 0.15)
        if self._prediction is None:
            self._prediction = Rectangle(
                origin,
                0.7,
                0.7,
                fill=False,
                edgecolor=self.theme.prediction_color,
                linewidth=1.5,
                zorder=_Z_PREDICTION,
            )
            self.ax.add_patch(self._prediction)
        else:
            self._prediction.set_xy(origin)


class FigureTimerScheduler:
    """Scheduler backed by single-shot matplotlib canvas timers."""

    def __init__(self, figure: Figure) -> None:
        self.figure = figure
        self._timer: TimerBase | None = None

    def schedule_next(self, callback: Callable[[], None], delay_ms: int) -> None:
        self.cancel()
        timer = self.figure.canvas.new_timer(interval=delay_ms)
        timer.single_shot = True
        timer.add_callback(self._fire, callback)
        self._timer = timer
        timer.start()

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def _fire(self, callback: Callable[[], None]) -> None:
        self._timer = None
        callback()
        self.figure.canvas.draw_idle()


# ---------------------------------------------------------------------------
# Static renders
# ---------------------------------------------------------------------------


def _figure_for_grid(grid: WallGrid, cell_inches: float) -> tuple[Figure, Axes]:
    fig, ax = plt.subplots(
        figsize=(max(2.0, grid.width * cell_inches), max(2.0, grid.height * cell_inches))
    )
    return fig, ax


def _draw_state(surface: MatplotlibSurface, state: SimulationState) -> None:
    grid = state.grid
    for index, visits in enumerate(state.counts):
        if visits > 0:
            surface.clear_cell(grid.cell_position(index), visits)
    for segment in grid.wall_segments():
        surface.draw_wall_segment(segment)
    if state.goal is not None:
        surface.draw_goal_marker(state.goal.position)
    surface.draw_agent_marker(state.agent.position)


def advance(state: SimulationState, ticks: int) -> None:
    """Step *state* forward *ticks* times without rendering."""
    for _ in range(ticks):
        step(state)


def render_maze_snapshot(
    state: SimulationState,
    output_path: Path,
    theme: Theme = DEFAULT_THEME,
    cell_inches: float = CELL_INCHES,
) -> None:
    """Save walls, visit shading, goal, and agent of *state* to an image."""
    fig, ax = _figure_for_grid(state.grid, cell_inches)
    surface = MatplotlibSurface(ax, state.grid.width, state.grid.height, theme)
    _draw_state(surface, state)
    ax.set_title(f"{state.config.variant.value} | tick {state.tick}")
    fig.savefig(Path(output_path), dpi=120, bbox_inches="tight")
    plt.close(fig)


def visit_count_array(counts: Sequence[int], grid_width: int, grid_height: int) -> np.ndarray:
    """Return (H, W) int array of visit counts from a row-major count list."""
    if len(counts) != grid_width * grid_height:
        raise ValueError(
            f"expected {grid_width * grid_height} counts for a {grid_width}x{grid_height} grid, "
            f"got {len(counts)}"
        )
    return np.asarray(counts, dtype=int).reshape(grid_height, grid_width)


def _wall_lines(grid: WallGrid) -> list[list[tuple[float, float]]]:
    """Wall segments as imshow-space polylines (cell centres on integers)."""
    lines: list[list[tuple[float, float]]] = []
    for segment in grid.wall_segments():
        x, y = segment.x - 0.5, segment.y - 0.5
        if segment.orientation == "vertical":
            lines.append([(x, y), (x, y + 1)])
        else:
            lines.append([(x, y), (x + 1, y)])
    return lines


def render_visit_heatmap(
    state: SimulationState,
    output_path: Path,
    theme: Theme = DEFAULT_THEME,
    cell_inches: float = CELL_INCHES,
) -> None:
    """Save a heatmap of per-cell visit counts with the maze walls overlaid."""
    grid = state.grid
    counts = visit_count_array(state.counts, grid.width, grid.height)
    fig, ax = _figure_for_grid(grid, cell_inches)
    img = ax.imshow(counts, cmap=theme.heatmap_cmap, origin="upper", aspect="equal")
    ax.add_collection(
        LineCollection(_wall_lines(grid), colors=theme.wall_color, linewidths=theme.wall_linewidth)
    )
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_title(f"Visits after {state.tick} ticks")
    fig.colorbar(img, ax=ax, fraction=0.046, pad=0.04, label="visits")
    fig.savefig(Path(output_path), dpi=120, bbox_inches="tight")
    plt.close(fig)


def render_run_animation(
    config: SimulationConfig,
    output_path: Path,
    frames: int = 100,
    fps: int = 10,
    theme: Theme = DEFAULT_THEME,
    cell_inches: float = CELL_INCHES,
) -> SimulationState:
    """Animate *frames* ticks of a fresh simulation into a GIF.

    Ticks are driven through ``TickDriver`` with a manual scheduler, so the
    frames show exactly what a live surface would receive.
    """
    if frames < 1:
        raise ValueError("frames must be >= 1")
    if fps < 1:
        raise ValueError("fps must be >= 1")

    state = create_simulation(config)
    fig, ax = _figure_for_grid(state.grid, cell_inches)
    surface = MatplotlibSurface(ax, state.grid.width, state.grid.height, theme)
    scheduler = ManualScheduler()
    driver = TickDriver(state, scheduler, surface)
    driver.render_initial()
    title = ax.set_title(f"{config.variant.value} | tick 0")

    def update(frame: int) -> list[object]:
        if frame > 0:
            if driver.running:
                scheduler.fire()
            else:
                driver.start()
        title.set_text(f"{config.variant.value} | tick {state.tick}")
        return []

    anim = animation.FuncAnimation(
        fig,
        update,
        frames=range(frames + 1),
        init_func=lambda: [],
        blit=False,
        repeat=False,
    )
    anim.save(Path(output_path), writer=animation.PillowWriter(fps=fps))
    plt.close(fig)
    driver.pause()
    return state


def watch_simulation(config: SimulationConfig, theme: Theme = DEFAULT_THEME) -> TickDriver:
    """Open a live window that ticks at ``config.tick_delay_ms`` until closed."""
    state = create_simulation(config)
    fig, ax = _figure_for_grid(state.grid, CELL_INCHES)
    surface = MatplotlibSurface(ax, state.grid.width, state.grid.height, theme)
    driver = TickDriver(state, FigureTimerScheduler(fig), surface)
    driver.render_initial()
    fig.canvas.mpl_connect("close_event", lambda _event: driver.pause())
    driver.start()
    plt.show()
    return driver
