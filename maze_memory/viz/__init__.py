"""Visualization layer: themes, matplotlib render surface, and CLI."""

from maze_memory.viz.cli import main
from maze_memory.viz.render import (
    FigureTimerScheduler,
    MatplotlibSurface,
    render_maze_snapshot,
    render_run_animation,
    render_visit_heatmap,
    visit_count_array,
    watch_simulation,
)
from maze_memory.viz.theme import (
    DARK_THEME,
    DEFAULT_THEME,
    REGISTERED_THEMES,
    Theme,
    get_theme,
)

__all__ = [
    "DARK_THEME",
    "DEFAULT_THEME",
    "FigureTimerScheduler",
    "MatplotlibSurface",
    "REGISTERED_THEMES",
    "Theme",
    "get_theme",
    "main",
    "render_maze_snapshot",
    "render_run_animation",
    "render_visit_heatmap",
    "visit_count_array",
    "watch_simulation",
]
