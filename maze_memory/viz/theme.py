"""Visualization theme presets for maze renderers.

Themes are frozen dataclasses that group all styling constants together so
renderers accept a ``Theme`` instead of referencing module-level colours.
"""

from __future__ import annotations

from dataclasses import dataclass

from maze_memory.config.constants import VISIT_SATURATION_BASE, VISIT_SATURATION_STEP


@dataclass(frozen=True)
class Theme:
    """Complete collection of visualization style tokens."""

    background_color: str = "#FFFFFF"
    wall_color: str = "#000000"
    wall_linewidth: float = 1.0
    thick_wall_color: str = "#000000"
    agent_color: str = "#000000"
    goal_color: str = "#000000"
    prediction_color: str = "#1E88E5"
    heatmap_cmap: str = "Greens"
    visit_base: int = VISIT_SATURATION_BASE
    visit_step: int = VISIT_SATURATION_STEP

    def visit_color(self, visits: int) -> str:
        """Green shade that saturates as a cell is visited more often."""
        channel = max(0, min(255, self.visit_base - visits * self.visit_step))
        return f"#{channel:02X}FF{channel:02X}"


DEFAULT_THEME = Theme()

DARK_THEME = Theme(
    background_color="#1A1A1A",
    wall_color="#E0E0E0",
    thick_wall_color="#E0E0E0",
    agent_color="#FFC107",
    goal_color="#FF5722",
    prediction_color="#64B5F6",
    heatmap_cmap="viridis",
)

REGISTERED_THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "dark": DARK_THEME,
}


def get_theme(name: str) -> Theme:
    """Look up a registered theme by name."""
    try:
        return REGISTERED_THEMES[name]
    except KeyError as exc:
        valid = ", ".join(sorted(REGISTERED_THEMES))
        raise ValueError(f"theme must be one of {valid}") from exc
