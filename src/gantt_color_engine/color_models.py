from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal, NamedTuple


NodeKind = Literal["task", "summary", "milestone"]
"""Allowed node kinds: regular task bar, summary (group) bar, milestone diamond."""

ColorMode = Literal["manual", "theme", "summary", "taskType", "hierarchy"]
"""Top-level coloring strategies selected once for the whole chart."""

PaletteCategory = Literal["classic", "professional", "design", "vibrant", "soft"]


@dataclass(frozen=True)
class Node:
    """Single row of the task hierarchy in parent-pointer form."""

    id: str
    own_color: str
    kind: NodeKind = "task"
    parent_id: str | None = None
    color_override: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class ThemeOptions:
    """Palette selection; a custom monochrome base wins over a palette id."""

    selected_palette_id: str | None = None
    custom_monochrome_base: str | None = None


@dataclass(frozen=True)
class SummaryOptions:
    use_milestone_accent: bool = True
    milestone_accent_color: str = "#CA8A04"


@dataclass(frozen=True)
class TaskTypeOptions:
    summary_color: str = "#0A2E4A"
    task_color: str = "#0F6CBD"
    milestone_color: str = "#CA8A04"


@dataclass(frozen=True)
class HierarchyOptions:
    """Depth-based lightening of a single base color (percent values, 0-100)."""

    base_color: str = "#0F6CBD"
    lighten_percent_per_level: float = 12
    max_lighten_percent: float = 36


@dataclass(frozen=True)
class ColorModeState:
    """
    Active mode plus one option bag per automatic mode.

    All option bags are always present so switching modes never loses
    previously configured options.
    """

    mode: ColorMode = "manual"
    theme_options: ThemeOptions = field(default_factory=ThemeOptions)
    summary_options: SummaryOptions = field(default_factory=SummaryOptions)
    task_type_options: TaskTypeOptions = field(default_factory=TaskTypeOptions)
    hierarchy_options: HierarchyOptions = field(default_factory=HierarchyOptions)

    def with_mode(self, mode: ColorMode) -> "ColorModeState":
        """Return a copy with only the active mode switched."""
        return replace(self, mode=mode)


DEFAULT_COLOR_MODE_STATE = ColorModeState()


@dataclass(frozen=True)
class Palette:
    """Curated, immutable set of distinct colors."""

    id: str
    name: str
    category: PaletteCategory
    colors: tuple[str, ...]


class HSL(NamedTuple):
    h: float  # 0-360
    s: float  # 0-100
    l: float  # 0-100


@dataclass
class ColorProject:
    """Task snapshot plus the chart's color mode state, as loaded from a project file."""

    name: str | None
    nodes: list[Node] = field(default_factory=list)
    state: ColorModeState = field(default_factory=ColorModeState)


@dataclass(frozen=True)
class ColorChange:
    """One node's color edit when baking computed colors into manual colors."""

    id: str
    previous_color: str
    previous_override: str | None
    new_color: str
