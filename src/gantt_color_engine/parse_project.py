from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, get_args

import yaml

from .color_models import (
    ColorMode,
    ColorModeState,
    ColorProject,
    HierarchyOptions,
    Node,
    NodeKind,
    SummaryOptions,
    TaskTypeOptions,
    ThemeOptions,
)
from .color_space import is_valid_hex

_LOG = logging.getLogger("gantt_color_engine.parse_project")

_NODE_KINDS: tuple[str, ...] = get_args(NodeKind)
_COLOR_MODES: tuple[str, ...] = get_args(ColorMode)


class ProjectFileError(Exception):
    """Raised when a project file is structurally invalid (bad keys, kinds, colors, ids)."""


@dataclass(frozen=True)
class _Path:
    """Helper to produce readable YAML path strings like tasks[0].color."""

    parts: tuple[str, ...] = ()

    def child(self, segment: str) -> "_Path":
        return _Path(self.parts + (segment,))

    def __str__(self) -> str:  # pragma: no cover - trivial
        return ".".join(self.parts) if self.parts else "root"


def load_project(path: str) -> ColorProject:
    """Load nodes and color mode state from a YAML file at the given path."""

    with open(path, "r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)

    return parse_project(raw)


def parse_project(data: Any) -> ColorProject:
    path = _Path()
    if not isinstance(data, dict):
        raise ProjectFileError(f"{path}: expected mapping at top level")
    _assert_allowed_keys(data, {"name", "color_mode", "tasks"}, path)

    name = data.get("name")
    if name is not None and not isinstance(name, str):
        raise ProjectFileError(f"{path.child('name')}: expected string")

    tasks_raw = data.get("tasks")
    if tasks_raw is None:
        raise ProjectFileError(f"{path}: missing required field 'tasks'")
    if not isinstance(tasks_raw, list):
        raise ProjectFileError(f"{path.child('tasks')}: expected list")

    ids: set[str] = set()
    nodes = [_parse_node(item, path.child(f"tasks[{idx}]"), ids) for idx, item in enumerate(tasks_raw)]
    for node in nodes:
        if node.parent_id is not None and node.parent_id not in ids:
            _LOG.warning("task '%s' references unknown parent '%s'; treating it as a root", node.id, node.parent_id)

    state = parse_color_mode_state(data.get("color_mode"), path.child("color_mode"))
    return ColorProject(name=name, nodes=nodes, state=state)


def _parse_node(data: Any, path: _Path, ids: set[str]) -> Node:
    if not isinstance(data, dict):
        raise ProjectFileError(f"{path}: expected mapping for task")
    _assert_allowed_keys(data, {"id", "name", "kind", "color", "parent", "color_override"}, path)

    node_id = _require_str(data, "id", path)
    if node_id in ids:
        raise ProjectFileError(f"{path.child('id')}: duplicate id '{node_id}'")
    ids.add(node_id)

    kind = data.get("kind", "task")
    if kind not in _NODE_KINDS:
        raise ProjectFileError(f"{path.child('kind')}: expected one of {list(_NODE_KINDS)}")

    parent = data.get("parent")
    if parent is not None and not isinstance(parent, str):
        raise ProjectFileError(f"{path.child('parent')}: expected string id")

    label = data.get("name")
    if label is not None and not isinstance(label, str):
        raise ProjectFileError(f"{path.child('name')}: expected string")

    return Node(
        id=node_id,
        name=label,
        kind=kind,
        parent_id=parent,
        own_color=_require_color(data, "color", path),
        color_override=_optional_color(data, "color_override", path),
    )


def parse_color_mode_state(data: Any, path: _Path | None = None) -> ColorModeState:
    """
    Build a ColorModeState from its mapping form.

    Missing sections and fields keep their defaults, so older files without
    color settings load as manual mode.
    """

    path = path or _Path(("color_mode",))
    if data is None:
        return ColorModeState()
    if not isinstance(data, dict):
        raise ProjectFileError(f"{path}: expected mapping")
    _assert_allowed_keys(
        data,
        {"mode", "theme_options", "summary_options", "task_type_options", "hierarchy_options"},
        path,
    )

    mode = data.get("mode", "manual")
    if mode not in _COLOR_MODES:
        raise ProjectFileError(f"{path.child('mode')}: expected one of {list(_COLOR_MODES)}")

    theme_raw = _section(data, "theme_options", {"selected_palette_id", "custom_monochrome_base"}, path)
    summary_raw = _section(data, "summary_options", {"use_milestone_accent", "milestone_accent_color"}, path)
    task_type_raw = _section(data, "task_type_options", {"summary_color", "task_color", "milestone_color"}, path)
    hierarchy_raw = _section(
        data, "hierarchy_options", {"base_color", "lighten_percent_per_level", "max_lighten_percent"}, path
    )

    theme_path = path.child("theme_options")
    palette_id = theme_raw.get("selected_palette_id")
    if palette_id is not None and not isinstance(palette_id, str):
        raise ProjectFileError(f"{theme_path.child('selected_palette_id')}: expected string")
    theme = ThemeOptions(
        selected_palette_id=palette_id,
        custom_monochrome_base=_optional_color(theme_raw, "custom_monochrome_base", theme_path),
    )

    summary_defaults = SummaryOptions()
    summary_path = path.child("summary_options")
    use_accent = summary_raw.get("use_milestone_accent", summary_defaults.use_milestone_accent)
    if not isinstance(use_accent, bool):
        raise ProjectFileError(f"{summary_path.child('use_milestone_accent')}: expected boolean")
    summary = SummaryOptions(
        use_milestone_accent=use_accent,
        milestone_accent_color=_color_or_default(
            summary_raw, "milestone_accent_color", summary_defaults.milestone_accent_color, summary_path
        ),
    )

    type_defaults = TaskTypeOptions()
    type_path = path.child("task_type_options")
    task_type = TaskTypeOptions(
        summary_color=_color_or_default(task_type_raw, "summary_color", type_defaults.summary_color, type_path),
        task_color=_color_or_default(task_type_raw, "task_color", type_defaults.task_color, type_path),
        milestone_color=_color_or_default(task_type_raw, "milestone_color", type_defaults.milestone_color, type_path),
    )

    hierarchy_defaults = HierarchyOptions()
    hierarchy_path = path.child("hierarchy_options")
    hierarchy = HierarchyOptions(
        base_color=_color_or_default(hierarchy_raw, "base_color", hierarchy_defaults.base_color, hierarchy_path),
        lighten_percent_per_level=_percent_or_default(
            hierarchy_raw, "lighten_percent_per_level", hierarchy_defaults.lighten_percent_per_level, hierarchy_path
        ),
        max_lighten_percent=_percent_or_default(
            hierarchy_raw, "max_lighten_percent", hierarchy_defaults.max_lighten_percent, hierarchy_path
        ),
    )

    return ColorModeState(
        mode=mode,
        theme_options=theme,
        summary_options=summary,
        task_type_options=task_type,
        hierarchy_options=hierarchy,
    )


def dump_color_mode_state(state: ColorModeState) -> dict[str, Any]:
    """Mapping form of the state, loadable again with parse_color_mode_state."""
    return asdict(state)


def _section(data: dict[str, Any], key: str, allowed: set[str], path: _Path) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ProjectFileError(f"{path.child(key)}: expected mapping")
    _assert_allowed_keys(value, allowed, path.child(key))
    return value


def _assert_allowed_keys(data: dict[str, Any], allowed: set[str], path: _Path) -> None:
    extras = sorted(str(key) for key in set(data.keys()) - allowed)
    if extras:
        raise ProjectFileError(f"{path}: unexpected fields {extras}")


def _require_str(data: dict[str, Any], key: str, path: _Path) -> str:
    if key not in data:
        raise ProjectFileError(f"{path}: missing required field '{key}'")
    value = data[key]
    if not isinstance(value, str) or not value.strip():
        raise ProjectFileError(f"{path.child(key)}: expected non-empty string")
    return value


def _require_color(data: dict[str, Any], key: str, path: _Path) -> str:
    value = _require_str(data, key, path)
    if not is_valid_hex(value):
        raise ProjectFileError(f"{path.child(key)}: invalid hex color '{value}'")
    return value


def _optional_color(data: dict[str, Any], key: str, path: _Path) -> str | None:
    if data.get(key) is None:
        return None
    return _require_color(data, key, path)


def _color_or_default(data: dict[str, Any], key: str, default: str, path: _Path) -> str:
    return _optional_color(data, key, path) or default


def _percent_or_default(data: dict[str, Any], key: str, default: float, path: _Path) -> float:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ProjectFileError(f"{path.child(key)}: expected number")
    if not 0 <= value <= 100:
        raise ProjectFileError(f"{path.child(key)}: expected value between 0 and 100")
    return value
