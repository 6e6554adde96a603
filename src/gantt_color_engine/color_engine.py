from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from .color_models import ColorChange, ColorModeState, Node
from .contrast import pick_text_color
from .mode_strategies import ColorContext, resolve_color
from .palettes import list_categories, list_palettes, lookup_palette

__all__ = [
    "apply_color_changes",
    "compute_all_colors",
    "compute_color",
    "list_categories",
    "list_palettes",
    "lookup_palette",
    "pick_text_color",
    "plan_manual_conversion",
]


def compute_color(node: Node, all_nodes: Sequence[Node], state: ColorModeState) -> str:
    """
    Display color of one node under the given color mode state.

    Pure and total: unknown palettes, dangling parents and malformed options
    degrade to the node's own color (or the configured base) instead of raising.
    """

    return resolve_color(node, ColorContext(all_nodes, state))


def compute_all_colors(all_nodes: Sequence[Node], state: ColorModeState) -> dict[str, str]:
    """Colors for every node keyed by id; same result as compute_color per node."""

    ctx = ColorContext(all_nodes, state)
    return {node.id: resolve_color(node, ctx) for node in ctx.index.nodes}


def plan_manual_conversion(all_nodes: Sequence[Node], state: ColorModeState) -> list[ColorChange]:
    """
    Changes that bake the currently displayed colors into the nodes' own colors.

    Each node whose displayed color differs from its own color, or which
    carries an override, gets an entry; applying the changes and switching to
    manual mode leaves the chart looking the same.
    """

    ctx = ColorContext(all_nodes, state)
    changes: list[ColorChange] = []
    for node in ctx.index.nodes:
        new_color = resolve_color(node, ctx)
        if new_color == node.own_color and node.color_override is None:
            continue
        changes.append(
            ColorChange(
                id=node.id,
                previous_color=node.own_color,
                previous_override=node.color_override,
                new_color=new_color,
            )
        )
    return changes


def apply_color_changes(all_nodes: Iterable[Node], changes: Iterable[ColorChange]) -> list[Node]:
    """Return a new snapshot with the changes applied and their overrides cleared."""

    by_id = {change.id: change for change in changes}
    updated: list[Node] = []
    for node in all_nodes:
        change = by_id.get(node.id)
        if change is None:
            updated.append(node)
        else:
            updated.append(replace(node, own_color=change.new_color, color_override=None))
    return updated
