from __future__ import annotations

import logging
from functools import cached_property
from types import MappingProxyType
from typing import Callable, Mapping

from .color_models import HSL, ColorMode, ColorModeState, Node
from .color_space import generate_monochrome_palette, hex_to_hsl, hsl_to_hex, lighten
from .hierarchy import (
    NodeIndex,
    NodesLike,
    as_index,
    color_giver_ids,
    depth,
    depth_relative_to,
    nearest_summary,
    theme_color_giver,
)
from .palettes import lookup_palette
from .stable_hash import assign_palette_indices, stable_hash

_LOG = logging.getLogger("gantt_color_engine.mode_strategies")

THEME_CHILD_STEP = 7  # lightness points per level below the color-giver
THEME_SIBLING_STEP = 2  # lightness points per hash bucket among siblings
THEME_MAX_LIGHTNESS = 88


class ColorContext:
    """
    Read-only inputs shared by every node of one computation.

    The id index, the active theme palette and the color-giver slot assignment
    are derived lazily, once per context, so a batch reuses them.
    """

    def __init__(self, nodes: NodesLike, state: ColorModeState) -> None:
        self.index: NodeIndex = as_index(nodes)
        self.state = state

    @cached_property
    def theme_colors(self) -> list[str]:
        options = self.state.theme_options
        if options.custom_monochrome_base:
            return generate_monochrome_palette(options.custom_monochrome_base)
        if options.selected_palette_id:
            palette = lookup_palette(options.selected_palette_id)
            if palette is not None:
                return list(palette.colors)
            _LOG.debug("unknown palette id %r, keeping own colors", options.selected_palette_id)
        return []

    @cached_property
    def theme_assignment(self) -> dict[str, int]:
        return assign_palette_indices(color_giver_ids(self.index), len(self.theme_colors))

    def theme_slot(self, node_id: str) -> int:
        size = len(self.theme_colors)
        return self.theme_assignment.get(node_id, stable_hash(node_id) % size)


def _manual_color(node: Node, ctx: ColorContext) -> str:
    return node.own_color


def _theme_color(node: Node, ctx: ColorContext) -> str:
    colors = ctx.theme_colors
    if not colors:
        return node.own_color

    giver = theme_color_giver(node, ctx.index)
    if giver is None:
        return colors[ctx.theme_slot(node.id)]

    base = colors[ctx.theme_slot(giver.id)]
    if node.id == giver.id:
        return base

    # Children are always lighter than their giver; siblings differ slightly.
    levels = depth_relative_to(node, giver, ctx.index)
    bucket = stable_hash(node.id) % 5
    h, s, l = hex_to_hsl(base)
    lightness = min(THEME_MAX_LIGHTNESS, l + levels * THEME_CHILD_STEP + bucket * THEME_SIBLING_STEP)
    hue = (h + bucket - 2 + 360) % 360
    return hsl_to_hex(HSL(hue, s, lightness))


def _summary_color(node: Node, ctx: ColorContext) -> str:
    options = ctx.state.summary_options
    if node.kind == "milestone" and options.use_milestone_accent:
        return options.milestone_accent_color
    # Summaries define their group's color, nested ones included.
    if node.kind == "summary":
        return node.own_color
    parent = nearest_summary(node, ctx.index)
    if parent is not None:
        return parent.own_color
    return node.own_color


def _task_type_color(node: Node, ctx: ColorContext) -> str:
    options = ctx.state.task_type_options
    if node.kind == "summary":
        return options.summary_color
    if node.kind == "milestone":
        return options.milestone_color
    return options.task_color


def _hierarchy_color(node: Node, ctx: ColorContext) -> str:
    options = ctx.state.hierarchy_options
    level = depth(node, ctx.index)
    amount = min(level * options.lighten_percent_per_level / 100, options.max_lighten_percent / 100)
    return lighten(options.base_color, max(0.0, amount))


Strategy = Callable[[Node, ColorContext], str]

STRATEGIES: Mapping[ColorMode, Strategy] = MappingProxyType(
    {
        "manual": _manual_color,
        "theme": _theme_color,
        "summary": _summary_color,
        "taskType": _task_type_color,
        "hierarchy": _hierarchy_color,
    }
)


def resolve_color(node: Node, ctx: ColorContext) -> str:
    """Override short-circuit (automatic modes only), then the active mode's strategy."""

    mode = ctx.state.mode
    if mode != "manual" and node.color_override:
        return node.color_override

    strategy = STRATEGIES.get(mode)
    if strategy is None:
        _LOG.debug("unknown color mode %r, keeping own color of %s", mode, node.id)
        return node.own_color
    return strategy(node, ctx)
