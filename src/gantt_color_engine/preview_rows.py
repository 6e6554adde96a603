from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .color_models import ColorModeState, Node, NodeKind
from .contrast import pick_text_color
from .hierarchy import NodeIndex
from .mode_strategies import ColorContext, resolve_color


@dataclass
class PreviewRow:
    """
    Flattened view of a colored node used by the preview renderer.

    Only the fields relevant to drawing are kept: positional order,
    indentation level, node kind, bar color and the legible label color.
    """

    order: int
    indent: int
    node_id: str
    name: str
    kind: NodeKind
    color: str
    text_color: str


def to_preview_rows(nodes: Sequence[Node], state: ColorModeState) -> list[PreviewRow]:
    """
    Convert a node snapshot into preview rows in tree order.

    Roots come in snapshot order, each followed by its descendants depth-first
    (children in snapshot order); nested nodes increase indent by 1. Nodes not
    reachable from a root are appended at indent 0.
    """

    ctx = ColorContext(nodes, state)
    rows: List[PreviewRow] = []
    visited: set[str] = set()

    for node in ctx.index.nodes:
        if ctx.index.is_root(node):
            _append_node(node, ctx, rows, visited, indent=0)
    for node in ctx.index.nodes:
        if node.id not in visited:
            _append_node(node, ctx, rows, visited, indent=0)

    return rows


def _append_node(node: Node, ctx: ColorContext, rows: List[PreviewRow], visited: set[str], indent: int) -> None:
    """Append the node and its unvisited descendants, depth-first."""

    index: NodeIndex = ctx.index
    stack = [(node, indent)]
    while stack:
        current, level = stack.pop()
        if current.id in visited:
            continue
        visited.add(current.id)
        color = resolve_color(current, ctx)
        rows.append(
            PreviewRow(
                order=len(rows),
                indent=level,
                node_id=current.id,
                name=current.name or current.id,
                kind=current.kind,
                color=color,
                text_color=pick_text_color(color),
            )
        )
        # Reversed so children pop in snapshot order.
        stack.extend((child, level + 1) for child in reversed(index.children_of(current.id)))
