from __future__ import annotations

from collections import Counter
from types import MappingProxyType
from typing import Iterable, Mapping

from .color_models import Node
from .color_space import is_valid_hex, normalize_hex

CURATED_SWATCHES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "blues": ("#0A2E4A", "#0F6CBD", "#2B88D8", "#62ABF5", "#B4D6FA"),
        "greens": ("#1B4332", "#2D6A4F", "#40916C", "#52B788", "#74C69D"),
        "warm": ("#7F1D1D", "#DC2626", "#F97316", "#FBBF24", "#FDE68A"),
        "neutral": ("#1E293B", "#334155", "#64748B", "#94A3B8", "#CBD5E1"),
    }
)


def all_swatches() -> list[str]:
    """Curated swatches flattened family by family."""
    return [color for family in CURATED_SWATCHES.values() for color in family]


def project_colors(nodes: Iterable[Node], max_colors: int = 12) -> list[str]:
    """
    Own colors used in the project, most frequent first.

    Colors are normalized to uppercase #RRGGBB; ties keep first-seen order.
    Malformed colors are skipped.
    """

    counts = Counter(normalize_hex(node.own_color) for node in nodes if is_valid_hex(node.own_color))
    return [color for color, _ in counts.most_common(max(0, max_colors))]
