from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from .color_models import Palette, PaletteCategory

DEFAULT_PALETTE_ID = "tableau-10"

CATEGORY_LABELS: Mapping[PaletteCategory, str] = MappingProxyType(
    {
        "classic": "Classic",
        "professional": "Professional",
        "design": "Design Systems",
        "vibrant": "Vibrant",
        "soft": "Soft & Accessible",
    }
)


def _palette(palette_id: str, name: str, category: PaletteCategory, colors: str) -> Palette:
    return Palette(id=palette_id, name=name, category=category, colors=tuple(colors.split()))


COLOR_PALETTES: tuple[Palette, ...] = (
    # Classic charting defaults
    _palette("tableau-10", "Tableau 10", "classic",
             "#4e79a7 #f28e2b #e15759 #76b7b2 #59a14f #edc948 #b07aa1 #ff9da7 #9c755f #bab0ac"),
    _palette("d3-category10", "D3 Category 10", "classic",
             "#1f77b4 #ff7f0e #2ca02c #d62728 #9467bd #8c564b #e377c2 #7f7f7f #bcbd22 #17becf"),
    _palette("office", "Office", "classic",
             "#4472c4 #ed7d31 #a5a5a5 #ffc000 #5b9bd5 #70ad47 #264478 #9e480e #636363 #997300"),
    _palette("google-charts", "Google Charts", "classic",
             "#3366cc #dc3912 #ff9900 #109618 #990099 #0099c6 #dd4477 #66aa00 #b82e2e #316395"),
    # Professional
    _palette("highcharts", "Highcharts", "professional",
             "#2caffe #544fc5 #00e272 #fe6a35 #6b8abc #d568fb #2ee0ca #fa4b42 #feb56a #91e8e1"),
    _palette("ibm-carbon", "IBM Carbon", "professional",
             "#6929c4 #1192e8 #005d5d #9f1853 #fa4d56 #570408 #198038 #002d9c #ee538b #b28600"),
    _palette("corporate-blue", "Corporate Blue", "professional",
             "#0a2e4a #0f6cbd #2b88d8 #62abf5 #115ea3 #4a90c2 #1e3a5f #5b7fa6"),
    _palette("slate", "Slate", "professional",
             "#1e293b #334155 #475569 #64748b #94a3b8 #0f766e #b45309 #7c3aed"),
    _palette("power-bi", "Power BI", "professional",
             "#118dff #12239e #e66c37 #6b007b #e044a7 #744ec2 #d9b300 #d64550 #197278 #1aab40"),
    _palette("economist", "Economist", "professional",
             "#006ba2 #3ebcd2 #379a8b #ebb434 #b4ba39 #9a607f #d1b07c #758d99"),
    _palette("financial-times", "Financial Times", "professional",
             "#0f5499 #990f3d #ff7faa #00994d #96cc28 #ff8833 #593380 #0d7680"),
    # Design systems
    _palette("material-design", "Material Design", "design",
             "#f44336 #e91e63 #9c27b0 #3f51b5 #2196f3 #009688 #4caf50 #ffc107 #ff5722 #795548"),
    _palette("tailwind", "Tailwind", "design",
             "#ef4444 #f97316 #eab308 #22c55e #14b8a6 #3b82f6 #6366f1 #a855f7 #ec4899 #64748b"),
    _palette("flat-ui", "Flat UI", "design",
             "#1abc9c #2ecc71 #3498db #9b59b6 #34495e #f1c40f #e67e22 #e74c3c #95a5a6"),
    _palette("nord", "Nord", "design",
             "#bf616a #d08770 #ebcb8b #a3be8c #b48ead #88c0d0 #81a1c1 #5e81ac #8fbcbb"),
    # Vibrant
    _palette("bold", "Bold", "vibrant",
             "#7f3c8d #11a579 #3969ac #f2b701 #e73f74 #80ba5a #e68310 #008695 #cf1c90 #f97b72"),
    _palette("neon", "Neon", "vibrant",
             "#00f5d4 #00bbf9 #fee440 #f15bb5 #9b5de5 #ff006e #fb5607 #3a86ff"),
    _palette("candy", "Candy", "vibrant",
             "#ff6b6b #4ecdc4 #ffe66d #95e1d3 #f38181 #aa96da #fcbad3 #a8d8ea"),
    _palette("set1", "Set 1", "vibrant",
             "#e41a1c #377eb8 #4daf4a #984ea3 #ff7f00 #ffff33 #a65628 #f781bf #999999"),
    _palette("dark2", "Dark 2", "vibrant",
             "#1b9e77 #d95f02 #7570b3 #e7298a #66a61e #e6ab02 #a6761d #666666"),
    _palette("sunset", "Sunset", "vibrant",
             "#7f1d1d #dc2626 #f97316 #fbbf24 #fde68a #be123c #ea580c #facc15"),
    _palette("rainbow", "Rainbow", "vibrant",
             "#e6194b #f58231 #ffe119 #bfef45 #3cb44b #42d4f4 #4363d8 #911eb4 #f032e6"),
    # Soft and colorblind-friendly
    _palette("okabe-ito", "Okabe-Ito", "soft",
             "#e69f00 #56b4e9 #009e73 #f0e442 #0072b2 #d55e00 #cc79a7 #000000"),
    _palette("pastel", "Pastel", "soft",
             "#fecaca #fed7aa #fef08a #bbf7d0 #bfdbfe #ddd6fe #fbcfe8 #e5e7eb"),
    _palette("set2", "Set 2", "soft",
             "#66c2a5 #fc8d62 #8da0cb #e78ac3 #a6d854 #ffd92f #e5c494 #b3b3b3"),
    _palette("set3", "Set 3", "soft",
             "#8dd3c7 #ffffb3 #bebada #fb8072 #80b1d3 #fdb462 #b3de69 #fccde5 #d9d9d9 #bc80bd"),
    _palette("forest", "Forest", "soft",
             "#1b4332 #2d6a4f #40916c #52b788 #74c69d #95d5b2 #b7e4c7 #d8f3dc"),
)


@lru_cache(maxsize=None)
def _palette_table() -> tuple[Mapping[str, Palette], Mapping[PaletteCategory, tuple[Palette, ...]]]:
    by_id = {palette.id: palette for palette in COLOR_PALETTES}
    by_category = {
        category: tuple(p for p in COLOR_PALETTES if p.category == category) for category in CATEGORY_LABELS
    }
    return MappingProxyType(by_id), MappingProxyType(by_category)


def lookup_palette(palette_id: str | None) -> Palette | None:
    if not palette_id:
        return None
    return _palette_table()[0].get(palette_id)


def list_palettes() -> list[Palette]:
    return list(COLOR_PALETTES)


def list_categories() -> list[PaletteCategory]:
    return list(CATEGORY_LABELS)


def palettes_by_category() -> Mapping[PaletteCategory, tuple[Palette, ...]]:
    """Read-only grouping of the static table, computed on first use."""
    return _palette_table()[1]
