from __future__ import annotations

from importlib import metadata
from pathlib import Path

import matplotlib

matplotlib.use("Agg")  # ensure headless, deterministic output
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon

from .color_space import normalize_hex
from .preview_rows import PreviewRow

# Layout knobs, in data units (x: bar slots, y: rows).
BAR_WIDTH = 10.0
INDENT_STEP = 0.8
ROW_HEIGHT = 0.6
SUMMARY_HEIGHT = 0.4
MILESTONE_HALF_WIDTH = 0.35
FONT_SCALE = 1.0
TITLE_FONT = 14 * FONT_SCALE
LABEL_FONT = 10 * FONT_SCALE
FOOTER_FONT = 8 * FONT_SCALE


def render_preview(rows: list[PreviewRow], out_path: str, title: str = "") -> None:
    """
    Render a static SVG swatch chart of the computed colors to `out_path`.

    - One row per node; indentation mirrors tree depth.
    - Tasks draw as full bars, summaries as thinner bars, milestones as diamonds.
    - Labels sit inside bars in the text color picked for legibility.
    """

    if not rows:
        raise ValueError("rows must not be empty")

    max_indent = max(row.indent for row in rows)
    fig_height = max(2.0, ROW_HEIGHT * len(rows) + 1.5)
    fig_width = max(6.0, 4.0 + max_indent * INDENT_STEP)
    fig, ax = plt.subplots(figsize=(fig_width, fig_height))
    try:
        ax.set_ylim(-1, len(rows))
        ax.invert_yaxis()
        ax.set_xlim(-0.5, BAR_WIDTH + max_indent * INDENT_STEP + 0.5)
        ax.axis("off")

        fig.suptitle(title, fontsize=TITLE_FONT)
        fig.text(
            0.99,
            0.01,
            f"gantt-color-engine v{_tool_version()}",
            ha="right",
            va="bottom",
            fontsize=FOOTER_FONT,
            alpha=0.8,
        )

        for idx, row in enumerate(rows):
            y = idx
            x_start = row.indent * INDENT_STEP

            if row.kind == "milestone":
                cx = x_start + MILESTONE_HALF_WIDTH
                half_height = ROW_HEIGHT / 1.5
                diamond = [
                    (cx - MILESTONE_HALF_WIDTH, y),
                    (cx, y - half_height),
                    (cx + MILESTONE_HALF_WIDTH, y),
                    (cx, y + half_height),
                ]
                ax.add_patch(Polygon(diamond, closed=True, facecolor=normalize_hex(row.color), edgecolor="black", linewidth=0.5))
                # Label sits beside the diamond, on the page background.
                ax.text(cx + MILESTONE_HALF_WIDTH + 0.2, y, row.name, ha="left", va="center", fontsize=LABEL_FONT)
                continue

            height = SUMMARY_HEIGHT if row.kind == "summary" else ROW_HEIGHT
            ax.barh(
                y,
                width=BAR_WIDTH,
                left=x_start,
                height=height,
                color=normalize_hex(row.color),
                edgecolor="black",
                linewidth=0.5,
            )
            ax.text(
                x_start + 0.2,
                y,
                f"{row.name}  {row.color}",
                ha="left",
                va="center",
                fontsize=LABEL_FONT,
                fontweight="bold" if row.kind == "summary" else "normal",
                color=normalize_hex(row.text_color),
            )

        Path(out_path).parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out_path, format="svg", bbox_inches="tight")
    finally:
        plt.close(fig)


def _tool_version() -> str:
    try:
        return metadata.version("gantt-color-engine")
    except metadata.PackageNotFoundError:
        return "0.0.0"
