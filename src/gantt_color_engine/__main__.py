from __future__ import annotations

import argparse
import logging
import sys
import webbrowser
from dataclasses import replace
from pathlib import Path
from typing import get_args

import yaml

from .color_models import ColorMode, ColorModeState
from .color_space import is_valid_hex
from .palettes import CATEGORY_LABELS, lookup_palette, palettes_by_category
from .parse_project import ProjectFileError, load_project
from .preview_rows import to_preview_rows
from .render_preview import render_preview


def _parse_hex(value: str) -> str:
    if not is_valid_hex(value):
        raise argparse.ArgumentTypeError(f"invalid color '{value}', expected #RRGGBB or #RGB")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute Gantt task colors and legible label colors",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("project", nargs="?", help="Path to project YAML")
    parser.add_argument("--mode", choices=get_args(ColorMode), help="Override the project's color mode")
    parser.add_argument("--palette", help="Theme palette id (implies --mode theme unless given)")
    parser.add_argument(
        "--monochrome",
        type=_parse_hex,
        help="Base color for a generated monochrome theme (implies --mode theme unless given)",
    )
    parser.add_argument("--out", help="Also render a preview SVG to this path")
    parser.add_argument("--list-palettes", action="store_true", help="List available palettes and exit")
    parser.add_argument("--verbose", action="store_true", help="Log engine fallbacks")
    parser.add_argument(
        "--view",
        dest="view",
        action="store_true",
        default=False,
        help="Best-effort open the preview after rendering",
    )
    return parser


def _apply_overrides(state: ColorModeState, args: argparse.Namespace) -> ColorModeState:
    theme = state.theme_options
    if args.palette:
        theme = replace(theme, selected_palette_id=args.palette, custom_monochrome_base=None)
    if args.monochrome:
        theme = replace(theme, custom_monochrome_base=args.monochrome)
    mode = args.mode or ("theme" if (args.palette or args.monochrome) else state.mode)
    return replace(state, mode=mode, theme_options=theme)


def _print_palettes() -> None:
    for category, palettes in palettes_by_category().items():
        print(f"{CATEGORY_LABELS[category]}:")
        for palette in palettes:
            print(f"  {palette.id:<18} {palette.name:<18} {' '.join(palette.colors)}")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_palettes:
        _print_palettes()
        return 0
    if not args.project:
        print("Error: a project file is required unless --list-palettes is given", file=sys.stderr)
        return 2
    if args.palette and lookup_palette(args.palette) is None:
        print(f"Error: unknown palette '{args.palette}' (see --list-palettes)", file=sys.stderr)
        return 2

    project_path = Path(args.project)
    try:
        project = load_project(str(project_path))
    except (yaml.YAMLError, ProjectFileError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except FileNotFoundError:
        print(f"Error: project file not found: {project_path}", file=sys.stderr)
        return 1
    except Exception as exc:  # Unexpected
        print(f"Unexpected error while loading project: {exc}", file=sys.stderr)
        return 1

    state = _apply_overrides(project.state, args)
    rows = to_preview_rows(project.nodes, state)
    for row in rows:
        print(f"{'  ' * row.indent}{row.node_id}\t{row.kind}\t{row.color}\t{row.text_color}")

    if args.out:
        if not rows:
            print("Error: project has no tasks, nothing to render", file=sys.stderr)
            return 2
        try:
            render_preview(rows, out_path=args.out, title=project.name or "")
        except Exception as exc:
            print(f"Unexpected error while rendering: {exc}", file=sys.stderr)
            return 1

        if args.view:
            try:
                webbrowser.open(Path(args.out).resolve().as_uri())
            except Exception:
                logging.getLogger("gantt_color_engine.cli").debug("could not open %s", args.out)

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
