from dataclasses import replace
from typing import get_args

import pytest

from gantt_color_engine.color_engine import (
    apply_color_changes,
    compute_all_colors,
    compute_color,
    plan_manual_conversion,
)
from gantt_color_engine.color_models import (
    HSL,
    ColorMode,
    ColorModeState,
    HierarchyOptions,
    Node,
    SummaryOptions,
    ThemeOptions,
)
from gantt_color_engine.color_space import generate_monochrome_palette, hex_to_hsl, hsl_to_hex
from gantt_color_engine.contrast import relative_luminance
from gantt_color_engine.mode_strategies import STRATEGIES
from gantt_color_engine.palettes import lookup_palette

TABLEAU = lookup_palette("tableau-10").colors


def _node(node_id, parent=None, kind="task", color="#000000", override=None):
    return Node(id=node_id, own_color=color, kind=kind, parent_id=parent, color_override=override)


def _theme(palette_id="tableau-10", monochrome=None):
    return ColorModeState(
        mode="theme",
        theme_options=ThemeOptions(selected_palette_id=palette_id, custom_monochrome_base=monochrome),
    )


def _colors(nodes, state):
    return [compute_color(node, nodes, state) for node in nodes]


# Manual mode and overrides


def test_manual_mode_returns_own_color_verbatim():
    node = _node("1", color="#abcdef")
    assert compute_color(node, [node], ColorModeState()) == "#abcdef"


def test_manual_mode_ignores_override():
    node = _node("1", color="#abcdef", override="#ff0000")
    assert compute_color(node, [node], ColorModeState(mode="manual")) == "#abcdef"


@pytest.mark.parametrize("mode", ["theme", "summary", "taskType", "hierarchy"])
def test_override_wins_in_automatic_modes(mode):
    node = _node("1", kind="summary", color="#abcdef", override="#FF0000")
    state = replace(_theme(), mode=mode)
    assert compute_color(node, [node], state) == "#FF0000"


def test_every_color_mode_has_a_strategy():
    assert set(STRATEGIES) == set(get_args(ColorMode))


def test_unknown_mode_degrades_to_own_color():
    node = _node("1", color="#123456")
    state = replace(ColorModeState(), mode="rainbow-unicorn")
    assert compute_color(node, [node], state) == "#123456"


# Theme mode


def test_theme_without_palette_keeps_own_color():
    node = _node("1", color="#ABCDEF")
    assert compute_color(node, [node], _theme(palette_id=None)) == "#ABCDEF"
    assert compute_color(node, [node], _theme(palette_id="no-such-palette")) == "#ABCDEF"


def test_theme_root_gets_its_preferred_palette_color():
    # "a" and "b" hash to 177670 and 177671: slots 0 and 1 of a 10-color palette.
    a, b = _node("a"), _node("b")
    assert compute_color(a, [a], _theme()) == TABLEAU[0]
    assert compute_color(a, [a, b], _theme()) == TABLEAU[0]
    assert compute_color(b, [a, b], _theme()) == TABLEAU[1]


def test_theme_single_root_promotes_level_one_groups():
    nodes = [
        _node("a", kind="summary"),
        _node("b", "a", kind="summary"),
        _node("c", "a", kind="summary"),
    ]
    assert _colors(nodes, _theme()) == [TABLEAU[0], TABLEAU[1], TABLEAU[2]]


def test_theme_children_are_lighter_variants_of_their_giver():
    nodes = [
        _node("a", kind="summary"),
        _node("b", kind="summary"),
        _node("c", "a", kind="summary"),
        _node("d", "c"),
    ]
    root_color, _, child_color, grandchild_color = _colors(nodes, _theme())

    assert root_color == TABLEAU[0]  # #4e79a7 -> hsl(211, 36, 48)
    # "c": one level down, hash bucket 2 -> +7 +4 lightness, hue unchanged.
    assert child_color == hsl_to_hex(HSL(211, 36, 59))
    # "d": two levels down, hash bucket 3 -> +14 +6 lightness, hue +1.
    assert grandchild_color == hsl_to_hex(HSL(212, 36, 68))

    root_hsl, child_hsl, grand_hsl = (hex_to_hsl(c) for c in (root_color, child_color, grandchild_color))
    assert root_hsl.l < child_hsl.l < grand_hsl.l
    for hsl in (child_hsl, grand_hsl):
        diff = abs(hsl.h - root_hsl.h)
        assert min(diff, 360 - diff) <= 5


def test_theme_child_lightness_is_capped():
    nodes = [_node("a", kind="summary"), _node("z", kind="summary")]
    parent = "a"
    for level in range(12):
        node_id = f"level-{level}"
        nodes.append(_node(node_id, parent))
        parent = node_id
    deepest = compute_color(nodes[-1], nodes, _theme())
    assert hex_to_hsl(deepest).l <= 89


def test_theme_monochrome_base_wins_over_palette_id():
    node = _node("a")
    colors = generate_monochrome_palette("#1F77B4")
    # stable_hash("a") % 5 == 0
    assert compute_color(node, [node], _theme(palette_id="tableau-10", monochrome="#1F77B4")) == colors[0]


def test_theme_deconflicts_colliding_roots():
    ids = [
        "f47ac10b-58cc-4372-a567-0e02b2c3d479",
        "7c9e6679-7425-40de-944b-e07fc1f90ae7",
        "b17dfd05-3bcf-4537-a053-7d39dfd30ada",
        "d37eee15-4cdf-5648-b164-8e49efe41beb",
        "f58aa038-6efa-7869-d386-ab6baaa63dad",
    ]
    nodes = [_node(node_id, kind="summary") for node_id in ids]
    colors = _colors(nodes, _theme("candy"))
    assert len(set(colors)) == 5
    assert set(colors) <= set(lookup_palette("candy").colors)


def test_theme_root_colors_survive_reordering():
    aaa, bbb, ccc = (_node(f"root-{s}", kind="summary") for s in ("aaa", "bbb", "ccc"))
    ordered = [aaa, bbb, ccc]
    shuffled = [ccc, aaa, bbb]

    first = {node.id: compute_color(node, ordered, _theme()) for node in ordered}
    second = {node.id: compute_color(node, shuffled, _theme()) for node in ordered}

    assert first == second
    assert len(set(first.values())) == 3
    assert set(first.values()) <= set(TABLEAU)


# Summary mode


def _summary_tree():
    return [
        _node("outer", kind="summary", color="#111111"),
        _node("inner", "outer", kind="summary", color="#222222"),
        _node("leaf", "inner", color="#333333"),
        _node("direct", "outer", color="#444444"),
        _node("gate", "outer", kind="milestone", color="#555555"),
        _node("loose", color="#666666"),
        _node("mid", "inner", color="#777777"),
        _node("deep", "mid", color="#888888"),
    ]


def test_summary_mode_inherits_from_nearest_summary():
    nodes = _summary_tree()
    colors = compute_all_colors(nodes, ColorModeState(mode="summary"))
    assert colors["outer"] == "#111111"
    assert colors["inner"] == "#222222"
    assert colors["leaf"] == "#222222"
    assert colors["direct"] == "#111111"
    assert colors["deep"] == "#222222"
    assert colors["loose"] == "#666666"


def test_summary_mode_milestone_accent():
    nodes = _summary_tree()
    accent = ColorModeState(mode="summary", summary_options=SummaryOptions(True, "#CA8A04"))
    plain = ColorModeState(mode="summary", summary_options=SummaryOptions(False, "#CA8A04"))
    assert compute_all_colors(nodes, accent)["gate"] == "#CA8A04"
    assert compute_all_colors(nodes, plain)["gate"] == "#111111"


# Task type mode


def test_task_type_mode_colors_by_kind():
    state = ColorModeState(mode="taskType")
    options = state.task_type_options
    nodes = [_node("s", kind="summary"), _node("t"), _node("m", kind="milestone")]
    assert _colors(nodes, state) == [options.summary_color, options.task_color, options.milestone_color]


# Hierarchy mode


def test_hierarchy_root_gets_base_color_exactly():
    node = _node("r")
    state = ColorModeState(mode="hierarchy", hierarchy_options=HierarchyOptions(base_color="#0F6CBD"))
    assert compute_color(node, [node], state) == "#0F6CBD"


def test_hierarchy_levels_lighten_until_the_cap():
    nodes = [_node("r", kind="summary")]
    for level in range(1, 6):
        nodes.append(_node(f"l{level}", nodes[-1].id))
    state = ColorModeState(
        mode="hierarchy",
        hierarchy_options=HierarchyOptions(base_color="#0F6CBD", lighten_percent_per_level=12, max_lighten_percent=36),
    )
    colors = _colors(nodes, state)

    lightness = [hex_to_hsl(color).l for color in colors]
    assert lightness[:4] == [40, 52, 64, 76]
    luminance = [relative_luminance(color) for color in colors[:4]]
    assert all(a < b for a, b in zip(luminance, luminance[1:]))
    assert colors[3] == colors[4] == colors[5]


# Facade behaviour


def test_switching_modes_keeps_option_bags():
    state = _theme("nord")
    switched = state.with_mode("hierarchy").with_mode("theme")
    assert switched == state


@pytest.mark.parametrize("mode", get_args(ColorMode))
def test_batch_matches_single_node_computation(mode):
    nodes = _summary_tree() + [_node("pinned", "outer", override="#00FF00")]
    state = replace(_theme(), mode=mode)
    batch = compute_all_colors(nodes, state)
    assert batch == {node.id: compute_color(node, nodes, state) for node in nodes}


def test_computation_is_idempotent_and_does_not_mutate_input():
    nodes = _summary_tree()
    snapshot = list(nodes)
    first = compute_all_colors(nodes, _theme())
    second = compute_all_colors(nodes, _theme())
    assert first == second
    assert nodes == snapshot


def test_plan_manual_conversion_bakes_displayed_colors():
    nodes = [
        _node("s", kind="summary", color="#0A2E4A"),
        _node("t", "s", color="#000000", override="#FF00FF"),
        _node("m", "s", kind="milestone", color="#000000"),
    ]
    state = ColorModeState(mode="taskType")
    displayed = compute_all_colors(nodes, state)

    changes = plan_manual_conversion(nodes, state)
    assert [change.id for change in changes] == ["t", "m"]
    assert changes[0].previous_override == "#FF00FF"
    assert changes[0].new_color == "#FF00FF"

    baked = apply_color_changes(nodes, changes)
    assert all(node.color_override is None for node in baked)
    assert compute_all_colors(baked, ColorModeState()) == displayed
    assert nodes[1].color_override == "#FF00FF"
