from gantt_color_engine.color_models import Node
from gantt_color_engine.swatches import CURATED_SWATCHES, all_swatches, project_colors


def _nodes(*colors):
    return [Node(id=str(idx), own_color=color) for idx, color in enumerate(colors)]


def test_project_colors_orders_by_frequency_then_first_use():
    nodes = _nodes("#00ff00", "#ff0000", "#FF0000", "#0000ff", "#00FF00", "#f00")
    assert project_colors(nodes) == ["#FF0000", "#00FF00", "#0000FF"]


def test_project_colors_skips_malformed_and_respects_limit():
    nodes = _nodes("teal", "#123456", "#abcdef", "#123456")
    assert project_colors(nodes) == ["#123456", "#ABCDEF"]
    assert project_colors(nodes, max_colors=1) == ["#123456"]
    assert project_colors(nodes, max_colors=0) == []


def test_curated_swatches():
    assert list(CURATED_SWATCHES) == ["blues", "greens", "warm", "neutral"]
    assert all(len(family) == 5 for family in CURATED_SWATCHES.values())
    swatches = all_swatches()
    assert len(swatches) == 20
    assert swatches[0] == "#0A2E4A"
