"""Unit tests for the force layout."""

import math

import pytest

from learnmap.mindmap import (
    CanvasMapping,
    ForceConfig,
    apply_boundary_constraints,
    build_graph,
    compute_layout,
    entries_to_graph,
    get_node_color,
    get_node_size,
    get_visible_nodes,
    hide_all_child_nodes,
    open_path,
)
from learnmap.mindmap.layout import BOUNDARY_RADII
from learnmap.models import MindmapData, MindmapLink, MindmapNode, MindmapPath


class TestStyling:
    """Tests for node colors and sizes."""

    @pytest.mark.parametrize(
        "group,color,size",
        [(1, "#8B5CC0", 50), (2, "#B849BA", 30), (3, "#BA496E", 20), (7, "#999", 10)],
    )
    def test_color_and_size(self, group: int, color: str, size: int) -> None:
        assert get_node_color(group) == color
        assert get_node_size(group) == size


class TestBoundaryConstraints:
    """Tests for apply_boundary_constraints."""

    def test_clamps_to_canvas(self) -> None:
        node = MindmapNode(id="a", name="a", group=1, x=-500.0, y=5000.0)
        apply_boundary_constraints(node, 1200, 800, padding=72)
        assert node.x == 72 + 50
        assert node.y == 800 - 72 - 50

    def test_inside_is_unchanged(self) -> None:
        node = MindmapNode(id="a", name="a", group=3, x=600.0, y=400.0)
        apply_boundary_constraints(node, 1200, 800)
        assert (node.x, node.y) == (600.0, 400.0)

    def test_unplaced_node_goes_to_corner(self) -> None:
        node = MindmapNode(id="a", name="a", group=3)
        apply_boundary_constraints(node, 1200, 800, padding=72)
        assert (node.x, node.y) == (97, 97)


class TestBuildGraph:
    """Tests for build_graph and CanvasMapping."""

    def _nodes(self) -> list[MindmapNode]:
        return [
            MindmapNode(id="m", name="m", group=1),
            MindmapNode(id="s1", name="s1", group=2, parent="m"),
            MindmapNode(id="t1", name="t1", group=3, parent="s1"),
        ]

    def test_link_weights(self) -> None:
        config = ForceConfig(link_weight_main=0.8, link_weight=0.65)
        graph = build_graph(
            self._nodes(), [MindmapLink("m", "s1"), MindmapLink("s1", "t1")], config
        )
        assert graph["m"]["s1"]["weight"] == 0.8
        assert graph["s1"]["t1"]["weight"] == 0.65

    def test_links_to_unknown_nodes_are_dropped(self) -> None:
        graph = build_graph(self._nodes(), [MindmapLink("m", "gone")], ForceConfig())
        assert set(graph.nodes) == {"m", "s1", "t1"}
        assert graph.number_of_edges() == 0

    def test_canvas_mapping(self) -> None:
        mapping = CanvasMapping(1200, 800, 100)
        assert mapping.to_layout(600, 400) == (0.0, 0.0)
        assert mapping.to_layout(1100, 100) == (1.0, -1.0)
        assert mapping.to_canvas(-1.0, 1.0) == (100.0, 700.0)


class TestComputeLayout:
    """Tests for compute_layout."""

    def test_visible_nodes_inside_bounds(self, sample_entries) -> None:
        data = entries_to_graph(sample_entries)
        hide_all_child_nodes(data.nodes)
        open_path(MindmapPath("DevOps", "Containers"), data.nodes)

        compute_layout(data, width=1200, height=800, padding=72, seed=3)

        for node in get_visible_nodes(data.nodes):
            radius = BOUNDARY_RADII[node.group]
            assert 72 + radius <= node.x <= 1200 - 72 - radius
            assert 72 + radius <= node.y <= 800 - 72 - radius

    def test_hidden_nodes_are_not_placed(self, sample_entries) -> None:
        data = entries_to_graph(sample_entries)
        hide_all_child_nodes(data.nodes)
        compute_layout(data, seed=3)
        for node in data.nodes:
            if node.group == 1:
                assert node.x is not None
            else:
                assert node.x is None

    def test_all_nodes_when_not_visible_only(self, sample_entries) -> None:
        data = entries_to_graph(sample_entries)
        hide_all_child_nodes(data.nodes)
        compute_layout(data, seed=3, visible_only=False)
        assert all(node.x is not None for node in data.nodes)

    def test_deterministic_with_seed(self, sample_entries) -> None:
        first = entries_to_graph(sample_entries)
        second = entries_to_graph(sample_entries)
        compute_layout(first, seed=7)
        compute_layout(second, seed=7)
        assert [(n.x, n.y) for n in first.nodes] == [(n.x, n.y) for n in second.nodes]

    def test_new_nodes_start_near_parent(self, sample_entries) -> None:
        data = entries_to_graph(sample_entries)
        hide_all_child_nodes(data.nodes)
        compute_layout(data, seed=3)

        open_path(MindmapPath("Backend", "API"), data.nodes)
        ticks = compute_layout(data, seed=3)

        assert ticks > 0
        assert data.get_node("Backend-API").x is not None
        assert data.get_node("Backend-API-GraphQL Basics").x is not None

    def test_empty_graph(self) -> None:
        assert compute_layout(entries_to_graph([])) == 0

    def test_single_node_is_centered(self) -> None:
        data = MindmapData(nodes=[MindmapNode(id="m", name="m", group=1)])
        assert compute_layout(data, width=1200, height=800, seed=1) == 1
        assert (data.nodes[0].x, data.nodes[0].y) == (600.0, 400.0)

    def test_pinned_node_stays_put(self, sample_entries) -> None:
        data = entries_to_graph(sample_entries)
        hide_all_child_nodes(data.nodes)
        open_path(MindmapPath("DevOps", "Containers"), data.nodes)
        pinned = data.get_node("DevOps")
        pinned.fx, pinned.fy = 300.0, 250.0

        compute_layout(data, seed=5)

        assert (pinned.x, pinned.y) == (300.0, 250.0)
        assert data.get_node("DevOps-Containers").x is not None

    def test_nodes_are_spread_apart(self, sample_entries) -> None:
        data = entries_to_graph(sample_entries)
        hide_all_child_nodes(data.nodes)
        open_path(MindmapPath("DevOps", "Containers"), data.nodes)

        compute_layout(data, seed=3)

        visible = get_visible_nodes(data.nodes)
        for i, a in enumerate(visible):
            for b in visible[i + 1:]:
                assert math.dist((a.x, a.y), (b.x, b.y)) > 1

    def test_iterations_are_configurable(self, sample_entries) -> None:
        data = entries_to_graph(sample_entries)
        config = ForceConfig(iterations=1)
        assert compute_layout(data, config=config, seed=3, visible_only=False) == len(data.nodes)
