# tests/unit/test_bubble_layout.py
"""
Unit tests for bubble sizing, seeding, relaxation and hulls.

Exact coordinates are not asserted. Layout tests check the outcomes that
hold for any seed: no overlapping bubbles, and same-category bubbles
grouped closer together than bubbles of different categories.
"""

import itertools
import logging
import math
import random

import pytest

from hootspot.services.bubble_layout import (
    Anchor,
    BubbleNode,
    ForceRelaxation,
    bubble_radius,
    build_bubble_nodes,
    category_anchors,
    category_hulls,
    chart_height,
    convex_hull,
    layout_bounds,
    overlapping_pairs,
    plan_layout,
    resolve_overlaps,
    sample_circle,
    scale_factor,
    seed_anchors,
)
from hootspot.services.highlighting import assign_pattern_colors, index_findings, unique_pattern_names

CATEGORY_A = "category_interpersonal_psychological"
CATEGORY_B = "category_sociopolitical_rhetorical"


@pytest.fixture
def two_category_findings(make_finding):
    findings = [
        make_finding("Ad Hominem", "q1", strength=3, category=CATEGORY_A),
        make_finding("Gaslighting", "q2", strength=3, category=CATEGORY_A),
        make_finding("Guilt Trip", "q3", strength=3, category=CATEGORY_A),
        make_finding("Bandwagon", "q4", strength=3, category=CATEGORY_B),
        make_finding("Fear", "q5", strength=3, category=CATEGORY_B),
        make_finding("Strawman", "q6", strength=3, category=CATEGORY_B),
    ]
    indexed = index_findings(findings)
    colors = assign_pattern_colors(unique_pattern_names(findings))
    return indexed, colors


def _node(node_id, x, y, radius=10.0, category=CATEGORY_A, color="red"):
    return BubbleNode(id=node_id, name=node_id, strength=1, category=category,
                      color=color, radius=radius, x=x, y=y)


def _mean_distance(pairs):
    distances = [a.distance_to(b) for a, b in pairs]
    return sum(distances) / len(distances)


class TestSizing:
    """Radius and scale factor."""

    def test_full_width(self):
        assert scale_factor(500) == 1.0
        assert bubble_radius(10, scale_factor(500)) == 62

    def test_half_width(self):
        assert scale_factor(250) == 0.5
        assert bubble_radius(10, scale_factor(250)) == 32

    def test_wide_container_never_upscales(self):
        assert scale_factor(1200) == 1.0

    def test_unknown_width_is_unscaled(self):
        assert scale_factor(0) == 1.0

    def test_custom_baseline(self):
        assert scale_factor(400, baseline_width=800) == 0.5

    def test_radius_floor(self):
        assert bubble_radius(0, 1.0) == 2
        assert bubble_radius(1, 0.001) > 2

    @pytest.mark.parametrize(
        "width,height",
        [(100, 250), (250, 250), (375, 350), (500, 450), (900, 450)],
    )
    def test_chart_height(self, width, height):
        assert chart_height(width) == pytest.approx(height)


class TestBuildBubbleNodes:
    def test_strength_drives_radius(self, make_finding):
        indexed = index_findings([make_finding("Fear", "q", strength=10)])
        assert build_bubble_nodes(indexed, {}, 500)[0].radius == 62
        assert build_bubble_nodes(indexed, {}, 250)[0].radius == 32
        assert build_bubble_nodes(indexed, {}, 0)[0].radius == 62

    def test_node_fields(self, make_finding):
        indexed = index_findings([
            make_finding("Fear", "a", display_name="Fear Appeal", category=CATEGORY_B),
            make_finding("Fear", "b", display_name="Fear Appeal", category=CATEGORY_B),
        ])
        nodes = build_bubble_nodes(indexed, {"Fear": "hsl(0, 70%, 60%)"}, 500)
        assert [n.id for n in nodes] == ["Fear-0", "Fear-1"]
        assert nodes[0].name == "Fear Appeal"
        assert nodes[0].category == CATEGORY_B
        assert nodes[0].color == "hsl(0, 70%, 60%)"
        assert not nodes[0].positioned

    def test_unknown_pattern_gets_fallback_color(self, make_finding):
        indexed = index_findings([make_finding("Fear", "a")])
        assert build_bubble_nodes(indexed, {}, 500)[0].color == "#cccccc"

    def test_empty(self):
        assert build_bubble_nodes([], {}, 500) == []


class TestSeeding:
    def test_category_anchors_evenly_spaced(self):
        anchors = category_anchors(["a", "b", "c"], 400, 300)
        assert [anchors[c].x for c in "abc"] == [100, 200, 300]
        assert all(anchors[c].y == 150 for c in "abc")

    def test_name_clusters_share_anchor_near_category(self):
        nodes = [
            _node("n1", None, None, category="a"),
            _node("n2", None, None, category="a"),
            _node("n3", None, None, category="b"),
        ]
        nodes[1].name = "n1"
        anchors = seed_anchors(nodes, 300, 200, random.Random(3))
        assert anchors[0] == anchors[1]
        assert abs(anchors[0].x - 100) <= 25 and abs(anchors[0].y - 100) <= 25
        assert abs(anchors[2].x - 200) <= 25

    def test_seeding_is_reproducible(self):
        nodes = [_node(f"n{i}", None, None, category="a" if i % 2 else "b") for i in range(4)]
        first = seed_anchors(nodes, 500, 450, random.Random(11))
        second = seed_anchors(nodes, 500, 450, random.Random(11))
        assert first == second


class TestPlanLayout:
    def test_zero_findings(self):
        layout = plan_layout([], {}, 500)
        assert layout.is_empty
        assert layout.hulls == []

    def test_zero_width_skips_layout(self, two_category_findings):
        indexed, colors = two_category_findings
        layout = plan_layout(indexed, colors, 0)
        assert layout.nodes == []
        assert layout.bounds is None

    @pytest.mark.slow
    @pytest.mark.parametrize("seed", [1, 7, 42, 2024])
    def test_no_overlaps(self, two_category_findings, seed):
        indexed, colors = two_category_findings
        layout = plan_layout(indexed, colors, 500, seed=seed)
        assert len(layout.nodes) == len(indexed)
        assert all(n.positioned for n in layout.nodes)
        assert overlapping_pairs(layout.nodes) == []

    @pytest.mark.parametrize("seed", [1, 7, 42, 2024])
    def test_categories_cluster(self, two_category_findings, seed):
        indexed, colors = two_category_findings
        nodes = plan_layout(indexed, colors, 500, seed=seed).nodes

        pairs = list(itertools.combinations(nodes, 2))
        intra = [(a, b) for a, b in pairs if a.category == b.category]
        inter = [(a, b) for a, b in pairs if a.category != b.category]
        assert _mean_distance(intra) < _mean_distance(inter)

    def test_no_overlaps_with_large_bubbles(self, make_finding):
        findings = [make_finding(f"P{i}", f"q{i}", strength=10, category=CATEGORY_A if i % 2 else CATEGORY_B)
                    for i in range(8)]
        indexed = index_findings(findings)
        layout = plan_layout(indexed, assign_pattern_colors(unique_pattern_names(findings)), 500, seed=5)
        assert overlapping_pairs(layout.nodes) == []

    def test_same_seed_same_layout(self, two_category_findings):
        indexed, colors = two_category_findings
        first = plan_layout(indexed, colors, 500, seed=99)
        second = plan_layout(indexed, colors, 500, seed=99)
        assert [(n.x, n.y) for n in first.nodes] == [(n.x, n.y) for n in second.nodes]

    def test_random_seed_is_recorded(self, two_category_findings):
        indexed, colors = two_category_findings
        first = plan_layout(indexed, colors, 400)
        assert isinstance(first.seed, int)
        replay = plan_layout(indexed, colors, 400, seed=first.seed)
        assert [(n.x, n.y) for n in first.nodes] == [(n.x, n.y) for n in replay.nodes]

    def test_narrow_container_shrinks_bubbles(self, two_category_findings):
        indexed, colors = two_category_findings
        wide = plan_layout(indexed, colors, 500, seed=1)
        narrow = plan_layout(indexed, colors, 250, seed=1)
        assert narrow.nodes[0].radius == pytest.approx(wide.nodes[0].radius / 2 + 1)

    def test_responsive_height_default(self, two_category_findings):
        indexed, colors = two_category_findings
        assert plan_layout(indexed, colors, 250, seed=1).height == 250
        assert plan_layout(indexed, colors, 500, seed=1, container_height=300).height == 300

    def test_one_hull_per_category(self, two_category_findings):
        indexed, colors = two_category_findings
        layout = plan_layout(indexed, colors, 500, seed=3)
        assert [h.category for h in layout.hulls] == [CATEGORY_A, CATEGORY_B]
        assert all(h.kind == "polygon" for h in layout.hulls)
        assert layout.bounds is not None

    def test_injected_engine(self, two_category_findings):
        indexed, colors = two_category_findings
        calls = []

        class RowEngine:
            def relax(self, nodes, anchors, center, iterations, rng):
                calls.append((len(nodes), len(anchors), center, iterations))
                for i, node in enumerate(nodes):
                    node.x, node.y = i * 100.0, 0.0
                return nodes

        layout = plan_layout(indexed, colors, 500, container_height=400, seed=1, iterations=10, engine=RowEngine())
        assert calls == [(6, 6, (250.0, 200.0), 10)]
        assert [n.x for n in layout.nodes] == [0.0, 100.0, 200.0, 300.0, 400.0, 500.0]

    def test_overlapping_engine_output_logged(self, two_category_findings, caplog):
        indexed, colors = two_category_findings

        class StackEngine:
            def relax(self, nodes, anchors, center, iterations, rng):
                for node in nodes:
                    node.x, node.y = center
                return nodes

        with caplog.at_level(logging.WARNING, logger="hootspot.services.bubble_layout.planner"):
            plan_layout(indexed, colors, 500, seed=1, engine=StackEngine())

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "StackEngine left 15 overlapping" in warnings[0].getMessage()

    def test_default_engine_logs_no_overlap_warning(self, two_category_findings, caplog):
        indexed, colors = two_category_findings
        with caplog.at_level(logging.WARNING, logger="hootspot.services.bubble_layout.planner"):
            plan_layout(indexed, colors, 500, seed=1)
        assert not [r for r in caplog.records if r.name == "hootspot.services.bubble_layout.planner"]


class TestForceRelaxation:
    def test_anchor_count_must_match(self):
        nodes = [_node("a", 0.0, 0.0)]
        with pytest.raises(ValueError):
            ForceRelaxation().relax(nodes, [], (0, 0), 10, random.Random(0))

    def test_empty_nodes(self):
        assert ForceRelaxation().relax([], [], (0, 0), 10, random.Random(0)) == []

    def test_nodes_pulled_toward_anchor(self):
        node = _node("a", 0.0, 0.0)
        ForceRelaxation().relax([node], [Anchor(100.0, 100.0)], (100.0, 100.0), 300, random.Random(0))
        assert math.hypot(node.x - 100.0, node.y - 100.0) < 5

    def test_coincident_nodes_separated(self):
        nodes = [_node("a", 50.0, 50.0), _node("b", 50.0, 50.0), _node("c", 50.0, 50.0)]
        anchors = [Anchor(50.0, 50.0)] * 3
        ForceRelaxation().relax(nodes, anchors, (50.0, 50.0), 300, random.Random(0))
        assert overlapping_pairs(nodes) == []


class TestResolveOverlaps:
    def test_coincident_pair(self):
        nodes = [_node("a", 0.0, 0.0), _node("b", 0.0, 0.0)]
        resolve_overlaps(nodes, buffer=2.0)
        assert nodes[0].distance_to(nodes[1]) == pytest.approx(22.0)

    def test_already_separated_untouched(self):
        nodes = [_node("a", 0.0, 0.0), _node("b", 100.0, 0.0)]
        assert resolve_overlaps(nodes, buffer=2.0) == 1
        assert (nodes[1].x, nodes[1].y) == (100.0, 0.0)

    def test_dense_pile_resolved(self):
        rng = random.Random(8)
        nodes = [_node(str(i), rng.random() * 10, rng.random() * 10, radius=5 + i) for i in range(12)]
        resolve_overlaps(nodes, buffer=2.0)
        assert overlapping_pairs(nodes) == []


class TestHulls:
    def test_convex_hull_drops_interior_points(self):
        hull = convex_hull([(0, 0), (1, 0), (1, 1), (0, 1), (0.5, 0.5)])
        assert hull == [(0, 0), (1, 0), (1, 1), (0, 1)]

    def test_convex_hull_small_inputs(self):
        assert convex_hull([]) == []
        assert convex_hull([(1, 1), (1, 1)]) == [(1, 1)]

    def test_sample_circle(self):
        points = sample_circle(10, 20, 5, samples=4)
        assert len(points) == 4
        for x, y in points:
            assert math.hypot(x - 10, y - 20) == pytest.approx(5)

    def test_single_bubble_category_is_circle(self):
        """A lone bubble's hull is a circle of radius + padding around it."""
        node = _node("solo", 40.0, 60.0, radius=12.0, color="blue")
        (hull,) = category_hulls([node], padding=15)
        assert hull.kind == "circle"
        assert hull.center == (40.0, 60.0)
        assert hull.radius == 27.0
        assert hull.points == []
        assert hull.color == "blue"
        assert hull.svg_path() == "M 40.0,33.0 a 27.0,27.0 0 1,0 0,54.0 a 27.0,27.0 0 1,0 0,-54.0 z"

    def test_multi_bubble_hull_encloses_padded_circles(self):
        nodes = [_node("a", 0.0, 0.0), _node("b", 60.0, 10.0), _node("c", 30.0, 50.0)]
        (hull,) = category_hulls(nodes, padding=15, samples=12)
        assert hull.kind == "polygon"
        assert hull.node_count == 3

        cloud = [p for n in nodes for p in sample_circle(n.x, n.y, n.radius + 15, 12)]
        vertices = hull.points
        for px, py in cloud:
            for (ax, ay), (bx, by) in zip(vertices, vertices[1:] + vertices[:1]):
                # Counter-clockwise hull: every point is on or left of each edge
                assert (bx - ax) * (py - ay) - (by - ay) * (px - ax) >= -1e-9

    def test_hull_svg_path_polygon(self):
        nodes = [_node("a", 0.0, 0.0), _node("b", 60.0, 0.0)]
        (hull,) = category_hulls(nodes)
        path = hull.svg_path()
        assert path.startswith("M ") and path.endswith(" Z")

    def test_hulls_grouped_by_category(self):
        nodes = [
            _node("a", 0.0, 0.0, category="x"),
            _node("b", 100.0, 0.0, category="y"),
            _node("c", 20.0, 0.0, category="x"),
        ]
        hulls = category_hulls(nodes)
        assert [(h.category, h.kind, h.node_count) for h in hulls] == [("x", "polygon", 2), ("y", "circle", 1)]

    def test_unpositioned_nodes_ignored(self):
        assert category_hulls([_node("a", None, None)]) == []


class TestLayoutBounds:
    def test_bounds_include_padding(self):
        nodes = [_node("a", 0.0, 0.0, radius=10.0), _node("b", 100.0, 50.0, radius=5.0)]
        bounds = layout_bounds(nodes, hull_padding=15, zoom_padding=20)
        # x: -25..120, y: -25..70 before the 20px zoom margin
        assert bounds.min_x == -45.0
        assert bounds.min_y == -45.0
        assert bounds.width == 185.0
        assert bounds.height == 135.0
        assert bounds.as_viewbox() == "-45.0 -45.0 185.0 135.0"

    def test_no_nodes(self):
        assert layout_bounds([]) is None
