# hootspot/services/bubble_layout/planner.py
"""
Bubble chart planning.

Turns indexed findings into sized bubbles and lays them out:

1. Size every bubble from its strength, scaled down for narrow containers
2. Seed anchors: one per category, evenly spaced across the width, and one
   per (category, name) cluster jittered around its category anchor
3. Relax positions with a force simulation (centering, anchor pull,
   collision avoidance)
4. Wrap each category in a hull for rendering

Exact coordinates are not stable across seeds. What holds for any seed is
that bubbles do not overlap and same-category bubbles sit closer together
than bubbles of different categories.
"""

import logging
import random
from typing import Mapping, Optional, Sequence

from hootspot.constants import BubbleDefaults, ColorDefaults
from hootspot.services.bubble_layout.forces import ForceRelaxation, RelaxationEngine, overlapping_pairs
from hootspot.services.bubble_layout.hull import category_hulls, layout_bounds
from hootspot.services.bubble_layout.sizing import bubble_radius, chart_height, scale_factor
from hootspot.services.bubble_layout.types import Anchor, BubbleLayout, BubbleNode
from hootspot.services.highlighting.types import IndexedFinding

logger = logging.getLogger(__name__)


def build_bubble_nodes(
    indexed_findings: Sequence[IndexedFinding],
    color_map: Mapping[str, str],
    container_width: float,
    baseline_width: float = BubbleDefaults.BASELINE_WIDTH,
) -> list[BubbleNode]:
    """One unpositioned bubble per finding, in input order."""
    if not indexed_findings:
        return []

    scale = scale_factor(container_width, baseline_width)
    return [
        BubbleNode(
            id=f"{f.pattern_name}-{f.display_index}",
            name=f.display_name,
            strength=f.strength,
            category=f.category,
            color=color_map.get(f.pattern_name, ColorDefaults.FALLBACK_COLOR),
            radius=bubble_radius(f.strength, scale),
            pattern_name=f.pattern_name,
            display_index=f.display_index,
        )
        for f in indexed_findings
    ]


def category_anchors(categories: Sequence[str], width: float, height: float) -> dict[str, Anchor]:
    """Evenly spaced anchors across the width, all on the vertical centre."""
    step = width / (len(categories) + 1)
    return {
        category: Anchor(x=step * (i + 1), y=height / 2)
        for i, category in enumerate(categories)
    }


def seed_anchors(
    nodes: Sequence[BubbleNode],
    width: float,
    height: float,
    rng: random.Random,
    jitter: float = BubbleDefaults.NAME_JITTER,
) -> list[Anchor]:
    """
    Anchor for every node, aligned with nodes.

    Nodes sharing a category and display name share one anchor, offset
    from the category anchor by up to jitter/2 on each axis.
    """
    categories = list(dict.fromkeys(n.category for n in nodes))
    by_category = category_anchors(categories, width, height)

    clusters: dict[tuple[str, str], Anchor] = {}
    for node in nodes:
        key = (node.category, node.name)
        if key not in clusters:
            base = by_category[node.category]
            clusters[key] = Anchor(
                x=base.x + (rng.random() - 0.5) * jitter,
                y=base.y + (rng.random() - 0.5) * jitter,
            )

    return [clusters[(n.category, n.name)] for n in nodes]


def plan_layout(
    indexed_findings: Sequence[IndexedFinding],
    color_map: Mapping[str, str],
    container_width: float,
    container_height: Optional[float] = None,
    seed: Optional[int] = None,
    iterations: int = BubbleDefaults.ITERATIONS,
    baseline_width: float = BubbleDefaults.BASELINE_WIDTH,
    hull_padding: float = BubbleDefaults.HULL_PADDING,
    hull_samples: int = BubbleDefaults.HULL_SAMPLES,
    collision_buffer: float = BubbleDefaults.COLLISION_BUFFER,
    engine: Optional[RelaxationEngine] = None,
) -> BubbleLayout:
    """
    Size, seed and relax the bubble chart.

    Args:
        indexed_findings: Findings with display indexes
        color_map: pattern_name -> color
        container_width: Rendering width in px; 0 if not yet measured
        container_height: Rendering height; defaults to the responsive height
        seed: Seed for jitter and initial positions. None draws a fresh seed,
            which is recorded on the returned layout.
        iterations: Relaxation ticks
        collision_buffer: Extra px kept between bubbles
        engine: Relaxation engine; ForceRelaxation when omitted

    Returns:
        BubbleLayout. Empty when there are no findings or no width to lay
        out in.
    """
    if not indexed_findings or container_width <= 0:
        return BubbleLayout(width=max(0.0, container_width))

    width = float(container_width)
    height = float(container_height) if container_height else chart_height(width)

    if seed is None:
        seed = random.randrange(2**32)
    rng = random.Random(seed)

    nodes = build_bubble_nodes(indexed_findings, color_map, width, baseline_width)
    anchors = seed_anchors(nodes, width, height, rng)
    for node in nodes:
        node.x = rng.random() * width
        node.y = rng.random() * height

    engine = engine or ForceRelaxation(collision_buffer=collision_buffer)
    engine.relax(nodes, anchors, (width / 2, height / 2), iterations, rng)
    overlaps = overlapping_pairs(nodes)
    if overlaps:
        logger.warning(
            f"{type(engine).__name__} left {len(overlaps)} overlapping bubble pair(s) (seed={seed})",
            extra={"nodes": len(nodes), "seed": seed},
        )

    hulls = category_hulls(nodes, hull_padding, hull_samples)
    logger.debug(
        f"Laid out {len(nodes)} bubbles in {len(hulls)} categories (seed={seed})",
        extra={"nodes": len(nodes), "categories": len(hulls), "seed": seed, "iterations": iterations},
    )

    return BubbleLayout(
        nodes=nodes,
        hulls=hulls,
        width=width,
        height=height,
        bounds=layout_bounds(nodes, hull_padding),
        seed=seed,
    )
