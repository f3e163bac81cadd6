# hootspot/services/bubble_layout/__init__.py
"""
Bubble chart sizing, force-directed layout and category hulls.
"""

from hootspot.services.bubble_layout.forces import (
    ForceRelaxation,
    RelaxationEngine,
    overlapping_pairs,
    resolve_overlaps,
)
from hootspot.services.bubble_layout.hull import (
    category_hulls,
    convex_hull,
    layout_bounds,
    sample_circle,
)
from hootspot.services.bubble_layout.planner import (
    build_bubble_nodes,
    category_anchors,
    plan_layout,
    seed_anchors,
)
from hootspot.services.bubble_layout.sizing import bubble_radius, chart_height, scale_factor
from hootspot.services.bubble_layout.types import (
    Anchor,
    Bounds,
    BubbleLayout,
    BubbleNode,
    CategoryHull,
)

__all__ = [
    "Anchor",
    "Bounds",
    "BubbleLayout",
    "BubbleNode",
    "CategoryHull",
    "ForceRelaxation",
    "RelaxationEngine",
    "bubble_radius",
    "build_bubble_nodes",
    "category_anchors",
    "category_hulls",
    "chart_height",
    "convex_hull",
    "layout_bounds",
    "overlapping_pairs",
    "plan_layout",
    "resolve_overlaps",
    "sample_circle",
    "scale_factor",
    "seed_anchors",
]
