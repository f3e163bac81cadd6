# hootspot/services/bubble_layout/hull.py
"""
Category hulls and chart bounds.

Each category's bubbles are enclosed by the convex hull of points sampled
around every bubble's padded circle. A lone bubble gets a padded circle
instead, since a hull of one circle is just that circle.
"""

import math
from typing import Iterable, Sequence

from hootspot.constants import BubbleDefaults
from hootspot.services.bubble_layout.types import Bounds, BubbleNode, CategoryHull

Point = tuple[float, float]


def sample_circle(x: float, y: float, radius: float, samples: int = BubbleDefaults.HULL_SAMPLES) -> list[Point]:
    """Evenly spaced points on a circle, starting at angle 0."""
    return [
        (
            x + radius * math.cos(2 * math.pi * i / samples),
            y + radius * math.sin(2 * math.pi * i / samples),
        )
        for i in range(samples)
    ]


def _cross(o: Point, a: Point, b: Point) -> float:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def convex_hull(points: Iterable[Point]) -> list[Point]:
    """
    Convex hull by Andrew's monotone chain.

    Returns vertices in counter-clockwise order without repeating the first
    point. Collinear points are dropped. Fewer than three distinct points
    come back as-is (sorted).
    """
    pts = sorted(set(points))
    if len(pts) < 3:
        return pts

    lower: list[Point] = []
    for p in pts:
        while len(lower) >= 2 and _cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)

    upper: list[Point] = []
    for p in reversed(pts):
        while len(upper) >= 2 and _cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)

    return lower[:-1] + upper[:-1]


def category_hulls(
    nodes: Sequence[BubbleNode],
    padding: float = BubbleDefaults.HULL_PADDING,
    samples: int = BubbleDefaults.HULL_SAMPLES,
) -> list[CategoryHull]:
    """
    Build one hull per category, in first-occurrence order of categories.

    The hull takes the color of the category's first bubble.
    """
    groups: dict[str, list[BubbleNode]] = {}
    for node in nodes:
        if node.positioned:
            groups.setdefault(node.category, []).append(node)

    hulls = []
    for category, members in groups.items():
        first = members[0]
        if len(members) == 1:
            hulls.append(CategoryHull(
                category=category,
                color=first.color,
                kind="circle",
                center=(first.x, first.y),
                radius=first.radius + padding,
                node_count=1,
            ))
            continue

        cloud: list[Point] = []
        for node in members:
            cloud.extend(sample_circle(node.x, node.y, node.radius + padding, samples))
        hulls.append(CategoryHull(
            category=category,
            color=first.color,
            kind="polygon",
            points=convex_hull(cloud),
            node_count=len(members),
        ))

    return hulls


def layout_bounds(
    nodes: Sequence[BubbleNode],
    hull_padding: float = BubbleDefaults.HULL_PADDING,
    zoom_padding: float = BubbleDefaults.VIEWBOX_ZOOM_PADDING,
) -> Bounds | None:
    """Viewport enclosing every bubble, its hull padding, and a zoom margin."""
    placed = [n for n in nodes if n.positioned]
    if not placed:
        return None

    min_x = min(n.x - n.radius - hull_padding for n in placed)
    max_x = max(n.x + n.radius + hull_padding for n in placed)
    min_y = min(n.y - n.radius - hull_padding for n in placed)
    max_y = max(n.y + n.radius + hull_padding for n in placed)

    return Bounds(
        min_x=min_x - zoom_padding,
        min_y=min_y - zoom_padding,
        width=(max_x - min_x) + zoom_padding * 2,
        height=(max_y - min_y) + zoom_padding * 2,
    )
