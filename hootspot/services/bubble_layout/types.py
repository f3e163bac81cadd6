# hootspot/services/bubble_layout/types.py
"""
Data types for the bubble chart layout.
"""

import math
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class BubbleNode:
    """
    One finding drawn as a bubble.

    Attributes:
        id: "<pattern_name>-<display_index>", matches the report card link
        name: Short display label
        strength: Finding strength (1-10)
        category: Category key used for clustering
        color: Pattern color
        radius: Bubble radius in px
        pattern_name: Stable pattern identifier
        display_index: Shared finding index
        x, y: Position after layout (None before)
        vx, vy: Velocity during relaxation
    """
    id: str
    name: str
    strength: int
    category: str
    color: str
    radius: float
    pattern_name: str = ""
    display_index: int = 0
    x: Optional[float] = None
    y: Optional[float] = None
    vx: float = 0.0
    vy: float = 0.0

    @property
    def positioned(self) -> bool:
        return self.x is not None and self.y is not None

    def distance_to(self, other: "BubbleNode") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Anchor:
    """Target point a node is pulled toward."""
    x: float
    y: float


@dataclass
class CategoryHull:
    """
    Outline enclosing one category's bubbles.

    A category with a single bubble degenerates to a circle (kind="circle",
    center and radius set). Otherwise kind="polygon" and points holds the
    convex hull vertices in counter-clockwise order.
    """
    category: str
    color: str
    kind: str
    points: list[tuple[float, float]] = field(default_factory=list)
    center: Optional[tuple[float, float]] = None
    radius: float = 0.0
    node_count: int = 0

    def svg_path(self) -> str:
        """SVG path data for the hull outline."""
        if self.kind == "circle":
            cx, cy = self.center
            r = self.radius
            return (
                f"M {cx},{cy - r} "
                f"a {r},{r} 0 1,0 0,{r * 2} "
                f"a {r},{r} 0 1,0 0,-{r * 2} z"
            )
        if not self.points:
            return ""
        head, *rest = self.points
        segments = [f"M {head[0]},{head[1]}"] + [f"L {x},{y}" for x, y in rest]
        return " ".join(segments) + " Z"


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned viewport rectangle (SVG viewBox)."""
    min_x: float
    min_y: float
    width: float
    height: float

    def as_viewbox(self) -> str:
        return f"{self.min_x} {self.min_y} {self.width} {self.height}"


@dataclass
class BubbleLayout:
    """Positioned nodes plus the hulls and viewport that frame them."""
    nodes: list[BubbleNode] = field(default_factory=list)
    hulls: list[CategoryHull] = field(default_factory=list)
    width: float = 0.0
    height: float = 0.0
    bounds: Optional[Bounds] = None
    seed: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return not self.nodes
