# hootspot/services/bubble_layout/forces.py
"""
Force-directed relaxation for the bubble chart.

A small velocity-based simulation in the style of common force-directed
graph engines: each tick applies a centering force, an x/y pull toward
each node's anchor, and pairwise collision avoidance, then integrates
velocities with decay while a cooling factor (alpha) runs down to its
minimum over the configured number of ticks.

The planner only depends on the RelaxationEngine protocol, so another
engine can be injected in place of ForceRelaxation.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import Protocol, Sequence

from hootspot.constants import BubbleDefaults
from hootspot.services.bubble_layout.types import Anchor, BubbleNode

logger = logging.getLogger(__name__)

# Upper bound on overlap-resolution sweeps after the simulation
MAX_RESOLVE_PASSES = 500
OVERLAP_EPSILON = 1e-6


class RelaxationEngine(Protocol):
    """Positions nodes in place; nodes must already carry x/y seeds."""

    def relax(
        self,
        nodes: Sequence[BubbleNode],
        anchors: Sequence[Anchor],
        center: tuple[float, float],
        iterations: int,
        rng: random.Random,
    ) -> Sequence[BubbleNode]:
        ...


@dataclass
class ForceRelaxation:
    """
    Default relaxation engine.

    Attributes:
        center_strength: Fraction of the centroid offset removed each tick
        anchor_strength: Pull toward the per-node anchor (scaled by alpha)
        collision_strength: Fraction of a collision overlap corrected per pass
        collision_buffer: px added to each radius for collisions
        collision_passes: Collision passes per tick
        velocity_decay: Fraction of velocity lost per tick
        alpha_min: Alpha reached after the configured number of ticks
    """
    center_strength: float = BubbleDefaults.CENTER_STRENGTH
    anchor_strength: float = BubbleDefaults.ANCHOR_STRENGTH
    collision_strength: float = BubbleDefaults.COLLISION_STRENGTH
    collision_buffer: float = BubbleDefaults.COLLISION_BUFFER
    collision_passes: int = BubbleDefaults.COLLISION_PASSES
    velocity_decay: float = BubbleDefaults.VELOCITY_DECAY
    alpha_min: float = BubbleDefaults.ALPHA_MIN

    def relax(
        self,
        nodes: Sequence[BubbleNode],
        anchors: Sequence[Anchor],
        center: tuple[float, float],
        iterations: int,
        rng: random.Random,
    ) -> Sequence[BubbleNode]:
        if not nodes:
            return nodes
        if len(anchors) != len(nodes):
            raise ValueError(f"Expected {len(nodes)} anchors, got {len(anchors)}")

        alpha = 1.0
        alpha_decay = 1 - math.pow(self.alpha_min, 1 / max(1, iterations))

        for _ in range(iterations):
            alpha += (0.0 - alpha) * alpha_decay
            self._apply_center(nodes, center)
            self._apply_anchor(nodes, anchors, alpha)
            for _ in range(self.collision_passes):
                self._apply_collision(nodes, rng)
            for node in nodes:
                node.vx *= 1 - self.velocity_decay
                node.vy *= 1 - self.velocity_decay
                node.x += node.vx
                node.y += node.vy

        resolve_overlaps(nodes, self.collision_buffer)
        return nodes

    def _apply_center(self, nodes: Sequence[BubbleNode], center: tuple[float, float]) -> None:
        cx, cy = center
        mean_x = sum(n.x for n in nodes) / len(nodes)
        mean_y = sum(n.y for n in nodes) / len(nodes)
        shift_x = (mean_x - cx) * self.center_strength
        shift_y = (mean_y - cy) * self.center_strength
        for node in nodes:
            node.x -= shift_x
            node.y -= shift_y

    def _apply_anchor(self, nodes: Sequence[BubbleNode], anchors: Sequence[Anchor], alpha: float) -> None:
        k = self.anchor_strength * alpha
        for node, anchor in zip(nodes, anchors):
            node.vx += (anchor.x - node.x) * k
            node.vy += (anchor.y - node.y) * k

    def _apply_collision(self, nodes: Sequence[BubbleNode], rng: random.Random) -> None:
        # Positions are predicted one step ahead (x + vx), and the correction
        # is split between the pair in proportion to the other's area
        count = len(nodes)
        for i in range(count):
            a = nodes[i]
            ra = a.radius + self.collision_buffer
            xa = a.x + a.vx
            ya = a.y + a.vy
            for j in range(i + 1, count):
                b = nodes[j]
                rb = b.radius + self.collision_buffer
                reach = ra + rb
                dx = xa - (b.x + b.vx)
                dy = ya - (b.y + b.vy)
                dist_sq = dx * dx + dy * dy
                if dist_sq >= reach * reach:
                    continue
                if dx == 0:
                    dx = _jiggle(rng)
                    dist_sq += dx * dx
                if dy == 0:
                    dy = _jiggle(rng)
                    dist_sq += dy * dy
                dist = math.sqrt(dist_sq)
                push = (reach - dist) / dist * self.collision_strength
                dx *= push
                dy *= push
                share = (rb * rb) / (ra * ra + rb * rb)
                a.vx += dx * share
                a.vy += dy * share
                b.vx -= dx * (1 - share)
                b.vy -= dy * (1 - share)


def _jiggle(rng: random.Random) -> float:
    return (rng.random() - 0.5) * 1e-6


def overlapping_pairs(nodes: Sequence[BubbleNode], buffer: float = 0.0) -> list[tuple[int, int]]:
    """Index pairs closer than the sum of their radii plus buffer."""
    pairs = []
    for i in range(len(nodes)):
        for j in range(i + 1, len(nodes)):
            a, b = nodes[i], nodes[j]
            reach = a.radius + b.radius + buffer
            if a.distance_to(b) < reach - OVERLAP_EPSILON:
                pairs.append((i, j))
    return pairs


def resolve_overlaps(nodes: Sequence[BubbleNode], buffer: float) -> int:
    """
    Push apart any pair still overlapping after the simulation.

    Pairs closer than their radii plus half the buffer are separated to
    radii + buffer along the line joining their centres, each node moving
    in proportion to the other's radius.
    Coincident centres are split along a direction derived from their
    indexes so the result stays deterministic.

    Returns:
        Number of sweeps performed.
    """
    for sweep in range(1, MAX_RESOLVE_PASSES + 1):
        moved = False
        for i in range(len(nodes)):
            for j in range(i + 1, len(nodes)):
                a, b = nodes[i], nodes[j]
                # Pairs are pushed to the full buffer but only revisited once
                # they fall below half of it, which keeps the sweeps short
                target = a.radius + b.radius + buffer
                dx = b.x - a.x
                dy = b.y - a.y
                dist = math.hypot(dx, dy)
                if dist >= target - buffer / 2 - OVERLAP_EPSILON:
                    continue
                if dist < OVERLAP_EPSILON:
                    angle = (i * 7 + j * 13) % 360 * math.pi / 180
                    dx, dy, dist = math.cos(angle), math.sin(angle), 1.0
                    overlap = target
                else:
                    overlap = target - dist
                total = a.radius + b.radius
                share_a = b.radius / total if total else 0.5
                ux, uy = dx / dist, dy / dist
                a.x -= ux * overlap * share_a
                a.y -= uy * overlap * share_a
                b.x += ux * overlap * (1 - share_a)
                b.y += uy * overlap * (1 - share_a)
                moved = True
        if not moved:
            return sweep
    logger.warning(f"Overlap resolution stopped after {MAX_RESOLVE_PASSES} sweeps")
    return MAX_RESOLVE_PASSES
