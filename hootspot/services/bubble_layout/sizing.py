# hootspot/services/bubble_layout/sizing.py
"""
Bubble sizing and responsive chart height.
"""

from hootspot.constants import BubbleDefaults


def scale_factor(container_width: float, baseline_width: float = BubbleDefaults.BASELINE_WIDTH) -> float:
    """
    Shrink factor for containers narrower than the baseline.

    An unknown width (0 or negative) means the container has not been
    measured yet; bubbles are then drawn unscaled.
    """
    if container_width <= 0:
        return 1.0
    return min(1.0, container_width / baseline_width)


def bubble_radius(strength: int, scale: float = 1.0) -> float:
    """radius = 2 + strength * 6 * scale, never below the 2px floor."""
    return BubbleDefaults.MIN_RADIUS + max(0, strength) * BubbleDefaults.RADIUS_PER_STRENGTH * scale


def chart_height(container_width: float) -> float:
    """Chart height interpolated linearly between the min and max widths."""
    span = BubbleDefaults.MAX_WIDTH - BubbleDefaults.MIN_WIDTH
    progress = max(0.0, container_width - BubbleDefaults.MIN_WIDTH)
    t = min(1.0, progress / span)
    return BubbleDefaults.MIN_HEIGHT + (BubbleDefaults.MAX_HEIGHT - BubbleDefaults.MIN_HEIGHT) * t
