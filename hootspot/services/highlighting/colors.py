# hootspot/services/highlighting/colors.py
"""
Deterministic pattern colors.

Colors depend only on a pattern's position in the first-occurrence
ordering of pattern names, so one findings list always yields the same
palette. Hues are spread by the golden angle to keep neighbours distinct.
"""

import colorsys
import re
from typing import Sequence

from hootspot.constants import ColorDefaults

_HSL_RE = re.compile(
    r"^\s*hsl\(\s*([\d.]+)\s*,\s*([\d.]+)%\s*,\s*([\d.]+)%\s*\)\s*$",
    re.IGNORECASE,
)


def _css_number(value: float) -> str:
    """Render like JavaScript number-to-string: 70.0 -> '70', 12.5 -> '12.5'."""
    value = round(value, 10)
    if value == int(value):
        return str(int(value))
    return repr(value)


def golden_angle_color(
    index: int,
    saturation: float = ColorDefaults.SATURATION,
    lightness: float = ColorDefaults.LIGHTNESS,
) -> str:
    """CSS hsl() color for the index-th pattern."""
    hue = (index * ColorDefaults.GOLDEN_ANGLE) % 360
    return f"hsl({_css_number(hue)}, {_css_number(saturation * 100)}%, {_css_number(lightness * 100)}%)"


def assign_pattern_colors(
    pattern_names: Sequence[str],
    saturation: float = ColorDefaults.SATURATION,
    lightness: float = ColorDefaults.LIGHTNESS,
) -> dict[str, str]:
    """
    Map each unique pattern name to its color.

    Args:
        pattern_names: Unique names in first-occurrence order
            (see indexer.unique_pattern_names). Repeats keep their first color.
    """
    colors: dict[str, str] = {}
    for name in pattern_names:
        if name not in colors:
            colors[name] = golden_angle_color(len(colors), saturation, lightness)
    return colors


def hsl_to_hex(color: str) -> str:
    """
    Convert an hsl() string to #rrggbb.

    Exporters that cannot render CSS hsl() need solid hex colors. Strings
    that are not hsl() are returned unchanged.
    """
    match = _HSL_RE.match(color)
    if not match:
        return color
    hue, sat, light = (float(g) for g in match.groups())
    r, g, b = colorsys.hls_to_rgb((hue % 360) / 360, light / 100, sat / 100)
    return "#{:02x}{:02x}{:02x}".format(*(round(c * 255) for c in (r, g, b)))
