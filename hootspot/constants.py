# hootspot/constants.py
"""
Centralized magic constants organized by domain.

Deployment-tunable values live in config.Settings; the numbers here are
fixed properties of the highlighting and bubble chart algorithms.
"""

from enum import Enum


class CategoryKey(str, Enum):
    """Closed set of category keys the analysis model classifies into."""
    INTERPERSONAL_PSYCHOLOGICAL = "category_interpersonal_psychological"
    COVERT_INDIRECT_CONTROL = "category_covert_indirect_control"
    SOCIOPOLITICAL_RHETORICAL = "category_sociopolitical_rhetorical"


class QuoteMatching:
    """Characters tolerated around a model-supplied quote."""

    # Straight and curly quotes plus the backtick the model sometimes uses
    QUOTE_CHARS = '"\'“”‘’`'

    # Terminal punctuation stripped from the end of a quote before searching
    TERMINAL_PUNCTUATION = ".,;:-!?…"

    # Characters swallowed after a match so a highlight keeps its closing
    # period or quote mark
    TRAILING_EXTENSION_CHARS = ".,;:\"“”'‘’`-!?"

    IDENTITY_SEPARATOR = "::"


class ColorDefaults:
    """Golden-angle palette used for pattern colors."""

    GOLDEN_ANGLE = 137.5
    SATURATION = 0.7
    LIGHTNESS = 0.6
    FALLBACK_COLOR = "#cccccc"


class BubbleDefaults:
    """Sizing and layout constants for the bubble chart."""

    BASELINE_WIDTH = 500            # Width at which bubbles are unscaled
    MIN_RADIUS = 2                  # Radius floor in px
    RADIUS_PER_STRENGTH = 6         # px of radius per strength point

    # Responsive chart height (interpolated between MIN_WIDTH and MAX_WIDTH)
    MIN_WIDTH = 250
    MAX_WIDTH = 500
    MIN_HEIGHT = 250
    MAX_HEIGHT = 450

    NAME_JITTER = 50                # Spread of name-cluster anchors around category anchor

    # Relaxation forces
    ITERATIONS = 300
    CENTER_STRENGTH = 0.1
    ANCHOR_STRENGTH = 0.2
    COLLISION_STRENGTH = 0.9
    COLLISION_BUFFER = 2.0
    COLLISION_PASSES = 3
    ALPHA_MIN = 0.001
    VELOCITY_DECAY = 0.4

    # Hulls and viewport
    HULL_PADDING = 15.0
    HULL_SAMPLES = 12
    VIEWBOX_ZOOM_PADDING = 20.0
