# hootspot/errors.py
"""
Exception types raised by HootSpot.

The highlighting core itself degrades gracefully on bad input; these are
raised at the edges (parsing model output) or when an internal invariant
check fails.
"""


class HootSpotError(Exception):
    """Base class for HootSpot errors."""


class AnalysisParseError(HootSpotError):
    """Model output could not be turned into a valid Analysis."""

    def __init__(self, message: str, payload: str = ""):
        super().__init__(message)
        self.payload = payload


class HighlightInvariantError(HootSpotError):
    """Highlight regions are unsorted or overlap."""
