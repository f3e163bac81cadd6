# hootspot/services/highlighting/__init__.py
"""
Finding-to-source-text alignment and highlight merging.

Pipeline: index_findings -> locate_findings -> merge_spans, with
assign_pattern_colors supplying the shared palette.
"""

from hootspot.services.highlighting.colors import (
    assign_pattern_colors,
    golden_angle_color,
    hsl_to_hex,
)
from hootspot.services.highlighting.indexer import (
    finding_key,
    index_findings,
    unique_pattern_names,
)
from hootspot.services.highlighting.quote_matcher import (
    find_quote_spans,
    locate_findings,
    normalize_quote,
    utf16_offsets,
)
from hootspot.services.highlighting.span_merger import (
    group_exact_spans,
    merge_spans,
    validate_regions,
)
from hootspot.services.highlighting.types import (
    HighlightRegion,
    IndexedFinding,
    Span,
    TextSegment,
)

__all__ = [
    "HighlightRegion",
    "IndexedFinding",
    "Span",
    "TextSegment",
    "assign_pattern_colors",
    "find_quote_spans",
    "finding_key",
    "golden_angle_color",
    "group_exact_spans",
    "hsl_to_hex",
    "index_findings",
    "locate_findings",
    "merge_spans",
    "normalize_quote",
    "unique_pattern_names",
    "utf16_offsets",
    "validate_regions",
]
