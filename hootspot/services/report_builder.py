# hootspot/services/report_builder.py
"""
Report assembly.

Runs the whole highlighting pipeline for one (analysis, source text,
container width) and returns everything the presentation layer needs:
indexed findings, the pattern palette, merged highlight regions and the
bubble layout. Nothing is cached between calls.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Optional, Sequence

from hootspot.config import Settings, get_settings
from hootspot.logging_config import log_stage
from hootspot.schemas.analysis import Analysis
from hootspot.services.bubble_layout import BubbleLayout, plan_layout
from hootspot.services.highlighting import (
    HighlightRegion,
    IndexedFinding,
    TextSegment,
    assign_pattern_colors,
    index_findings,
    locate_findings,
    merge_spans,
    unique_pattern_names,
    validate_regions,
)

logger = logging.getLogger(__name__)


@dataclass
class AnalysisReport:
    """
    Everything derived from one analysis.

    Attributes:
        summary: The analysis summary, passed through
        indexed_findings: Findings in input order with display indexes
        pattern_colors: pattern_name -> color, in first-occurrence order
        highlights: Sorted, non-overlapping highlight regions
        bubble_layout: Positioned bubbles and category hulls
        unmatched_indexes: Display indexes whose quote was not found in the text
    """
    summary: str
    indexed_findings: list[IndexedFinding] = field(default_factory=list)
    pattern_colors: dict[str, str] = field(default_factory=dict)
    highlights: list[HighlightRegion] = field(default_factory=list)
    bubble_layout: BubbleLayout = field(default_factory=BubbleLayout)
    unmatched_indexes: list[int] = field(default_factory=list)

    @property
    def has_findings(self) -> bool:
        return bool(self.indexed_findings)


def build_report(
    analysis: Analysis,
    source_text: str,
    container_width: float,
    *,
    container_height: Optional[float] = None,
    seed: Optional[int] = None,
    settings: Optional[Settings] = None,
    trace_id: Optional[str] = None,
) -> AnalysisReport:
    """
    Build the full report for an analysis.

    Args:
        analysis: Model output (not modified)
        source_text: Text that was analyzed
        container_width: Bubble chart width in px; 0 skips the layout
        container_height: Bubble chart height; responsive default when omitted
        seed: Layout seed; falls back to settings.LAYOUT_SEED, then random
        settings: Overrides get_settings()
        trace_id: Correlates the stage logs of this build

    Returns:
        AnalysisReport. Empty collections, never an exception, for an empty
        findings list or text.
    """
    settings = settings or get_settings()
    trace_id = trace_id or uuid.uuid4().hex[:12]
    findings = analysis.findings

    with log_stage("index", trace_id=trace_id) as metrics:
        indexed = index_findings(findings)
        metrics["findings"] = len(indexed)

    with log_stage("colors"):
        colors = assign_pattern_colors(
            unique_pattern_names(findings),
            saturation=settings.COLOR_SATURATION,
            lightness=settings.COLOR_LIGHTNESS,
        )

    with log_stage("highlight") as metrics:
        located = locate_findings(source_text, indexed) if source_text else []
        highlights = merge_spans(located)
        if settings.debug_checks:
            validate_regions(highlights)
        metrics["spans"] = len(located)
        metrics["regions"] = len(highlights)

    # Taken from the located spans rather than the regions, since merging
    # drops same-pattern findings from a region
    located_indexes = {finding.display_index for _, finding in located}
    unmatched = sorted({f.display_index for f in indexed} - located_indexes)

    with log_stage("layout") as metrics:
        layout = plan_layout(
            indexed,
            colors,
            container_width,
            container_height=container_height,
            seed=seed if seed is not None else settings.LAYOUT_SEED,
            iterations=settings.LAYOUT_ITERATIONS,
            baseline_width=settings.BUBBLE_BASELINE_WIDTH,
            hull_padding=settings.HULL_PADDING,
            hull_samples=settings.HULL_SAMPLES,
            collision_buffer=settings.COLLISION_BUFFER,
        )
        metrics["nodes"] = len(layout.nodes)

    logger.info(
        f"Built report: {len(indexed)} findings, {len(highlights)} highlights, "
        f"{len(unmatched)} unmatched",
        extra={
            "event": "report_built",
            "findings": len(indexed),
            "regions": len(highlights),
            "unmatched": len(unmatched),
        },
    )

    return AnalysisReport(
        summary=analysis.analysis_summary,
        indexed_findings=indexed,
        pattern_colors=colors,
        highlights=highlights,
        bubble_layout=layout,
        unmatched_indexes=unmatched,
    )


def render_segments(source_text: str, regions: Sequence[HighlightRegion]) -> list[TextSegment]:
    """
    Split the text into alternating plain and highlighted segments.

    Concatenating the segment texts reproduces source_text exactly.
    """
    segments: list[TextSegment] = []
    cursor = 0
    for region in regions:
        if region.start > cursor:
            segments.append(TextSegment(cursor, region.start, source_text[cursor:region.start]))
        segments.append(TextSegment(region.start, region.end, source_text[region.start:region.end], region))
        cursor = region.end
    if cursor < len(source_text):
        segments.append(TextSegment(cursor, len(source_text), source_text[cursor:]))
    return segments
