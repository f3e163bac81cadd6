# hootspot/schemas/report.py
"""
Schemas for report endpoints.

POST /v1/report         - Highlights, palette and bubble layout for an analysis
POST /v1/analysis/parse - Validate raw model output into an Analysis
"""

from typing import Literal

from pydantic import BaseModel, Field

from hootspot.constants import ColorDefaults
from hootspot.schemas.analysis import Analysis
from hootspot.services.highlighting import finding_key, hsl_to_hex, utf16_offsets
from hootspot.services.report_builder import AnalysisReport, render_segments


class ReportRequest(BaseModel):
    """Input for a report build."""

    source_text: str = Field(..., description="The text that was analyzed")
    analysis: Analysis = Field(..., description="Analysis returned by the model")
    container_width: float = Field(0, ge=0, description="Bubble chart width in px (0 = not measured)")
    container_height: float | None = Field(None, gt=0, description="Bubble chart height in px")
    seed: int | None = Field(None, description="Layout seed for reproducible bubble positions")


class ParseRequest(BaseModel):
    """Raw model output to validate."""

    raw: str = Field(..., description="Model response, possibly fenced or wrapped in prose")
    source_text: str | None = Field(None, description="Analyzed text, used to sort findings by position")


class IndexedFindingOut(BaseModel):
    """A finding with its display index."""

    display_index: int
    pattern_name: str
    display_name: str
    specific_quote: str
    explanation: str
    strength: int
    category: str
    key: str = Field(..., description="pattern_name::specific_quote, stable across re-renders")
    color: str = Field(..., description="Pattern color")
    hex_color: str = Field(..., description="Pattern color as #rrggbb for SVG and PDF exporters")


class HighlightRegionOut(BaseModel):
    """A merged highlight region."""

    start: int = Field(..., description="Start offset (code points)")
    end: int = Field(..., description="End offset, exclusive (code points)")
    start_utf16: int = Field(..., description="Start offset in UTF-16 code units (JavaScript string index)")
    end_utf16: int = Field(..., description="End offset in UTF-16 code units")
    text: str = Field(..., description="Highlighted source text")
    display_indexes: list[int] = Field(default_factory=list, description="Findings backing this region")
    pattern_names: list[str] = Field(default_factory=list)


class TextSegmentOut(BaseModel):
    """A run of source text, highlighted or plain."""

    start: int
    end: int
    text: str
    highlighted: bool
    display_indexes: list[int] = Field(default_factory=list)


class BubbleNodeOut(BaseModel):
    """A positioned bubble."""

    id: str
    name: str
    strength: int
    category: str
    color: str
    radius: float
    display_index: int
    x: float | None = None
    y: float | None = None


class CategoryHullOut(BaseModel):
    """A category outline."""

    category: str
    color: str
    kind: Literal["circle", "polygon"]
    path: str = Field(..., description="SVG path data")
    node_count: int


class BubbleLayoutOut(BaseModel):
    """Bubble chart layout."""

    width: float
    height: float
    seed: int | None = None
    viewbox: str | None = Field(None, description="SVG viewBox enclosing all bubbles")
    nodes: list[BubbleNodeOut] = Field(default_factory=list)
    hulls: list[CategoryHullOut] = Field(default_factory=list)


class ReportResponse(BaseModel):
    """Response from the report endpoint."""

    summary: str
    has_findings: bool
    findings: list[IndexedFindingOut] = Field(default_factory=list)
    pattern_colors: dict[str, str] = Field(default_factory=dict)
    highlights: list[HighlightRegionOut] = Field(default_factory=list)
    segments: list[TextSegmentOut] = Field(
        default_factory=list,
        description="The whole source text split at highlight boundaries",
    )
    bubble_layout: BubbleLayoutOut
    unmatched_indexes: list[int] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: AnalysisReport, source_text: str) -> "ReportResponse":
        layout = report.bubble_layout
        colors = report.pattern_colors
        utf16 = [utf16_offsets(source_text, r.span) for r in report.highlights]
        return cls(
            summary=report.summary,
            has_findings=report.has_findings,
            findings=[
                IndexedFindingOut(
                    display_index=f.display_index,
                    pattern_name=f.pattern_name,
                    display_name=f.display_name,
                    specific_quote=f.specific_quote,
                    explanation=f.explanation,
                    strength=f.strength,
                    category=f.category,
                    key=finding_key(f.finding),
                    color=colors.get(f.pattern_name, ""),
                    hex_color=hsl_to_hex(colors.get(f.pattern_name, ColorDefaults.FALLBACK_COLOR)),
                )
                for f in report.indexed_findings
            ],
            pattern_colors=colors,
            highlights=[
                HighlightRegionOut(
                    start=r.start,
                    end=r.end,
                    start_utf16=start_utf16,
                    end_utf16=end_utf16,
                    text=r.text(source_text),
                    display_indexes=r.display_indexes,
                    pattern_names=[f.pattern_name for f in r.findings],
                )
                for r, (start_utf16, end_utf16) in zip(report.highlights, utf16)
            ],
            segments=[
                TextSegmentOut(
                    start=s.start,
                    end=s.end,
                    text=s.text,
                    highlighted=s.highlighted,
                    display_indexes=s.region.display_indexes if s.region else [],
                )
                for s in render_segments(source_text, report.highlights)
            ],
            bubble_layout=BubbleLayoutOut(
                width=layout.width,
                height=layout.height,
                seed=layout.seed,
                viewbox=layout.bounds.as_viewbox() if layout.bounds else None,
                nodes=[
                    BubbleNodeOut(
                        id=n.id,
                        name=n.name,
                        strength=n.strength,
                        category=n.category,
                        color=n.color,
                        radius=n.radius,
                        display_index=n.display_index,
                        x=n.x,
                        y=n.y,
                    )
                    for n in layout.nodes
                ],
                hulls=[
                    CategoryHullOut(
                        category=h.category,
                        color=h.color,
                        kind=h.kind,
                        path=h.svg_path(),
                        node_count=h.node_count,
                    )
                    for h in layout.hulls
                ],
            ),
            unmatched_indexes=report.unmatched_indexes,
        )
