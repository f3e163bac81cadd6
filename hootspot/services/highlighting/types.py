# hootspot/services/highlighting/types.py
"""
Data types for the highlighting engine.
"""

from dataclasses import dataclass, field

from hootspot.schemas.analysis import Finding


@dataclass(frozen=True, order=True)
class Span:
    """Half-open [start, end) character range into the source text."""
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def contains(self, other: "Span") -> bool:
        return self.start <= other.start and other.end <= self.end


@dataclass(frozen=True)
class IndexedFinding:
    """
    A finding plus its display index.

    The display index is shared by every finding with the same
    (pattern_name, specific_quote) and links highlight pills, report cards
    and bubbles together.
    """
    finding: Finding
    display_index: int

    @property
    def pattern_name(self) -> str:
        return self.finding.pattern_name

    @property
    def display_name(self) -> str:
        return self.finding.display_name

    @property
    def specific_quote(self) -> str:
        return self.finding.specific_quote

    @property
    def explanation(self) -> str:
        return self.finding.explanation

    @property
    def strength(self) -> int:
        return self.finding.strength

    @property
    def category(self) -> str:
        return self.finding.category

    @property
    def identity(self) -> tuple[str, str]:
        return (self.finding.pattern_name, self.finding.specific_quote)


@dataclass
class HighlightRegion:
    """A merged highlight and the findings backing it."""
    start: int
    end: int
    findings: list[IndexedFinding] = field(default_factory=list)

    @property
    def span(self) -> Span:
        return Span(self.start, self.end)

    @property
    def display_indexes(self) -> list[int]:
        return [f.display_index for f in self.findings]

    def text(self, source_text: str) -> str:
        return source_text[self.start:self.end]


@dataclass(frozen=True)
class TextSegment:
    """A slice of the source text, either plain or highlighted."""
    start: int
    end: int
    text: str
    region: HighlightRegion | None = None

    @property
    def highlighted(self) -> bool:
        return self.region is not None
