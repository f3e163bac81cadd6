# hootspot/services/highlighting/indexer.py
"""
Stable display indexes for findings.
"""

from typing import Iterable, Sequence

from hootspot.constants import QuoteMatching
from hootspot.schemas.analysis import Finding
from hootspot.services.highlighting.types import IndexedFinding


def finding_key(finding: Finding) -> str:
    """Identity key shared by duplicate findings."""
    return f"{finding.pattern_name}{QuoteMatching.IDENTITY_SEPARATOR}{finding.specific_quote}"


def index_findings(findings: Sequence[Finding]) -> list[IndexedFinding]:
    """
    Assign each finding a display index.

    Indexes are handed out in list order starting at 0, one per unique
    (pattern_name, specific_quote). Repeats of a key reuse its index, so
    the output has the same length and order as the input.
    """
    # Keyed on the tuple rather than the joined string so a "::" inside a
    # pattern name cannot collide with another identity
    seen: dict[tuple[str, str], int] = {}
    indexed = []
    for finding in findings:
        key = (finding.pattern_name, finding.specific_quote)
        if key not in seen:
            seen[key] = len(seen)
        indexed.append(IndexedFinding(finding=finding, display_index=seen[key]))
    return indexed


def unique_pattern_names(findings: Iterable[Finding | IndexedFinding]) -> list[str]:
    """Pattern names in first-occurrence order."""
    # dict keeps insertion order
    return list(dict.fromkeys(f.pattern_name for f in findings))
