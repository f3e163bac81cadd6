# hootspot/services/highlighting/span_merger.py
"""
Merge quote spans into non-overlapping highlight regions.

Several findings often quote the same or overlapping text. The renderer
needs one highlight per stretch of text, carrying every finding behind
it, so spans are first grouped by exact position and then swept left to
right, extending the current region while the next one overlaps it.
"""

import logging
from typing import Iterable, Sequence

from hootspot.errors import HighlightInvariantError
from hootspot.services.highlighting.types import HighlightRegion, IndexedFinding, Span

logger = logging.getLogger(__name__)


def group_exact_spans(located: Iterable[tuple[Span, IndexedFinding]]) -> list[HighlightRegion]:
    """
    Collapse spans with identical (start, end) into one region.

    Findings landing on the same span are deduplicated by display index.
    Regions come back in first-seen order.
    """
    by_position: dict[tuple[int, int], HighlightRegion] = {}

    for span, finding in located:
        key = (span.start, span.end)
        region = by_position.get(key)
        if region is None:
            by_position[key] = HighlightRegion(start=span.start, end=span.end, findings=[finding])
        elif all(f.display_index != finding.display_index for f in region.findings):
            region.findings.append(finding)

    return list(by_position.values())


def merge_spans(located: Iterable[tuple[Span, IndexedFinding]]) -> list[HighlightRegion]:
    """
    Produce sorted, pairwise non-overlapping highlight regions.

    Regions overlap when the next one starts strictly before the current one
    ends; touching regions stay separate. When regions are merged, findings
    are deduplicated by pattern_name only, so two different quotes of the
    same pattern inside one merged region are shown once.

    Args:
        located: (span, finding) pairs, typically from locate_findings()

    Returns:
        Regions sorted by start. Every input span lies inside exactly one.
    """
    groups = group_exact_spans(located)
    if not groups:
        return []

    groups.sort(key=lambda r: (r.start, r.end))

    merged: list[HighlightRegion] = []
    current = HighlightRegion(groups[0].start, groups[0].end, list(groups[0].findings))

    for nxt in groups[1:]:
        if nxt.start < current.end:
            present = {f.pattern_name for f in current.findings}
            for finding in nxt.findings:
                if finding.pattern_name not in present:
                    current.findings.append(finding)
                    present.add(finding.pattern_name)
            current.end = max(current.end, nxt.end)
        else:
            merged.append(current)
            current = HighlightRegion(nxt.start, nxt.end, list(nxt.findings))

    merged.append(current)

    if len(merged) < len(groups):
        logger.debug(f"Merged {len(groups)} span groups into {len(merged)} highlight regions")

    return merged


def validate_regions(regions: Sequence[HighlightRegion]) -> None:
    """Raise HighlightInvariantError unless regions are sorted and disjoint."""
    for region in regions:
        if region.start > region.end:
            raise HighlightInvariantError(f"Region has start {region.start} after end {region.end}")
    for current, nxt in zip(regions, regions[1:]):
        if current.end > nxt.start:
            raise HighlightInvariantError(
                f"Regions overlap or are unsorted: "
                f"({current.start}-{current.end}) then ({nxt.start}-{nxt.end})"
            )
