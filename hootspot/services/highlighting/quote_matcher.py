# hootspot/services/highlighting/quote_matcher.py
"""
Quote position matching.

The analysis model returns findings with a free-text quote but no
positions. This module finds where each quote actually occurs in the
source text, tolerating the punctuation and quote marks the model tends
to add or drop at the end of a quote.
"""

import logging
import re
from typing import Iterable

from hootspot.constants import QuoteMatching
from hootspot.services.highlighting.types import IndexedFinding, Span

logger = logging.getLogger(__name__)


_LEADING_STRIP_CHARS = QuoteMatching.QUOTE_CHARS + ".,;:…"
_TRAILING_STRIP_CHARS = QuoteMatching.QUOTE_CHARS + QuoteMatching.TERMINAL_PUNCTUATION
_EXTENSION_CHARS = frozenset(QuoteMatching.TRAILING_EXTENSION_CHARS)


def normalize_quote(quote: str) -> str:
    """
    Strip the decoration the model puts around a quote.

    Removes surrounding whitespace, wrapping quote marks, and any trailing
    run of terminal punctuation. Inner text is left untouched.
    """
    if not quote:
        return ""

    cleaned = quote.strip()
    # Alternate whitespace and char-set stripping until stable, since
    # runs like 'wrong. "' mix both
    while True:
        stripped = cleaned.rstrip().rstrip(_TRAILING_STRIP_CHARS)
        stripped = stripped.lstrip().lstrip(_LEADING_STRIP_CHARS)
        if stripped == cleaned:
            return cleaned
        cleaned = stripped


def _extend_trailing(source_text: str, end: int, limit: int) -> int:
    """Advance end through punctuation/quote characters, stopping at limit."""
    while end < limit and source_text[end] in _EXTENSION_CHARS:
        end += 1
    return end


def find_quote_spans(source_text: str, quote: str) -> list[Span]:
    """
    Find every occurrence of a quote in the source text.

    Matching is a case-insensitive literal search (no word boundaries) for
    the normalized quote. Each match is then extended forward through the
    punctuation or closing quote that immediately follows it in the source.

    Args:
        source_text: The original text that was analyzed
        quote: The finding's specific_quote, as returned by the model

    Returns:
        Non-overlapping spans in ascending order. Empty when the quote is
        blank or not present.
    """
    if not source_text or not quote or not quote.strip():
        return []

    needle = normalize_quote(quote)
    if not needle:
        return []

    pattern = re.compile(re.escape(needle), re.IGNORECASE)
    raw = [(m.start(), m.end()) for m in pattern.finditer(source_text)]

    spans = []
    for i, (start, end) in enumerate(raw):
        # Never extend into the next occurrence
        limit = raw[i + 1][0] if i + 1 < len(raw) else len(source_text)
        spans.append(Span(start, _extend_trailing(source_text, end, limit)))

    return spans


def locate_findings(
    source_text: str,
    indexed_findings: Iterable[IndexedFinding],
) -> list[tuple[Span, IndexedFinding]]:
    """
    Pair every quote occurrence with the finding that claimed it.

    Findings whose quote cannot be found contribute nothing. They remain in
    the caller's findings list; no placeholder span is produced.
    """
    located: list[tuple[Span, IndexedFinding]] = []
    missing = 0

    for finding in indexed_findings:
        spans = find_quote_spans(source_text, finding.specific_quote)
        if not spans:
            missing += 1
            logger.debug(
                f"Quote not found for '{finding.pattern_name}' "
                f"(display_index={finding.display_index}): {finding.specific_quote[:60]!r}"
            )
            continue
        located.extend((span, finding) for span in spans)

    if missing:
        logger.info(f"{missing} finding(s) had no locatable quote in the source text")

    return located


def utf16_offsets(source_text: str, span: Span) -> tuple[int, int]:
    """
    Convert a code-point span to UTF-16 code unit offsets.

    Browser consumers index strings in UTF-16, where characters outside the
    BMP (most emoji) count as two units.
    """
    start = len(source_text[:span.start].encode("utf-16-le")) // 2
    length = len(source_text[span.start:span.end].encode("utf-16-le")) // 2
    return start, start + length
