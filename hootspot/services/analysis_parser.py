# hootspot/services/analysis_parser.py
"""
Turn raw model output into a validated Analysis.

Models do not reliably return bare JSON: responses arrive wrapped in
markdown fences or surrounded by conversational text. The parser digs the
JSON object out, validates it, and orders findings by where their quote
first appears in the analyzed text.
"""

import json
import logging
import re
from typing import Sequence

from pydantic import ValidationError

from hootspot.errors import AnalysisParseError
from hootspot.schemas.analysis import Analysis, Finding

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


def extract_json(raw: str) -> str:
    """
    Extract a JSON object from a model response.

    Prefers the body of the first markdown fence; otherwise takes the text
    between the first '{' and the last '}'. Returns the input unchanged
    when neither is present.
    """
    if not raw:
        return ""

    fence = _FENCE_RE.search(raw)
    if fence and fence.group(1):
        return fence.group(1).strip()

    first = raw.find("{")
    last = raw.rfind("}")
    if first == -1 or last == -1 or last < first:
        return raw

    return raw[first:last + 1]


def sort_findings_by_position(findings: Sequence[Finding], source_text: str) -> list[Finding]:
    """
    Order findings by the first exact occurrence of their quote.

    Findings whose quote is absent keep their relative order at the end.
    """
    def position(finding: Finding) -> tuple[int, int]:
        pos = source_text.find(finding.specific_quote) if finding.specific_quote else -1
        return (1, 0) if pos == -1 else (0, pos)

    # sorted() is stable, so ties keep model order
    return sorted(findings, key=position)


def parse_analysis(raw: str, source_text: str | None = None) -> Analysis:
    """
    Parse and validate a raw model response.

    Args:
        raw: Model output, possibly fenced or wrapped in prose
        source_text: When given, findings are sorted by quote position

    Raises:
        AnalysisParseError: The payload is not valid JSON or does not match
            the Analysis schema. The extracted payload is attached so the
            caller can send it to a repair pass.
    """
    payload = extract_json(raw or "")

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        logger.warning(f"Model output is not valid JSON: {e}")
        raise AnalysisParseError(f"Malformed analysis JSON: {e}", payload=payload) from e

    if not isinstance(data, dict) or not isinstance(data.get("findings"), list):
        raise AnalysisParseError(
            "Received an unexpected JSON structure: expected an object with a 'findings' list",
            payload=payload,
        )

    try:
        analysis = Analysis.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Analysis failed validation with {e.error_count()} error(s)")
        raise AnalysisParseError(f"Analysis failed validation: {e}", payload=payload) from e

    if source_text:
        analysis = analysis.model_copy(
            update={"findings": sort_findings_by_position(analysis.findings, source_text)}
        )

    logger.info(f"Parsed analysis with {len(analysis.findings)} finding(s)")
    return analysis
