# hootspot/routers/report.py
"""
Report endpoints.

POST /v1/report         - Highlights, palette and bubble layout for an analysis
POST /v1/analysis/parse - Validate raw model output into an Analysis
"""

import logging

from fastapi import APIRouter, HTTPException, status

from hootspot.errors import AnalysisParseError
from hootspot.schemas.analysis import Analysis
from hootspot.schemas.report import ParseRequest, ReportRequest, ReportResponse
from hootspot.services.analysis_parser import parse_analysis
from hootspot.services.report_builder import build_report

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["report"])


@router.post("/report", response_model=ReportResponse)
def create_report(request: ReportRequest) -> ReportResponse:
    """
    Build the highlighted report for an analysis.

    Quotes that cannot be found in source_text produce no highlight; their
    display indexes are listed in unmatched_indexes. A container_width of 0
    returns an empty bubble layout.
    """
    report = build_report(
        request.analysis,
        request.source_text,
        request.container_width,
        container_height=request.container_height,
        seed=request.seed,
    )
    return ReportResponse.from_report(report, request.source_text)


@router.post("/analysis/parse", response_model=Analysis)
def parse_model_output(request: ParseRequest) -> Analysis:
    """
    Validate raw model output.

    Returns 422 with the parse error when the output cannot be turned into
    an Analysis.
    """
    try:
        return parse_analysis(request.raw, request.source_text)
    except AnalysisParseError as e:
        logger.info(f"Rejected model output: {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
