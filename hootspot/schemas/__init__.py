# hootspot/schemas/__init__.py
"""
Pydantic schemas for model output and API request/response validation.

Report schemas live in hootspot.schemas.report and are imported from there
directly, since they depend on the report builder.
"""

from hootspot.schemas.analysis import Analysis, Finding

__all__ = [
    "Analysis",
    "Finding",
]
