# hootspot/routers/__init__.py
"""
API routers for v1 endpoints.
"""

from hootspot.routers.report import router as report_router

__all__ = [
    "report_router",
]
