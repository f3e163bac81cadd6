# hootspot/main.py
"""
HootSpot API.

Thin HTTP surface over the highlighting engine.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hootspot import __version__
from hootspot.config import get_settings
from hootspot.logging_config import configure_logging
from hootspot.routers import report_router

settings = get_settings()
configure_logging(json_format=settings.LOG_JSON, level=settings.LOG_LEVEL)

app = FastAPI(
    title="HootSpot API",
    description="Highlights manipulation-pattern findings in source text",
    version=__version__,
)

if settings.cors_origin_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(report_router)


@app.get("/")
def root() -> dict:
    return {
        "service": "HootSpot API",
        "version": __version__,
        "endpoints": {
            "health": "/health",
            "report": "POST /v1/report",
            "parse": "POST /v1/analysis/parse",
        },
    }


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "service": "hootspot", "version": __version__}
