# hootspot/logging_config.py
"""
Structured JSON logging for the report pipeline.

Provides a JSON formatter with trace IDs for correlating the stages of one
report build, plus a context manager that times each stage.
"""

import json
import logging
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone

# Context variables for trace correlation
trace_id_var: ContextVar[str | None] = ContextVar("trace_id", default=None)
stage_var: ContextVar[str | None] = ContextVar("stage", default=None)

# Extra record attributes copied into the JSON payload
EXTRA_FIELDS = (
    "event",
    "duration_ms",
    "findings",
    "spans",
    "regions",
    "nodes",
    "categories",
    "unmatched",
    "iterations",
    "seed",
)


# -----------------------------------------------------------------------------
# JSON Formatter
# -----------------------------------------------------------------------------


class JSONFormatter(logging.Formatter):
    """
    Format log records as single-line JSON.

    Output format:
    {"timestamp": "...", "level": "INFO", "message": "...", "trace_id": "...", ...}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        trace_id = trace_id_var.get()
        if trace_id:
            log_data["trace_id"] = trace_id

        stage = stage_var.get()
        if stage:
            log_data["stage"] = stage

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data)


def configure_logging(json_format: bool = True, level: str = "INFO") -> None:
    """
    Configure root logging.

    Args:
        json_format: If True, use JSON format. If False, use human-readable format.
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level.upper()))

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))

    root_logger.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# -----------------------------------------------------------------------------
# Context Managers
# -----------------------------------------------------------------------------


@contextmanager
def log_stage(stage: str, trace_id: str | None = None):
    """
    Context manager for stage-level logging.

    Logs stage completion with duration. The yielded dict can be filled with
    counters (any of EXTRA_FIELDS) that are attached to the completion record.

    Usage:
        with log_stage("merge", trace_id=trace_id) as metrics:
            regions = merge_spans(located)
            metrics["regions"] = len(regions)
    """
    if trace_id:
        trace_id_var.set(trace_id)
    token = stage_var.set(stage)

    start_time = time.perf_counter()
    logger = logging.getLogger("hootspot.pipeline")
    metrics: dict = {}

    try:
        yield metrics
        duration_ms = round((time.perf_counter() - start_time) * 1000, 3)
        logger.debug(
            f"Stage {stage} completed",
            extra={"event": "stage_complete", "duration_ms": duration_ms, **metrics},
        )
    except Exception as e:
        duration_ms = round((time.perf_counter() - start_time) * 1000, 3)
        logger.error(
            f"Stage {stage} failed: {e}",
            extra={"event": "stage_failed", "duration_ms": duration_ms},
            exc_info=True,
        )
        raise
    finally:
        stage_var.reset(token)
