"""Shared telemetry: logging setup and tracing helpers."""

from storage_gateway.shared.telemetry.logging import get_logger, setup_logging
from storage_gateway.shared.telemetry.tracing import (
    add_span_attributes,
    get_trace_id,
    traced,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "traced",
    "add_span_attributes",
    "get_trace_id",
]
