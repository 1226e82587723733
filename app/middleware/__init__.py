"""Application middleware package."""

from .logging import StructuredLoggingMiddleware
from .telemetry import PROCESS_TIME_HEADER, TelemetryMiddleware

__all__ = ["PROCESS_TIME_HEADER", "StructuredLoggingMiddleware", "TelemetryMiddleware"]
