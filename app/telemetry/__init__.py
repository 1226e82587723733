"""Telemetry helpers and metrics."""

from .metrics import (
    ERROR_COUNTER,
    REQUEST_COUNT,
    REQUEST_LATENCY,
    TIMESTAMPS_STAMPED,
    observe_request,
    observe_stamped,
)

__all__ = [
    "ERROR_COUNTER",
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "TIMESTAMPS_STAMPED",
    "observe_request",
    "observe_stamped",
]
