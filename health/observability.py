# ============================================================================
# OBSERVABILITY
# ============================================================================
# STATUS: Core - OpenTelemetry tracing
# PURPOSE: Spans around health check runs
# CREATED: 18 OCT 2026
# ============================================================================
"""
Observability

Thin wrapper over the OpenTelemetry tracing API.

Spans go to whatever tracer provider the host application configured.
With no SDK configured, the API hands out non-recording spans, so the
health package can trace unconditionally.

Usage:
    from health.observability import start_span

    with start_span("health.measure", {"health.checks": 3}) as span:
        span.set_attribute("health.status", "OK")
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode

logger = logging.getLogger(__name__)

TRACER_NAME = "health"


def get_tracer(name: str = TRACER_NAME) -> trace.Tracer:
    """Get a tracer from the globally configured provider."""
    return trace.get_tracer(name)


@contextmanager
def start_span(
    name: str,
    attributes: Optional[Dict[str, Any]] = None,
) -> Iterator[Span]:
    """
    Start a span as the current span.

    Args:
        name: Span name
        attributes: Initial attributes

    Yields:
        The active OpenTelemetry span
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(name, attributes=attributes) as span:
        yield span


def mark_span_error(span: Span, message: str) -> None:
    """Flag a span as failed with a description."""
    span.set_status(Status(StatusCode.ERROR, message))
    span.set_attribute("error.message", message)


__all__ = [
    "TRACER_NAME",
    "get_tracer",
    "start_span",
    "mark_span_error",
]
