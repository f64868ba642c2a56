from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger("pykeyset")


@dataclass(frozen=True)
class QueryEvent:
    """Represents a single keyset page fetch for tracing."""

    operation: str
    collection: str
    filter: dict[str, Any] | None = None
    sort: list[tuple[str, int]] | None = None
    limit: int | None = None
    duration_ms: float = 0.0
    result_count: int | None = None


@dataclass(frozen=True)
class CursorRejected:
    """A cursor that failed to decode and was treated as "no cursor"."""

    cursor: str
    kind: str
    error: str


Event = QueryEvent | CursorRejected


class _ObservabilityState:
    """Global mutable state for observability."""

    def __init__(self) -> None:
        self.enabled: bool = False
        self.slow_query_threshold_ms: float = 100.0
        self.listeners: list[Callable[[Event], Any]] = []
        self.events: list[Event] = []
        self.capture_events: bool = False


_state = _ObservabilityState()


def enable_tracing(slow_query_ms: float = 100.0, capture_events: bool = False) -> None:
    """Enable query tracing and observability."""
    _state.enabled = True
    _state.slow_query_threshold_ms = slow_query_ms
    _state.capture_events = capture_events


def disable_tracing() -> None:
    """Disable tracing and clear all state."""
    _state.enabled = False
    _state.slow_query_threshold_ms = 100.0
    _state.listeners.clear()
    _state.events.clear()
    _state.capture_events = False


def get_events() -> list[Event]:
    """Return captured events."""
    return list(_state.events)


def clear_events() -> None:
    """Clear captured events."""
    _state.events.clear()


def add_listener(callback: Callable[[Event], Any]) -> None:
    """Register a listener that receives each emitted event."""
    _state.listeners.append(callback)


def remove_listener(callback: Callable[[Event], Any]) -> None:
    """Remove a previously registered listener."""
    _state.listeners.remove(callback)


def _dispatch(event: Event) -> None:
    if _state.capture_events:
        _state.events.append(event)
    for listener in _state.listeners:
        listener(event)


def emit_event(event: QueryEvent) -> None:
    """Emit a query event: store, log slow queries, notify listeners."""
    if not _state.enabled:
        return

    if event.duration_ms > _state.slow_query_threshold_ms:
        logger.warning(
            "Slow query: %s on %s took %.1fms (threshold: %.1fms)",
            event.operation,
            event.collection,
            event.duration_ms,
            _state.slow_query_threshold_ms,
        )

    _dispatch(event)
    _try_emit_otel_span(event)


def report_invalid_cursor(cursor: str, kind: str, error: Exception) -> None:
    """Log a rejected cursor and notify listeners when tracing is enabled.

    The warning is always logged; pagination continues from the start.
    """
    logger.warning("invalid pagination cursor: cursor=%r kind=%s error=%s", cursor, kind, error)
    if _state.enabled:
        _dispatch(CursorRejected(cursor=cursor, kind=kind, error=str(error)))


def _try_emit_otel_span(event: QueryEvent) -> None:
    """Attempt to emit an OpenTelemetry span if the library is available."""
    try:
        from opentelemetry import trace

        tracer = trace.get_tracer("pykeyset")
        with tracer.start_as_current_span(f"pykeyset.{event.operation}") as span:
            span.set_attribute("db.system", "mongodb")
            span.set_attribute("db.collection", event.collection)
            span.set_attribute("db.operation", event.operation)
            if event.duration_ms:
                span.set_attribute("db.duration_ms", event.duration_ms)
    except ImportError:
        pass


@asynccontextmanager
async def track_query(
    operation: str,
    collection: str,
    filter: dict | None = None,
    sort: list | None = None,
    limit: int | None = None,
):
    """Context manager that times an operation and emits a QueryEvent."""
    if not _state.enabled:
        yield {"result_count": None}
        return

    start = time.perf_counter()
    ctx: dict[str, Any] = {"result_count": None}
    try:
        yield ctx
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        event = QueryEvent(
            operation=operation,
            collection=collection,
            filter=filter,
            sort=sort,
            limit=limit,
            duration_ms=duration_ms,
            result_count=ctx.get("result_count"),
        )
        emit_event(event)
