"""Span helpers for use cases: the traced decorator and current-span access."""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

P = ParamSpec("P")
R = TypeVar("R")

_tracer = trace.get_tracer("app.search")


def traced(
    span_name: str,
    attributes: dict[str, str | int | float | bool] | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Run the decorated coroutine inside a span named span_name.

    Exceptions mark the span as ERROR and are re-raised unchanged. Call
    arguments are not recorded; use add_span_attributes for safe values.
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with _tracer.start_as_current_span(
                span_name, attributes=attributes, record_exception=False
            ) as span:
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.record_exception(e)
                    span.set_status(Status(StatusCode.ERROR, type(e).__name__))
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: Any) -> None:
    """Set attributes on the current span if it is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)


def get_trace_id() -> str | None:
    """Return the current trace ID as 32-char hex, or None outside a span."""
    ctx = trace.get_current_span().get_span_context()
    if not ctx.is_valid:
        return None
    return format(ctx.trace_id, "032x")
