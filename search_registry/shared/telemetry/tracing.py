"""OpenTelemetry tracing helpers for registry and resolver operations.

Only the API is used; spans are no-ops until the host process installs an
SDK tracer provider.
"""

import inspect
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from search_registry.core.config import get_settings

# Keyword arguments recorded on spans; anything else (keys, entities) is not.
_RECORDED_KWARGS = frozenset({"offset", "limit", "type_id", "type_name"})


def _get_tracer() -> trace.Tracer:
    """Tracer named after the configured service (app_name, app_version)."""
    settings = get_settings()
    return trace.get_tracer(settings.app_name, settings.app_version)


@contextmanager
def _span(name: str, kwargs: dict[str, Any]) -> Iterator[trace.Span]:
    """Start a span, record allowlisted kwargs, and mark errors before re-raising."""
    with _get_tracer().start_as_current_span(name, record_exception=False) as span:
        for key, value in kwargs.items():
            if key in _RECORDED_KWARGS and value is not None:
                span.set_attribute(f"arg.{key}", str(value))
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            raise
        span.set_status(Status(StatusCode.OK))


def traced(operation_name: str | None = None) -> Callable:
    """Decorator: run the function (sync or async) inside a span.

    Args:
        operation_name: Span name (defaults to module.funcname).
    """

    def decorator(func: Callable) -> Callable:
        span_name = operation_name or f"{func.__module__}.{func.__name__}"

        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with _span(span_name, kwargs):
                    return await func(*args, **kwargs)

            return async_wrapper

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with _span(span_name, kwargs):
                return func(*args, **kwargs)

        return sync_wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)


def add_span_event(name: str, attributes: dict | None = None) -> None:
    """Add an event to the current span."""
    span = trace.get_current_span()
    if span.is_recording():
        span.add_event(name, attributes=attributes or {})
