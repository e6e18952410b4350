"""OpenTelemetry tracing decorators."""

import inspect
import functools
from collections.abc import Callable
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Span

# Type variable for generic function signatures
F = TypeVar("F", bound=Callable[..., Any])

DEFAULT_SERVICE_NAME = "menu-catalog-svc"


def _mark_failure(span: Span, exc: Exception) -> None:
    span.set_attribute("success", False)
    span.set_attribute("error.type", type(exc).__name__)
    span.set_attribute("error.message", str(exc))
    span.record_exception(exc)


def traced(
    span_name: str | None = None, service_name: str = DEFAULT_SERVICE_NAME
) -> Callable[[F], F]:
    """Decorator to add OpenTelemetry tracing to a function.

    Creates a new span for the decorated function. Exceptions are recorded on
    the span and re-raised unchanged. Async functions are supported.

    Args:
        span_name: Name for the span (defaults to function name if not provided)
        service_name: Service name for span attributes

    Returns:
        Decorated function with tracing

    Example:
        @traced("catalog.create")
        def create(self, candidate: MenuItemCandidate) -> MenuItem:
            ...
    """

    def decorator(func: F) -> F:
        name = span_name or func.__name__
        tracer = trace.get_tracer(service_name)

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(name, record_exception=False) as span:
                span.set_attribute("service.name", service_name)
                if span_name:
                    span.set_attribute("function.name", func.__name__)

                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _mark_failure(span, e)
                    raise
                span.set_attribute("success", True)
                return result

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(name, record_exception=False) as span:
                span.set_attribute("service.name", service_name)
                if span_name:
                    span.set_attribute("function.name", func.__name__)

                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    _mark_failure(span, e)
                    raise
                span.set_attribute("success", True)
                return result

        if inspect.iscoroutinefunction(func):
            return async_wrapper  # type: ignore
        return sync_wrapper  # type: ignore

    return decorator
