"""Span helpers: the traced decorator and TracedOperation context manager.

Span attributes are taken from keyword arguments only when the argument
name is allowlisted, so access keys and row payloads never reach an
exporter.
"""

import inspect
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

# Keyword argument names recorded as ``arg.<name>`` (case-insensitive).
_SAFE_SPAN_ATTR_KEYS = frozenset({
    "slug", "name", "pattern", "table", "field", "lang", "target_lang",
    "source_lang", "currency", "category_id", "kind", "limit", "tenant_id",
})

_tracer = trace.get_tracer(__name__)


def _call_attributes(kwargs: Mapping[str, Any]) -> dict[str, str]:
    return {
        f"arg.{key}": str(value)
        for key, value in kwargs.items()
        if not key.startswith("_") and key.lower() in _SAFE_SPAN_ATTR_KEYS
    }


@contextmanager
def _operation_span(
    name: str,
    attributes: Mapping[str, Any],
    tracer: trace.Tracer = _tracer,
) -> Iterator[trace.Span]:
    """Current span that ends OK, or ERROR with the exception recorded."""
    with tracer.start_as_current_span(
        name, record_exception=False, set_status_on_exception=False
    ) as span:
        if attributes:
            span.set_attributes(dict(attributes))
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, type(e).__name__))
            span.record_exception(e)
            raise
        span.set_status(Status(StatusCode.OK))


def traced(
    operation_name: str | None = None,
    attributes: dict[str, str | int | float | bool] | None = None,
) -> Callable:
    """Run each call of a sync or async function inside its own span.

    The span is named ``operation_name`` or ``module.qualname`` and carries
    ``attributes`` plus any allowlisted keyword arguments.
    """

    def decorator(func: Callable) -> Callable:
        tracer = trace.get_tracer(func.__module__)
        span_name = operation_name or f"{func.__module__}.{func.__qualname__}"

        def _attrs(kwargs: Mapping[str, Any]) -> dict[str, Any]:
            return {**(attributes or {}), **_call_attributes(kwargs)}

        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with _operation_span(span_name, _attrs(kwargs), tracer):
                    return await func(*args, **kwargs)

            return async_wrapper

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with _operation_span(span_name, _attrs(kwargs), tracer):
                return func(*args, **kwargs)

        return sync_wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span, if one is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)


def add_span_event(name: str, attributes: dict | None = None) -> None:
    span = trace.get_current_span()
    if span.is_recording():
        span.add_event(name, attributes=attributes or {})


class TracedOperation:
    """Run a block (``with`` or ``async with``) inside a span."""

    def __init__(self, operation_name: str, attributes: dict | None = None) -> None:
        self.operation_name = operation_name
        self.attributes = attributes or {}
        self.span: trace.Span | None = None
        self._scope: Any = None

    def __enter__(self) -> "TracedOperation":
        self._scope = _operation_span(self.operation_name, self.attributes)
        self.span = self._scope.__enter__()
        return self

    def __exit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> bool | None:
        scope, self._scope = self._scope, None
        if scope is None:
            return None
        return scope.__exit__(exc_type, exc_val, exc_tb)

    async def __aenter__(self) -> "TracedOperation":
        return self.__enter__()

    async def __aexit__(
        self,
        exc_type: type | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> bool | None:
        return self.__exit__(exc_type, exc_val, exc_tb)

    def set_attribute(self, key: str, value: str | int | float | bool) -> None:
        if self.span is not None:
            self.span.set_attribute(key, value)
