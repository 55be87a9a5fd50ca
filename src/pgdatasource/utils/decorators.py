"""Tracing decorator for data source reads and statement execution."""

import functools
from typing import Any, Callable, Dict, Optional, TypeVar

from opentelemetry.trace import Span, SpanKind, Status, StatusCode

from pgdatasource.logging.filters import data_source_var, request_id_var
from pgdatasource.telemetry import get_tracer


F = TypeVar('F', bound=Callable[..., Any])

logger = None


def _get_logger():
    """Get logger instance lazily."""
    global logger
    if logger is None:
        from pgdatasource.logging import get_logger
        logger = get_logger(__name__)
    return logger


def _context_attributes() -> Dict[str, Any]:
    """Request context of the current read, so spans join the log records."""
    collected: Dict[str, Any] = {}
    request_id = request_id_var.get()
    if request_id:
        collected["pgdatasource.request_id"] = request_id
    data_source = data_source_var.get()
    if data_source:
        collected["pgdatasource.data_source"] = data_source
    return collected


def _record_failure(span: Span, exc: Exception) -> None:
    span.record_exception(exc)
    error_code = getattr(exc, "error_code", None)
    if error_code is not None:
        span.set_attribute("pgdatasource.error_code", getattr(error_code, "value", str(error_code)))
    span.set_status(Status(StatusCode.ERROR, str(exc)))


def traced(
    span_name: Optional[str] = None,
    *,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: Optional[Dict[str, Any]] = None,
    attribute_getter: Optional[Callable[..., Optional[Dict[str, Any]]]] = None,
) -> Callable[[F], F]:
    """Instrument a function with an OpenTelemetry span.

    The span carries the request id and data source name of the current
    read. On failure it records the exception, plus the ``DataSourceError``
    code when there is one, and the exception propagates unchanged.

    Only plain functions are supported; a generator would end its span
    before the first item is produced.

    Args:
        span_name: Optional explicit span name. Defaults to module-qualified function name.
        kind: Span kind, defaults to INTERNAL.
        attributes: Static span attributes to attach.
        attribute_getter: Callable returning additional attributes at call time.
            It receives the same arguments as the wrapped function.

    Example:
        >>> @traced("pgdatasource.read", attributes={"db.system": "postgresql"})
        ... def read(db, data):
        ...     ...
    """

    def decorator(func: F) -> F:

        def _collect_attributes(args: tuple, kwargs: dict) -> Dict[str, Any]:
            collected = _context_attributes()
            if attributes:
                collected.update({k: v for k, v in attributes.items() if v is not None})

            if attribute_getter:
                try:
                    dynamic_attrs = attribute_getter(*args, **kwargs)
                except Exception as exc:  # pragma: no cover
                    _get_logger().warning("trace attribute getter failed: %s", exc)
                    dynamic_attrs = None

                if dynamic_attrs:
                    collected.update({k: v for k, v in dynamic_attrs.items() if v is not None})

            return collected

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = get_tracer(func.__module__)
            name = span_name or f"{func.__module__}.{func.__qualname__}"

            with tracer.start_as_current_span(
                name,
                kind=kind,
                record_exception=False,
                set_status_on_exception=False,
            ) as span:
                for key, value in _collect_attributes(args, kwargs).items():
                    span.set_attribute(key, value)

                try:
                    return func(*args, **kwargs)
                except Exception as exc:
                    _record_failure(span, exc)
                    raise

        return wrapper  # type: ignore[return-value]

    return decorator
