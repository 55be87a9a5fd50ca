"""Tests for the tracing decorator."""

from unittest.mock import MagicMock, patch

import pytest

from pgdatasource.common.exceptions import DataSourceError, ErrorCode
from pgdatasource.logging.filters import reset_request_context, set_request_context
from pgdatasource.utils import traced


class TestTraced:
    """Test the traced decorator."""

    @pytest.fixture
    def span(self):
        tracer = MagicMock()
        span = tracer.start_as_current_span.return_value.__enter__.return_value
        with patch("pgdatasource.utils.decorators.get_tracer", return_value=tracer):
            yield span, tracer

    def test_returns_wrapped_result_and_sets_attributes(self, span):
        """Test that the result is returned and attributes are set on the span."""
        span_obj, tracer = span

        @traced("test.span", attributes={"static": "x", "skipped": None},
                attribute_getter=lambda value: {"value": value})
        def double(value):
            return value * 2

        assert double(4) == 8
        tracer.start_as_current_span.assert_called_once()
        assert tracer.start_as_current_span.call_args[0][0] == "test.span"
        span_obj.set_attribute.assert_any_call("static", "x")
        span_obj.set_attribute.assert_any_call("value", 4)
        assert span_obj.set_attribute.call_count == 2

    def test_exception_recorded_and_reraised(self, span):
        """Test that exceptions are recorded on the span and re-raised."""
        span_obj, _ = span

        @traced()
        def fail():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            fail()

        span_obj.record_exception.assert_called_once()
        span_obj.set_status.assert_called_once()

    def test_default_span_name(self, span):
        """Test the span name derived from the function."""
        _, tracer = span

        @traced()
        def named():
            return None

        named()

        assert tracer.start_as_current_span.call_args[0][0].endswith("named")

    def test_request_context_attached(self, span):
        """Test that request context is attached to the span."""
        span_obj, _ = span

        @traced("test.span")
        def noop():
            return None

        tokens = set_request_context(request_id="req-3", data_source="postgresql_tables")
        try:
            noop()
        finally:
            reset_request_context(tokens)

        span_obj.set_attribute.assert_any_call("pgdatasource.request_id", "req-3")
        span_obj.set_attribute.assert_any_call("pgdatasource.data_source", "postgresql_tables")

    def test_error_code_recorded(self, span):
        """Test that DataSourceError codes are recorded on the span."""
        span_obj, _ = span

        @traced("test.span")
        def fail():
            raise DataSourceError("scan failed", ErrorCode.SCAN_ERROR)

        with pytest.raises(DataSourceError):
            fail()

        span_obj.set_attribute.assert_any_call("pgdatasource.error_code", "DATA_001")
