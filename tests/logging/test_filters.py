import json
import logging

from unittest.mock import Mock

from pgdatasource.logging import CustomJsonFormatter, setup_logging
from pgdatasource.logging.filters import (
    ContextFilter,
    data_source_var,
    request_id_var,
    reset_request_context,
    set_logging_context,
    set_request_context,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="sample",
        args=(),
        exc_info=None,
    )


def test_context_filter_respects_static_environment():
    set_logging_context(environment="qa", extra={"region": "us-east"})
    try:
        record = _record()
        assert ContextFilter().filter(record)
        assert getattr(record, "environment") == "qa"
        assert getattr(record, "region") == "us-east"
    finally:
        set_logging_context(environment=None, extra=None)


def test_context_filter_uses_request_context():
    tokens = set_request_context(request_id="req-1", data_source="postgresql_query")
    try:
        record = _record()
        assert ContextFilter().filter(record)
        assert record.request_id == "req-1"
        assert record.data_source == "postgresql_query"
        assert record.sdk_name == "pgdatasource"
    finally:
        reset_request_context(tokens)


def test_reset_request_context_restores_outer_values():
    outer = set_request_context(request_id="outer", data_source="postgresql_tables")
    try:
        inner = set_request_context(request_id="inner", data_source="postgresql_query")
        assert request_id_var.get() == "inner"

        reset_request_context(inner)

        assert request_id_var.get() == "outer"
        assert data_source_var.get() == "postgresql_tables"
    finally:
        reset_request_context(outer)

    assert request_id_var.get() is None
    assert data_source_var.get() is None


def test_set_request_context_skips_unset_values():
    tokens = set_request_context(request_id="req-2")
    try:
        assert len(tokens) == 1
        assert data_source_var.get() is None
    finally:
        reset_request_context(tokens)


def test_context_filter_no_config_is_graceful():
    set_logging_context(environment=None, extra=None)
    record = _record()
    assert ContextFilter().filter(record)
    assert not hasattr(record, "environment")
    assert record.request_id is None


def test_json_formatter_includes_extra_fields():
    record = _record()
    record.database = "analytics"
    ContextFilter().filter(record)

    payload = json.loads(CustomJsonFormatter().format(record))

    assert payload["message"] == "sample"
    assert payload["level"] == "INFO"
    assert payload["database"] == "analytics"
    assert payload["sdk_name"] == "pgdatasource"


def test_json_formatter_masks_secrets_and_truncates_statements():
    record = _record()
    record.password = "s3cret"
    record.statement = "SELECT " + "x" * 2000
    record.details = {"dsn": "postgresql://u:p@h/db", "database": "db"}

    payload = json.loads(CustomJsonFormatter().format(record))

    assert payload["password"] == "***"
    assert payload["details"] == {"dsn": "***", "database": "db"}
    assert len(payload["statement"]) == 1003


def test_setup_logging_reads_settings():
    settings = Mock(log_level="DEBUG", app_env="qa")
    try:
        setup_logging(settings=settings)

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        record = _record()
        ContextFilter().filter(record)
        assert record.environment == "qa"
    finally:
        set_logging_context(environment=None, extra=None)
        setup_logging("WARNING")
