"""Common utilities and exceptions for pgdatasource.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. All exceptions are raised as
    DataSourceError and include structured error information.
"""

from pgdatasource.common.exceptions import (
    DataSourceError,
    ErrorCode,
    # Helper functions
    configuration_error,
    validation_error,
    connection_error,
    query_execution_error,
    scan_error,
    data_source_not_found_error,
)

__all__ = [
    # Base Exception and Error Codes
    "DataSourceError",
    "ErrorCode",
    # Helper functions
    "configuration_error",
    "validation_error",
    "connection_error",
    "query_execution_error",
    "scan_error",
    "data_source_not_found_error",
]
