from enum import Enum
from typing import Any, Dict, Optional, Sequence


# Queries stored in error details are cut to this many characters
MAX_QUERY_DETAIL_LENGTH = 500


class ErrorCode(Enum):
    """Standard error codes for pgdatasource operations.

    This enum provides categorized error codes that can be used
    to identify error types without creating numerous exception classes.
    Each category has its own prefix for easy identification. Every
    failure is final for the read that raised it.

    Attributes:
        CONFIG_*: Settings could not be loaded
        VALIDATION_*: Data source input validation errors
        CONNECTION_*: Connection and transaction-open errors
        EXECUTION_*: Statement execution errors
        RESOURCE_*: Unknown data source names
        DATA_*: Result decoding errors
    """
    # Configuration errors
    CONFIG_ERROR = "CONFIG_001"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_001"

    # Connection errors
    CONNECTION_ERROR = "CONNECTION_001"

    # Execution errors
    EXECUTION_ERROR = "EXECUTION_001"
    QUERY_EXECUTION_ERROR = "EXECUTION_002"

    # Resource errors
    DATA_SOURCE_NOT_FOUND = "RESOURCE_002"

    # Data errors
    SCAN_ERROR = "DATA_001"


class DataSourceError(Exception):
    """Base exception for all pgdatasource errors.

    A single exception class that uses error codes for categorization
    instead of a deep hierarchy of exception classes.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.EXECUTION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        """Initialize a pgdatasource error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
            cause: Optional underlying exception
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

        # Lazy import to avoid circular dependency
        from pgdatasource.logging import get_logger
        logger = get_logger(__name__)
        logger.error(
            message,
            extra={
                "error_code": error_code.value,
                "details": self.details,
            },
            exc_info=cause is not None,
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }


def _truncate_query(query: str) -> str:
    if len(query) > MAX_QUERY_DETAIL_LENGTH:
        return query[:MAX_QUERY_DETAIL_LENGTH] + "..."
    return query


# Helper functions for common error scenarios
def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> DataSourceError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details

    Returns:
        DataSourceError with CONFIG_ERROR code
    """
    details = kwargs.get('details', {})
    if config_key:
        details["config_key"] = config_key

    return DataSourceError(
        message=message,
        error_code=ErrorCode.CONFIG_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def validation_error(
    message: str,
    field: Optional[str] = None,
    value: Any = None,
    **kwargs
) -> DataSourceError:
    """Create a validation error.

    Args:
        message: Error message
        field: Field that failed validation
        value: Invalid value
        **kwargs: Additional error details

    Returns:
        DataSourceError with VALIDATION_ERROR code
    """
    details = kwargs.get('details', {})
    if field:
        details["field"] = field
    if value is not None:
        details["value"] = str(value)

    return DataSourceError(
        message=message,
        error_code=ErrorCode.VALIDATION_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def connection_error(
    message: str,
    service: Optional[str] = None,
    database: Optional[str] = None,
    **kwargs
) -> DataSourceError:
    """Create a connection error.

    Raised when a connection or a transaction cannot be opened, for
    example when the server is unreachable or the database does not exist.

    Args:
        message: Error message
        service: Service that failed to connect
        database: Database the connection was scoped to
        **kwargs: Additional error details

    Returns:
        DataSourceError with CONNECTION_ERROR code
    """
    details = kwargs.get('details', {})
    if service:
        details["service"] = service
    if database:
        details["database"] = database

    return DataSourceError(
        message=message,
        error_code=ErrorCode.CONNECTION_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def query_execution_error(
    query: str,
    original_error: Exception,
    phase: str = "execute",
    **kwargs
) -> DataSourceError:
    """Create a query execution error.

    Args:
        query: SQL query that failed
        original_error: The underlying exception
        phase: Step that failed, ``execute`` for the statement itself or
            ``describe`` for the column type lookup that follows it
        **kwargs: Additional error details

    Returns:
        DataSourceError with QUERY_EXECUTION_ERROR code
    """
    details = kwargs.get('details', {})
    details["query"] = _truncate_query(query)
    details["phase"] = phase

    if phase == "describe":
        message = f"could not describe columns for query: {str(original_error)}"
    else:
        message = f"Query execution failed: {str(original_error)}"

    return DataSourceError(
        message=message,
        error_code=ErrorCode.QUERY_EXECUTION_ERROR,
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'cause']}
    )


def scan_error(
    query: str,
    original_error: Exception,
    row_index: Optional[int] = None,
    **kwargs
) -> DataSourceError:
    """Create a scan error for a row that could not be read.

    Args:
        query: SQL query whose output could not be scanned
        original_error: The underlying exception
        row_index: Zero-based index of the failing row, when known
        **kwargs: Additional error details

    Returns:
        DataSourceError with SCAN_ERROR code
    """
    details = kwargs.get('details', {})
    details["query"] = _truncate_query(query)
    if row_index is not None:
        details["row_index"] = row_index

    return DataSourceError(
        message=f"could not scan output for query: {str(original_error)}",
        error_code=ErrorCode.SCAN_ERROR,
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'cause']}
    )


def data_source_not_found_error(
    name: str,
    available: Sequence[str] = (),
    **kwargs
) -> DataSourceError:
    """Create an error for an unregistered data source name.

    Args:
        name: Requested data source name
        available: Registered data source names
        **kwargs: Additional error details

    Returns:
        DataSourceError with DATA_SOURCE_NOT_FOUND code
    """
    details = kwargs.get('details', {})
    details["resource_type"] = "data source"
    details["resource_name"] = name

    return DataSourceError(
        message=f"Unknown data source {name!r}. Available: {', '.join(available)}",
        error_code=ErrorCode.DATA_SOURCE_NOT_FOUND,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )
