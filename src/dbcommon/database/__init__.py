"""Driver error normalization for database clients."""

from .config import DiagnosticsConfig, get_diagnostics_config
from .converter import (
    CodeMappingExceptionConverter,
    ExceptionConverter,
    GenericExceptionConverter,
    MySQLExceptionConverter,
    SQLStateExceptionConverter,
    get_exception_converter,
)
from .exceptions import (
    ConnectionException,
    ConstraintViolationException,
    DatabaseError,
    DeadlockException,
    DriverError,
    DriverException,
    DriverRequiredError,
    ExceptionKind,
    ForeignKeyConstraintViolationException,
    GenericDriverException,
    InvalidDriverClassError,
    InvalidFieldNameException,
    InvalidLimitOffsetError,
    InvalidPlatformVersionError,
    InvalidTableNameError,
    InvalidWrapperClassError,
    LockTimeoutException,
    NoColumnsSpecifiedError,
    NonUniqueFieldNameException,
    NotNullConstraintViolationException,
    NotSupportedError,
    ReadOnlyException,
    SyntaxErrorException,
    TableExistsException,
    TableNotFoundException,
    TypeAlreadyRegisteredError,
    TypeExistsError,
    TypeNotFoundError,
    TypeNotRegisteredError,
    UniqueConstraintViolationException,
    UnknownColumnTypeError,
    UnknownDriverError,
    error_code_of,
    exception_for_kind,
    is_normalized,
    sql_state_of,
)
from .formatting import format_parameter, format_parameters
from .metrics import DatabaseMetrics, get_db_metrics
from .utils import async_db_retry, db_retry, is_retryable_error
from .wrapper import (
    raw_message,
    translate_errors,
    wrap,
    wrap_for_driver,
    wrap_for_query,
)

__all__ = [
    # Configuration
    "DiagnosticsConfig",
    "get_diagnostics_config",
    # Wrapping
    "wrap",
    "wrap_for_query",
    "wrap_for_driver",
    "translate_errors",
    "raw_message",
    # Formatting
    "format_parameter",
    "format_parameters",
    # Converters
    "ExceptionConverter",
    "get_exception_converter",
    "GenericExceptionConverter",
    "CodeMappingExceptionConverter",
    "SQLStateExceptionConverter",
    "MySQLExceptionConverter",
    # Metrics
    "DatabaseMetrics",
    "get_db_metrics",
    # Raw driver errors
    "DriverError",
    "error_code_of",
    "sql_state_of",
    # Normalized exceptions
    "ExceptionKind",
    "DriverException",
    "GenericDriverException",
    "ConnectionException",
    "ConstraintViolationException",
    "UniqueConstraintViolationException",
    "ForeignKeyConstraintViolationException",
    "NotNullConstraintViolationException",
    "SyntaxErrorException",
    "TableNotFoundException",
    "TableExistsException",
    "InvalidFieldNameException",
    "NonUniqueFieldNameException",
    "LockTimeoutException",
    "DeadlockException",
    "ReadOnlyException",
    "exception_for_kind",
    "is_normalized",
    # Exceptions
    "DatabaseError",
    "NotSupportedError",
    "InvalidPlatformVersionError",
    "DriverRequiredError",
    "UnknownDriverError",
    "InvalidDriverClassError",
    "InvalidWrapperClassError",
    "InvalidTableNameError",
    "NoColumnsSpecifiedError",
    "InvalidLimitOffsetError",
    "TypeExistsError",
    "UnknownColumnTypeError",
    "TypeNotFoundError",
    "TypeNotRegisteredError",
    "TypeAlreadyRegisteredError",
    # Utils
    "db_retry",
    "async_db_retry",
    "is_retryable_error",
]
