"""Database-specific exceptions."""

from enum import StrEnum
from typing import Any, ClassVar

from sqlalchemy.exc import DBAPIError


class DatabaseError(Exception):
    """Base exception for database operations."""

    def __init__(
        self,
        message: str,
        table: str | None = None,
        operation: str | None = None,
        original_error: BaseException | None = None,
    ):
        """Initialize database error with context."""
        super().__init__(message)
        self.message = message
        self.table = table
        self.operation = operation
        self.original_error = original_error
        if original_error is not None:
            self.__cause__ = original_error

    def __str__(self) -> str:
        """String representation with context."""
        parts = [self.message]
        if self.table:
            parts.append(f"Table: {self.table}")
        if self.operation:
            parts.append(f"Operation: {self.operation}")
        return " | ".join(parts)


class DriverError(Exception):
    """Error raised natively by a driver, before normalization."""

    def __init__(
        self,
        message: str,
        error_code: int | str | None = None,
        sql_state: str | None = None,
    ):
        """Initialize with the vendor error code and SQLSTATE, if known."""
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.sql_state = sql_state


def _driver_level(error: BaseException) -> BaseException:
    """Unwrap SQLAlchemy's DBAPIError to the DB-API exception it carries."""
    if isinstance(error, DBAPIError) and error.orig is not None:
        return error.orig
    return error


def error_code_of(error: BaseException) -> int | str | None:
    """Extract the vendor error code from a raw driver error."""
    error = _driver_level(error)
    code = getattr(error, "error_code", None)
    if code is not None:
        return code

    # mysqlclient / PyMySQL
    errno = getattr(error, "errno", None)
    if isinstance(errno, int):
        return errno
    if error.args and isinstance(error.args[0], int) and not isinstance(error.args[0], bool):
        return error.args[0]
    return None


def sql_state_of(error: BaseException) -> str | None:
    """Extract the SQLSTATE from a raw driver error."""
    error = _driver_level(error)
    for attr in ("sql_state", "sqlstate", "pgcode"):
        state = getattr(error, attr, None)
        if isinstance(state, str) and state:
            return state
    return None


class ExceptionKind(StrEnum):
    """Discriminator of the normalized exception variants."""

    CONNECTION = "connection"
    CONSTRAINT_VIOLATION = "constraint_violation"
    UNIQUE_CONSTRAINT_VIOLATION = "unique_constraint_violation"
    FOREIGN_KEY_CONSTRAINT_VIOLATION = "foreign_key_constraint_violation"
    NOT_NULL_CONSTRAINT_VIOLATION = "not_null_constraint_violation"
    SYNTAX_ERROR = "syntax_error"
    TABLE_NOT_FOUND = "table_not_found"
    TABLE_EXISTS = "table_exists"
    INVALID_FIELD_NAME = "invalid_field_name"
    NON_UNIQUE_FIELD_NAME = "non_unique_field_name"
    LOCK_TIMEOUT = "lock_timeout"
    DEADLOCK = "deadlock"
    READ_ONLY = "read_only"
    GENERIC = "generic"


class DriverException(DatabaseError):
    """Backend-agnostic exception converted from a raw driver error.

    The raw error is kept as ``original_error`` and ``__cause__``; the
    vendor error code and SQLSTATE default to the ones carried by it.
    """

    kind: ClassVar[ExceptionKind] = ExceptionKind.GENERIC
    retryable: ClassVar[bool] = False

    def __init__(
        self,
        message: str,
        original_error: BaseException,
        error_code: int | str | None = None,
        sql_state: str | None = None,
        table: str | None = None,
        operation: str | None = None,
    ):
        """Initialize with the raw driver error as cause."""
        super().__init__(
            message,
            table=table,
            operation=operation,
            original_error=original_error,
        )
        self.error_code = (
            error_code if error_code is not None else error_code_of(original_error)
        )
        self.sql_state = (
            sql_state if sql_state is not None else sql_state_of(original_error)
        )

    @property
    def cause(self) -> BaseException:
        """The raw driver error this exception was converted from."""
        return self.original_error


class GenericDriverException(DriverException):
    """Driver error that could not be classified."""

    kind = ExceptionKind.GENERIC


class ConnectionException(DriverException):
    """Transport or connectivity to the database was lost or refused."""

    kind = ExceptionKind.CONNECTION
    retryable = True


class ConstraintViolationException(DriverException):
    """Uniqueness, foreign key or check constraint failure."""

    kind = ExceptionKind.CONSTRAINT_VIOLATION


class UniqueConstraintViolationException(ConstraintViolationException):
    """Unique constraint failure."""

    kind = ExceptionKind.UNIQUE_CONSTRAINT_VIOLATION


class ForeignKeyConstraintViolationException(ConstraintViolationException):
    """Foreign key constraint failure."""

    kind = ExceptionKind.FOREIGN_KEY_CONSTRAINT_VIOLATION


class NotNullConstraintViolationException(ConstraintViolationException):
    """NOT NULL constraint failure."""

    kind = ExceptionKind.NOT_NULL_CONSTRAINT_VIOLATION


class SyntaxErrorException(DriverException):
    """Malformed statement."""

    kind = ExceptionKind.SYNTAX_ERROR


class TableNotFoundException(DriverException):
    """Statement references a table that does not exist."""

    kind = ExceptionKind.TABLE_NOT_FOUND


class TableExistsException(DriverException):
    """Attempt to create a table that already exists."""

    kind = ExceptionKind.TABLE_EXISTS


class InvalidFieldNameException(DriverException):
    """Statement references an unknown column."""

    kind = ExceptionKind.INVALID_FIELD_NAME


class NonUniqueFieldNameException(DriverException):
    """Column reference is ambiguous."""

    kind = ExceptionKind.NON_UNIQUE_FIELD_NAME


class LockTimeoutException(DriverException):
    """Lock wait exceeded."""

    kind = ExceptionKind.LOCK_TIMEOUT
    retryable = True


class DeadlockException(DriverException):
    """Transaction was chosen as a deadlock victim."""

    kind = ExceptionKind.DEADLOCK
    retryable = True


class ReadOnlyException(DriverException):
    """Write attempted against a read-only connection or server."""

    kind = ExceptionKind.READ_ONLY


EXCEPTION_CLASSES: dict[ExceptionKind, type[DriverException]] = {
    cls.kind: cls
    for cls in (
        GenericDriverException,
        ConnectionException,
        ConstraintViolationException,
        UniqueConstraintViolationException,
        ForeignKeyConstraintViolationException,
        NotNullConstraintViolationException,
        SyntaxErrorException,
        TableNotFoundException,
        TableExistsException,
        InvalidFieldNameException,
        NonUniqueFieldNameException,
        LockTimeoutException,
        DeadlockException,
        ReadOnlyException,
    )
}


def exception_for_kind(kind: ExceptionKind | str) -> type[DriverException]:
    """Return the exception class for a kind."""
    return EXCEPTION_CLASSES[ExceptionKind(kind)]


def is_normalized(error: Any) -> bool:
    """Check whether an error already belongs to the normalized taxonomy."""
    return isinstance(getattr(error, "kind", None), ExceptionKind)


class NotSupportedError(DatabaseError):
    """Operation not supported by the platform."""

    def __init__(self, method: str):
        """Initialize with the unsupported operation."""
        super().__init__(f"Operation '{method}' is not supported by platform.")
        self.method = method


class InvalidPlatformVersionError(DatabaseError):
    """Platform version string in an unexpected format."""

    def __init__(self, version: str, expected_format: str):
        """Initialize with the given version and the expected format."""
        super().__init__(
            f'Invalid platform version "{version}" specified. '
            f'The platform version has to be specified in the format: "{expected_format}".'
        )
        self.version = version
        self.expected_format = expected_format


class DriverRequiredError(DatabaseError):
    """No driver was configured for a connection."""

    def __init__(self, url: str | None = None):
        """Initialize with the connection URL, if one was given."""
        if url:
            message = (
                "The options 'driver' or 'driver_class' are mandatory if a connection "
                f"URL without scheme is given. Given URL: {url}"
            )
        else:
            message = "The options 'driver' or 'driver_class' are mandatory if no URL is given."
        super().__init__(message)
        self.url = url


class UnknownDriverError(DatabaseError):
    """Driver name is not one of the supported drivers."""

    def __init__(self, name: str, known_drivers: list[str]):
        """Initialize with the requested and the supported driver names."""
        super().__init__(
            f"The given 'driver' {name} is unknown, only the following drivers "
            f"are supported: {', '.join(known_drivers)}"
        )
        self.name = name
        self.known_drivers = list(known_drivers)


class InvalidDriverClassError(DatabaseError):
    """Configured driver class does not implement the driver interface."""

    def __init__(self, driver_class: str):
        """Initialize with the offending class name."""
        super().__init__(
            f"The given 'driver_class' {driver_class} has to implement the Driver interface."
        )
        self.driver_class = driver_class


class InvalidWrapperClassError(DatabaseError):
    """Configured connection wrapper class is not a connection subtype."""

    def __init__(self, wrapper_class: str):
        """Initialize with the offending class name."""
        super().__init__(
            f"The given 'wrapper_class' {wrapper_class} has to be a subtype of Connection."
        )
        self.wrapper_class = wrapper_class


class InvalidTableNameError(DatabaseError):
    """Table name is not valid."""

    def __init__(self, table: str):
        """Initialize with the table name."""
        super().__init__(f"Invalid table name specified: {table}", table=table)


class NoColumnsSpecifiedError(DatabaseError):
    """Table defined without columns."""

    def __init__(self, table: str):
        """Initialize with the table name."""
        super().__init__(f"No columns specified for table {table}", table=table)


class InvalidLimitOffsetError(DatabaseError):
    """Negative offset in a limit clause."""

    def __init__(self):
        """Initialize with a fixed message."""
        super().__init__(
            "Invalid Offset in Limit Query, it has to be larger than or equal to 0."
        )


class TypeExistsError(DatabaseError):
    """Column type name already taken."""

    def __init__(self, name: str):
        """Initialize with the type name."""
        super().__init__(f"Type {name} already exists.")
        self.name = name


class UnknownColumnTypeError(DatabaseError):
    """Column type name is not registered."""

    def __init__(self, name: str):
        """Initialize with the requested type name."""
        super().__init__(
            f'Unknown column type "{name}" requested. Any type that you use has to be '
            "registered with the type registry before use. If this error occurs during "
            "database introspection then you might have forgotten to register a mapping "
            "for a database type. If the type name is empty you might have a problem with "
            "the cache or forgot some mapping information."
        )
        self.name = name


class TypeNotFoundError(DatabaseError):
    """Type to be overridden does not exist."""

    def __init__(self, name: str):
        """Initialize with the type name."""
        super().__init__(f"Type to be overwritten {name} does not exist.")
        self.name = name


class TypeNotRegisteredError(DatabaseError):
    """Type instance is not registered."""

    def __init__(self, type_obj: Any, type_id: str):
        """Initialize with the type instance and its registration identifier."""
        super().__init__(
            f"Type of the class {type(type_obj).__name__}@{type_id} is not registered."
        )
        self.type_id = type_id


class TypeAlreadyRegisteredError(DatabaseError):
    """Type instance is registered already."""

    def __init__(self, type_obj: Any, type_id: str):
        """Initialize with the type instance and its registration identifier."""
        super().__init__(
            f"Type of the class {type(type_obj).__name__}@{type_id} is already registered."
        )
        self.type_id = type_id
