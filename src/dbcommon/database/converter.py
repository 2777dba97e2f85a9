"""Per-driver conversion of raw driver errors into normalized exceptions."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

from .exceptions import (
    ConnectionException,
    ConstraintViolationException,
    DeadlockException,
    DriverException,
    ExceptionKind,
    ForeignKeyConstraintViolationException,
    GenericDriverException,
    InvalidFieldNameException,
    LockTimeoutException,
    NonUniqueFieldNameException,
    NotNullConstraintViolationException,
    ReadOnlyException,
    SyntaxErrorException,
    TableExistsException,
    TableNotFoundException,
    UniqueConstraintViolationException,
    error_code_of,
    exception_for_kind,
    sql_state_of,
)

ExceptionTarget = type[DriverException] | ExceptionKind | str


@runtime_checkable
class ExceptionConverter(Protocol):
    """Maps a raw driver error to a normalized exception."""

    def convert(self, message: str, cause: BaseException) -> DriverException: ...


def get_exception_converter(driver: Any) -> ExceptionConverter | None:
    """Return the converter a driver exposes, or None if it has none."""
    converter = getattr(driver, "exception_converter", None)
    if isinstance(converter, ExceptionConverter):
        return converter
    return None


def _as_class(target: ExceptionTarget) -> type[DriverException]:
    if isinstance(target, type):
        return target
    return exception_for_kind(target)


def _freeze(
    mapping: Mapping[Any, ExceptionTarget] | None,
) -> Mapping[str, type[DriverException]]:
    return MappingProxyType(
        {str(key): _as_class(target) for key, target in (mapping or {}).items()}
    )


class GenericExceptionConverter:
    """Converter for drivers without meaningful error codes."""

    def convert(self, message: str, cause: BaseException) -> DriverException:
        return GenericDriverException(message, cause)


class CodeMappingExceptionConverter:
    """Table-driven converter.

    Lookup order is vendor error code, exact SQLSTATE, then the two-character
    SQLSTATE class. Anything unmatched becomes a GenericDriverException.
    """

    def __init__(
        self,
        error_codes: Mapping[int | str, ExceptionTarget] | None = None,
        sql_states: Mapping[str, ExceptionTarget] | None = None,
        sql_state_classes: Mapping[str, ExceptionTarget] | None = None,
    ):
        self.error_codes = _freeze(error_codes)
        self.sql_states = _freeze(sql_states)
        self.sql_state_classes = _freeze(sql_state_classes)

    def resolve(self, cause: BaseException) -> type[DriverException]:
        """Pick the exception class for a raw driver error."""
        code = error_code_of(cause)
        if code is not None and str(code) in self.error_codes:
            return self.error_codes[str(code)]

        state = sql_state_of(cause)
        if state:
            if state in self.sql_states:
                return self.sql_states[state]
            if state[:2] in self.sql_state_classes:
                return self.sql_state_classes[state[:2]]

        return GenericDriverException

    def convert(self, message: str, cause: BaseException) -> DriverException:
        return self.resolve(cause)(message, cause)


SQLSTATE_EXCEPTIONS: dict[str, type[DriverException]] = {
    "23000": ConstraintViolationException,
    "23502": NotNullConstraintViolationException,
    "23503": ForeignKeyConstraintViolationException,
    "23505": UniqueConstraintViolationException,
    "25006": ReadOnlyException,
    "40001": DeadlockException,
    "40P01": DeadlockException,
    "42601": SyntaxErrorException,
    "42702": NonUniqueFieldNameException,
    "42703": InvalidFieldNameException,
    "42P01": TableNotFoundException,
    "42P07": TableExistsException,
    "55P03": LockTimeoutException,
}

SQLSTATE_CLASS_EXCEPTIONS: dict[str, type[DriverException]] = {
    "08": ConnectionException,
    "23": ConstraintViolationException,
}


class SQLStateExceptionConverter(CodeMappingExceptionConverter):
    """Converter for drivers reporting ANSI / PostgreSQL SQLSTATE codes."""

    def __init__(self):
        super().__init__(
            error_codes={"23000": ConstraintViolationException},
            sql_states=SQLSTATE_EXCEPTIONS,
            sql_state_classes=SQLSTATE_CLASS_EXCEPTIONS,
        )


MYSQL_ERROR_CODES: dict[int, type[DriverException]] = {
    1213: DeadlockException,
    1205: LockTimeoutException,
    1050: TableExistsException,
    1051: TableNotFoundException,
    1146: TableNotFoundException,
    1109: TableNotFoundException,
    1216: ForeignKeyConstraintViolationException,
    1217: ForeignKeyConstraintViolationException,
    1451: ForeignKeyConstraintViolationException,
    1452: ForeignKeyConstraintViolationException,
    1701: ForeignKeyConstraintViolationException,
    1062: UniqueConstraintViolationException,
    1557: UniqueConstraintViolationException,
    1569: UniqueConstraintViolationException,
    1586: UniqueConstraintViolationException,
    1054: InvalidFieldNameException,
    1166: InvalidFieldNameException,
    1611: InvalidFieldNameException,
    1052: NonUniqueFieldNameException,
    1060: NonUniqueFieldNameException,
    1110: NonUniqueFieldNameException,
    1064: SyntaxErrorException,
    1149: SyntaxErrorException,
    1287: SyntaxErrorException,
    1341: SyntaxErrorException,
    1342: SyntaxErrorException,
    1343: SyntaxErrorException,
    1344: SyntaxErrorException,
    1382: SyntaxErrorException,
    1479: SyntaxErrorException,
    1541: SyntaxErrorException,
    1554: SyntaxErrorException,
    1626: SyntaxErrorException,
    1044: ConnectionException,
    1045: ConnectionException,
    1046: ConnectionException,
    1049: ConnectionException,
    1095: ConnectionException,
    1142: ConnectionException,
    1143: ConnectionException,
    1227: ConnectionException,
    1370: ConnectionException,
    1429: ConnectionException,
    2002: ConnectionException,
    2005: ConnectionException,
    2006: ConnectionException,
    2013: ConnectionException,
    1048: NotNullConstraintViolationException,
    1121: NotNullConstraintViolationException,
    1138: NotNullConstraintViolationException,
    1171: NotNullConstraintViolationException,
    1252: NotNullConstraintViolationException,
    1263: NotNullConstraintViolationException,
    1364: NotNullConstraintViolationException,
    1566: NotNullConstraintViolationException,
    1290: ReadOnlyException,
    1792: ReadOnlyException,
    23000: ConstraintViolationException,
}


class MySQLExceptionConverter(CodeMappingExceptionConverter):
    """Converter for MySQL / MariaDB vendor error codes."""

    def __init__(self):
        super().__init__(
            error_codes=MYSQL_ERROR_CODES,
            sql_states=SQLSTATE_EXCEPTIONS,
            sql_state_classes=SQLSTATE_CLASS_EXCEPTIONS,
        )
