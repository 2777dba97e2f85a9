"""Wrapping of raw driver errors into normalized exceptions."""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterable, Mapping
from contextlib import contextmanager
from typing import Any

from .config import get_diagnostics_config
from .converter import get_exception_converter
from .exceptions import (
    DriverError,
    DriverException,
    GenericDriverException,
    is_normalized,
)
from .formatting import format_parameters, parameter_values
from .metrics import get_db_metrics

logger = logging.getLogger(__name__)

UNRENDERABLE_PARAMS = "[<parameters could not be rendered>]"


def raw_message(error: BaseException) -> str:
    """Return the native message of a raw driver error."""
    if isinstance(error, DriverError):
        return error.message
    try:
        return str(error)
    except Exception:
        return type(error).__name__


def wrap(driver: Any, raw_error: BaseException, message: str) -> DriverException:
    """Convert a raw driver error into a normalized exception.

    Errors that are already normalized are returned unchanged. Otherwise the
    driver's exception converter decides the exception kind; drivers without
    one get a GenericDriverException. The raw error is always kept as cause.

    Args:
        driver: Driver whose statement failed.
        raw_error: Error raised by the driver.
        message: Composed diagnostic message.

    Returns:
        The normalized exception. It is returned, not raised.
    """
    if is_normalized(raw_error):
        return raw_error  # type: ignore[return-value]

    converter = get_exception_converter(driver)
    if converter is not None:
        try:
            converted = converter.convert(message, raw_error)
        except Exception:
            logger.exception(
                "Exception converter %s failed on %s",
                type(converter).__name__,
                type(raw_error).__name__,
            )
        else:
            if is_normalized(converted):
                return converted
            logger.warning(
                "Exception converter %s returned %s instead of a driver exception",
                type(converter).__name__,
                type(converted).__name__,
            )

    return GenericDriverException(message, raw_error)


def wrap_for_query(
    driver: Any,
    raw_error: BaseException,
    sql: str,
    params: Iterable[Any] | Mapping[str, Any] | None = None,
    *,
    include_params: bool = True,
) -> DriverException:
    """Normalize an error raised while executing a statement."""
    message = f"An exception occurred while executing '{sql}'"

    if include_params:
        try:
            values = parameter_values(params)
            rendered = format_parameters(values) if values else None
        except Exception:
            logger.exception("Failed to render parameters for %r", sql)
            rendered = UNRENDERABLE_PARAMS
        if rendered is not None:
            message += f" with params {rendered}"

    message += ":\n\n" + raw_message(raw_error)

    return wrap(driver, raw_error, message)


def wrap_for_driver(driver: Any, raw_error: BaseException) -> DriverException:
    """Normalize an error raised by a driver outside of statement execution."""
    return wrap(
        driver,
        raw_error,
        "An exception occurred in driver: " + raw_message(raw_error),
    )


@contextmanager
def translate_errors(
    driver: Any,
    sql: str | None = None,
    params: Iterable[Any] | Mapping[str, Any] | None = None,
    *,
    table: str | None = None,
    operation: str | None = None,
) -> Generator[None, None, None]:
    """Re-raise errors from the enclosed block as normalized exceptions."""
    include_params = get_diagnostics_config().include_params

    try:
        yield
    except Exception as e:
        if is_normalized(e):
            raise

        if sql is not None:
            error = wrap_for_query(driver, e, sql, params, include_params=include_params)
        else:
            error = wrap_for_driver(driver, e)

        if getattr(error, "table", None) is None:
            error.table = table
        if getattr(error, "operation", None) is None:
            error.operation = operation

        logger.debug(
            "Normalized %s from %s as %s",
            type(e).__name__,
            type(driver).__name__,
            error.kind,
        )
        get_db_metrics().record_exception(error, driver)
        raise error from e
