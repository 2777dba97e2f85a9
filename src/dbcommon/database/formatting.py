"""Diagnostic rendering of bound statement parameters."""

import io
import json
import mmap
import socket
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic_core import to_jsonable_python

# Handle-like values are shown by their own string form only
RESOURCE_TYPES: tuple[type, ...] = (io.IOBase, socket.socket, mmap.mmap)
BINARY_TYPES: tuple[type, ...] = (bytes, bytearray, memoryview)


def hex_escape(data: bytes) -> str:
    r"""Render bytes as a quoted string of ``\xNN`` escapes."""
    return '"' + _escaped(data) + '"'


def _escaped(data: bytes) -> str:
    return "".join(f"\\x{pair}" for pair in _pairs(data.hex()))


def _pairs(digits: str) -> Iterable[str]:
    return (digits[i : i + 2] for i in range(0, len(digits), 2))


def _text_bytes(value: str) -> bytes | None:
    """Return the raw bytes of text that is not valid UTF-8, else None."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        try:
            return value.encode("utf-8", "surrogateescape")
        except UnicodeEncodeError:
            return value.encode("utf-8", "surrogatepass")
    return None


def _str_bytes(value: Any) -> bytes:
    try:
        text = str(value)
    except Exception:
        text = object.__repr__(value)
    return text.encode("utf-8", "surrogatepass")


def _json_default(value: Any) -> Any:
    """Make nested values JSON-compatible; nested binary becomes escape text."""
    if isinstance(value, BINARY_TYPES):
        return _escaped(bytes(value))
    return to_jsonable_python(value)


def format_parameter(value: Any) -> str:
    """Render a single bound parameter value."""
    if isinstance(value, RESOURCE_TYPES):
        try:
            return str(value)
        except Exception:
            return object.__repr__(value)

    if isinstance(value, BINARY_TYPES):
        try:
            data = bytes(value)
        except Exception:
            # e.g. a released memoryview
            data = _str_bytes(value)
        return hex_escape(data)

    if isinstance(value, str):
        raw = _text_bytes(value)
        if raw is not None:
            return hex_escape(raw)

    try:
        return json.dumps(
            value,
            default=_json_default,
            separators=(",", ":"),
        )
    except Exception:
        # Not representable as JSON text
        return hex_escape(_str_bytes(value))


def format_parameters(params: Iterable[Any] | Mapping[str, Any] | None) -> str:
    """Return a human-readable representation of statement parameters.

    Positional parameters keep their order; for named parameters the values
    are rendered in mapping order. Binary values and text that is not valid
    UTF-8 are shown as hex escapes so that every value stays printable and
    no byte is lost.

    Args:
        params: Bound parameter values.

    Returns:
        The rendered values joined with ``", "`` inside ``[...]``.
    """
    values = parameter_values(params)
    return "[" + ", ".join(format_parameter(value) for value in values) + "]"


def parameter_values(params: Iterable[Any] | Mapping[str, Any] | None) -> list[Any]:
    """Collect bound parameter values into a list, in binding order."""
    if params is None:
        return []
    if isinstance(params, Mapping):
        return list(params.values())
    if isinstance(params, (str, *BINARY_TYPES)):
        return [params]
    try:
        return list(params)
    except TypeError:
        return [params]
