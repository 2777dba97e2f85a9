"""Tests for bound parameter formatting."""

import io
import math
import re
import uuid
from datetime import datetime
from decimal import Decimal

import pytest

from dbcommon.database import format_parameter, format_parameters


def _unescape(rendered: str) -> bytes:
    return bytes.fromhex("".join(re.findall(r"\\x([0-9a-f]{2})", rendered)))


class TestFormatParameters:
    """Test rendering of parameter collections."""

    def test_scalars(self):
        """Text, numbers and null render as JSON."""
        assert format_parameters(["hello", 42, None]) == '["hello", 42, null]'

    def test_binary_renders_as_hex_escapes(self):
        """Bytes that are not valid text are shown as hex escapes."""
        assert format_parameters([b"\xde\xad"]) == r'["\xde\xad"]'

    @pytest.mark.parametrize(
        "data",
        [b"\xff\xfe\x00", b"\x00", bytes(range(256)), b"plain ascii"],
    )
    def test_binary_round_trip(self, data):
        """Hex escapes are printable and reproduce the exact bytes."""
        result = format_parameters([data])

        assert all(32 <= ord(char) < 127 for char in result)
        assert _unescape(result) == data

    def test_empty_binary(self):
        """Empty bytes render as an empty quoted string."""
        assert format_parameters([b""]) == '[""]'

    def test_bytearray_and_memoryview(self):
        """Other binary types take the same path as bytes."""
        assert format_parameters([bytearray(b"\x01"), memoryview(b"\x02")]) == (
            r'["\x01", "\x02"]'
        )

    def test_released_memoryview(self):
        """A released memoryview still renders without raising."""
        view = memoryview(b"\xde\xad")
        view.release()

        result = format_parameters([view])

        assert b"released" in _unescape(result)

    def test_nested_binary(self):
        """Binary values inside containers keep their hex escapes."""
        assert format_parameters([[b"\xde\xad"]]) == r'[["\\xde\\xad"]]'
        assert format_parameters([{"blob": b"\x00"}]) == r'[{"blob":"\\x00"}]'

    def test_text_with_undecodable_bytes(self):
        """Text carrying surrogate-escaped bytes falls back to its raw bytes."""
        value = b"\xff\xfeab".decode("utf-8", "surrogateescape")
        assert format_parameters([value]) == r'["\xff\xfe\x61\x62"]'

    def test_non_ascii_text_is_escaped(self):
        """Valid non-ASCII text stays text, escaped to ASCII."""
        assert format_parameters(["café"]) == '["caf\\u00e9"]'

    def test_booleans_and_floats(self):
        """Booleans and floats use their JSON spelling."""
        assert format_parameters([True, False, 1.5]) == "[true, false, 1.5]"
        assert format_parameters([math.nan]) == "[NaN]"

    def test_named_parameters(self):
        """Named parameters render their values in mapping order."""
        assert format_parameters({"id": 7, "name": "bob"}) == '[7, "bob"]'

    def test_empty_and_none(self):
        """An empty or missing collection renders as empty brackets."""
        assert format_parameters([]) == "[]"
        assert format_parameters(None) == "[]"

    def test_nested_values(self):
        """Nested lists and dicts are compact JSON."""
        assert format_parameters([[1, 2], {"a": None}]) == '[[1,2], {"a":null}]'

    def test_rich_types(self):
        """Datetimes, decimals and UUIDs use their JSON-compatible forms."""
        value = uuid.UUID("12345678-1234-5678-1234-567812345678")
        result = format_parameters([datetime(2024, 1, 2, 3, 4, 5), Decimal("1.50"), value])

        assert result == (
            '["2024-01-02T03:04:05", "1.50", "12345678-1234-5678-1234-567812345678"]'
        )

    def test_generator_input(self):
        """Any iterable of values is accepted."""
        assert format_parameters(x for x in (1, 2)) == "[1, 2]"


class TestFormatParameter:
    """Test rendering of single values."""

    def test_resource_uses_string_form(self):
        """Handle-like values render via str()."""
        handle = io.BytesIO(b"\xff")
        assert format_parameter(handle) == str(handle)

    def test_unserializable_object_falls_back_to_hex(self):
        """Objects with no JSON form are hex-escaped from their string form."""

        class Opaque:
            def __str__(self):
                return "ab"

        assert format_parameter(Opaque()) == r'"\x61\x62"'

    def test_broken_str_never_raises(self):
        """A value whose __str__ raises still renders."""

        class Broken:
            def __str__(self):
                raise RuntimeError("no")

        result = format_parameter(Broken())
        assert result.startswith('"\\x')
        assert b"Broken" in _unescape(result)

    def test_circular_structure(self):
        """Self-referencing containers do not break formatting."""
        loop = []
        loop.append(loop)

        assert _unescape(format_parameter(loop)) == b"[[...]]"
