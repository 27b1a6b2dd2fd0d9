"""Tests for the bounds-checked byte cursor."""

import pytest

from pyjclass.cursor import Cursor
from pyjclass.errors import ReadPastEnd, RawError


class TestReads:
    def test_big_endian_integers(self):
        cursor = Cursor(bytes.fromhex("01 0203 04050607"))
        assert cursor.read_integer(1) == 0x01
        assert cursor.read_integer(2) == 0x0203
        assert cursor.read_integer(4) == 0x04050607
        assert cursor.remaining == 0

    def test_named_widths(self):
        cursor = Cursor(bytes.fromhex("FF FFFF FFFFFFFF"))
        assert cursor.read_u1() == 0xFF
        assert cursor.read_u2() == 0xFFFF
        assert cursor.read_u4() == 0xFFFFFFFF

    def test_read_bytes_returns_copy(self):
        data = bytearray(b"abc")
        cursor = Cursor(data)
        chunk = cursor.read_bytes(2)
        data[0] = ord("z")
        assert chunk == b"ab"
        assert isinstance(chunk, bytes)
        assert cursor.position == 2

    def test_read_zero_bytes(self):
        cursor = Cursor(b"")
        assert cursor.read_bytes(0) == b""
        assert cursor.position == 0

    def test_invalid_width(self):
        with pytest.raises(ValueError):
            Cursor(b"\x00\x00\x00").read_integer(3)


class TestBoundaries:
    def test_read_exactly_remaining(self):
        cursor = Cursor(b"\x00\x01")
        assert cursor.read_u2() == 1
        assert cursor.remaining == 0

    def test_read_one_past_end(self):
        cursor = Cursor(b"\x00\x01\x02")
        with pytest.raises(ReadPastEnd) as exc:
            cursor.read_u4()
        assert exc.value.tried == 4
        assert exc.value.left == 3

    def test_failed_read_does_not_advance(self):
        cursor = Cursor(b"\x00\x01\x02")
        cursor.read_u1()
        with pytest.raises(ReadPastEnd):
            cursor.read_bytes(3)
        assert cursor.position == 1
        assert cursor.read_bytes(2) == b"\x01\x02"

    def test_empty_buffer(self):
        with pytest.raises(ReadPastEnd) as exc:
            Cursor(b"").read_u1()
        assert (exc.value.tried, exc.value.left) == (1, 0)

    def test_is_raw_error(self):
        with pytest.raises(RawError):
            Cursor(b"").read_u2()
