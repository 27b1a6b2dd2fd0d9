"""
Sequential big-endian reader over an in-memory class file.
"""

import struct

from .errors import ReadPastEnd


_INTEGER_FORMATS = {
    1: ">B",
    2: ">H",
    4: ">I",
}


class Cursor:
    """Forward-only, bounds-checked reader.

    Every read either consumes exactly the requested number of bytes or
    raises ReadPastEnd and leaves the position untouched.
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes):
        self._data = memoryview(data)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def _check(self, count: int):
        left = self.remaining
        if count > left:
            raise ReadPastEnd(tried=count, left=left)

    def read_integer(self, width: int) -> int:
        """Read an unsigned big-endian integer of 1, 2 or 4 bytes."""
        fmt = _INTEGER_FORMATS.get(width)
        if fmt is None:
            raise ValueError(f"Unsupported integer width: {width}")
        self._check(width)
        val = struct.unpack_from(fmt, self._data, self._pos)[0]
        self._pos += width
        return val

    def read_u1(self) -> int:
        return self.read_integer(1)

    def read_u2(self) -> int:
        return self.read_integer(2)

    def read_u4(self) -> int:
        return self.read_integer(4)

    def read_bytes(self, count: int) -> bytes:
        """Read exactly `count` bytes into a new bytes object."""
        if count < 0:
            raise ValueError(f"Negative read length: {count}")
        self._check(count)
        val = bytes(self._data[self._pos:self._pos + count])
        self._pos += count
        return val
