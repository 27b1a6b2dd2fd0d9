"""
Raw class file decoder.

Turns a byte buffer into the fixed header fields plus the ordered list of
tagged constant pool records. No cross-reference between constants is
checked here; that happens in constant_pool.resolve().
"""

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import ClassVar

from .cursor import Cursor
from .errors import UnexpectedConstantTag, UnsupportedConstantTag

log = logging.getLogger(__name__)


class ConstantPoolTag(IntEnum):
    UTF8 = 1
    INTEGER = 3
    FLOAT = 4
    LONG = 5
    DOUBLE = 6
    CLASS = 7
    STRING = 8
    FIELDREF = 9
    METHODREF = 10
    INTERFACE_METHODREF = 11
    NAME_AND_TYPE = 12
    METHOD_HANDLE = 15
    METHOD_TYPE = 16
    INVOKE_DYNAMIC = 18


# Tags the format defines but this decoder does not read
UNSUPPORTED_TAGS = frozenset({
    ConstantPoolTag.INTEGER,
    ConstantPoolTag.FLOAT,
    ConstantPoolTag.LONG,
    ConstantPoolTag.DOUBLE,
    ConstantPoolTag.INTERFACE_METHODREF,
    ConstantPoolTag.METHOD_HANDLE,
    ConstantPoolTag.METHOD_TYPE,
    ConstantPoolTag.INVOKE_DYNAMIC,
})


class ConstantKind(Enum):
    """The kinds of constant the decoder produces."""
    CLASS = "class"
    FIELD_REF = "fieldref"
    METHOD_REF = "methodref"
    STRING = "string"
    NAME_AND_TYPE = "nameandtype"
    UTF8 = "utf8"

    def __str__(self) -> str:
        return self.value


class RawConstant:
    """Base class for decoded but unresolved constant pool records."""
    kind: ClassVar[ConstantKind]


@dataclass(frozen=True)
class ConstantClass(RawConstant):
    kind: ClassVar[ConstantKind] = ConstantKind.CLASS
    name_index: int


@dataclass(frozen=True)
class ConstantFieldRef(RawConstant):
    kind: ClassVar[ConstantKind] = ConstantKind.FIELD_REF
    class_index: int
    name_and_type_index: int


@dataclass(frozen=True)
class ConstantMethodRef(RawConstant):
    kind: ClassVar[ConstantKind] = ConstantKind.METHOD_REF
    class_index: int
    name_and_type_index: int


@dataclass(frozen=True)
class ConstantString(RawConstant):
    kind: ClassVar[ConstantKind] = ConstantKind.STRING
    string_index: int


@dataclass(frozen=True)
class ConstantNameAndType(RawConstant):
    kind: ClassVar[ConstantKind] = ConstantKind.NAME_AND_TYPE
    name_index: int
    descriptor_index: int


@dataclass(frozen=True)
class ConstantUtf8(RawConstant):
    """Undecoded UTF-8 payload; decoding is deferred to resolution."""
    kind: ClassVar[ConstantKind] = ConstantKind.UTF8
    length: int
    bytes: bytes


@dataclass(frozen=True)
class RawClassFile:
    """Header fields and the raw constant pool of a class file.

    constant_pool holds constant_pool_count - 1 records; record k sits in
    pool slot k + 1 of the file.
    """
    magic: int
    minor: int
    major: int
    constant_pool_count: int
    constant_pool: tuple[RawConstant, ...]


def _read_constant(cursor: Cursor) -> RawConstant:
    """Read one tagged constant pool record."""
    tag = cursor.read_u1()

    if tag == ConstantPoolTag.UTF8:
        length = cursor.read_u2()
        return ConstantUtf8(length, cursor.read_bytes(length))

    elif tag == ConstantPoolTag.CLASS:
        return ConstantClass(cursor.read_u2())

    elif tag == ConstantPoolTag.STRING:
        return ConstantString(cursor.read_u2())

    elif tag == ConstantPoolTag.FIELDREF:
        class_idx = cursor.read_u2()
        nat_idx = cursor.read_u2()
        return ConstantFieldRef(class_idx, nat_idx)

    elif tag == ConstantPoolTag.METHODREF:
        class_idx = cursor.read_u2()
        nat_idx = cursor.read_u2()
        return ConstantMethodRef(class_idx, nat_idx)

    elif tag == ConstantPoolTag.NAME_AND_TYPE:
        name_idx = cursor.read_u2()
        desc_idx = cursor.read_u2()
        return ConstantNameAndType(name_idx, desc_idx)

    elif tag in UNSUPPORTED_TAGS:
        raise UnsupportedConstantTag(tag)

    raise UnexpectedConstantTag(tag)


def parse(data: bytes) -> RawClassFile:
    """Decode the header and constant pool of a class file."""
    cursor = Cursor(data)

    magic = cursor.read_u4()

    minor = cursor.read_u2()
    major = cursor.read_u2()

    count = cursor.read_u2()
    pool = [_read_constant(cursor) for _ in range(count - 1)]

    log.debug("decoded %d raw constants, %d trailing byte(s) left unread",
              len(pool), cursor.remaining)

    return RawClassFile(
        magic=magic,
        minor=minor,
        major=major,
        constant_pool_count=count,
        constant_pool=tuple(pool),
    )
