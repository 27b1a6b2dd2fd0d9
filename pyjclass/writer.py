"""
Encoder for the header and constant pool, the inverse of raw.parse().
"""

import struct

from .classfile import CLASS_FILE_MAGIC
from .errors import WriteError
from .raw import (
    ConstantClass,
    ConstantFieldRef,
    ConstantMethodRef,
    ConstantNameAndType,
    ConstantPoolTag,
    ConstantString,
    ConstantUtf8,
    RawClassFile,
    RawConstant,
)

U2_MAX = 0xFFFF


def _write_constant(out: bytearray, constant: RawConstant):
    if isinstance(constant, ConstantUtf8):
        if constant.length != len(constant.bytes):
            raise WriteError(
                f"utf8 length {constant.length} does not match {len(constant.bytes)} payload bytes"
            )
        out.append(ConstantPoolTag.UTF8)
        out.extend(struct.pack(">H", constant.length))
        out.extend(constant.bytes)

    elif isinstance(constant, ConstantClass):
        out.append(ConstantPoolTag.CLASS)
        out.extend(struct.pack(">H", constant.name_index))

    elif isinstance(constant, ConstantString):
        out.append(ConstantPoolTag.STRING)
        out.extend(struct.pack(">H", constant.string_index))

    elif isinstance(constant, ConstantFieldRef):
        out.append(ConstantPoolTag.FIELDREF)
        out.extend(struct.pack(">HH", constant.class_index, constant.name_and_type_index))

    elif isinstance(constant, ConstantMethodRef):
        out.append(ConstantPoolTag.METHODREF)
        out.extend(struct.pack(">HH", constant.class_index, constant.name_and_type_index))

    elif isinstance(constant, ConstantNameAndType):
        out.append(ConstantPoolTag.NAME_AND_TYPE)
        out.extend(struct.pack(">HH", constant.name_index, constant.descriptor_index))

    else:
        raise WriteError(f"Cannot write constant: {constant!r}")


def write_class_file(raw: RawClassFile) -> bytes:
    """Encode header fields and raw constants back into class file bytes."""
    if not 0 <= raw.constant_pool_count <= U2_MAX:
        raise WriteError(f"constant pool count {raw.constant_pool_count} does not fit in u2")
    if len(raw.constant_pool) != max(raw.constant_pool_count - 1, 0):
        raise WriteError(
            f"constant pool count {raw.constant_pool_count} does not match "
            f"{len(raw.constant_pool)} constants"
        )

    out = bytearray()
    try:
        out.extend(struct.pack(">IHHH", raw.magic, raw.minor, raw.major,
                               raw.constant_pool_count))
        for constant in raw.constant_pool:
            _write_constant(out, constant)
    except struct.error as e:
        raise WriteError(str(e)) from e
    return bytes(out)


class ConstantPoolWriter:
    """Collects raw constants, handing out the 1-based slot of each.

    Identical constants share a slot. Referenced constants are always added
    before the constant that references them.
    """

    def __init__(self):
        self.constants: list[RawConstant] = []
        self._slots: dict[RawConstant, int] = {}

    @property
    def count(self) -> int:
        """The constant_pool_count this pool is written with."""
        return len(self.constants) + 1

    def add(self, constant: RawConstant) -> int:
        if constant in self._slots:
            return self._slots[constant]
        if self.count >= U2_MAX:
            raise WriteError(f"constant pool is full ({U2_MAX - 1} entries)")
        self.constants.append(constant)
        slot = len(self.constants)
        self._slots[constant] = slot
        return slot

    def add_utf8(self, value: str) -> int:
        data = value.encode("utf-8")
        if len(data) > U2_MAX:
            raise WriteError(f"utf8 constant of {len(data)} bytes is too long")
        return self.add(ConstantUtf8(len(data), data))

    def add_class(self, internal_name: str) -> int:
        return self.add(ConstantClass(self.add_utf8(internal_name)))

    def add_string(self, value: str) -> int:
        return self.add(ConstantString(self.add_utf8(value)))

    def add_name_and_type(self, name: str, descriptor: str) -> int:
        name_idx = self.add_utf8(name)
        desc_idx = self.add_utf8(descriptor)
        return self.add(ConstantNameAndType(name_idx, desc_idx))

    def add_fieldref(self, class_name: str, field_name: str, descriptor: str) -> int:
        class_idx = self.add_class(class_name)
        nat_idx = self.add_name_and_type(field_name, descriptor)
        return self.add(ConstantFieldRef(class_idx, nat_idx))

    def add_methodref(self, class_name: str, method_name: str, descriptor: str) -> int:
        class_idx = self.add_class(class_name)
        nat_idx = self.add_name_and_type(method_name, descriptor)
        return self.add(ConstantMethodRef(class_idx, nat_idx))


class ClassFileWriter:
    """Writes the class file header followed by a constant pool."""

    def __init__(self, major: int = 52, minor: int = 0, magic: int = CLASS_FILE_MAGIC):
        self.major = major
        self.minor = minor
        self.magic = magic

    def to_raw(self, cp: ConstantPoolWriter) -> RawClassFile:
        return RawClassFile(
            magic=self.magic,
            minor=self.minor,
            major=self.major,
            constant_pool_count=cp.count,
            constant_pool=tuple(cp.constants),
        )

    def to_bytes(self, cp: ConstantPoolWriter) -> bytes:
        return write_class_file(self.to_raw(cp))

    def write(self, path: str, cp: ConstantPoolWriter):
        with open(path, "wb") as f:
            f.write(self.to_bytes(cp))
