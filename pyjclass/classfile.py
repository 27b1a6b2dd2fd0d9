"""
Class assembly: header fields plus the resolved constant pool.
"""

import json
from dataclasses import dataclass, fields, is_dataclass
from pathlib import Path

from .constant_pool import ConstantPool, resolve
from .raw import RawClassFile, parse

CLASS_FILE_MAGIC = 0xCAFEBABE


@dataclass(frozen=True)
class Magic:
    value: int

    @property
    def is_class_file(self) -> bool:
        return self.value == CLASS_FILE_MAGIC

    def __str__(self) -> str:
        return f"{self.value:x}"


@dataclass(frozen=True)
class Version:
    major: int
    minor: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


def _serialize_value(value):
    """Helper to serialize a value for JSON."""
    if is_dataclass(value):
        return {f.name: _serialize_value(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (list, tuple)):
        return [_serialize_value(v) for v in value]
    return value


@dataclass(frozen=True)
class Class:
    """A decoded class file."""
    magic: Magic
    version: Version
    constant_pool: ConstantPool

    @classmethod
    def build(cls, raw: RawClassFile) -> "Class":
        """Resolve the constant pool of `raw` and wrap the header fields."""
        return cls(
            magic=Magic(raw.magic),
            version=Version(raw.major, raw.minor),
            constant_pool=resolve(raw.constant_pool, raw.constant_pool_count),
        )

    def to_dict(self) -> dict:
        return {
            "magic": str(self.magic),
            "version": str(self.version),
            "constant_pool": _serialize_value(self.constant_pool),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def parse_bytes(data: bytes) -> Class:
    """Decode a class file held in memory."""
    return Class.build(parse(data))


def read_class_file(path: str | Path) -> Class:
    """Read a single class file."""
    return parse_bytes(Path(path).read_bytes())
