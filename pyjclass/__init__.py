"""pyjclass - decode the constant pool of Java class files."""

from .classfile import Class, Magic, Version, parse_bytes, read_class_file
from .constant_pool import ConstantPool, normalise_index, resolve
from .errors import (
    ClassFileError,
    RawError,
    ReadPastEnd,
    UnexpectedConstantTag,
    UnsupportedConstantTag,
    ResolveError,
    OutOfRangeIndex,
    UnexpectedConstantKind,
    Utf8DecodeError,
    DescriptorError,
    WriteError,
)
from .raw import ConstantKind, RawClassFile, parse

__version__ = "0.1.0"
__all__ = [
    "Class",
    "Magic",
    "Version",
    "parse_bytes",
    "read_class_file",
    "ConstantPool",
    "ConstantKind",
    "RawClassFile",
    "parse",
    "resolve",
    "normalise_index",
    "ClassFileError",
    "RawError",
    "ReadPastEnd",
    "UnexpectedConstantTag",
    "UnsupportedConstantTag",
    "ResolveError",
    "OutOfRangeIndex",
    "UnexpectedConstantKind",
    "Utf8DecodeError",
    "DescriptorError",
    "WriteError",
]
