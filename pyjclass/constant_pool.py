"""
Constant pool resolution.

The raw pool addresses every constant by its 1-based slot in the file. The
resolved pool splits constants by kind into dense tuples and rewrites each
cross-reference as an index into the tuple of the referenced kind.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .errors import OutOfRangeIndex, UnexpectedConstantKind, Utf8DecodeError
from .raw import (
    ConstantClass,
    ConstantFieldRef,
    ConstantKind,
    ConstantMethodRef,
    ConstantNameAndType,
    ConstantString,
    ConstantUtf8,
    RawConstant,
)

log = logging.getLogger(__name__)


def normalise_index(index: int) -> int:
    """Convert a 1-based pool index from the file to a 0-based raw offset."""
    return index - 1


class IndexKeeper:
    """Maps raw pool offsets of one kind to their dense resolved index."""

    def __init__(self, kind: ConstantKind, size: int):
        self.kind = kind
        self._table: list[Optional[int]] = [None] * size
        self._next = 0

    def __len__(self) -> int:
        return self._next

    def assign(self, slot: int) -> int:
        index = self._next
        self._table[slot] = index
        self._next += 1
        return index

    def lookup(self, slot: int) -> int:
        index = self._table[slot]
        if index is None:
            raise KeyError(f"No {self.kind} constant at raw offset {slot}")
        return index

    @classmethod
    def build(cls, kind: ConstantKind, raw_pool: Sequence[RawConstant],
              size: int) -> "IndexKeeper":
        """Number every constant of `kind` in pool order."""
        keeper = cls(kind, size)
        for slot, constant in enumerate(raw_pool):
            if constant.kind is kind:
                keeper.assign(slot)
        return keeper


@dataclass(frozen=True)
class ClassEntry:
    name_index: int


@dataclass(frozen=True)
class StringEntry:
    string_index: int


@dataclass(frozen=True)
class NameAndTypeEntry:
    name_index: int
    descriptor_index: int


@dataclass(frozen=True)
class FieldRefEntry:
    class_index: int
    name_and_type_index: int


@dataclass(frozen=True)
class MethodRefEntry:
    class_index: int
    name_and_type_index: int


@dataclass(frozen=True)
class ConstantPool:
    """Resolved constant pool, one tuple per constant kind.

    Indices inside entries point into the tuple of the referenced kind:
    ClassEntry.name_index into utf8s, FieldRefEntry.class_index into
    classes, and so on.
    """
    classes: tuple[ClassEntry, ...] = ()
    field_refs: tuple[FieldRefEntry, ...] = ()
    method_refs: tuple[MethodRefEntry, ...] = ()
    strings: tuple[StringEntry, ...] = ()
    name_and_types: tuple[NameAndTypeEntry, ...] = ()
    utf8s: tuple[str, ...] = ()

    def utf8(self, index: int) -> str:
        return self.utf8s[index]

    def class_name(self, entry: ClassEntry) -> str:
        """Internal name of a class constant, e.g. 'java/lang/Object'."""
        return self.utf8s[entry.name_index]

    def string_value(self, entry: StringEntry) -> str:
        return self.utf8s[entry.string_index]

    def name_and_type(self, entry: NameAndTypeEntry) -> tuple[str, str]:
        """Return (name, descriptor) for a name-and-type constant."""
        return self.utf8s[entry.name_index], self.utf8s[entry.descriptor_index]

    def member(self, ref) -> tuple[str, str, str]:
        """Return (class name, member name, descriptor) for a field or method ref."""
        owner = self.class_name(self.classes[ref.class_index])
        name, descriptor = self.name_and_type(self.name_and_types[ref.name_and_type_index])
        return owner, name, descriptor


class _Resolver:
    """Second pass: validate references and rewrite them into dense indices."""

    def __init__(self, raw_pool: Sequence[RawConstant], constant_pool_count: int):
        self.raw_pool = raw_pool
        self.count = constant_pool_count
        size = max(constant_pool_count, len(raw_pool))
        self.keepers = {
            kind: IndexKeeper.build(kind, raw_pool, size)
            for kind in (ConstantKind.UTF8, ConstantKind.CLASS, ConstantKind.NAME_AND_TYPE)
        }

    def _target(self, index: int, expected: ConstantKind, upper: int) -> int:
        """Check raw `index` against the pool and return its resolved index."""
        slot = normalise_index(index)
        if not 1 <= index <= upper or slot >= len(self.raw_pool):
            raise OutOfRangeIndex(slot)
        actual = self.raw_pool[slot].kind
        if actual is not expected:
            raise UnexpectedConstantKind(expected=expected, actual=actual)
        return self.keepers[expected].lookup(slot)

    def single(self, index: int, expected: ConstantKind) -> int:
        return self._target(index, expected, self.count - 1)

    def dual(self, first: int, first_kind: ConstantKind,
             second: int, second_kind: ConstantKind) -> tuple[int, int]:
        # Two-index constants may not point at the last slot
        upper = self.count - 2
        return (self._target(first, first_kind, upper),
                self._target(second, second_kind, upper))

    def resolve(self) -> ConstantPool:
        classes = []
        field_refs = []
        method_refs = []
        strings = []
        name_and_types = []
        utf8s = []

        for slot, constant in enumerate(self.raw_pool):
            if isinstance(constant, ConstantUtf8):
                try:
                    utf8s.append(constant.bytes.decode("utf-8"))
                except UnicodeDecodeError as e:
                    raise Utf8DecodeError(slot + 1, e.reason) from e

            elif isinstance(constant, ConstantClass):
                name = self.single(constant.name_index, ConstantKind.UTF8)
                classes.append(ClassEntry(name))

            elif isinstance(constant, ConstantString):
                value = self.single(constant.string_index, ConstantKind.UTF8)
                strings.append(StringEntry(value))

            elif isinstance(constant, ConstantNameAndType):
                name, desc = self.dual(
                    constant.name_index, ConstantKind.UTF8,
                    constant.descriptor_index, ConstantKind.UTF8,
                )
                name_and_types.append(NameAndTypeEntry(name, desc))

            elif isinstance(constant, ConstantFieldRef):
                owner, nat = self.dual(
                    constant.class_index, ConstantKind.CLASS,
                    constant.name_and_type_index, ConstantKind.NAME_AND_TYPE,
                )
                field_refs.append(FieldRefEntry(owner, nat))

            elif isinstance(constant, ConstantMethodRef):
                owner, nat = self.dual(
                    constant.class_index, ConstantKind.CLASS,
                    constant.name_and_type_index, ConstantKind.NAME_AND_TYPE,
                )
                method_refs.append(MethodRefEntry(owner, nat))

            else:
                raise TypeError(f"Unknown raw constant: {constant!r}")

        log.debug("resolved %d utf8, %d class, %d string, %d name-and-type, "
                  "%d fieldref, %d methodref constants",
                  len(utf8s), len(classes), len(strings), len(name_and_types),
                  len(field_refs), len(method_refs))

        return ConstantPool(
            classes=tuple(classes),
            field_refs=tuple(field_refs),
            method_refs=tuple(method_refs),
            strings=tuple(strings),
            name_and_types=tuple(name_and_types),
            utf8s=tuple(utf8s),
        )


def resolve(raw_pool: Sequence[RawConstant], constant_pool_count: int) -> ConstantPool:
    """Validate every reference in `raw_pool` and build the per-kind pool."""
    return _Resolver(raw_pool, constant_pool_count).resolve()
