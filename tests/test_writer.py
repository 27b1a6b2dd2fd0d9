"""Tests for the class file writer."""

import pytest

from pyjclass.errors import WriteError
from pyjclass.raw import (
    ConstantClass,
    ConstantFieldRef,
    ConstantNameAndType,
    ConstantUtf8,
    RawClassFile,
    RawConstant,
    parse,
)
from pyjclass.writer import ClassFileWriter, ConstantPoolWriter, write_class_file


def raw_file(*constants, count=None):
    return RawClassFile(
        magic=0xCAFEBABE,
        minor=0,
        major=52,
        constant_pool_count=len(constants) + 1 if count is None else count,
        constant_pool=tuple(constants),
    )


class TestConstantPoolWriter:
    def test_deduplicates_entries(self):
        cp = ConstantPoolWriter()
        assert cp.add_utf8("foo") == 1
        assert cp.add_class("foo") == 2
        assert cp.add_utf8("foo") == 1
        assert cp.add_class("foo") == 2
        assert cp.count == 3
        assert cp.constants == [ConstantUtf8(3, b"foo"), ConstantClass(1)]

    def test_kinds_do_not_collide(self):
        cp = ConstantPoolWriter()
        cp.add_utf8("a")
        assert cp.add_class("a") != cp.add_string("a")

    def test_shared_name_and_type(self):
        cp = ConstantPoolWriter()
        first = cp.add_methodref("A", "run", "()V")
        second = cp.add_methodref("B", "run", "()V")
        assert first != second
        assert cp.add_name_and_type("run", "()V") == 5

    def test_pool_full(self):
        cp = ConstantPoolWriter()
        for i in range(0xFFFE):
            cp.add(ConstantClass(i))
        assert cp.count == 0xFFFF
        with pytest.raises(WriteError):
            cp.add_utf8("one too many")

    def test_utf8_too_long(self):
        with pytest.raises(WriteError):
            ConstantPoolWriter().add_utf8("x" * 0x10000)


class TestWriteClassFile:
    def test_example_layout(self, example_bytes):
        cp = ConstantPoolWriter()
        cp.add_class("foo")
        assert ClassFileWriter(major=52, minor=0).to_bytes(cp) == example_bytes

    def test_inverse_of_parse(self, example_bytes, hello_bytes):
        assert write_class_file(parse(example_bytes)) == example_bytes
        assert write_class_file(parse(hello_bytes)) == hello_bytes

    def test_header(self):
        data = ClassFileWriter(major=50, minor=3).to_bytes(ConstantPoolWriter())
        raw = parse(data)
        assert (raw.magic, raw.major, raw.minor) == (0xCAFEBABE, 50, 3)
        assert raw.constant_pool_count == 1

    def test_all_kinds(self):
        raw = raw_file(
            ConstantUtf8(1, b"a"),
            ConstantClass(1),
            ConstantNameAndType(1, 1),
            ConstantFieldRef(2, 3),
        )
        assert parse(write_class_file(raw)) == raw

    def test_unknown_constant(self):
        class Opaque(RawConstant):
            pass

        with pytest.raises(WriteError):
            write_class_file(raw_file(Opaque()))

    def test_count_mismatch(self):
        with pytest.raises(WriteError):
            write_class_file(raw_file(ConstantClass(1), count=5))

    def test_count_too_large(self):
        with pytest.raises(WriteError):
            write_class_file(raw_file(count=0x10000))

    def test_index_too_large(self):
        with pytest.raises(WriteError):
            write_class_file(raw_file(ConstantClass(0x10000)))

    def test_utf8_length_mismatch(self):
        with pytest.raises(WriteError):
            write_class_file(raw_file(ConstantUtf8(5, b"abc")))

    def test_write_file(self, tmp_path):
        cp = ConstantPoolWriter()
        cp.add_class("p/Q")
        path = tmp_path / "Q.class"
        ClassFileWriter().write(str(path), cp)
        raw = parse(path.read_bytes())
        assert raw.constant_pool == (ConstantUtf8(3, b"p/Q"), ConstantClass(1))
