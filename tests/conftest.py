import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from pyjclass.writer import ConstantPoolWriter, ClassFileWriter


# magic, minor 0, major 52, count 3, Utf8 "foo", Class #1
EXAMPLE = bytes.fromhex("CAFEBABE 0000 0034 0003 01 0003 666F6F 07 0001")


@pytest.fixture
def example_bytes():
    return EXAMPLE


@pytest.fixture
def hello_bytes():
    """A pool with a method ref, a field ref and a string."""
    cp = ConstantPoolWriter()
    cp.add_methodref("java/lang/Object", "<init>", "()V")
    cp.add_fieldref("java/lang/System", "out", "Ljava/io/PrintStream;")
    cp.add_string("hello")
    return ClassFileWriter(major=52, minor=0).to_bytes(cp)
